"""Shared test fixtures for the minecraft-submodule test suite."""

import textwrap
from pathlib import Path

import pytest

from minecraft_submodule.module import PlatformModule
from minecraft_submodule.platforms import Platform
from minecraft_submodule.registry import ModuleRegistry
from minecraft_submodule.settings import BuildSettings


@pytest.fixture
def registry():
    return ModuleRegistry()


@pytest.fixture
def make_module(registry):
    """Factory fixture that creates and registers a module without settings."""
    def _make(path: str, platform: Platform) -> PlatformModule:
        module = PlatformModule(path, platform, registry)
        registry.register(module)
        return module
    return _make


@pytest.fixture
def base_properties():
    """Properties a loom-based fabric/neoforge build would define."""
    return {
        "mod_id": "example",
        "java_version": "21",
        "maven_group": "com.example",
        "archives_base_name": "example",
        "minecraft_version": "1.21.1",
        "fabric_loader_version": "0.16.5",
        "fapi_version": "0.104.0+1.21.1",
        "neoforge_version": "21.1.66",
        "parchment_mc_version": "1.21",
        "parchment_version": "2024.07.28",
        "neoform_version": "1.21.1-20240808.144430",
        "fabric_kotlin_version": "1.12.2+kotlin.2.0.20",
        "neoforge_kotlin_version": "5.5.0",
    }


@pytest.fixture
def make_settings(base_properties, monkeypatch):
    """Factory fixture building BuildSettings for a platform."""
    monkeypatch.delenv("JAVA_VERSION", raising=False)

    def _make(platform: str, **overrides) -> BuildSettings:
        props = {**base_properties, "submodule.platform": platform, **overrides}
        return BuildSettings.from_properties(props, environ={})
    return _make


@pytest.fixture
def build_description(base_properties):
    """A three-platform build: shared root family plus a ':core' library family."""
    return {
        "properties": dict(base_properties),
        "modules": {
            ":fabric": {
                "platform": "fabric",
                "connect": ":xplat",
                "base_dependencies": False,
            },
            ":neoforge": {
                "platform": "neoforge",
                "connect": ":xplat",
                "base_dependencies": False,
                "dependencies": [
                    {"external": "com.example:neo-only:1.0", "api": False, "include": False},
                ],
            },
            ":xplat": {
                "platform": "xplat",
                "base_dependencies": False,
                "refmap": "example",
                "dependencies": [
                    {"project": ":core"},
                    {"external": "com.example:lib-${platform}:2.0", "api": False},
                    {"project": ":tools", "transitive": False, "api": False},
                ],
            },
            ":core-xplat": {"platform": "xplat", "base_dependencies": False},
            ":core-fabric": {"platform": "fabric", "connect": ":core-xplat", "base_dependencies": False},
            ":core-neoforge": {"platform": "neoforge", "connect": ":core-xplat", "base_dependencies": False},
            ":tools-xplat": {"platform": "xplat", "base_dependencies": False},
        },
    }


@pytest.fixture
def write_yaml(tmp_path):
    """Factory fixture that writes a build description to a temp directory."""
    def _write(content: str, name: str = "submodule.yaml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path
    return _write
