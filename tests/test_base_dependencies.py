"""Tests for the base dependency helpers of PlatformModule."""

import pytest

from minecraft_submodule.errors import ConfigurationError
from minecraft_submodule.module import PlatformModule
from minecraft_submodule.platforms import Platform


@pytest.fixture
def module_for(registry, make_settings):
    def _make(platform: str, path: str = ":mod", **overrides) -> PlatformModule:
        settings = make_settings(platform, **overrides)
        module = PlatformModule(path, settings.platform, registry, settings=settings)
        registry.register(module)
        return module
    return _make


class TestApplyBaseDependencies:
    def test_fabric(self, module_for):
        module = module_for("fabric")
        module.apply_base_dependencies()
        assert module.emitter.notations("minecraft") == ["com.mojang:minecraft:1.21.1"]
        assert module.emitter.notations("modCompileOnly") == [
            "net.fabricmc:fabric-loader:0.16.5",
            "net.fabricmc.fabric-api:fabric-api:0.104.0+1.21.1",
        ]
        assert "com.google.code.findbugs:jsr305:3.0.2" in module.emitter.notations("compileOnly")

    def test_neoforge_on_moddev_sets_version(self, module_for):
        module = module_for("neoforge")
        module.apply_base_dependencies()
        assert module.neoforge_version == "21.1.66"
        assert module.emitter.notations("neoForge") == []

    def test_neoforge_on_architectury(self, module_for):
        module = module_for("neoforge", **{"submodule.mode": "architectury"})
        module.apply_base_dependencies()
        assert module.emitter.notations("neoForge") == ["net.neoforged:neoforge:21.1.66"]

    def test_xplat_minivan_uses_mixin(self, module_for):
        module = module_for("xplat")
        module.apply_base_dependencies()
        assert "net.fabricmc:sponge-mixin:0.15.4+mixin.0.8.7" in module.emitter.notations("compileOnly")
        assert module.emitter.notations("annotationProcessor") == ["io.github.llamalad7:mixinextras-common:0.4.1"]

    def test_kotlin_on_fabric(self, module_for):
        module = module_for("fabric", **{"submodule.kotlin": True})
        module.apply_base_dependencies()
        assert module.using_kotlin
        assert "net.fabricmc:fabric-language-kotlin:1.12.2+kotlin.2.0.20" in module.emitter.notations("modLocalRuntime")

    def test_kotlin_on_moddev_neoforge(self, module_for):
        module = module_for("neoforge", **{"submodule.kotlin": True})
        module.apply_kotlin()
        assert module.emitter.notations("localRuntime") == ["thedarkcolour:kotlinforforge-neoforge:5.5.0"]

    def test_neoforge_pr_repository(self, module_for):
        module = module_for("neoforge", neoforge_pr="1234")
        module.apply_neoforge_dependency()
        assert module.repositories == [("NeoForge PR #1234", "https://prmaven.neoforged.net/NeoForge/pr1234")]

    def test_requires_settings(self, registry):
        module = PlatformModule(":bare", Platform.FABRIC, registry)
        with pytest.raises(ConfigurationError):
            module.apply_fabric_loader_dependency()

    def test_set_refmaps(self, module_for):
        assert module_for("xplat").set_refmaps("example") == "example.refmap.json"
