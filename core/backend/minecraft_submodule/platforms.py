"""
Platform Definitions

Platforms a module can target, the build modes that pick its toolchain,
and the naming convention for per-platform module paths.
"""

import re
from enum import Enum

from .errors import ConfigurationError

ROOT_PATH = ":"

# Gradle-style project path: ":" or ":a", ":a:b-c", ...
_PATH_PATTERN = re.compile(r'^:(?:[A-Za-z0-9_.\-]+(?::[A-Za-z0-9_.\-]+)*)?$')


class Platform(Enum):
    XPLAT = "xplat"
    MOJMAP = "mojmap"
    INTERMEDIARY = "intermediary"
    FABRIC = "fabric"
    NEOFORGE = "neoforge"

    @classmethod
    def parse(cls, value: str) -> "Platform":
        for platform in cls:
            if platform.value == value:
                return platform
        raise ConfigurationError(f"Unrecognized submodule.platform type: {value}")

    @property
    def is_shared(self) -> bool:
        return self is Platform.XPLAT


class SubmoduleMode(Enum):
    PLATFORM = "platform"
    ARCHITECTURY = "architectury"

    @classmethod
    def parse(cls, value: str) -> "SubmoduleMode":
        value = value.lower()
        if value == "platform":
            return cls.PLATFORM
        if value in ("architectury", "arch"):
            return cls.ARCHITECTURY
        raise ConfigurationError(
            f"Unrecognized submodule.mode '{value}'. "
            f"Supported modes are 'platform' (default) and 'architectury'."
        )


class XplatMode(Enum):
    LOOM = "loom"
    MODDEV = "moddev"
    MINIVAN = "minivan"

    @classmethod
    def parse(cls, value: str) -> "XplatMode":
        try:
            return cls(value.lower())
        except ValueError:
            raise ConfigurationError(
                f"Unrecognized submodule.xplat.mode '{value}'. "
                f"Supported modes are 'loom', 'moddev', and 'minivan' (default)."
            ) from None


class Toolchain(Enum):
    """Build extension that drives a module"""
    LOOM = "loom"
    MODDEV = "moddev"
    MINIVAN = "minivan"


def select_toolchain(platform: Platform, mode: SubmoduleMode = SubmoduleMode.PLATFORM,
                     xplat_mode: XplatMode = XplatMode.MINIVAN) -> Toolchain:
    """
    Pick the toolchain for a module

    Architectury mode always runs on loom. Otherwise neoforge gets moddev,
    the shared module follows its xplat mode, and the rest use loom.
    """
    if mode is SubmoduleMode.ARCHITECTURY:
        return Toolchain.LOOM

    if platform is Platform.NEOFORGE:
        return Toolchain.MODDEV

    if platform is Platform.XPLAT:
        return Toolchain(xplat_mode.value)

    return Toolchain.LOOM


def validate_path(path: str) -> str:
    """Raise ConfigurationError unless path is a well-formed module path"""
    if not isinstance(path, str) or not _PATH_PATTERN.match(path):
        raise ConfigurationError(f"Malformed module path: {path!r}")
    return path


def platform_project_path(base: str, suffix: str) -> str:
    """
    Name the platform variant of a module family

    Args:
        base: Module path prefix, or ":" for the repository root
        suffix: Variant suffix (e.g. "xplat", "fabric", "xplat-mojmap")

    Returns:
        ":<suffix>" for the root, "<base>-<suffix>" otherwise
    """
    validate_path(base)
    if base == ROOT_PATH:
        return f":{suffix}"
    return f"{base}-{suffix}"
