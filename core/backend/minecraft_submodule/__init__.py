"""
Minecraft Submodule

Multi-platform build configuration for Minecraft mods whose loader targets
(Fabric, NeoForge, vanilla/Mojmap) share one cross-platform source tree.

Version: 1.0.0
"""

__version__ = "1.0.0"
__description__ = "Multi-platform Minecraft mod build configuration"

from .errors import (
    ConfigurationError,
    SubmoduleError,
    UnresolvedModuleError,
    UnsupportedOperationError,
    VersionIndexError,
)
from .module import PlatformModule
from .platforms import Platform
from .registry import ModuleRegistry

__all__ = [
    "ConfigurationError",
    "ModuleRegistry",
    "Platform",
    "PlatformModule",
    "SubmoduleError",
    "UnresolvedModuleError",
    "UnsupportedOperationError",
    "VersionIndexError",
]
