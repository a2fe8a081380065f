"""
Build Settings

Typed view over the flat property mapping a module is configured from.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigurationError
from .platforms import Platform, SubmoduleMode, Toolchain, XplatMode, select_toolchain


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


@dataclass
class BuildSettings:
    """
    Settings for one module

    Attributes:
        platform: Platform the module targets
        mode: Plain per-platform build or architectury
        xplat_mode: Toolchain for the shared module in platform mode
        kotlin: Whether Kotlin support is applied
        mod_id: Mod identifier
        java_version: Java release to compile for
        properties: Every raw property, including the ones above
    """
    platform: Platform
    mod_id: str
    java_version: str
    mode: SubmoduleMode = SubmoduleMode.PLATFORM
    xplat_mode: XplatMode = XplatMode.MINIVAN
    kotlin: bool = False
    properties: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_properties(cls, properties: Mapping[str, Any],
                        environ: Optional[Mapping[str, str]] = None) -> "BuildSettings":
        """
        Parse module settings

        Args:
            properties: Flat property mapping
            environ: Environment to read JAVA_VERSION from (default: os.environ)
        """
        environ = os.environ if environ is None else environ
        props = {k: v for k, v in properties.items()}

        def require(name: str) -> str:
            if props.get(name) in (None, ""):
                raise ConfigurationError(f"Missing required property '{name}'")
            return str(props[name])

        java_version = environ.get("JAVA_VERSION") or require("java_version")

        return cls(
            platform=Platform.parse(require("submodule.platform")),
            mod_id=require("mod_id"),
            java_version=str(java_version),
            mode=SubmoduleMode.parse(str(props.get("submodule.mode") or "platform")),
            xplat_mode=XplatMode.parse(str(props.get("submodule.xplat.mode") or "minivan")),
            kotlin=_as_bool(props.get("submodule.kotlin", False)),
            properties=props,
        )

    @property
    def toolchain(self) -> Toolchain:
        return select_toolchain(self.platform, self.mode, self.xplat_mode)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        value = self.properties.get(name)
        return default if value is None else str(value)

    def require(self, name: str) -> str:
        value = self.properties.get(name)
        if value in (None, ""):
            raise ConfigurationError(f"Missing required property '{name}'")
        return str(value)

    def archives_name(self, project_name: str) -> str:
        return f"{self.require('archives_base_name')}-{project_name}"
