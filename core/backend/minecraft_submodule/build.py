"""
Build Configuration

Turns a validated build description into configured platform modules.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .config import NEOFORM_CACHE_DIR
from .errors import ConfigurationError
from .module import PlatformModule
from .neoform import resolve_neoform_version
from .platforms import Platform, Toolchain
from .registry import ModuleRegistry
from .resources import process_resources
from .settings import BuildSettings

logger = logging.getLogger(__name__)

NeoFormResolver = Callable[[str], str]


def module_directory(path: str) -> Path:
    """Directory of a module relative to the repository root (":a:b-c" -> "a/b-c")"""
    parts = [part for part in path.split(":") if part]
    return Path(*parts) if parts else Path(".")


def _declare_dependencies(module: PlatformModule, entries: List[Dict]):
    for entry in entries:
        flags = {k: entry[k] for k in ("transitive", "api", "include") if k in entry}
        if "project" in entry:
            if "propagate_as_mod" in entry:
                flags["propagate_as_mod"] = entry["propagate_as_mod"]
            module.declare_project_dependency(entry["project"], **flags)
        else:
            module.declare_external_dependency(entry["external"], **flags)


def _module_configurator(path: str, module_config: Dict, properties: Dict,
                         registry: ModuleRegistry, neoform_resolver: NeoFormResolver):
    def configure() -> PlatformModule:
        merged = {**properties, **(module_config.get("properties") or {})}
        merged["submodule.platform"] = module_config.get("platform")
        settings = BuildSettings.from_properties(merged)

        module = PlatformModule(path, settings.platform, registry, settings=settings)
        logger.info(f"{path}: platform={settings.platform.value} toolchain={settings.toolchain.value}")

        if module_config.get("refmap"):
            module.set_refmaps(module_config["refmap"])

        if module_config.get("base_dependencies", True):
            module.apply_base_dependencies()

        if settings.platform is Platform.XPLAT and settings.toolchain is Toolchain.MODDEV:
            module.neoform_version = settings.get("neoform_version") or \
                neoform_resolver(settings.require("minecraft_version"))

        if module_config.get("connect"):
            module.connect(module_config["connect"])

        _declare_dependencies(module, module_config.get("dependencies") or [])
        return module

    return configure


def load_build(config: Dict, neoform_resolver: Optional[NeoFormResolver] = None) -> ModuleRegistry:
    """
    Define every module of a build description without configuring any

    Args:
        config: Build description from config_loader.load_config()
        neoform_resolver: Looks up NeoForm for a Minecraft version; defaults
            to the cached index lookup under the description's root

    Returns:
        Registry holding one pending definition per module
    """
    root = Path(config.get("root") or ".")
    if neoform_resolver is None:
        def neoform_resolver(minecraft_version: str) -> str:
            return resolve_neoform_version(minecraft_version, root / NEOFORM_CACHE_DIR)

    registry = ModuleRegistry()
    properties = dict(config.get("properties") or {})

    for path, module_config in (config.get("modules") or {}).items():
        registry.define(path, _module_configurator(
            path, module_config or {}, properties, registry, neoform_resolver
        ))

    return registry


def configure_build(config: Dict, neoform_resolver: Optional[NeoFormResolver] = None) -> List[PlatformModule]:
    """
    Configure every module and check their cross-module references

    Returns:
        Configured modules in description order

    Raises:
        SubmoduleError: Any configuration failure; the build is unusable
    """
    registry = load_build(config, neoform_resolver)
    modules = registry.configure_all()
    registry.verify_references()
    logger.info(f"✓ Configured {len(modules)} module(s)")
    return modules


def resource_properties(module: PlatformModule, expansions: Optional[Dict] = None) -> Dict:
    """Properties available to ${...} tokens in a module's metadata files"""
    settings = module.settings
    if settings is None:
        raise ConfigurationError(f"{module.path} has no build settings")
    version = settings.get("version") or settings.get("mod_version") or "unspecified"
    return {"version": version, "mod_id": settings.mod_id, **(expansions or {})}


def process_module_resources(module: PlatformModule, root: Path, output_dir: Path,
                             expansions: Optional[Dict] = None) -> List[str]:
    """
    Process a module's resources, followed by its shared module's

    Args:
        module: Configured module
        root: Repository root
        output_dir: Destination for the processed resources
        expansions: Extra ${...} values
    """
    source_dirs = [root / module_directory(module.path) / "src" / "main" / "resources"]
    if module.connected_to:
        source_dirs.append(root / module_directory(module.connected_to) / "src" / "main" / "resources")

    return process_resources(
        source_dirs,
        output_dir,
        resource_properties(module, expansions),
        module.platform,
        refmap=module.refmap_name,
    )
