"""
Platform Modules

One module per compiled platform variant. The shared (xplat) module records
the dependencies it declares as transitive; each platform module that
connects to it re-declares them in its own platform's vocabulary.
"""

import logging
from typing import Dict, List, Optional, Tuple, Union

from .dependencies import (
    CoordinateResolver,
    DependencyEmitter,
    DependencyRecorder,
    ExternalDependency,
    ProjectDependency,
    ProjectRef,
    coordinate_template,
)
from .errors import ConfigurationError, UnsupportedOperationError
from .platforms import Platform, Toolchain, validate_path
from .registry import ModuleRegistry
from .settings import BuildSettings
from .translation import (
    NAMED_ELEMENTS,
    emit_external_dependency,
    emit_project_dependency,
    rules_for,
)

logger = logging.getLogger(__name__)

MAIN_MOD_UNIT = "main"
NEOFORGE_PR_MAVEN = "https://prmaven.neoforged.net/NeoForge/pr{number}"


class PlatformModule:
    """A module compiled against one platform"""

    def __init__(self, path: str, platform: Platform, registry: ModuleRegistry,
                 emitter: Optional[DependencyEmitter] = None,
                 settings: Optional[BuildSettings] = None):
        """
        Args:
            path: Module path (e.g. ":xplat", ":foo-fabric")
            platform: Platform this module compiles against
            registry: Registry used to resolve other modules
            emitter: Receives this module's declarations (default: a recorder)
            settings: Build properties, needed by the base dependency helpers
        """
        self.path = validate_path(path)
        self.platform = platform
        self.registry = registry
        self.emitter = emitter if emitter is not None else DependencyRecorder(path)
        self.settings = settings

        self.connected_to: Optional[str] = None
        self.connected_from: List[str] = []
        self.mod_units: Dict[str, List[str]] = {}
        self.refmap_name: Optional[str] = None
        self.using_kotlin = False
        self.neoforge_version: Optional[str] = None
        self.neoform_version: Optional[str] = None
        self.repositories: List[Tuple[str, str]] = []

        self._transitive_projects: List[ProjectDependency] = []
        self._transitive_externals: List[ExternalDependency] = []
        self._frozen = False

    def __repr__(self):
        return f"PlatformModule({self.path!r}, {self.platform.value})"

    @property
    def transitive_project_dependencies(self) -> Tuple[ProjectDependency, ...]:
        return tuple(self._transitive_projects)

    @property
    def transitive_external_dependencies(self) -> Tuple[ExternalDependency, ...]:
        return tuple(self._transitive_externals)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self):
        if self._frozen:
            raise ConfigurationError(
                f"Cannot declare dependencies on {self.path}: "
                f"{', '.join(self.connected_from)} already connected to it"
            )

    def _freeze(self, connector: str):
        self._frozen = True
        self.connected_from.append(connector)

    def _register_mod_unit(self, dependency: ProjectDependency, target: str):
        if not (dependency.propagate_as_mod and rules_for(self.platform).mod_metadata):
            return
        mod_id = target.rsplit(":", 1)[-1]
        self.mod_units.setdefault(mod_id, [target])

    def declare_project_dependency(self, base: str, transitive: bool = True, api: bool = True,
                                   include: bool = True, propagate_as_mod: bool = True) -> None:
        """
        Depend on another module family of this repository

        Args:
            base: Path prefix of the family (":" for the repository root)
            transitive: Re-declare on every platform module connecting here
            api: Export the dependency to consumers of this module
            include: Bundle the dependency into the distributable
            propagate_as_mod: Register the dependency as a loadable mod on
                platforms with mod metadata
        """
        self._check_mutable()
        dependency = ProjectDependency(base, api=api, include=include,
                                       propagate_as_mod=propagate_as_mod)

        target = emit_project_dependency(self.emitter, self.platform, dependency)
        self._register_mod_unit(dependency, target)

        if transitive:
            self._transitive_projects.append(dependency)
        logger.debug(f"{self.path}: project dependency on {target} (transitive={transitive})")

    def declare_external_dependency(self, coordinate_resolver: Union[CoordinateResolver, str, dict],
                                    transitive: bool = True, api: bool = True,
                                    include: bool = True) -> None:
        """
        Depend on a third-party artifact

        Args:
            coordinate_resolver: Pure function from platform id to coordinate,
                or a template/mapping accepted by coordinate_template()
            transitive: Re-declare on every platform module connecting here
            api: Export the dependency to consumers of this module
            include: Bundle the artifact into the distributable
        """
        self._check_mutable()
        if not callable(coordinate_resolver):
            coordinate_resolver = coordinate_template(coordinate_resolver)
        dependency = ExternalDependency(coordinate_resolver, api=api, include=include)

        coordinate = emit_external_dependency(self.emitter, self.platform, dependency)

        if transitive:
            self._transitive_externals.append(dependency)
        logger.debug(f"{self.path}: external dependency on {coordinate} (transitive={transitive})")

    def connect(self, shared_module_name: str) -> None:
        """
        Derive this module from a shared module

        Re-declares every transitive dependency of the shared module using
        this module's platform rules, then freezes the shared module.

        Raises:
            UnresolvedModuleError: The shared module does not exist
            UnsupportedOperationError: Called from a shared module, or the
                target is not a shared module
            ConfigurationError: This module is already connected
        """
        if self.platform.is_shared:
            raise UnsupportedOperationError(
                f"{self.path} is a shared module and cannot connect to another module"
            )
        if self.connected_to is not None:
            raise ConfigurationError(
                f"{self.path} is already connected to {self.connected_to}"
            )

        shared = self.registry.resolve(shared_module_name)
        if not shared.platform.is_shared:
            raise UnsupportedOperationError(
                f"{self.path} cannot connect to {shared.path}: "
                f"it targets {shared.platform.value}, not xplat"
            )

        self.connected_to = shared.path
        self.emitter.add("compileOnly", ProjectRef(shared.path, NAMED_ELEMENTS))

        main_unit = self.mod_units.setdefault(MAIN_MOD_UNIT, [self.path])
        if shared.path not in main_unit:
            main_unit.append(shared.path)

        if self.platform is not Platform.NEOFORGE and shared.refmap_name:
            self.refmap_name = shared.refmap_name

        for dependency in shared.transitive_project_dependencies:
            target = emit_project_dependency(self.emitter, self.platform, dependency)
            self._register_mod_unit(dependency, target)

        for dependency in shared.transitive_external_dependencies:
            emit_external_dependency(self.emitter, self.platform, dependency)

        shared._freeze(self.path)
        logger.info(
            f"{self.path} connected to {shared.path}: "
            f"{len(shared.transitive_project_dependencies)} project and "
            f"{len(shared.transitive_external_dependencies)} external dependencies propagated"
        )

    def _require_settings(self) -> BuildSettings:
        if self.settings is None:
            raise ConfigurationError(f"{self.path} has no build settings")
        return self.settings

    def set_refmaps(self, basename: str) -> str:
        self.refmap_name = f"{basename}.refmap.json"
        return self.refmap_name

    def apply_fabric_loader_dependency(self) -> None:
        version = self._require_settings().require("fabric_loader_version")
        self.emitter.add("modCompileOnly", f"net.fabricmc:fabric-loader:{version}")
        self.emitter.add("modLocalRuntime", f"net.fabricmc:fabric-loader:{version}")

    def apply_fabric_api_dependency(self) -> None:
        version = self._require_settings().require("fapi_version")
        self.emitter.add("modCompileOnly", f"net.fabricmc.fabric-api:fabric-api:{version}")
        self.emitter.add("modLocalRuntime", f"net.fabricmc.fabric-api:fabric-api:{version}")

    def apply_neoforge_dependency(self) -> None:
        """Add NeoForge itself, plus its PR maven when neoforge_pr is a number"""
        settings = self._require_settings()

        pr = settings.get("neoforge_pr", "none")
        if pr.isdigit():
            self.repositories.append((f"NeoForge PR #{pr}", NEOFORGE_PR_MAVEN.format(number=pr)))

        version = settings.require("neoforge_version")
        if settings.toolchain is Toolchain.MODDEV:
            self.neoforge_version = version
        else:
            self.emitter.add("neoForge", f"net.neoforged:neoforge:{version}")

    def apply_kotlin(self) -> None:
        settings = self._require_settings()
        self.using_kotlin = True

        if self.platform in (Platform.XPLAT, Platform.MOJMAP, Platform.INTERMEDIARY):
            for scope in ("compileOnly", "testCompileOnly"):
                self.emitter.add(scope, "org.jetbrains.kotlin:kotlin-stdlib")
                self.emitter.add(scope, "org.jetbrains.kotlin:kotlin-reflect")
        elif self.platform is Platform.NEOFORGE:
            version = settings.require("neoforge_kotlin_version")
            compile_scope, runtime_scope = (
                ("compileOnly", "localRuntime") if settings.toolchain is Toolchain.MODDEV
                else ("modCompileOnly", "modLocalRuntime")
            )
            self.emitter.add(compile_scope, f"thedarkcolour:kotlinforforge-neoforge:{version}")
            self.emitter.add(runtime_scope, f"thedarkcolour:kotlinforforge-neoforge:{version}")
        elif self.platform is Platform.FABRIC:
            version = settings.require("fabric_kotlin_version")
            self.emitter.add("modCompileOnly", f"net.fabricmc:fabric-language-kotlin:{version}")
            self.emitter.add("modLocalRuntime", f"net.fabricmc:fabric-language-kotlin:{version}")

    def apply_base_dependencies(self) -> None:
        """Declare what every module of this platform and toolchain needs"""
        settings = self._require_settings()
        toolchain = settings.toolchain

        if toolchain is Toolchain.LOOM:
            minecraft_version = settings.require("minecraft_version")
            self.emitter.add("minecraft", f"com.mojang:minecraft:{minecraft_version}")
            if self.platform is Platform.NEOFORGE:
                self.apply_neoforge_dependency()
            else:
                self.apply_fabric_loader_dependency()
            if self.platform is Platform.FABRIC:
                self.apply_fabric_api_dependency()
        elif self.platform is Platform.XPLAT:
            # moddev and minivan shared modules compile against bare mixin
            mixin = settings.get("mixin_version", "0.15.4+mixin.0.8.7")
            mixinextras = settings.get("mixinextras_version", "0.4.1")
            self.emitter.add("compileOnly", f"net.fabricmc:sponge-mixin:{mixin}")
            self.emitter.add("compileOnly", f"io.github.llamalad7:mixinextras-common:{mixinextras}")
            self.emitter.add("annotationProcessor", f"io.github.llamalad7:mixinextras-common:{mixinextras}")
        elif self.platform is Platform.NEOFORGE:
            self.apply_neoforge_dependency()

        if settings.kotlin:
            self.apply_kotlin()

        self.emitter.add("compileOnly", "com.google.code.findbugs:jsr305:3.0.2")
        self.emitter.add("testCompileOnly", "com.google.code.findbugs:jsr305:3.0.2")
