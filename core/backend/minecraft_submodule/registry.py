"""
Module Registry

Maps module paths to configured modules. Modules can be defined lazily:
the first resolve() of a pending path runs its configure callback, so a
module may connect to a shared module declared later in the build.
"""

import logging
from typing import Callable, Dict, List

from .errors import ConfigurationError, UnresolvedModuleError
from .platforms import validate_path

logger = logging.getLogger(__name__)


class ModuleRegistry:
    """Registry of every module in one build"""

    def __init__(self):
        self._modules: Dict[str, object] = {}
        self._pending: Dict[str, Callable[[], object]] = {}
        self._order: List[str] = []
        self._evaluating: List[str] = []

    def __contains__(self, path: str) -> bool:
        return path in self._modules or path in self._pending

    def __len__(self) -> int:
        return len(self._order)

    @property
    def paths(self) -> List[str]:
        """Module paths in definition order"""
        return list(self._order)

    def _claim(self, path: str):
        validate_path(path)
        if path in self:
            raise ConfigurationError(f"Module '{path}' is defined more than once")
        self._order.append(path)

    def register(self, module) -> None:
        """Add an already-configured module"""
        self._claim(module.path)
        self._modules[module.path] = module

    def define(self, path: str, configure: Callable[[], object]) -> None:
        """
        Add a module whose configuration runs on first resolve

        Args:
            path: Module path
            configure: Callback that builds, configures and returns the module
        """
        self._claim(path)
        self._pending[path] = configure

    def resolve(self, path: str):
        """
        Look up a module, configuring it first if it is still pending

        Raises:
            UnresolvedModuleError: No module with this path exists
            ConfigurationError: The module is already being configured
                further up the stack (evaluation cycle)
        """
        if path in self._modules:
            return self._modules[path]

        if path not in self._pending:
            raise UnresolvedModuleError(path)

        if path in self._evaluating:
            cycle = " -> ".join(self._evaluating + [path])
            raise ConfigurationError(f"Evaluation cycle between modules: {cycle}")

        logger.info(f"Configuring module {path}")
        self._evaluating.append(path)
        try:
            module = self._pending[path]()
        finally:
            self._evaluating.pop()

        del self._pending[path]
        self._modules[path] = module
        return module

    def configure_all(self) -> List[object]:
        """Resolve every module, returning them in definition order"""
        return [self.resolve(path) for path in self._order]

    def verify_references(self) -> None:
        """
        Check that every project reference emitted by a configured module
        points at a module of this build. Emitters that do not record
        declarations (no project_refs()) are skipped.

        Raises:
            UnresolvedModuleError: For the first dangling reference
        """
        for path in self._order:
            module = self._modules.get(path)
            if module is None:
                continue
            project_refs = getattr(module.emitter, "project_refs", None)
            if project_refs is None:
                logger.debug(f"{path}: emitter keeps no declarations, skipping reference check")
                continue
            for ref in project_refs():
                if ref.path not in self:
                    logger.error(f"{path} depends on missing module {ref.path}")
                    raise UnresolvedModuleError(ref.path)
