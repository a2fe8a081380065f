"""
Dependency Model

Declared dependencies, emitted (scope, artifact) pairs, and the emitter
that collects them for one module.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Protocol, Union

from .errors import ConfigurationError
from .platforms import validate_path

logger = logging.getLogger(__name__)

# (platform id) -> artifact coordinate
CoordinateResolver = Callable[[str], str]

_PLATFORM_TOKEN = re.compile(r'\$\{platform\}')


@dataclass(frozen=True)
class ProjectDependency:
    """Dependency on another module family in the same repository"""
    base: str
    api: bool = True
    include: bool = True
    propagate_as_mod: bool = True

    def __post_init__(self):
        validate_path(self.base)


@dataclass(frozen=True)
class ExternalDependency:
    """Third-party artifact whose coordinate depends on the platform"""
    coordinate_resolver: CoordinateResolver
    api: bool = True
    include: bool = True

    def coordinate(self, platform_id: str) -> str:
        coordinate = self.coordinate_resolver(platform_id)
        if not coordinate:
            raise ConfigurationError(f"No artifact coordinate for platform '{platform_id}'")
        return coordinate


def coordinate_template(spec: Union[str, Mapping[str, str]]) -> CoordinateResolver:
    """
    Build a coordinate resolver from a build-description value

    Args:
        spec: Either a coordinate string where ``${platform}`` is replaced by
            the platform id, or a mapping of platform id to coordinate with an
            optional ``default`` entry

    Returns:
        Pure function from platform id to coordinate
    """
    if isinstance(spec, str):
        def from_template(platform_id: str) -> str:
            return _PLATFORM_TOKEN.sub(platform_id, spec)
        return from_template

    if isinstance(spec, Mapping):
        table = dict(spec)

        def from_table(platform_id: str) -> str:
            if platform_id in table:
                return table[platform_id]
            if "default" in table:
                return _PLATFORM_TOKEN.sub(platform_id, table["default"])
            raise ConfigurationError(
                f"External dependency has no coordinate for platform '{platform_id}' "
                f"(known: {', '.join(sorted(table))})"
            )
        return from_table

    raise ConfigurationError(f"Unsupported external dependency coordinate: {spec!r}")


@dataclass(frozen=True)
class ProjectRef:
    """Output of another module, optionally through a named configuration"""
    path: str
    configuration: Optional[str] = None

    def to_kotlin(self) -> str:
        if self.configuration:
            return f'project("{self.path}", configuration = "{self.configuration}")'
        return f'project("{self.path}")'


Notation = Union[str, ProjectRef]


@dataclass(frozen=True)
class Declaration:
    scope: str
    notation: Notation

    def to_kotlin(self) -> str:
        if isinstance(self.notation, ProjectRef):
            value = self.notation.to_kotlin()
        else:
            value = f'"{self.notation}"'
        return f'add("{self.scope}", {value})'


class DependencyEmitter(Protocol):
    """Receives the dependency declarations of one module"""

    def add(self, scope: str, notation: Notation) -> None:
        ...


class DependencyRecorder:
    """In-memory emitter that keeps declarations in order"""

    def __init__(self, owner: str = ""):
        self.owner = owner
        self._declarations: List[Declaration] = []

    def add(self, scope: str, notation: Notation) -> None:
        declaration = Declaration(scope, notation)
        logger.debug(f"{self.owner or '<module>'}: {declaration.to_kotlin()}")
        self._declarations.append(declaration)

    @property
    def declarations(self) -> List[Declaration]:
        return list(self._declarations)

    def scopes(self) -> List[str]:
        seen: Dict[str, None] = {}
        for declaration in self._declarations:
            seen.setdefault(declaration.scope, None)
        return list(seen)

    def notations(self, scope: str) -> List[Notation]:
        return [d.notation for d in self._declarations if d.scope == scope]

    def project_refs(self) -> List[ProjectRef]:
        return [d.notation for d in self._declarations if isinstance(d.notation, ProjectRef)]

    def render(self) -> str:
        """Render as a Gradle Kotlin DSL ``dependencies { }`` block"""
        lines = ["dependencies {"]
        for declaration in self._declarations:
            lines.append(f"    {declaration.to_kotlin()}")
        lines.append("}")
        return "\n".join(lines) + "\n"
