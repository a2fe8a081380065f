"""
Platform Translation Table

How a declared dependency is re-expressed in each platform's dependency
vocabulary. The api and include flags of a declaration always survive the
translation: api picks the exported scope, include adds a bundling entry on
platforms that build a distributable.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from .dependencies import DependencyEmitter, ExternalDependency, ProjectDependency, ProjectRef
from .platforms import Platform, platform_project_path

NAMED_ELEMENTS = "namedElements"
INCLUDE_SCOPE = "include"

# Test classpath entries: (scope, "self" | "xplat", configuration)
TestEntry = Tuple[str, str, str]


@dataclass(frozen=True)
class PlatformRules:
    project_suffix: str
    project_api_scope: str
    project_private_scope: str
    external_api_scope: str
    external_private_scope: str
    platform_id: str
    bundles: bool = False
    mod_metadata: bool = False
    compile_against_xplat: bool = False
    test_entries: Tuple[TestEntry, ...] = ()

    def project_scope(self, api: bool) -> str:
        return self.project_api_scope if api else self.project_private_scope

    def external_scope(self, api: bool) -> str:
        return self.external_api_scope if api else self.external_private_scope


RULES: Dict[Platform, PlatformRules] = {
    Platform.XPLAT: PlatformRules(
        project_suffix="xplat",
        project_api_scope="api",
        project_private_scope="compileOnly",
        external_api_scope="modApi",
        external_private_scope="modCompileOnly",
        platform_id="xplat-intermediary",
        test_entries=(
            ("testCompileOnly", "self", NAMED_ELEMENTS),
            ("testRuntimeOnly", "self", NAMED_ELEMENTS),
        ),
    ),
    Platform.MOJMAP: PlatformRules(
        project_suffix="xplat-mojmap",
        project_api_scope="api",
        project_private_scope="compileOnly",
        external_api_scope="modApi",
        external_private_scope="modCompileOnly",
        platform_id="xplat-mojmap",
        test_entries=(
            ("testCompileOnly", "self", NAMED_ELEMENTS),
        ),
    ),
    Platform.INTERMEDIARY: PlatformRules(
        project_suffix="xplat-intermediary",
        project_api_scope="api",
        project_private_scope="compileOnly",
        external_api_scope="modApi",
        external_private_scope="modCompileOnly",
        platform_id="xplat-intermediary",
        test_entries=(
            ("testCompileOnly", "self", NAMED_ELEMENTS),
        ),
    ),
    Platform.FABRIC: PlatformRules(
        project_suffix="fabric",
        project_api_scope="api",
        project_private_scope="implementation",
        external_api_scope="modApi",
        external_private_scope="modImplementation",
        platform_id="fabric",
        bundles=True,
        mod_metadata=True,
        compile_against_xplat=True,
        test_entries=(
            ("testCompileOnly", "xplat", NAMED_ELEMENTS),
            ("testImplementation", "self", NAMED_ELEMENTS),
        ),
    ),
    Platform.NEOFORGE: PlatformRules(
        project_suffix="neoforge",
        project_api_scope="api",
        project_private_scope="implementation",
        external_api_scope="modApi",
        external_private_scope="modImplementation",
        platform_id="neoforge",
        bundles=True,
        mod_metadata=True,
        compile_against_xplat=True,
        test_entries=(
            ("testCompileOnly", "xplat", NAMED_ELEMENTS),
            ("testCompileOnly", "self", NAMED_ELEMENTS),
            ("testRuntimeOnly", "self", "dev"),
        ),
    ),
}


def rules_for(platform: Platform) -> PlatformRules:
    return RULES[platform]


def emit_project_dependency(emitter: DependencyEmitter, platform: Platform,
                            dependency: ProjectDependency) -> str:
    """
    Declare a project dependency in the given platform's vocabulary

    Returns:
        Path of the platform variant the dependency points at
    """
    rules = RULES[platform]
    target = platform_project_path(dependency.base, rules.project_suffix)
    xplat = platform_project_path(dependency.base, RULES[Platform.XPLAT].project_suffix)

    if rules.compile_against_xplat:
        emitter.add("compileOnly", ProjectRef(xplat, NAMED_ELEMENTS))

    emitter.add(rules.project_scope(dependency.api), ProjectRef(target, NAMED_ELEMENTS))

    if rules.bundles and dependency.include:
        emitter.add(INCLUDE_SCOPE, ProjectRef(target))

    for scope, which, configuration in rules.test_entries:
        path = target if which == "self" else xplat
        emitter.add(scope, ProjectRef(path, configuration))

    return target


def emit_external_dependency(emitter: DependencyEmitter, platform: Platform,
                             dependency: ExternalDependency) -> str:
    """
    Declare an external dependency in the given platform's vocabulary

    Returns:
        The resolved artifact coordinate
    """
    rules = RULES[platform]
    coordinate = dependency.coordinate(rules.platform_id)

    emitter.add(rules.external_scope(dependency.api), coordinate)

    if rules.bundles and dependency.include:
        emitter.add(INCLUDE_SCOPE, coordinate)

    return coordinate
