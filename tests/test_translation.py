"""Tests for translation.py: per-platform dependency vocabulary."""

import pytest

from minecraft_submodule.dependencies import DependencyRecorder, ExternalDependency, ProjectDependency, ProjectRef
from minecraft_submodule.platforms import Platform
from minecraft_submodule.translation import (
    RULES,
    emit_external_dependency,
    emit_project_dependency,
)


def emitted(platform, dependency):
    recorder = DependencyRecorder()
    if isinstance(dependency, ProjectDependency):
        emit_project_dependency(recorder, platform, dependency)
    else:
        emit_external_dependency(recorder, platform, dependency)
    return [(d.scope, d.notation) for d in recorder.declarations]


class TestRulesTable:
    def test_every_platform_has_rules(self):
        assert set(RULES) == set(Platform)

    @pytest.mark.parametrize("platform", list(Platform))
    def test_api_and_private_scopes_differ(self, platform):
        rules = RULES[platform]
        assert rules.project_scope(True) != rules.project_scope(False)
        assert rules.external_scope(True) != rules.external_scope(False)

    def test_only_loader_platforms_bundle(self):
        bundling = {p for p, rules in RULES.items() if rules.bundles}
        assert bundling == {Platform.FABRIC, Platform.NEOFORGE}


class TestProjectTranslation:
    def test_xplat(self):
        assert emitted(Platform.XPLAT, ProjectDependency(":foo", api=False)) == [
            ("compileOnly", ProjectRef(":foo-xplat", "namedElements")),
            ("testCompileOnly", ProjectRef(":foo-xplat", "namedElements")),
            ("testRuntimeOnly", ProjectRef(":foo-xplat", "namedElements")),
        ]

    def test_fabric(self):
        assert emitted(Platform.FABRIC, ProjectDependency(":foo")) == [
            ("compileOnly", ProjectRef(":foo-xplat", "namedElements")),
            ("api", ProjectRef(":foo-fabric", "namedElements")),
            ("include", ProjectRef(":foo-fabric")),
            ("testCompileOnly", ProjectRef(":foo-xplat", "namedElements")),
            ("testImplementation", ProjectRef(":foo-fabric", "namedElements")),
        ]

    def test_neoforge_private_without_include(self):
        assert emitted(Platform.NEOFORGE, ProjectDependency(":foo", api=False, include=False)) == [
            ("compileOnly", ProjectRef(":foo-xplat", "namedElements")),
            ("implementation", ProjectRef(":foo-neoforge", "namedElements")),
            ("testCompileOnly", ProjectRef(":foo-xplat", "namedElements")),
            ("testCompileOnly", ProjectRef(":foo-neoforge", "namedElements")),
            ("testRuntimeOnly", ProjectRef(":foo-neoforge", "dev")),
        ]

    def test_mojmap_root_family(self):
        assert emitted(Platform.MOJMAP, ProjectDependency(":")) == [
            ("api", ProjectRef(":xplat-mojmap", "namedElements")),
            ("testCompileOnly", ProjectRef(":xplat-mojmap", "namedElements")),
        ]

    def test_returns_target(self):
        recorder = DependencyRecorder()
        target = emit_project_dependency(recorder, Platform.INTERMEDIARY, ProjectDependency(":lib"))
        assert target == ":lib-xplat-intermediary"


class TestExternalTranslation:
    def test_fabric_bundles(self):
        dependency = ExternalDependency(lambda p: f"a:{p}:1", api=True, include=True)
        assert emitted(Platform.FABRIC, dependency) == [("modApi", "a:fabric:1"), ("include", "a:fabric:1")]

    def test_mojmap_never_bundles(self):
        dependency = ExternalDependency(lambda p: f"a:{p}:1", api=False, include=True)
        assert emitted(Platform.MOJMAP, dependency) == [("modCompileOnly", "a:xplat-mojmap:1")]

    def test_neoforge_private_unbundled(self):
        dependency = ExternalDependency(lambda p: "a:b:1", api=False, include=False)
        assert emitted(Platform.NEOFORGE, dependency) == [("modImplementation", "a:b:1")]
