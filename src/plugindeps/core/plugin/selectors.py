"""Selectors specific to plugin class paths."""

from __future__ import annotations

from dataclasses import dataclass

from plugindeps.core.artifact.models import PROVIDED, TEST, Artifact, Dependency
from plugindeps.core.graph.collection import CollectionContext, DependencySelector


@dataclass(frozen=True)
class ClassicScopeDependencySelector:
    """Scope selection as resolvers did it before transitive scopes were fixed.

    Plugins whose prerequisites predate the fix were built and tested
    against this behaviour, so it is reproduced as is: ``test`` and
    ``provided`` dependencies are dropped everywhere except directly below
    the root, and the selector falls back to accepting everything whenever
    it is derived for the root context again.

    Two instances are equal when they are in the same state.
    """

    transitive: bool = False

    def select_dependency(self, dependency: Dependency) -> bool:
        return not self.transitive or dependency.scope not in (TEST, PROVIDED)

    def derive_child_selector(self, context: CollectionContext) -> DependencySelector:
        child = self
        if context.dependency is not None and not child.transitive:
            child = ClassicScopeDependencySelector(transitive=True)
        if context.dependency is None and child.transitive:
            child = ClassicScopeDependencySelector(transitive=False)
        return child


WAGON_GROUP_ID = "org.apache.maven.wagon"
WAGON_PROVIDER_API = "wagon-provider-api"


def is_legacy_core_artifact(artifact: Artifact) -> bool:
    """True for ``org.apache.maven:maven-*`` artifacts of the 2.x line."""
    return (
        artifact.version.startswith("2.")
        and artifact.artifact_id.startswith("maven-")
        and artifact.group_id == "org.apache.maven"
    )


def is_wagon_provider(artifact: Artifact) -> bool:
    return artifact.group_id == WAGON_GROUP_ID and artifact.artifact_id == WAGON_PROVIDER_API


@dataclass(frozen=True)
class WagonExcluder:
    """Keeps the transport API of old core artifacts off the plugin class path.

    Below a 2.x core artifact the ``wagon-provider-api`` dependency is
    dropped; the running build tool provides its own.
    """

    core_artifact: bool = False

    def select_dependency(self, dependency: Dependency) -> bool:
        return not self.core_artifact or not is_wagon_provider(dependency.artifact)

    def derive_child_selector(self, context: CollectionContext) -> DependencySelector:
        dependency = context.dependency
        if self.core_artifact or dependency is None or not is_legacy_core_artifact(dependency.artifact):
            return self
        return WagonExcluder(core_artifact=True)
