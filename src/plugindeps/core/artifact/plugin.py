"""Plugin descriptors as declared in a build file.

A ``PluginDescriptor`` is the ``<plugin>`` element: coordinates plus the
dependencies the build author attached to it. Declared dependencies are
model-level (they carry a packaging *type*, not an extension) and are
converted to graph-level ``Dependency`` objects with an artifact type
registry.
"""

from __future__ import annotations

from dataclasses import dataclass

from plugindeps.core.artifact.models import (
    COMPILE,
    PROP_LOCAL_PATH,
    Artifact,
    ArtifactTypeRegistry,
    Dependency,
    Exclusion,
)

PLUGIN_TYPE = "maven-plugin"


@dataclass(frozen=True)
class DeclaredDependency:
    """A dependency as written in the build file.

    Attributes:
        group_id: Group identifier.
        artifact_id: Artifact identifier.
        version: Requested version.
        type: Packaging type looked up in the artifact type registry.
        classifier: Explicit classifier; overrides the type's default.
        scope: Declared scope (``compile`` when not given).
        optional: Declared optionality, ``None`` when not declared.
        exclusions: ``(groupId, artifactId)`` pairs, wildcards allowed.
        system_path: Local path, only meaningful for ``system`` scope.
    """

    group_id: str
    artifact_id: str
    version: str
    type: str = "jar"
    classifier: str = ""
    scope: str = COMPILE
    optional: bool | None = None
    exclusions: tuple[tuple[str, str], ...] = ()
    system_path: str | None = None

    def to_dependency(self, registry: ArtifactTypeRegistry) -> Dependency:
        """Convert to a graph dependency using *registry* for the packaging type."""
        artifact_type = registry.get_or_default(self.type)
        props = dict(artifact_type.properties)
        if self.system_path:
            props[PROP_LOCAL_PATH] = self.system_path
        artifact = Artifact(
            group_id=self.group_id,
            artifact_id=self.artifact_id,
            version=self.version,
            extension=artifact_type.extension,
            classifier=self.classifier or artifact_type.classifier,
            properties=props,
        )
        exclusions = frozenset(Exclusion(g, a) for g, a in self.exclusions)
        return Dependency(artifact, self.scope or COMPILE, self.optional, exclusions)


@dataclass(frozen=True)
class PluginDescriptor:
    """A build plugin and the dependencies declared on it."""

    group_id: str
    artifact_id: str
    version: str
    dependencies: tuple[DeclaredDependency, ...] = ()

    @property
    def key(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    @property
    def id(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    def to_artifact(self, registry: ArtifactTypeRegistry) -> Artifact:
        """The plugin's own artifact, typed as a plugin."""
        artifact_type = registry.get_or_default(PLUGIN_TYPE)
        return Artifact(
            group_id=self.group_id,
            artifact_id=self.artifact_id,
            version=self.version,
            extension=artifact_type.extension,
            classifier=artifact_type.classifier,
            properties=dict(artifact_type.properties),
        )

    def __str__(self) -> str:
        return self.id

