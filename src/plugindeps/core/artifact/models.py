"""Artifact coordinates, dependency edges and the artifact type registry.

These are the value types every other layer speaks: an ``Artifact`` is a
coordinate plus a free-form property bag, a ``Dependency`` is an artifact
with a scope, an optionality flag and exclusions. All of them are frozen;
"setters" return modified copies.

Coordinates render the way repository tooling prints them::

    groupId:artifactId:extension[:classifier]:version
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping

# ---------------------------------------------------------------------------
# Well-known scopes and artifact properties
# ---------------------------------------------------------------------------

COMPILE = "compile"
PROVIDED = "provided"
RUNTIME = "runtime"
TEST = "test"
SYSTEM = "system"

PROP_TYPE = "type"
PROP_LANGUAGE = "language"
PROP_LOCAL_PATH = "localPath"
PROP_INCLUDES_DEPENDENCIES = "includesDependencies"
PROP_CONSTITUTES_BUILD_PATH = "constitutesBuildPath"

# Minimum build-tool version the artifact declares it needs.
PROP_REQUIRED_MAVEN_VERSION = "requiredMavenVersion"

WILDCARD = "*"


# ---------------------------------------------------------------------------
# Artifact
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Artifact:
    """A specific artifact in a repository.

    Attributes:
        group_id: Group identifier (e.g., "org.apache.maven.plugins").
        artifact_id: Artifact identifier (e.g., "maven-compiler-plugin").
        version: Version string; may be empty for not yet versioned artifacts.
        extension: File extension (e.g., "jar", "pom").
        classifier: Optional classifier, empty string when absent.
        properties: Extensible string metadata (type, language, prerequisites).
        file: Local file once the artifact has been resolved.
    """

    group_id: str
    artifact_id: str
    version: str = ""
    extension: str = "jar"
    classifier: str = ""
    properties: Mapping[str, str] = field(default_factory=dict, hash=False)
    file: Path | None = None

    @classmethod
    def parse(cls, coords: str, properties: Mapping[str, str] | None = None) -> Artifact:
        """Build an artifact from ``g:a[:ext[:classifier]]:v`` coordinates.

        Raises:
            ValueError: If the coordinates have fewer than three or more than
                five segments.
        """
        parts = [p.strip() for p in coords.strip().split(":")]
        if len(parts) < 3 or len(parts) > 5 or not all(parts[:2]):
            raise ValueError(
                f"Bad artifact coordinates {coords!r}, expected format is "
                "<groupId>:<artifactId>[:<extension>[:<classifier>]]:<version>"
            )
        extension = parts[2] if len(parts) >= 4 else "jar"
        classifier = parts[3] if len(parts) == 5 else ""
        return cls(
            group_id=parts[0],
            artifact_id=parts[1],
            version=parts[-1],
            extension=extension or "jar",
            classifier=classifier,
            properties=dict(properties or {}),
        )

    @property
    def key(self) -> str:
        """Versionless identity used for conflict detection and management."""
        base = f"{self.group_id}:{self.artifact_id}:{self.extension}"
        return f"{base}:{self.classifier}" if self.classifier else base

    def get_property(self, key: str, default: str | None = None) -> str | None:
        return self.properties.get(key, default)

    def with_properties(self, properties: Mapping[str, str]) -> Artifact:
        return replace(self, properties=dict(properties))

    def with_version(self, version: str) -> Artifact:
        return replace(self, version=version)

    def with_file(self, file: Path | None) -> Artifact:
        return replace(self, file=file)

    def __str__(self) -> str:
        base = f"{self.group_id}:{self.artifact_id}:{self.extension}"
        if self.classifier:
            base = f"{base}:{self.classifier}"
        return f"{base}:{self.version}"


# ---------------------------------------------------------------------------
# Exclusion & Dependency
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Exclusion:
    """A pattern removing matching artifacts below the declaring dependency.

    Any field may be ``"*"`` to match everything.
    """

    group_id: str
    artifact_id: str
    classifier: str = WILDCARD
    extension: str = WILDCARD

    @classmethod
    def parse(cls, pattern: str) -> Exclusion:
        """Build an exclusion from ``groupId:artifactId`` (wildcards allowed)."""
        parts = [p.strip() for p in pattern.split(":")]
        if len(parts) not in (2, 3, 4) or not all(parts):
            raise ValueError(f"Bad exclusion pattern {pattern!r}, expected <groupId>:<artifactId>")
        return cls(*parts)

    def matches(self, artifact: Artifact) -> bool:
        return (
            _matches(self.group_id, artifact.group_id)
            and _matches(self.artifact_id, artifact.artifact_id)
            and _matches(self.extension, artifact.extension)
            and _matches(self.classifier, artifact.classifier)
        )

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.extension}:{self.classifier}"


def _matches(pattern: str, value: str) -> bool:
    return pattern == WILDCARD or pattern == value


@dataclass(frozen=True)
class Dependency:
    """A dependency edge: an artifact plus how it is needed.

    Attributes:
        artifact: The artifact depended upon.
        scope: Scope label; empty string for the unscoped root dependency.
        optional: Tri-state optionality, ``None`` meaning "not declared".
        exclusions: Patterns removing transitive dependencies of this one.
    """

    artifact: Artifact
    scope: str = ""
    optional: bool | None = None
    exclusions: frozenset[Exclusion] = frozenset()

    @property
    def is_optional(self) -> bool:
        return bool(self.optional)

    def with_artifact(self, artifact: Artifact) -> Dependency:
        return replace(self, artifact=artifact)

    def with_scope(self, scope: str | None) -> Dependency:
        return replace(self, scope=scope or "")

    def with_optional(self, optional: bool | None) -> Dependency:
        return replace(self, optional=optional)

    def with_exclusions(self, exclusions: frozenset[Exclusion] | set[Exclusion]) -> Dependency:
        return replace(self, exclusions=frozenset(exclusions))

    def __str__(self) -> str:
        suffix = "?" if self.is_optional else ""
        return f"{self.artifact} ({self.scope}{suffix})"


# ---------------------------------------------------------------------------
# Artifact types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ArtifactType:
    """A packaging type and the artifact shape it implies."""

    id: str
    extension: str
    classifier: str = ""
    properties: Mapping[str, str] = field(default_factory=dict, hash=False)

    @classmethod
    def of(
        cls,
        type_id: str,
        extension: str | None = None,
        classifier: str = "",
        language: str = "none",
        constitutes_build_path: bool = False,
        includes_dependencies: bool = False,
    ) -> ArtifactType:
        props = {
            PROP_TYPE: type_id,
            PROP_LANGUAGE: language,
            PROP_CONSTITUTES_BUILD_PATH: str(constitutes_build_path).lower(),
            PROP_INCLUDES_DEPENDENCIES: str(includes_dependencies).lower(),
        }
        return cls(type_id, extension or type_id, classifier, props)


class ArtifactTypeRegistry:
    """Lookup of known artifact types by id."""

    def __init__(self, types: list[ArtifactType] | None = None) -> None:
        self._types: dict[str, ArtifactType] = {}
        for artifact_type in types or []:
            self.add(artifact_type)

    def add(self, artifact_type: ArtifactType) -> None:
        self._types[artifact_type.id] = artifact_type

    def get(self, type_id: str) -> ArtifactType | None:
        return self._types.get(type_id)

    def get_or_default(self, type_id: str) -> ArtifactType:
        """Return the registered type, or an ad-hoc one using the id as extension."""
        return self._types.get(type_id) or ArtifactType.of(type_id)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._types


def default_type_registry() -> ArtifactTypeRegistry:
    """Registry with the packaging types Maven itself knows about."""
    return ArtifactTypeRegistry([
        ArtifactType.of("pom"),
        ArtifactType.of("maven-plugin", "jar", language="java", constitutes_build_path=True),
        ArtifactType.of("jar", language="java", constitutes_build_path=True),
        ArtifactType.of("ejb", "jar", language="java", constitutes_build_path=True),
        ArtifactType.of("ejb-client", "jar", "client", language="java", constitutes_build_path=True),
        ArtifactType.of("test-jar", "jar", "tests", language="java", constitutes_build_path=True),
        ArtifactType.of("javadoc", "jar", "javadoc", language="java", constitutes_build_path=True),
        ArtifactType.of("java-source", "jar", "sources", language="java"),
        ArtifactType.of("war", language="java", includes_dependencies=True),
        ArtifactType.of("ear", language="java", includes_dependencies=True),
        ArtifactType.of("rar", language="java", includes_dependencies=True),
        ArtifactType.of("par", language="java", includes_dependencies=True),
    ])
