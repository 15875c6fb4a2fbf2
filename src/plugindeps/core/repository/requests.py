"""Requests to, and results from, a repository system."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from plugindeps.core.artifact.models import Artifact, Dependency
from plugindeps.core.graph.collection import DependencyFilter
from plugindeps.core.graph.node import DependencyNode
from plugindeps.core.repository.session import RequestTrace


@dataclass(frozen=True)
class RemoteRepository:
    """A remote repository to read descriptors and artifacts from."""

    id: str
    url: str = ""

    def __str__(self) -> str:
        return f"{self.id} ({self.url})" if self.url else self.id


@dataclass
class ArtifactDescriptorRequest:
    artifact: Artifact
    repositories: list[RemoteRepository] = field(default_factory=list)
    request_context: str = ""
    trace: RequestTrace | None = None


@dataclass
class ArtifactDescriptorResult:
    """What a descriptor says about an artifact.

    Attributes:
        artifact: The artifact the descriptor was read for (possibly with
            updated properties).
        properties: Descriptor-level properties, e.g. ``prerequisites.maven``.
        dependencies: Declared dependencies.
        managed_dependencies: Declared dependency management.
    """

    artifact: Artifact
    properties: dict[str, Any] = field(default_factory=dict)
    dependencies: list[Dependency] = field(default_factory=list)
    managed_dependencies: list[Dependency] = field(default_factory=list)


@dataclass
class CollectRequest:
    """Input to graph collection.

    Attributes:
        root: The root dependency; its own descriptor contributes further
            dependencies and management.
        dependencies: Direct dependencies, taking precedence over the root
            descriptor's.
        managed_dependencies: Management applied to transitive dependencies.
    """

    root: Dependency | None = None
    dependencies: list[Dependency] = field(default_factory=list)
    managed_dependencies: list[Dependency] = field(default_factory=list)
    repositories: list[RemoteRepository] = field(default_factory=list)
    request_context: str = ""
    trace: RequestTrace | None = None

    def add_dependency(self, dependency: Dependency) -> None:
        self.dependencies.append(dependency)

    def add_managed_dependency(self, dependency: Dependency) -> None:
        self.managed_dependencies.append(dependency)


@dataclass
class CollectResult:
    request: CollectRequest
    root: DependencyNode


@dataclass
class DependencyRequest:
    """Input to resolution: a collected graph (or a request to collect one) and a filter."""

    collect_request: CollectRequest | None = None
    filter: DependencyFilter | None = None
    root: DependencyNode | None = None
    trace: RequestTrace | None = None


@dataclass
class DependencyResult:
    request: DependencyRequest
    root: DependencyNode
    artifacts: list[Artifact] = field(default_factory=list)


@dataclass
class ArtifactRequest:
    artifact: Artifact
    repositories: list[RemoteRepository] = field(default_factory=list)
    request_context: str = ""
    trace: RequestTrace | None = None


@dataclass
class ArtifactResult:
    request: ArtifactRequest
    artifact: Artifact
    repository: Any = None
