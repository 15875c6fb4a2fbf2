"""The contract of a repository system (dependency-graph engine).

Implementations raise the ``RepositoryError`` subclasses from
``plugindeps.exceptions``:

- ``read_artifact_descriptor``: ``ArtifactDescriptorError``
- ``collect_dependencies``: ``DependencyCollectionError``
- ``resolve_dependencies``: ``DependencyResolutionError`` with the real
  failure chained as ``__cause__``
- ``resolve_artifact``: ``ArtifactResolutionError``
"""

from __future__ import annotations

from typing import Protocol

from plugindeps.core.repository.requests import (
    ArtifactDescriptorRequest,
    ArtifactDescriptorResult,
    ArtifactRequest,
    ArtifactResult,
    CollectRequest,
    CollectResult,
    DependencyRequest,
    DependencyResult,
)
from plugindeps.core.repository.session import RepositorySystemSession


class RepositorySystem(Protocol):
    def read_artifact_descriptor(
        self, session: RepositorySystemSession, request: ArtifactDescriptorRequest
    ) -> ArtifactDescriptorResult:
        ...

    def collect_dependencies(
        self, session: RepositorySystemSession, request: CollectRequest
    ) -> CollectResult:
        ...

    def resolve_dependencies(
        self, session: RepositorySystemSession, request: DependencyRequest
    ) -> DependencyResult:
        ...

    def resolve_artifact(
        self, session: RepositorySystemSession, request: ArtifactRequest
    ) -> ArtifactResult:
        ...
