"""Repository sessions, requests and the repository system contract."""

from plugindeps.core.repository.requests import (
    ArtifactDescriptorRequest,
    ArtifactDescriptorResult,
    ArtifactRequest,
    ArtifactResult,
    CollectRequest,
    CollectResult,
    DependencyRequest,
    DependencyResult,
    RemoteRepository,
)
from plugindeps.core.repository.session import (
    CONFIG_PROP_VERBOSE,
    ArtifactDescriptorPolicy,
    RepositorySystemSession,
    RequestTrace,
    config_boolean,
    new_session,
)
from plugindeps.core.repository.system import RepositorySystem

__all__ = [
    "ArtifactDescriptorRequest",
    "ArtifactDescriptorResult",
    "ArtifactRequest",
    "ArtifactResult",
    "CollectRequest",
    "CollectResult",
    "DependencyRequest",
    "DependencyResult",
    "RemoteRepository",
    "CONFIG_PROP_VERBOSE",
    "ArtifactDescriptorPolicy",
    "RepositorySystemSession",
    "RequestTrace",
    "config_boolean",
    "new_session",
    "RepositorySystem",
]
