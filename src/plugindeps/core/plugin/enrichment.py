"""Reading a plugin's descriptor to learn which build-tool version it needs."""

from __future__ import annotations

import logging
from typing import Sequence

from plugindeps.core.artifact.models import PROP_REQUIRED_MAVEN_VERSION, Artifact
from plugindeps.core.repository.requests import ArtifactDescriptorRequest, RemoteRepository
from plugindeps.core.repository.session import (
    ArtifactDescriptorPolicy,
    RepositorySystemSession,
    RequestTrace,
)
from plugindeps.core.repository.system import RepositorySystem

logger = logging.getLogger(__name__)

REPOSITORY_CONTEXT = "plugin"

# Descriptor property carrying the minimum build-tool version.
PREREQUISITES_PROPERTY = "prerequisites.maven"

# A missing descriptor must not fail plugin resolution; an unreadable one does.
RELAXED_DESCRIPTOR_POLICY = ArtifactDescriptorPolicy(ignore_missing=True, ignore_invalid=False)


def create_plugin_artifact(
    repository_system: RepositorySystem,
    artifact: Artifact,
    session: RepositorySystemSession,
    repositories: Sequence[RemoteRepository],
) -> Artifact:
    """Return *artifact* as described by its descriptor, stamped with its prerequisites.

    When the descriptor declares ``prerequisites.maven`` the value is copied
    to the ``requiredMavenVersion`` artifact property; otherwise the property
    stays absent.

    Raises:
        ArtifactDescriptorError: If the descriptor cannot be retrieved.
    """
    descriptor_session = session.copy(artifact_descriptor_policy=RELAXED_DESCRIPTOR_POLICY)
    request = ArtifactDescriptorRequest(
        artifact=artifact,
        repositories=list(repositories),
        request_context=REPOSITORY_CONTEXT,
        trace=RequestTrace.new_child(None, artifact),
    )
    result = repository_system.read_artifact_descriptor(descriptor_session, request)

    plugin_artifact = result.artifact
    required_version = result.properties.get(PREREQUISITES_PROPERTY)
    if required_version is not None:
        properties = dict(plugin_artifact.properties)
        properties[PROP_REQUIRED_MAVEN_VERSION] = str(required_version)
        plugin_artifact = plugin_artifact.with_properties(properties)
        logger.debug("Plugin %s requires build tool %s", plugin_artifact, required_version)
    return plugin_artifact
