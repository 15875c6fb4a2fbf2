"""Tests for reading plugin prerequisites into the plugin artifact."""

from __future__ import annotations

import pytest

from plugindeps.core.artifact import PROP_REQUIRED_MAVEN_VERSION, Artifact
from plugindeps.core.plugin import create_plugin_artifact
from plugindeps.core.repository import ArtifactDescriptorResult, RemoteRepository, new_session
from plugindeps.engine import InMemoryRepositorySystem
from plugindeps.exceptions import ArtifactDescriptorError

PLUGIN = Artifact.parse("org.example:demo-plugin:1.0", {"type": "maven-plugin"})


class _RecordingSystem:
    """Repository system returning a fixed descriptor and remembering the call."""

    def __init__(self, properties: dict) -> None:
        self.properties = properties
        self.calls: list = []

    def read_artifact_descriptor(self, session, request):
        self.calls.append((session, request))
        return ArtifactDescriptorResult(request.artifact, dict(self.properties))


class TestCreatePluginArtifact:
    """Tests for ``create_plugin_artifact``."""

    def test_prerequisites_copied(self, make_repository) -> None:
        system, repositories = make_repository(prerequisites="2.0.6")
        artifact = create_plugin_artifact(system, PLUGIN, new_session(), repositories)
        assert artifact.get_property(PROP_REQUIRED_MAVEN_VERSION) == "2.0.6"
        assert artifact.get_property("type") == "maven-plugin"

    def test_absent_prerequisites_leave_property_absent(self, make_repository) -> None:
        system, repositories = make_repository(prerequisites=None)
        artifact = create_plugin_artifact(system, PLUGIN, new_session(), repositories)
        assert artifact.get_property(PROP_REQUIRED_MAVEN_VERSION) is None

    def test_missing_descriptor_tolerated(self) -> None:
        """A plugin without descriptor resolves as if it declared nothing."""
        artifact = create_plugin_artifact(
            InMemoryRepositorySystem(), PLUGIN, new_session(), [RemoteRepository("central")]
        )
        assert artifact == PLUGIN
        assert artifact.get_property(PROP_REQUIRED_MAVEN_VERSION) is None

    def test_invalid_descriptor_fails(self, make_repository) -> None:
        def invalidate(data):
            data["artifacts"][0]["invalid"] = True

        system, repositories = make_repository(customize=invalidate)
        with pytest.raises(ArtifactDescriptorError):
            create_plugin_artifact(system, PLUGIN, new_session(), repositories)

    def test_unreachable_repository_fails(self) -> None:
        system = InMemoryRepositorySystem(unreachable=["central"])
        with pytest.raises(ArtifactDescriptorError, match="could not transfer"):
            create_plugin_artifact(system, PLUGIN, new_session(), [RemoteRepository("central")])

    def test_relaxed_policy_on_a_copy(self) -> None:
        """The descriptor is read with a relaxed copy; the caller's session is untouched."""
        system = _RecordingSystem({"prerequisites.maven": 3})
        session = new_session()
        artifact = create_plugin_artifact(system, PLUGIN, session, [RemoteRepository("central")])

        used_session, request = system.calls[0]
        assert used_session is not session
        assert used_session.artifact_descriptor_policy.ignore_missing
        assert not used_session.artifact_descriptor_policy.ignore_invalid
        assert session.artifact_descriptor_policy.ignore_invalid
        assert request.request_context == "plugin"
        assert request.repositories == [RemoteRepository("central")]
        assert artifact.get_property(PROP_REQUIRED_MAVEN_VERSION) == "3"
