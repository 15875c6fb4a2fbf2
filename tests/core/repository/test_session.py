"""Tests for repository sessions, request traces and collect requests."""

from __future__ import annotations

import pytest

from plugindeps.core.artifact import Artifact, Dependency
from plugindeps.core.graph import (
    AndDependencySelector,
    DefaultDependencyManager,
    NearestWinsConflictResolver,
)
from plugindeps.core.repository import (
    CONFIG_PROP_VERBOSE,
    ArtifactDescriptorPolicy,
    CollectRequest,
    RemoteRepository,
    RequestTrace,
    config_boolean,
    new_session,
)


class TestConfigBoolean:
    """Tests for boolean-like configuration values."""

    @pytest.mark.parametrize("value, expected", [
        (True, True),
        (False, False),
        ("true", True),
        ("TRUE", True),
        ("false", False),
        ("yes", False),
    ])
    def test_values(self, value: object, expected: bool) -> None:
        assert config_boolean({"k": value}, False, "k") is expected

    def test_missing_uses_default(self) -> None:
        assert config_boolean({}, True, "k") is True

    def test_unsupported_type_uses_default(self) -> None:
        assert config_boolean({"k": 1}, True, "k") is True


class TestRepositorySystemSession:
    """Tests for session defaults and copies."""

    def test_new_session_defaults(self) -> None:
        session = new_session()
        assert isinstance(session.dependency_selector, AndDependencySelector)
        assert isinstance(session.dependency_manager, DefaultDependencyManager)
        assert isinstance(session.dependency_graph_transformer, NearestWinsConflictResolver)
        assert session.artifact_descriptor_policy == ArtifactDescriptorPolicy(ignore_missing=True, ignore_invalid=True)
        assert "maven-plugin" in session.artifact_type_registry

    def test_copy_does_not_touch_original(self) -> None:
        session = new_session()
        strict = session.copy(artifact_descriptor_policy=ArtifactDescriptorPolicy())
        assert strict is not session
        assert not strict.artifact_descriptor_policy.ignore_missing
        assert session.artifact_descriptor_policy.ignore_missing
        assert strict.dependency_selector is session.dependency_selector

    def test_with_config_property(self) -> None:
        session = new_session()
        verbose = session.with_config_property(CONFIG_PROP_VERBOSE, True)
        assert verbose.config_boolean(CONFIG_PROP_VERBOSE)
        assert not session.config_boolean(CONFIG_PROP_VERBOSE)
        assert CONFIG_PROP_VERBOSE not in session.config_properties

    def test_config_properties_copied(self) -> None:
        properties = {"a": "1"}
        session = new_session(properties)
        properties["b"] = "2"
        assert "b" not in session.config_properties


class TestRequestTrace:
    """Tests for request trace chains."""

    def test_chain(self) -> None:
        outer = RequestTrace.new_child(None, "plugin")
        inner = RequestTrace.new_child(outer, "collect")
        assert inner.parent is outer
        assert inner.chain() == ["collect", "plugin"]


class TestCollectRequest:
    """Tests for building collect requests."""

    def test_add_dependency_and_management(self) -> None:
        request = CollectRequest(repositories=[RemoteRepository("central")])
        dependency = Dependency(Artifact.parse("g:a:1"), "runtime")
        request.add_dependency(dependency)
        request.add_managed_dependency(dependency)
        assert request.dependencies == [dependency]
        assert request.managed_dependencies == [dependency]

    def test_remote_repository_str(self) -> None:
        assert str(RemoteRepository("central", "https://repo.example.org")) == "central (https://repo.example.org)"
        assert str(RemoteRepository("local")) == "local"
