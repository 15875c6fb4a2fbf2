"""Repository session: the per-resolution configuration handed to an engine.

Sessions are frozen. Code that needs different settings (a relaxed
descriptor policy, verbose management tracking, plugin specific selectors)
derives a copy with ``copy()`` so that the caller's session is never
changed.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from plugindeps.core.artifact.models import PROVIDED, TEST, ArtifactTypeRegistry, default_type_registry
from plugindeps.core.graph.collection import (
    DependencyGraphTransformer,
    DependencyManager,
    DependencySelector,
)
from plugindeps.core.graph.managers import DefaultDependencyManager
from plugindeps.core.graph.selectors import (
    AndDependencySelector,
    ExclusionDependencySelector,
    OptionalDependencySelector,
    ScopeDependencySelector,
)
from plugindeps.core.graph.transformers import NearestWinsConflictResolver

# When true, collectors record the premanaged value of every managed attribute.
CONFIG_PROP_VERBOSE = "aether.dependencyManager.verbose"


def config_boolean(properties: Mapping[str, Any], default: bool, key: str) -> bool:
    """Read a boolean-like configuration value (bool, or "true"/"false" text)."""
    value = properties.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return default


@dataclass(frozen=True)
class ArtifactDescriptorPolicy:
    """How strictly descriptor problems are treated.

    Attributes:
        ignore_missing: A descriptor that does not exist yields an empty
            result instead of an error.
        ignore_invalid: A descriptor that cannot be interpreted yields an
            empty result instead of an error.
    """

    ignore_missing: bool = False
    ignore_invalid: bool = False


@dataclass(frozen=True)
class RequestTrace:
    """Causal chain of the requests that led to an engine call."""

    data: Any
    parent: RequestTrace | None = None

    @staticmethod
    def new_child(parent: RequestTrace | None, data: Any) -> RequestTrace:
        return RequestTrace(data, parent)

    def chain(self) -> list[Any]:
        """Trace data from this request up to the outermost one."""
        items: list[Any] = []
        trace: RequestTrace | None = self
        while trace is not None:
            items.append(trace.data)
            trace = trace.parent
        return items


@dataclass(frozen=True, eq=False)
class RepositorySystemSession:
    """Settings for one resolution.

    Attributes:
        config_properties: Free-form configuration (see ``CONFIG_PROP_VERBOSE``).
        dependency_selector: Decides which edges are collected.
        dependency_manager: Applies dependency management during collection.
        dependency_graph_transformer: Post-processes the collected graph.
        artifact_type_registry: Known packaging types.
        artifact_descriptor_policy: Tolerance for broken descriptors.
    """

    config_properties: Mapping[str, Any] = field(default_factory=dict)
    dependency_selector: DependencySelector | None = None
    dependency_manager: DependencyManager | None = None
    dependency_graph_transformer: DependencyGraphTransformer | None = None
    artifact_type_registry: ArtifactTypeRegistry = field(default_factory=default_type_registry)
    artifact_descriptor_policy: ArtifactDescriptorPolicy = field(default_factory=ArtifactDescriptorPolicy)

    def copy(self, **changes: Any) -> RepositorySystemSession:
        return replace(self, **changes)

    def with_config_property(self, key: str, value: Any) -> RepositorySystemSession:
        properties = dict(self.config_properties)
        properties[key] = value
        return replace(self, config_properties=properties)

    def config_boolean(self, key: str, default: bool = False) -> bool:
        return config_boolean(self.config_properties, default, key)


def new_session(config_properties: Mapping[str, Any] | None = None) -> RepositorySystemSession:
    """Session with the selector, manager and transformer a build uses by default.

    Descriptors that are missing or cannot be interpreted are tolerated, so a
    dependency without metadata is collected as a leaf.
    """
    return RepositorySystemSession(
        config_properties=dict(config_properties or {}),
        dependency_selector=AndDependencySelector(
            ScopeDependencySelector(excluded=(TEST, PROVIDED)),
            OptionalDependencySelector(),
            ExclusionDependencySelector(),
        ),
        dependency_manager=DefaultDependencyManager(),
        dependency_graph_transformer=NearestWinsConflictResolver(),
        artifact_descriptor_policy=ArtifactDescriptorPolicy(ignore_missing=True, ignore_invalid=True),
    )
