"""Dependency graph nodes and depth-first visitors.

A ``DependencyNode`` owns its children exclusively. Management (overrides
applied by a dependency manager during collection) is recorded explicitly:
``managed`` says *which* attributes were overridden, ``premanaged`` holds
the value they had before, and is only populated when the session asked
for verbose tracking.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Protocol

from plugindeps.core.artifact.models import Artifact, Dependency


class Managed(enum.Enum):
    """Attributes a dependency manager can override."""

    SCOPE = "scope"
    VERSION = "version"
    OPTIONAL = "optional"
    EXCLUSIONS = "exclusions"
    PROPERTIES = "properties"


@dataclass(eq=False)
class DependencyNode:
    """A vertex of a collected dependency graph.

    Nodes compare by identity: the same dependency may occur several times
    in one graph and each occurrence is its own node.

    Attributes:
        dependency: The edge leading to this node; ``None`` for a root built
            from a bare artifact.
        artifact: The node's artifact; set together with the dependency or on
            its own for a dependency-less root. Resolution replaces it with a
            copy that has its file set.
        children: Ordered child nodes.
        managed: Attributes overridden by dependency management.
        premanaged: Values of overridden attributes before management.
        repositories: Repositories the node was collected from.
        request_context: Context label of the originating request.
    """

    dependency: Dependency | None = None
    artifact: Artifact | None = None
    children: list[DependencyNode] = field(default_factory=list)
    managed: frozenset[Managed] = frozenset()
    premanaged: dict[Managed, Any] = field(default_factory=dict)
    repositories: list[Any] = field(default_factory=list)
    request_context: str = ""

    def __post_init__(self) -> None:
        if self.artifact is None and self.dependency is not None:
            self.artifact = self.dependency.artifact

    def is_managed(self, attribute: Managed) -> bool:
        return attribute in self.managed

    def set_artifact(self, artifact: Artifact) -> None:
        """Replace the artifact, keeping the dependency edge in sync."""
        self.artifact = artifact
        if self.dependency is not None:
            self.dependency = self.dependency.with_artifact(artifact)

    def set_scope(self, scope: str) -> None:
        if self.dependency is not None:
            self.dependency = self.dependency.with_scope(scope)

    def accept(self, visitor: DependencyVisitor) -> bool:
        """Walk this subtree depth-first.

        Returns:
            False if the visitor asked to stop the traversal.
        """
        if visitor.visit_enter(self):
            for child in list(self.children):
                if not child.accept(visitor):
                    break
        return visitor.visit_leave(self)

    def __str__(self) -> str:
        if self.dependency is not None:
            return str(self.dependency)
        return str(self.artifact) if self.artifact is not None else "(null)"


class DependencyVisitor(Protocol):
    """Depth-first callbacks around a node and its children."""

    def visit_enter(self, node: DependencyNode) -> bool:
        """Return False to skip the node's children."""
        ...

    def visit_leave(self, node: DependencyNode) -> bool:
        """Return False to stop visiting the node's siblings."""
        ...


class PreorderNodeCollector:
    """Collects every node of a graph in pre-order."""

    def __init__(self) -> None:
        self.nodes: list[DependencyNode] = []

    def visit_enter(self, node: DependencyNode) -> bool:
        self.nodes.append(node)
        return True

    def visit_leave(self, node: DependencyNode) -> bool:
        return True


def iter_nodes(root: DependencyNode) -> list[DependencyNode]:
    """Return every node of the graph rooted at *root* in pre-order."""
    collector = PreorderNodeCollector()
    root.accept(collector)
    return collector.nodes
