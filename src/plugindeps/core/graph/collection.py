"""Contracts between a graph collector and the rules that shape the graph.

During collection the engine walks declared dependencies top-down. At each
node it asks a *selector* whether an edge is included and a *manager*
whether its attributes are overridden, then derives child selectors and
managers for the next level from a ``CollectionContext``. After collection a
*transformer* rewrites the finished graph; during resolution a *filter*
decides which nodes get their files resolved.

Selectors and managers are immutable. Deriving returns either ``self``
(nothing changed) or a fresh instance; engines may cache derivations by
equality, so implementations define ``__eq__``/``__hash__`` over their
state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence

from plugindeps.core.artifact.models import Artifact, Dependency, Exclusion
from plugindeps.core.graph.node import DependencyNode


@dataclass(frozen=True)
class CollectionContext:
    """Where in the graph a child selector or manager is being derived.

    Attributes:
        session: The repository session driving the collection.
        artifact: The root artifact; only set for the root context.
        dependency: The dependency whose children are about to be processed,
            ``None`` at the root.
        managed_dependencies: Management declared by the current dependency's
            descriptor (or by the request, at the root).
    """

    session: Any
    artifact: Artifact | None = None
    dependency: Dependency | None = None
    managed_dependencies: tuple[Dependency, ...] = ()


@dataclass
class TransformationContext:
    """Scratch space shared by the transformers of one collection."""

    session: Any
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DependencyManagement:
    """Overrides a manager applies to one dependency; ``None`` leaves a field alone."""

    version: str | None = None
    scope: str | None = None
    optional: bool | None = None
    exclusions: frozenset[Exclusion] | None = None
    properties: dict[str, str] | None = None


class DependencySelector(Protocol):
    def select_dependency(self, dependency: Dependency) -> bool:
        """Return True to include *dependency* in the graph."""
        ...

    def derive_child_selector(self, context: CollectionContext) -> DependencySelector:
        """Return the selector for the children of ``context.dependency``."""
        ...


class DependencyManager(Protocol):
    def manage_dependency(self, dependency: Dependency) -> DependencyManagement | None:
        ...

    def derive_child_manager(self, context: CollectionContext) -> DependencyManager:
        ...


class DependencyGraphTransformer(Protocol):
    def transform_graph(self, node: DependencyNode, context: TransformationContext) -> DependencyNode:
        ...


class DependencyFilter(Protocol):
    def accept(self, node: DependencyNode, parents: Sequence[DependencyNode]) -> bool:
        """Return True to resolve *node*; *parents* runs from the direct parent up."""
        ...
