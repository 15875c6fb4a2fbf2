"""Dependency filters applied while resolving a collected graph."""

from __future__ import annotations

from typing import Iterable, Sequence

from plugindeps.core.artifact.models import Exclusion
from plugindeps.core.graph.collection import DependencyFilter
from plugindeps.core.graph.node import DependencyNode


class ScopeDependencyFilter:
    """Accepts nodes by scope; nodes without a dependency are always accepted."""

    def __init__(self, excluded: Iterable[str] = (), included: Iterable[str] | None = None) -> None:
        self.excluded = frozenset(excluded)
        self.included = frozenset(included) if included is not None else None

    def accept(self, node: DependencyNode, parents: Sequence[DependencyNode]) -> bool:
        dependency = node.dependency
        if dependency is None:
            return True
        scope = dependency.scope
        if self.included is not None and scope not in self.included:
            return False
        return scope not in self.excluded

    def __repr__(self) -> str:
        return f"ScopeDependencyFilter(excluded={sorted(self.excluded)})"


class AndDependencyFilter:
    """Accepts a node only if every operand accepts it."""

    def __init__(self, *filters: DependencyFilter) -> None:
        self.filters: tuple[DependencyFilter, ...] = tuple(filters)

    @staticmethod
    def new_instance(
        filter1: DependencyFilter | None, filter2: DependencyFilter | None
    ) -> DependencyFilter | None:
        if filter1 is None:
            return filter2
        if filter2 is None:
            return filter1
        return AndDependencyFilter(filter1, filter2)

    def accept(self, node: DependencyNode, parents: Sequence[DependencyNode]) -> bool:
        return all(f.accept(node, parents) for f in self.filters)


class ExclusionsDependencyFilter:
    """Rejects nodes whose artifact matches a ``groupId:artifactId`` pattern.

    Patterns may use ``*`` for either part, e.g. ``org.slf4j:*``.
    """

    def __init__(self, patterns: Iterable[str]) -> None:
        self.exclusions = tuple(Exclusion.parse(p) for p in patterns)

    def accept(self, node: DependencyNode, parents: Sequence[DependencyNode]) -> bool:
        if node.artifact is None:
            return True
        return not any(e.matches(node.artifact) for e in self.exclusions)
