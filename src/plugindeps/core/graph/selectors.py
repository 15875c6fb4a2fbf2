"""General purpose dependency selectors.

Every selector here is immutable and compares by state, so that a collector
can recognise that two derivations produced the same rule set.
"""

from __future__ import annotations

from typing import Iterable

from plugindeps.core.artifact.models import Dependency, Exclusion
from plugindeps.core.graph.collection import CollectionContext, DependencySelector


class AndDependencySelector:
    """Selects a dependency only if every operand selects it."""

    def __init__(self, *selectors: DependencySelector) -> None:
        self.selectors: tuple[DependencySelector, ...] = tuple(selectors)

    @staticmethod
    def new_instance(
        selector1: DependencySelector | None, selector2: DependencySelector | None
    ) -> DependencySelector | None:
        """Combine two selectors, skipping the ``None`` ones."""
        if selector1 is None:
            return selector2
        if selector2 is None or selector2 == selector1:
            return selector1
        return AndDependencySelector(selector1, selector2)

    def select_dependency(self, dependency: Dependency) -> bool:
        return all(s.select_dependency(dependency) for s in self.selectors)

    def derive_child_selector(self, context: CollectionContext) -> DependencySelector:
        derived = tuple(s.derive_child_selector(context) for s in self.selectors)
        if all(d is s for d, s in zip(derived, self.selectors)):
            return self
        return AndDependencySelector(*derived)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, AndDependencySelector) and set(self.selectors) == set(other.selectors)

    def __hash__(self) -> int:
        return hash(frozenset(self.selectors))

    def __repr__(self) -> str:
        inner = ", ".join(repr(s) for s in self.selectors)
        return f"AndDependencySelector({inner})"


class OptionalDependencySelector:
    """Drops optional dependencies of dependencies (depth two and below)."""

    def __init__(self, depth: int = 0) -> None:
        self.depth = depth

    def select_dependency(self, dependency: Dependency) -> bool:
        return self.depth < 2 or not dependency.is_optional

    def derive_child_selector(self, context: CollectionContext) -> DependencySelector:
        if self.depth >= 2:
            return self
        return OptionalDependencySelector(self.depth + 1)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, OptionalDependencySelector) and self.depth == other.depth

    def __hash__(self) -> int:
        return hash((OptionalDependencySelector, self.depth))

    def __repr__(self) -> str:
        return f"OptionalDependencySelector(depth={self.depth})"


class ExclusionDependencySelector:
    """Honours the exclusions declared along the current dependency path."""

    def __init__(self, exclusions: Iterable[Exclusion] = ()) -> None:
        self.exclusions = frozenset(exclusions)

    def select_dependency(self, dependency: Dependency) -> bool:
        return not any(e.matches(dependency.artifact) for e in self.exclusions)

    def derive_child_selector(self, context: CollectionContext) -> DependencySelector:
        dependency = context.dependency
        if dependency is None or not dependency.exclusions:
            return self
        merged = self.exclusions | dependency.exclusions
        if merged == self.exclusions:
            return self
        return ExclusionDependencySelector(merged)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ExclusionDependencySelector) and self.exclusions == other.exclusions

    def __hash__(self) -> int:
        return hash((ExclusionDependencySelector, self.exclusions))

    def __repr__(self) -> str:
        return f"ExclusionDependencySelector({sorted(str(e) for e in self.exclusions)})"


class ScopeDependencySelector:
    """Filters transitive dependencies by scope.

    Direct dependencies of the root are always selected. Once the collector
    descends below them the selector becomes transitive and stays so.

    Args:
        excluded: Scopes rejected on transitive dependencies.
        included: If given, only these scopes are accepted transitively.
    """

    def __init__(
        self,
        excluded: Iterable[str] = (),
        included: Iterable[str] | None = None,
        transitive: bool = False,
    ) -> None:
        self.excluded = frozenset(excluded)
        self.included = frozenset(included) if included is not None else None
        self.transitive = transitive

    def select_dependency(self, dependency: Dependency) -> bool:
        if not self.transitive:
            return True
        scope = dependency.scope
        if self.included is not None and scope not in self.included:
            return False
        return scope not in self.excluded

    def derive_child_selector(self, context: CollectionContext) -> DependencySelector:
        if self.transitive or context.dependency is None:
            return self
        return ScopeDependencySelector(self.excluded, self.included, True)

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, ScopeDependencySelector)
            and self.transitive == other.transitive
            and self.excluded == other.excluded
            and self.included == other.included
        )

    def __hash__(self) -> int:
        return hash((ScopeDependencySelector, self.transitive, self.excluded, self.included))

    def __repr__(self) -> str:
        return (
            f"ScopeDependencySelector(excluded={sorted(self.excluded)}, "
            f"transitive={self.transitive})"
        )
