"""Graph transformers run once a dependency graph has been collected."""

from __future__ import annotations

import logging
from collections import deque

from plugindeps.core.artifact.models import COMPILE, PROVIDED, RUNTIME, SYSTEM, TEST
from plugindeps.core.graph.collection import DependencyGraphTransformer, TransformationContext
from plugindeps.core.graph.node import DependencyNode

logger = logging.getLogger(__name__)


class ChainedDependencyGraphTransformer:
    """Applies several transformers in order, feeding each the previous result."""

    def __init__(self, *transformers: DependencyGraphTransformer) -> None:
        self.transformers: tuple[DependencyGraphTransformer, ...] = tuple(transformers)

    @staticmethod
    def new_instance(
        transformer1: DependencyGraphTransformer | None,
        transformer2: DependencyGraphTransformer | None,
    ) -> DependencyGraphTransformer | None:
        if transformer1 is None:
            return transformer2
        if transformer2 is None:
            return transformer1
        return ChainedDependencyGraphTransformer(transformer1, transformer2)

    def transform_graph(self, node: DependencyNode, context: TransformationContext) -> DependencyNode:
        for transformer in self.transformers:
            node = transformer.transform_graph(node, context)
        return node


def derive_scope(parent_scope: str, child_scope: str) -> str:
    """Effective scope of a transitive dependency given its parent's scope."""
    if child_scope in (SYSTEM, TEST):
        return child_scope
    if not parent_scope or parent_scope == COMPILE:
        return child_scope
    if parent_scope in (TEST, RUNTIME):
        return parent_scope
    if parent_scope in (SYSTEM, PROVIDED):
        return PROVIDED
    return RUNTIME


class NearestWinsConflictResolver:
    """Keeps the occurrence of each artifact nearest to the root.

    Conflicts are detected on the versionless artifact key. Ties at the same
    depth go to the first occurrence in declaration order. Surviving
    transitive nodes get their scope derived from their parent's.
    """

    def transform_graph(self, node: DependencyNode, context: TransformationContext) -> DependencyNode:
        seen: set[str] = set()
        if node.artifact is not None:
            seen.add(node.artifact.key)
        queue: deque[DependencyNode] = deque([node])
        removed = 0
        while queue:
            parent = queue.popleft()
            kept = []
            for child in parent.children:
                key = child.artifact.key if child.artifact is not None else None
                if key is not None and key in seen:
                    removed += 1
                    continue
                if key is not None:
                    seen.add(key)
                kept.append(child)
                queue.append(child)
            parent.children[:] = kept

        for child in node.children:
            self._derive_scopes(child)
        context.data["conflicts.removed"] = removed
        if removed:
            logger.debug("Removed %d conflicting dependency nodes", removed)
        return node

    def _derive_scopes(self, parent: DependencyNode) -> None:
        parent_scope = parent.dependency.scope if parent.dependency is not None else ""
        for child in parent.children:
            if child.dependency is not None:
                child.set_scope(derive_scope(parent_scope, child.dependency.scope))
            self._derive_scopes(child)
