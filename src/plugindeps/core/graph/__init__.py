"""Dependency graph nodes and the rules that shape a graph.

The package is split into focused submodules:

- ``node``: ``DependencyNode``, ``Managed`` and depth-first visitors.
- ``collection``: collection/transformation contexts and the selector,
  manager, transformer and filter protocols.
- ``selectors``: AND, optional, exclusion and scope selectors.
- ``managers``: classic (root-only) and default (transitive) management.
- ``filters``: scope, AND and exclusion-pattern filters for resolution.
- ``transformers``: transformer chaining and nearest-wins conflict removal.
"""

from plugindeps.core.graph.collection import (
    CollectionContext,
    DependencyFilter,
    DependencyGraphTransformer,
    DependencyManagement,
    DependencyManager,
    DependencySelector,
    TransformationContext,
)
from plugindeps.core.graph.filters import (
    AndDependencyFilter,
    ExclusionsDependencyFilter,
    ScopeDependencyFilter,
)
from plugindeps.core.graph.managers import ClassicDependencyManager, DefaultDependencyManager
from plugindeps.core.graph.node import DependencyNode, DependencyVisitor, Managed, iter_nodes
from plugindeps.core.graph.selectors import (
    AndDependencySelector,
    ExclusionDependencySelector,
    OptionalDependencySelector,
    ScopeDependencySelector,
)
from plugindeps.core.graph.transformers import (
    ChainedDependencyGraphTransformer,
    NearestWinsConflictResolver,
    derive_scope,
)

__all__ = [
    "CollectionContext",
    "TransformationContext",
    "DependencyManagement",
    "DependencySelector",
    "DependencyManager",
    "DependencyGraphTransformer",
    "DependencyFilter",
    "AndDependencyFilter",
    "ExclusionsDependencyFilter",
    "ScopeDependencyFilter",
    "ClassicDependencyManager",
    "DefaultDependencyManager",
    "DependencyNode",
    "DependencyVisitor",
    "Managed",
    "iter_nodes",
    "AndDependencySelector",
    "ExclusionDependencySelector",
    "OptionalDependencySelector",
    "ScopeDependencySelector",
    "ChainedDependencyGraphTransformer",
    "NearestWinsConflictResolver",
    "derive_scope",
]
