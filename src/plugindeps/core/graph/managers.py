"""Dependency managers: apply ``<dependencyManagement>`` style overrides.

Management never touches the direct dependencies of the root (those are
the declarations being managed *from*); it applies from depth two down.
Both managers merge management first-declaration-wins, so the root's
management beats anything discovered deeper.

``ClassicDependencyManager`` only honours the management known at the root.
``DefaultDependencyManager`` also picks up management declared by the
descriptors of transitive dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from plugindeps.core.artifact.models import PROP_LOCAL_PATH, SYSTEM, Dependency, Exclusion
from plugindeps.core.graph.collection import CollectionContext, DependencyManagement


@dataclass(frozen=True)
class _ManagedTables:
    versions: dict[str, str] = field(default_factory=dict)
    scopes: dict[str, str] = field(default_factory=dict)
    optionals: dict[str, bool] = field(default_factory=dict)
    local_paths: dict[str, str] = field(default_factory=dict)
    exclusions: dict[str, frozenset[Exclusion]] = field(default_factory=dict)

    def merged(self, managed_dependencies: tuple[Dependency, ...]) -> _ManagedTables:
        if not managed_dependencies:
            return self
        versions = dict(self.versions)
        scopes = dict(self.scopes)
        optionals = dict(self.optionals)
        local_paths = dict(self.local_paths)
        exclusions = dict(self.exclusions)
        for managed in managed_dependencies:
            artifact = managed.artifact
            key = artifact.key
            if artifact.version:
                versions.setdefault(key, artifact.version)
            if managed.scope:
                scopes.setdefault(key, managed.scope)
            if managed.optional is not None:
                optionals.setdefault(key, managed.optional)
            local_path = artifact.get_property(PROP_LOCAL_PATH)
            if local_path:
                local_paths.setdefault(key, local_path)
            if managed.exclusions:
                exclusions[key] = exclusions.get(key, frozenset()) | managed.exclusions
        return _ManagedTables(versions, scopes, optionals, local_paths, exclusions)


class _AbstractDependencyManager:
    # Depth from which the manager stops collecting management; None = never.
    derive_until: int | None = None

    def __init__(self, depth: int = 0, tables: _ManagedTables | None = None) -> None:
        self.depth = depth
        self.tables = tables or _ManagedTables()

    def derive_child_manager(self, context: CollectionContext):
        if self.derive_until is not None and self.depth >= self.derive_until:
            return self
        tables = self.tables
        if self.depth == 0 or self.derive_until is None:
            tables = tables.merged(context.managed_dependencies)
        return type(self)(min(self.depth + 1, 2), tables)

    def manage_dependency(self, dependency: Dependency) -> DependencyManagement | None:
        key = dependency.artifact.key
        version = scope = optional = exclusions = properties = None

        if self.depth >= 2:
            version = self.tables.versions.get(key)
            scope = self.tables.scopes.get(key)
            props = dict(dependency.artifact.properties)
            if scope is not None and scope != SYSTEM and PROP_LOCAL_PATH in props:
                del props[PROP_LOCAL_PATH]
                properties = props
            if scope == SYSTEM or (scope is None and dependency.scope == SYSTEM):
                local_path = self.tables.local_paths.get(key)
                if local_path is not None:
                    props[PROP_LOCAL_PATH] = local_path
                    properties = props
            optional = self.tables.optionals.get(key)

        managed_exclusions = self.tables.exclusions.get(key)
        if managed_exclusions is not None:
            exclusions = dependency.exclusions | managed_exclusions

        if all(v is None for v in (version, scope, optional, exclusions, properties)):
            return None
        return DependencyManagement(version, scope, optional, exclusions, properties)

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self.depth == other.depth and self.tables == other.tables

    def __hash__(self) -> int:
        return hash((type(self), self.depth, len(self.tables.versions), len(self.tables.scopes)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(depth={self.depth}, managed={sorted(self.tables.versions)})"


class ClassicDependencyManager(_AbstractDependencyManager):
    """Nearest-wins management taken from the root only (Maven 2 behaviour)."""

    derive_until = 2


class DefaultDependencyManager(_AbstractDependencyManager):
    """Management accumulated across every level of the graph."""

    derive_until = None
