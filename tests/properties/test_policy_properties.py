"""Property-based tests for plugin policy invariants.

Verifies:
- Threshold: a plugin is resolved classically iff its prerequisites are below 3
- Classic selector state: after any derivation sequence the selector is
  transitive exactly when the last context had a dependency
- Scope normalization: declared dependencies collect as runtime unless system
- Conflict resolution: no artifact key occurs twice after nearest-wins
"""
from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from plugindeps.core.artifact import (
    Artifact,
    DeclaredDependency,
    Dependency,
    PluginDescriptor,
)
from plugindeps.core.graph import (
    CollectionContext,
    DependencyNode,
    NearestWinsConflictResolver,
    TransformationContext,
    iter_nodes,
)
from plugindeps.core.plugin import (
    ClassicScopeDependencySelector,
    build_collect_request,
    is_classic_resolution,
)
from plugindeps.core.repository import new_session

# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

scopes = st.sampled_from(["compile", "runtime", "provided", "test", "system", ""])

artifact_ids = st.sampled_from(["alpha", "beta", "gamma", "delta", "epsilon"])

contexts = st.sampled_from([
    CollectionContext(session=None),
    CollectionContext(session=None, dependency=Dependency(Artifact.parse("g:a:1"), "compile")),
])


@st.composite
def dependency_trees(draw: st.DrawFn, depth: int = 3) -> DependencyNode:
    """A random tree of nodes drawn from a small artifact pool."""
    node = DependencyNode(Dependency(Artifact.parse(f"g:{draw(artifact_ids)}:1"), draw(scopes)))
    if depth > 0:
        for _ in range(draw(st.integers(min_value=0, max_value=3))):
            node.children.append(draw(dependency_trees(depth=depth - 1)))
    return node


# ---------------------------------------------------------------------------
# Threshold
# ---------------------------------------------------------------------------


class TestThreshold:
    """Classic resolution below prerequisites 3, default from 3 on."""

    @given(
        major=st.integers(min_value=0, max_value=12),
        minor=st.integers(min_value=0, max_value=20),
        patch=st.integers(min_value=0, max_value=20),
    )
    @settings(max_examples=100)
    def test_classic_iff_below_three(self, major: int, minor: int, patch: int) -> None:
        """The decision depends on the major version only."""
        assert is_classic_resolution(f"{major}.{minor}.{patch}") is (major < 3)

    @given(minor=st.integers(min_value=0, max_value=9))
    @settings(max_examples=20)
    def test_snapshots_sort_below_release(self, minor: int) -> None:
        """A 3.x snapshot is default unless it is the 3.0 snapshot itself."""
        assert is_classic_resolution(f"3.{minor}-SNAPSHOT") is (minor == 0)

    @given(
        minor=st.integers(min_value=0, max_value=9),
        qualifier=st.sampled_from(["alpha", "beta", "rc"]),
        build=st.integers(min_value=1, max_value=9),
    )
    @settings(max_examples=50)
    def test_prereleases_sort_below_release(self, minor: int, qualifier: str, build: int) -> None:
        """Only the 3.0 pre-releases stay below the threshold."""
        assert is_classic_resolution(f"3.{minor}-{qualifier}-{build}") is (minor == 0)

    @given(minor=st.integers(min_value=0, max_value=9), qualifier=st.sampled_from(["ga", "final"]))
    @settings(max_examples=20)
    def test_release_aliases_equal_release(self, minor: int, qualifier: str) -> None:
        """Release qualifiers never move a version below the threshold."""
        assert is_classic_resolution(f"3.{minor}-{qualifier}") is False


# ---------------------------------------------------------------------------
# Classic selector
# ---------------------------------------------------------------------------


class TestClassicSelectorState:
    """The selector only remembers the last derivation."""

    @given(start=st.booleans(), sequence=st.lists(contexts, min_size=1, max_size=10))
    @settings(max_examples=100)
    def test_last_context_decides(self, start: bool, sequence: list[CollectionContext]) -> None:
        selector = ClassicScopeDependencySelector(transitive=start)
        for context in sequence:
            selector = selector.derive_child_selector(context)
        assert selector.transitive is (sequence[-1].dependency is not None)

    @given(start=st.booleans(), scope=scopes)
    @settings(max_examples=50)
    def test_only_test_and_provided_ever_rejected(self, start: bool, scope: str) -> None:
        selected = ClassicScopeDependencySelector(start).select_dependency(
            Dependency(Artifact.parse("g:a:1"), scope)
        )
        assert selected or scope in ("test", "provided")


# ---------------------------------------------------------------------------
# Collect request
# ---------------------------------------------------------------------------


class TestScopeNormalization:
    """Declared scopes collapse to runtime, system excepted."""

    @given(declared=st.lists(scopes.filter(bool), min_size=0, max_size=6))
    @settings(max_examples=50)
    def test_runtime_unless_system(self, declared: list[str]) -> None:
        plugin = PluginDescriptor("g", "p", "1", tuple(
            DeclaredDependency("g", f"dep{i}", "1", scope=scope) for i, scope in enumerate(declared)
        ))
        session = new_session()
        request = build_collect_request(plugin, plugin.to_artifact(session.artifact_type_registry), session, [])
        expected = ["system" if s == "system" else "runtime" for s in declared]
        assert [d.scope for d in request.dependencies] == expected
        assert [d.scope for d in request.managed_dependencies] == expected


# ---------------------------------------------------------------------------
# Conflict resolution
# ---------------------------------------------------------------------------


class TestNearestWins:
    """Nearest-wins leaves a conflict free graph."""

    @given(root=dependency_trees())
    @settings(max_examples=50)
    def test_keys_unique(self, root: DependencyNode) -> None:
        NearestWinsConflictResolver().transform_graph(root, TransformationContext(session=None))
        keys = [n.artifact.key for n in iter_nodes(root)]
        assert len(keys) == len(set(keys))

    @given(root=dependency_trees())
    @settings(max_examples=50)
    def test_direct_dependencies_keep_scope(self, root: DependencyNode) -> None:
        before = {id(c): c.dependency.scope for c in root.children}
        NearestWinsConflictResolver().transform_graph(root, TransformationContext(session=None))
        assert all(c.dependency.scope == before[id(c)] for c in root.children)
