"""Tests for resolution filters."""

from __future__ import annotations

import pytest

from plugindeps.core.artifact import Artifact, Dependency
from plugindeps.core.graph import (
    AndDependencyFilter,
    DependencyNode,
    ExclusionsDependencyFilter,
    ScopeDependencyFilter,
)


def _node(coords: str, scope: str = "compile") -> DependencyNode:
    return DependencyNode(Dependency(Artifact.parse(coords), scope))


class TestScopeDependencyFilter:
    """Scope based acceptance."""

    @pytest.mark.parametrize("scope, accepted", [
        ("compile", True),
        ("runtime", True),
        ("system", True),
        ("provided", False),
        ("test", False),
    ])
    def test_excluded_scopes(self, scope: str, accepted: bool) -> None:
        dependency_filter = ScopeDependencyFilter(excluded=("provided", "test"))
        assert dependency_filter.accept(_node("g:a:1", scope), []) is accepted

    def test_node_without_dependency_accepted(self) -> None:
        root = DependencyNode(artifact=Artifact.parse("g:root:1"))
        assert ScopeDependencyFilter(excluded=("", "compile")).accept(root, [])

    def test_included_scopes(self) -> None:
        dependency_filter = ScopeDependencyFilter(included=("runtime",))
        assert dependency_filter.accept(_node("g:a:1", "runtime"), [])
        assert not dependency_filter.accept(_node("g:a:1", "compile"), [])


class TestExclusionsDependencyFilter:
    """Pattern based rejection."""

    def test_group_wildcard(self) -> None:
        dependency_filter = ExclusionsDependencyFilter(["org.slf4j:*"])
        assert not dependency_filter.accept(_node("org.slf4j:slf4j-api:1.7"), [])
        assert dependency_filter.accept(_node("org.example:lib:1.0"), [])

    def test_bad_pattern(self) -> None:
        with pytest.raises(ValueError):
            ExclusionsDependencyFilter(["nocolon"])


class TestAndDependencyFilter:
    """Conjunction of filters."""

    def test_new_instance_skips_none(self) -> None:
        scope_filter = ScopeDependencyFilter(excluded=("test",))
        assert AndDependencyFilter.new_instance(scope_filter, None) is scope_filter
        assert AndDependencyFilter.new_instance(None, scope_filter) is scope_filter
        assert AndDependencyFilter.new_instance(None, None) is None

    def test_all_must_accept(self) -> None:
        combined = AndDependencyFilter.new_instance(
            ScopeDependencyFilter(excluded=("test",)), ExclusionsDependencyFilter(["bad:*"])
        )
        assert combined is not None
        assert combined.accept(_node("good:a:1"), [])
        assert not combined.accept(_node("good:a:1", "test"), [])
        assert not combined.accept(_node("bad:a:1"), [])

    def test_parents_passed_through(self) -> None:
        """Every operand sees the same parent chain."""
        seen = []

        class Recording:
            def accept(self, node, parents):
                seen.append(list(parents))
                return True

        parent = _node("g:p:1")
        AndDependencyFilter(Recording(), Recording()).accept(_node("g:a:1"), [parent])
        assert seen == [[parent], [parent]]
