"""Tests for dependency nodes and depth-first traversal."""

from __future__ import annotations

from pathlib import Path

from plugindeps.core.artifact import Artifact, Dependency
from plugindeps.core.graph import DependencyNode, Managed, iter_nodes


def _node(coords: str, *children: DependencyNode) -> DependencyNode:
    return DependencyNode(Dependency(Artifact.parse(coords), "compile"), children=list(children))


class _Recorder:
    def __init__(self, skip: str | None = None, stop_after: str | None = None) -> None:
        self.events: list[str] = []
        self.skip = skip
        self.stop_after = stop_after

    def visit_enter(self, node: DependencyNode) -> bool:
        self.events.append(f"enter {node.artifact.artifact_id}")
        return node.artifact.artifact_id != self.skip

    def visit_leave(self, node: DependencyNode) -> bool:
        self.events.append(f"leave {node.artifact.artifact_id}")
        return node.artifact.artifact_id != self.stop_after


class TestDependencyNode:
    """Tests for node state."""

    def test_artifact_taken_from_dependency(self) -> None:
        node = _node("g:a:1")
        assert node.artifact is node.dependency.artifact

    def test_root_without_dependency(self) -> None:
        node = DependencyNode(artifact=Artifact.parse("g:root:1"))
        assert node.dependency is None
        assert str(node) == "g:root:jar:1"

    def test_set_artifact_syncs_dependency(self) -> None:
        node = _node("g:a:1")
        resolved = node.artifact.with_file(Path("/m2/a.jar"))
        node.set_artifact(resolved)
        assert node.artifact.file == Path("/m2/a.jar")
        assert node.dependency.artifact.file == Path("/m2/a.jar")

    def test_set_scope(self) -> None:
        node = _node("g:a:1")
        node.set_scope("runtime")
        assert node.dependency.scope == "runtime"

    def test_managed_bits(self) -> None:
        node = DependencyNode(Dependency(Artifact.parse("g:a:1")), managed=frozenset({Managed.VERSION}))
        assert node.is_managed(Managed.VERSION)
        assert not node.is_managed(Managed.SCOPE)

    def test_identity_equality(self) -> None:
        assert _node("g:a:1") != _node("g:a:1")


class TestTraversal:
    """Tests for ``accept`` and ``iter_nodes``."""

    def test_preorder(self) -> None:
        root = _node("g:root:1", _node("g:a:1", _node("g:a1:1")), _node("g:b:1"))
        assert [n.artifact.artifact_id for n in iter_nodes(root)] == ["root", "a", "a1", "b"]

    def test_enter_false_skips_children(self) -> None:
        root = _node("g:root:1", _node("g:a:1", _node("g:a1:1")), _node("g:b:1"))
        recorder = _Recorder(skip="a")
        root.accept(recorder)
        assert "enter a1" not in recorder.events
        assert "enter b" in recorder.events

    def test_leave_false_stops_siblings(self) -> None:
        root = _node("g:root:1", _node("g:a:1"), _node("g:b:1"))
        recorder = _Recorder(stop_after="a")
        root.accept(recorder)
        assert recorder.events == ["enter root", "enter a", "leave a", "leave root"]
