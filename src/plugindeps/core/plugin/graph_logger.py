"""Debug rendering of a collected dependency graph.

One line per node, children indented by three spaces::

    org.example:demo-plugin:jar:1.0:
       org.example:lib:jar:2.0:runtime (version managed from 1.5)

Management annotations come from the collection phase, so the graph can be
logged before (or without) resolving it.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from plugindeps.core.graph.node import DependencyNode, Managed

logger = logging.getLogger(__name__)

INDENT = "   "


def _default(value: Any) -> str:
    if value is None:
        return "default"
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def describe_node(node: DependencyNode) -> str:
    """Single-line description of *node* with its management annotations."""
    dependency = node.dependency
    if dependency is None:
        return str(node.artifact) if node.artifact is not None else ""

    parts = [f"{dependency.artifact}:{dependency.scope}"]
    if node.is_managed(Managed.SCOPE):
        parts.append(f" (scope managed from {_default(node.premanaged.get(Managed.SCOPE))})")
    if node.is_managed(Managed.VERSION):
        parts.append(f" (version managed from {_default(node.premanaged.get(Managed.VERSION))})")
    if node.is_managed(Managed.OPTIONAL):
        parts.append(f" (optionality managed from {_default(node.premanaged.get(Managed.OPTIONAL))})")
    # Premanaged exclusions and properties are recorded but not rendered.
    for attribute in (Managed.EXCLUSIONS, Managed.PROPERTIES):
        if node.is_managed(attribute):
            parts.append(f" ({attribute.value} managed)")
    return "".join(parts)


class GraphLogger:
    """Visitor writing an indented description of every node to *sink*.

    Args:
        sink: Called once per line; defaults to logging at DEBUG level.
    """

    def __init__(self, sink: Callable[[str], None] | None = None) -> None:
        self._sink = sink or self._log
        self._indent = ""
        self.lines: list[str] = []

    @staticmethod
    def _log(line: str) -> None:
        logger.debug("%s", line)

    def visit_enter(self, node: DependencyNode) -> bool:
        line = self._indent + describe_node(node)
        self.lines.append(line)
        self._sink(line)
        self._indent += INDENT
        return True

    def visit_leave(self, node: DependencyNode) -> bool:
        self._indent = self._indent[: -len(INDENT)]
        return True
