"""Rich output formatting helpers for the plugindeps CLI."""

from __future__ import annotations

import json
import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text
from rich.tree import Tree

from plugindeps.core.artifact.models import Artifact
from plugindeps.core.graph.node import DependencyNode, iter_nodes
from plugindeps.core.plugin.graph_logger import describe_node
from plugindeps.core.plugin.policy import PluginResolutionPolicy
from plugindeps.exceptions import PluginResolutionError

console = Console()


def configure_logging(debug: bool) -> None:
    """Send log records to stderr through Rich; DEBUG level when *debug* is set."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _node_label(node: DependencyNode) -> Text:
    label = Text(describe_node(node))
    if node.artifact is not None and node.artifact.file is not None:
        label.append(f"  {node.artifact.file}", style="dim")
    return label


def _add_children(tree: Tree, node: DependencyNode) -> None:
    for child in node.children:
        _add_children(tree.add(_node_label(child)), child)


def print_dependency_tree(root: DependencyNode, policy_name: str | None = None) -> None:
    """Print the resolved graph as a tree with management annotations.

    Args:
        root: Root of the resolved graph.
        policy_name: "classic" or "default", shown in the title when known.
    """
    title = "Plugin Class Path"
    if policy_name:
        title = f"{title} ({policy_name} policy)"
    tree = Tree(_node_label(root), guide_style="dim")
    _add_children(tree, root)
    console.print(Panel(tree, title=title))
    resolved = sum(1 for n in iter_nodes(root) if n.artifact is not None and n.artifact.file is not None)
    console.print(f"[bold]{resolved}[/bold] artifacts resolved")


def print_policy(artifact: Artifact, policy: PluginResolutionPolicy) -> None:
    """Print which resolution policy applies to a plugin and why."""
    style = "yellow" if policy.classic else "green"
    header = Text.assemble(
        ("Plugin: ", "bold"), (str(artifact), ""),
        ("  Prerequisites: ", "bold"), (policy.prerequisites, "dim"),
        ("  Policy: ", "bold"), (policy.name.upper(), style),
    )
    console.print(Panel(header, title="Resolution Policy"))
    console.print(f"  Selector: {policy.selector!r}")
    console.print(f"  Manager:  {policy.manager!r}")


def print_resolution_failure(error: PluginResolutionError) -> None:
    console.print(Panel("[bold red]Resolution failed[/bold red]", title="Plugin Resolution"))
    console.print(f"  [red]- phase: {error.phase}[/red]")
    console.print(f"  [red]- {error.cause}[/red]")


def node_to_dict(node: DependencyNode) -> dict[str, Any]:
    """JSON-serializable view of *node* and its subtree."""
    dependency = node.dependency
    artifact = node.artifact
    return {
        "artifact": str(artifact) if artifact is not None else None,
        "scope": dependency.scope if dependency is not None else None,
        "optional": dependency.is_optional if dependency is not None else False,
        "file": str(artifact.file) if artifact is not None and artifact.file is not None else None,
        "managed": sorted(m.value for m in node.managed),
        "children": [node_to_dict(child) for child in node.children],
    }


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout."""
    console.print_json(json.dumps(data, default=str))
