"""``plugindeps resolve <plugin.yaml>`` — Resolve a plugin's class path.

Loads the plugin declaration and a repository definition, resolves the
plugin's dependency graph with the policy its prerequisites call for, and
prints the resolved tree.

Exit Codes:
    0 — Class path resolved.
    1 — Resolution failed (descriptor, collection or artifact failure).
    2 — Plugin or repository file could not be loaded.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from plugindeps.cli.output import (
    configure_logging,
    node_to_dict,
    print_dependency_tree,
    print_json,
    print_resolution_failure,
)
from plugindeps.core.artifact.models import PROP_REQUIRED_MAVEN_VERSION
from plugindeps.core.graph.filters import ExclusionsDependencyFilter
from plugindeps.core.plugin.policy import DEFAULT_PREREQUISITES, is_classic_resolution
from plugindeps.core.plugin.resolver import PluginDependenciesResolver
from plugindeps.core.repository.session import CONFIG_PROP_VERBOSE, new_session
from plugindeps.engine.loader import load_plugin, load_repository
from plugindeps.engine.memory import DEFAULT_LOCAL_REPOSITORY
from plugindeps.exceptions import ConfigurationError, PluginResolutionError


def parse_defines(defines: tuple[str, ...]) -> dict[str, str]:
    """Turn ``key=value`` strings into session config properties.

    A bare ``key`` means ``key=true``.
    """
    properties: dict[str, str] = {}
    for define in defines:
        key, sep, value = define.partition("=")
        if not key:
            raise click.BadParameter(f"expected key=value, got {define!r}", param_hint="-D")
        properties[key] = value if sep else "true"
    return properties


@click.command("resolve")
@click.argument("plugin_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--repo", "repo_path",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="Repository definition (YAML).",
)
@click.option(
    "--local-repo",
    type=click.Path(file_okay=False),
    default=str(DEFAULT_LOCAL_REPOSITORY),
    show_default=True,
    help="Local repository root used for artifact paths.",
)
@click.option(
    "--core-extension", is_flag=True,
    help="Resolve as a core extension (no plexus-utils injection).",
)
@click.option(
    "--exclude", "excludes", multiple=True,
    help="Drop groupId:artifactId from the class path (wildcards allowed).",
)
@click.option(
    "-D", "--define", "defines", multiple=True,
    help="Session config property as key=value.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.option("--debug", is_flag=True, help="Log policy decisions and the collected graph.")
def resolve_command(
    plugin_path: str,
    repo_path: str,
    local_repo: str,
    core_extension: bool,
    excludes: tuple[str, ...],
    defines: tuple[str, ...],
    output_format: str,
    debug: bool,
) -> None:
    """Resolve the runtime class path of the plugin declared in PLUGIN_PATH.

    Exit code 0 on success, 1 on resolution failure, 2 on unreadable input.
    """
    configure_logging(debug)
    try:
        plugin = load_plugin(Path(plugin_path))
        system, repositories = load_repository(Path(repo_path), Path(local_repo))
        dependency_filter = ExclusionsDependencyFilter(excludes) if excludes else None
    except (ConfigurationError, ValueError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    # The tree shows what management replaced, so record it unless told otherwise.
    session = new_session({CONFIG_PROP_VERBOSE: "true", **parse_defines(defines)})
    resolver = PluginDependenciesResolver(system)
    try:
        if core_extension:
            root = resolver.resolve_core_extension_dependencies(plugin, dependency_filter, repositories, session)
        else:
            root = resolver.resolve_plugin_dependencies(plugin, None, dependency_filter, repositories, session)
    except PluginResolutionError as exc:
        if output_format == "json":
            print_json({"plugin": plugin.id, "error": str(exc.cause), "phase": exc.phase})
        else:
            print_resolution_failure(exc)
        sys.exit(1)

    prerequisites = DEFAULT_PREREQUISITES
    if root.artifact is not None:
        prerequisites = root.artifact.get_property(PROP_REQUIRED_MAVEN_VERSION, DEFAULT_PREREQUISITES)
    policy_name = "classic" if is_classic_resolution(prerequisites) else "default"

    if output_format == "json":
        print_json({"plugin": plugin.id, "policy": policy_name, "root": node_to_dict(root)})
    else:
        print_dependency_tree(root, policy_name)
    sys.exit(0)
