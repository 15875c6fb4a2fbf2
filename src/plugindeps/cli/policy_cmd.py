"""``plugindeps policy <plugin.yaml>`` — Show which resolution policy applies.

Reads the plugin descriptor from the repository and reports whether the
plugin's prerequisites select the classic or the default policy.

Exit Codes:
    0 — Policy determined.
    1 — The plugin descriptor could not be read.
    2 — Plugin or repository file could not be loaded.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from plugindeps.cli.output import configure_logging, print_json, print_policy
from plugindeps.core.plugin.enrichment import create_plugin_artifact
from plugindeps.core.plugin.policy import assemble_policy
from plugindeps.core.repository.session import new_session
from plugindeps.engine.loader import load_plugin, load_repository
from plugindeps.exceptions import ArtifactDescriptorError, ConfigurationError


@click.command("policy")
@click.argument("plugin_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--repo", "repo_path",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="Repository definition (YAML).",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.option("--debug", is_flag=True, help="Enable debug logging.")
def policy_command(plugin_path: str, repo_path: str, output_format: str, debug: bool) -> None:
    """Report the resolution policy for the plugin declared in PLUGIN_PATH."""
    configure_logging(debug)
    try:
        plugin = load_plugin(Path(plugin_path))
        system, repositories = load_repository(Path(repo_path))
    except ConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    session = new_session()
    try:
        artifact = create_plugin_artifact(
            system, plugin.to_artifact(session.artifact_type_registry), session, repositories
        )
    except ArtifactDescriptorError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    policy = assemble_policy(artifact, session)
    if output_format == "json":
        print_json({
            "plugin": plugin.id,
            "prerequisites": policy.prerequisites,
            "policy": policy.name,
        })
    else:
        print_policy(artifact, policy)
    sys.exit(0)
