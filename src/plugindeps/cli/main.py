"""plugindeps CLI — Prerequisite-aware plugin class path resolution.

Entry point for the ``plugindeps`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    resolve — Resolve a plugin's runtime class path.
    policy  — Show whether the classic or the default policy applies.

Usage::

    plugindeps resolve plugin.yaml --repo repo.yaml
    plugindeps resolve plugin.yaml --repo repo.yaml --format json
    plugindeps resolve plugin.yaml --repo repo.yaml --core-extension --exclude 'org.slf4j:*'
    plugindeps policy plugin.yaml --repo repo.yaml
"""

from __future__ import annotations

import click

from plugindeps import __version__
from plugindeps.cli.policy_cmd import policy_command
from plugindeps.cli.resolve_cmd import resolve_command


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """plugindeps: Resolve build plugin class paths.

    Plugins are resolved with the classic policy when their prerequisites
    are below 3, and with the session's default policy otherwise.
    """


cli.add_command(resolve_command)
cli.add_command(policy_command)
