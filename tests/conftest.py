"""Shared fixtures for plugindeps tests.

The sample repository models one plugin, ``org.example:demo-plugin:1.0``,
declaring three dependencies (``dep-d`` test, ``dep-e`` and ``dep-m``
compile). ``dep-e`` brings a spread of transitive dependencies:

    dep-e:1.0
      dep-d:1.0  (test)       also declared directly on the plugin
      dep-x:1.0  (test)       reachable only through dep-e
      dep-p:1.0  (provided)
      dep-f:1.0  (compile)    dep-e manages it to 2.0
      dep-m:0.9  (compile)    the plugin declares 1.0
      dep-o:1.0  (optional)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from plugindeps.core.artifact import DeclaredDependency, PluginDescriptor
from plugindeps.core.repository import RemoteRepository, RepositorySystemSession, new_session
from plugindeps.engine import InMemoryRepositorySystem, repository_from_dict

LOCAL_REPOSITORY = Path("/m2")


def sample_repository_data(prerequisites: str | None = "2.0") -> dict[str, Any]:
    """Repository definition around the demo plugin."""
    plugin: dict[str, Any] = {"coords": "org.example:demo-plugin:1.0"}
    if prerequisites is not None:
        plugin["properties"] = {"prerequisites.maven": prerequisites}
    return {
        "repositories": [{"id": "central", "url": "https://repo.example.org/maven2"}],
        "artifacts": [
            plugin,
            {"coords": "org.example:dep-d:1.0"},
            {
                "coords": "org.example:dep-e:1.0",
                "dependencies": [
                    {"coords": "org.example:dep-d:1.0", "scope": "test"},
                    {"coords": "org.example:dep-x:1.0", "scope": "test"},
                    {"coords": "org.example:dep-p:1.0", "scope": "provided"},
                    {"coords": "org.example:dep-f:1.0"},
                    {"coords": "org.example:dep-m:0.9"},
                    {"coords": "org.example:dep-o:1.0", "optional": True},
                ],
                "managed": [{"coords": "org.example:dep-f:2.0"}],
            },
            {"coords": "org.example:dep-f:1.0"},
            {"coords": "org.example:dep-f:2.0"},
            {"coords": "org.example:dep-m:0.9"},
            {"coords": "org.example:dep-m:1.0"},
            {"coords": "org.example:dep-x:1.0"},
            {"coords": "org.example:dep-p:1.0"},
            {"coords": "org.example:dep-o:1.0"},
            {"coords": "org.codehaus.plexus:plexus-utils:1.1"},
        ],
    }


@pytest.fixture
def plugin() -> PluginDescriptor:
    """The demo plugin with its three declared dependencies."""
    return PluginDescriptor(
        group_id="org.example",
        artifact_id="demo-plugin",
        version="1.0",
        dependencies=(
            DeclaredDependency("org.example", "dep-d", "1.0", scope="test"),
            DeclaredDependency("org.example", "dep-e", "1.0"),
            DeclaredDependency("org.example", "dep-m", "1.0"),
        ),
    )


@pytest.fixture
def make_repository() -> Callable[..., tuple[InMemoryRepositorySystem, list[RemoteRepository]]]:
    """Factory building the sample repository.

    Keyword arguments:
        prerequisites: ``prerequisites.maven`` of the plugin, None to omit.
        customize: Callable receiving the raw definition to edit in place.
    """

    def _make(
        prerequisites: str | None = "2.0",
        customize: Callable[[dict[str, Any]], None] | None = None,
    ) -> tuple[InMemoryRepositorySystem, list[RemoteRepository]]:
        data = sample_repository_data(prerequisites)
        if customize is not None:
            customize(data)
        return repository_from_dict(data, LOCAL_REPOSITORY)

    return _make


@pytest.fixture
def session() -> RepositorySystemSession:
    """Session with the default selector, manager and conflict resolver."""
    return new_session()


@pytest.fixture
def bare_session() -> RepositorySystemSession:
    """Default session without conflict resolution, so collected graphs stay raw."""
    return new_session().copy(dependency_graph_transformer=None)


@pytest.fixture
def write_inputs(tmp_path: Path) -> Callable[..., tuple[Path, Path]]:
    """Factory writing the sample plugin and repository as YAML files.

    Returns the ``(plugin_file, repository_file)`` paths.
    """
    import yaml

    def _write(
        prerequisites: str | None = "2.0",
        customize: Callable[[dict[str, Any]], None] | None = None,
    ) -> tuple[Path, Path]:
        data = sample_repository_data(prerequisites)
        if customize is not None:
            customize(data)
        repo_file = tmp_path / "repo.yaml"
        repo_file.write_text(yaml.safe_dump(data))
        plugin_file = tmp_path / "plugin.yaml"
        plugin_file.write_text(yaml.safe_dump({
            "plugin": {
                "group_id": "org.example",
                "artifact_id": "demo-plugin",
                "version": "1.0",
                "dependencies": [
                    {"group_id": "org.example", "artifact_id": "dep-d", "version": "1.0", "scope": "test"},
                    {"group_id": "org.example", "artifact_id": "dep-e", "version": "1.0"},
                    {"group_id": "org.example", "artifact_id": "dep-m", "version": "1.0"},
                ],
            }
        }))
        return plugin_file, repo_file

    return _write
