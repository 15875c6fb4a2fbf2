"""Load repository content and plugin declarations from YAML.

Repository file::

    repositories:
      - id: central
        url: https://repo.maven.apache.org/maven2
    unreachable: [snapshots]          # optional, repository ids failing transfers
    artifacts:
      - coords: org.example:demo-plugin:1.0
        properties:
          prerequisites.maven: "2.0.6"    # quoted; unquoted floats are rejected
        dependencies:
          - coords: org.example:lib:1.0
            scope: compile
            optional: false
            exclusions: ["org.unwanted:*"]
        managed:
          - coords: org.example:lib:1.2   # no scope: manages the version only
        descriptor: true              # false: file only, no descriptor
        invalid: false                # descriptor unreadable
        available: true               # file downloadable
        file: /opt/repo/lib.jar       # optional explicit location

Plugin file::

    plugin:
      group_id: org.example
      artifact_id: demo-plugin
      version: "1.0"
      dependencies:
        - group_id: org.example
          artifact_id: extra
          version: "2.0"
          scope: test
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from plugindeps.core.artifact.models import COMPILE, Artifact, Dependency, Exclusion
from plugindeps.core.artifact.plugin import DeclaredDependency, PluginDescriptor
from plugindeps.core.repository.requests import RemoteRepository
from plugindeps.engine.memory import DEFAULT_LOCAL_REPOSITORY, InMemoryRepositorySystem, RepositoryEntry
from plugindeps.exceptions import ConfigurationError


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Cannot read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Malformed YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping at the top level")
    return data


def _artifact(coords: Any, where: str) -> Artifact:
    if not isinstance(coords, str):
        raise ConfigurationError(f"{where}: 'coords' must be a string, got {coords!r}")
    try:
        return Artifact.parse(coords)
    except ValueError as exc:
        raise ConfigurationError(f"{where}: {exc}") from exc


def _exclusions(patterns: Any, where: str) -> frozenset[Exclusion]:
    try:
        return frozenset(Exclusion.parse(str(p)) for p in patterns or [])
    except ValueError as exc:
        raise ConfigurationError(f"{where}: {exc}") from exc


def _properties(data: Any, where: str) -> dict[str, str]:
    # Unquoted YAML floats lose digits: 3.10 loads as 3.1.
    properties = {}
    for key, value in (data or {}).items():
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise ConfigurationError(
                f"{where}: property {key!r} must be a quoted string, got {value!r}"
            )
        properties[str(key)] = str(value)
    return properties


def _optional(value: Any) -> bool | None:
    return None if value is None else bool(value)


def dependency_from_dict(
    data: dict[str, Any], where: str = "dependency", default_scope: str = COMPILE
) -> Dependency:
    """Build a graph dependency from a ``coords``/``scope``/... mapping.

    Management entries pass ``default_scope=""`` so that an entry without a
    scope only manages what it declares.
    """
    if not isinstance(data, dict) or "coords" not in data:
        raise ConfigurationError(f"{where}: expected a mapping with 'coords'")
    return Dependency(
        artifact=_artifact(data["coords"], where),
        scope=str(data.get("scope") or default_scope),
        optional=_optional(data.get("optional")),
        exclusions=_exclusions(data.get("exclusions"), where),
    )


def entry_from_dict(data: dict[str, Any]) -> RepositoryEntry:
    """Build a ``RepositoryEntry`` from one item of the ``artifacts`` list."""
    if not isinstance(data, dict) or "coords" not in data:
        raise ConfigurationError(f"artifact entry without 'coords': {data!r}")
    where = str(data["coords"])
    file = data.get("file")
    return RepositoryEntry(
        artifact=_artifact(data["coords"], where),
        properties=_properties(data.get("properties"), where),
        dependencies=[dependency_from_dict(d, where) for d in data.get("dependencies") or []],
        managed_dependencies=[
            dependency_from_dict(d, f"{where} (managed)", default_scope="")
            for d in data.get("managed") or []
        ],
        descriptor=bool(data.get("descriptor", True)),
        invalid=bool(data.get("invalid", False)),
        available=bool(data.get("available", True)),
        file=Path(file) if file else None,
    )


def repository_from_dict(
    data: dict[str, Any], local_repository: Path = DEFAULT_LOCAL_REPOSITORY
) -> tuple[InMemoryRepositorySystem, list[RemoteRepository]]:
    """Build the repository system and the remote repository list it serves."""
    repositories = []
    for item in data.get("repositories") or [{"id": "central"}]:
        if not isinstance(item, dict) or "id" not in item:
            raise ConfigurationError(f"repository without 'id': {item!r}")
        repositories.append(RemoteRepository(str(item["id"]), str(item.get("url", ""))))
    system = InMemoryRepositorySystem(
        (entry_from_dict(item) for item in data.get("artifacts") or []),
        local_repository=local_repository,
        unreachable=[str(r) for r in data.get("unreachable") or []],
    )
    return system, repositories


def load_repository(
    path: Path, local_repository: Path = DEFAULT_LOCAL_REPOSITORY
) -> tuple[InMemoryRepositorySystem, list[RemoteRepository]]:
    """Read a repository YAML file.

    Raises:
        ConfigurationError: If the file cannot be read or is malformed.
    """
    return repository_from_dict(_read_yaml(path), local_repository)


def plugin_from_dict(data: dict[str, Any]) -> PluginDescriptor:
    """Build a ``PluginDescriptor`` from the ``plugin`` mapping."""
    missing = [k for k in ("group_id", "artifact_id", "version") if not data.get(k)]
    if missing:
        raise ConfigurationError(f"plugin is missing {', '.join(missing)}")
    declared = []
    for item in data.get("dependencies") or []:
        absent = [k for k in ("group_id", "artifact_id", "version") if not item.get(k)]
        if absent:
            raise ConfigurationError(f"plugin dependency {item!r} is missing {', '.join(absent)}")
        exclusions = []
        for pattern in item.get("exclusions") or []:
            group_id, _, artifact_id = str(pattern).partition(":")
            if not group_id or not artifact_id:
                raise ConfigurationError(f"bad exclusion {pattern!r}, expected <groupId>:<artifactId>")
            exclusions.append((group_id, artifact_id))
        declared.append(DeclaredDependency(
            group_id=str(item["group_id"]),
            artifact_id=str(item["artifact_id"]),
            version=str(item["version"]),
            type=str(item.get("type") or "jar"),
            classifier=str(item.get("classifier") or ""),
            scope=str(item.get("scope") or COMPILE),
            optional=_optional(item.get("optional")),
            exclusions=tuple(exclusions),
            system_path=item.get("system_path"),
        ))
    return PluginDescriptor(
        group_id=str(data["group_id"]),
        artifact_id=str(data["artifact_id"]),
        version=str(data["version"]),
        dependencies=tuple(declared),
    )


def load_plugin(path: Path) -> PluginDescriptor:
    """Read a plugin YAML file (top-level ``plugin`` key).

    Raises:
        ConfigurationError: If the file cannot be read or is malformed.
    """
    data = _read_yaml(path)
    plugin = data.get("plugin")
    if not isinstance(plugin, dict):
        raise ConfigurationError(f"{path} has no 'plugin' mapping")
    return plugin_from_dict(plugin)
