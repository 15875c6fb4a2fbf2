"""In-memory repository system and its YAML loaders."""

from plugindeps.engine.loader import (
    load_plugin,
    load_repository,
    plugin_from_dict,
    repository_from_dict,
)
from plugindeps.engine.memory import InMemoryRepositorySystem, RepositoryEntry

__all__ = [
    "InMemoryRepositorySystem",
    "RepositoryEntry",
    "load_plugin",
    "load_repository",
    "plugin_from_dict",
    "repository_from_dict",
]
