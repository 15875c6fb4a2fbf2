"""plugindeps exception hierarchy.

All public exceptions inherit from PluginDepsError, giving callers a single
base class to catch when they want to handle any plugindeps-specific failure
without swallowing unrelated errors.

Two families live here. ``RepositoryError`` and its subclasses are raised by a
repository system (the dependency-graph engine). ``PluginResolutionError`` is
what the plugin resolver raises after wrapping one of those with the plugin
it was working on.
"""

from __future__ import annotations

from typing import Any


class PluginDepsError(Exception):
    """Base exception for all plugindeps errors."""


class ConfigurationError(PluginDepsError):
    """Raised when a repository or plugin definition cannot be loaded.

    Covers unreadable files, malformed YAML and coordinates that do not
    follow the ``groupId:artifactId:version`` shape.
    """


class RepositoryError(PluginDepsError):
    """Base class for failures reported by a repository system."""


class ArtifactDescriptorError(RepositoryError):
    """Raised when the descriptor of an artifact cannot be read.

    Covers transport failures and invalid descriptors that the active
    descriptor policy does not tolerate.
    """

    def __init__(self, artifact: Any, message: str) -> None:
        super().__init__(f"Failed to read artifact descriptor for {artifact}: {message}")
        self.artifact = artifact


class ArtifactResolutionError(RepositoryError):
    """Raised when one or more artifact files cannot be located."""

    def __init__(self, artifacts: list[Any], message: str = "") -> None:
        names = ", ".join(str(a) for a in artifacts)
        text = f"Could not resolve artifacts: {names}"
        if message:
            text = f"{text} ({message})"
        super().__init__(text)
        self.artifacts = list(artifacts)


class DependencyCollectionError(RepositoryError):
    """Raised when the dependency graph cannot be constructed."""

    def __init__(self, message: str, root: Any = None) -> None:
        super().__init__(message)
        self.root = root


class DependencyResolutionError(RepositoryError):
    """Envelope raised when the resolve phase fails.

    The actual failure (usually an ``ArtifactResolutionError``) is chained as
    ``__cause__``; ``root`` is the partially resolved graph.
    """

    def __init__(self, message: str, root: Any = None) -> None:
        super().__init__(message)
        self.root = root


class PluginResolutionError(PluginDepsError):
    """Raised when the artifact or the dependencies of a plugin cannot be resolved.

    Attributes:
        plugin: The plugin descriptor whose resolution failed.
        cause: The underlying repository failure.
        phase: Where it failed: ``"descriptor"``, ``"collection"``,
            ``"resolution"`` or ``"artifact"``.
    """

    def __init__(self, plugin: Any, cause: BaseException | None, phase: str) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Plugin {plugin} or one of its dependencies could not be resolved{detail}")
        self.plugin = plugin
        self.cause = cause
        self.phase = phase
