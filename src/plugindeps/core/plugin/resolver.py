"""Resolution of a plugin's artifact and of its dependency graph.

``PluginDependenciesResolver`` is the public entry point. For a dependency
resolution it:

1. reads the plugin descriptor and stamps the prerequisites on the plugin
   artifact (``enrichment``),
2. picks the classic or default policy (``policy``),
3. builds a collect request from the plugin's declared dependencies,
4. collects the graph with the policy's selector, manager and transformer,
5. logs the collected graph when debug logging is on,
6. resolves the graph's files through the policy's filter.

Every repository failure is re-raised as ``PluginResolutionError`` naming
the plugin.
"""

from __future__ import annotations

import logging
from typing import Sequence

from plugindeps.core.artifact.models import RUNTIME, SYSTEM, Artifact, Dependency
from plugindeps.core.artifact.plugin import PluginDescriptor
from plugindeps.core.graph.collection import DependencyFilter, DependencyGraphTransformer
from plugindeps.core.graph.node import DependencyNode
from plugindeps.core.plugin.enrichment import REPOSITORY_CONTEXT, create_plugin_artifact
from plugindeps.core.plugin.graph_logger import GraphLogger
from plugindeps.core.plugin.injector import PlexusUtilsInjector
from plugindeps.core.plugin.policy import assemble_policy, verbose_session
from plugindeps.core.plugin.versions import VersionComparator
from plugindeps.core.repository.requests import (
    ArtifactRequest,
    CollectRequest,
    DependencyRequest,
    RemoteRepository,
)
from plugindeps.core.repository.session import RepositorySystemSession, RequestTrace
from plugindeps.core.repository.system import RepositorySystem
from plugindeps.exceptions import (
    ArtifactDescriptorError,
    ArtifactResolutionError,
    DependencyCollectionError,
    DependencyResolutionError,
    PluginResolutionError,
)

logger = logging.getLogger(__name__)


def build_collect_request(
    plugin: PluginDescriptor,
    plugin_artifact: Artifact,
    session: RepositorySystemSession,
    repositories: Sequence[RemoteRepository],
) -> CollectRequest:
    """Collect request rooted at *plugin_artifact*.

    Declared dependencies become ``runtime`` unless they are ``system``
    scoped. Each one is also added as managed dependency so that the
    declaration wins over versions found transitively.
    """
    request = CollectRequest(
        root=Dependency(plugin_artifact, ""),
        repositories=list(repositories),
        request_context=REPOSITORY_CONTEXT,
    )
    for declared in plugin.dependencies:
        dependency = declared.to_dependency(session.artifact_type_registry)
        if dependency.scope != SYSTEM:
            dependency = dependency.with_scope(RUNTIME)
        request.add_dependency(dependency)
        request.add_managed_dependency(dependency)
    return request


class PluginDependenciesResolver:
    """Resolves plugin artifacts and plugin class paths.

    Args:
        repository_system: The engine doing the actual collection and
            resolution.
        comparator: Version ordering for the prerequisites check.

    The resolver holds no per-call state; concurrent calls are independent
    as long as the repository system tolerates them.
    """

    def __init__(
        self,
        repository_system: RepositorySystem,
        comparator: VersionComparator | None = None,
    ) -> None:
        self._system = repository_system
        self._comparator = comparator

    def resolve_plugin_artifact(
        self,
        plugin: PluginDescriptor,
        repositories: Sequence[RemoteRepository],
        session: RepositorySystemSession,
    ) -> Artifact:
        """Resolve the plugin's own artifact, without dependencies.

        Raises:
            PluginResolutionError: If the descriptor or the file cannot be
                obtained.
        """
        try:
            plugin_artifact = create_plugin_artifact(
                self._system, plugin.to_artifact(session.artifact_type_registry), session, repositories
            )
            request = ArtifactRequest(
                artifact=plugin_artifact,
                repositories=list(repositories),
                request_context=REPOSITORY_CONTEXT,
                trace=RequestTrace.new_child(None, plugin),
            )
            return self._system.resolve_artifact(session, request).artifact
        except ArtifactDescriptorError as exc:
            raise PluginResolutionError(plugin, exc, "descriptor") from exc
        except ArtifactResolutionError as exc:
            raise PluginResolutionError(plugin, exc, "artifact") from exc

    def resolve_plugin_dependencies(
        self,
        plugin: PluginDescriptor,
        plugin_artifact: Artifact | None,
        dependency_filter: DependencyFilter | None,
        repositories: Sequence[RemoteRepository],
        session: RepositorySystemSession,
    ) -> DependencyNode:
        """Resolve the full class path of a plugin.

        Args:
            plugin: The plugin as declared in the build.
            plugin_artifact: The plugin artifact if already resolved; derived
                from *plugin* otherwise.
            dependency_filter: Extra resolution filter, may be None.
            repositories: Repositories to resolve from.
            session: The caller's session; it is not modified.

        Returns:
            The resolved graph, rooted at the plugin artifact.

        Raises:
            PluginResolutionError: On descriptor, collection or resolution
                failure.
        """
        return self._resolve(
            plugin, plugin_artifact, dependency_filter, PlexusUtilsInjector(), repositories, session
        )

    def resolve_core_extension_dependencies(
        self,
        plugin: PluginDescriptor,
        dependency_filter: DependencyFilter | None,
        repositories: Sequence[RemoteRepository],
        session: RepositorySystemSession,
    ) -> DependencyNode:
        """Like ``resolve_plugin_dependencies`` for core extensions: no plexus-utils injection."""
        return self._resolve(plugin, None, dependency_filter, None, repositories, session)

    def _resolve(
        self,
        plugin: PluginDescriptor,
        artifact: Artifact | None,
        dependency_filter: DependencyFilter | None,
        transformer: DependencyGraphTransformer | None,
        repositories: Sequence[RemoteRepository],
        session: RepositorySystemSession,
    ) -> DependencyNode:
        session = verbose_session(session)
        trace = RequestTrace.new_child(None, plugin)

        try:
            plugin_artifact = create_plugin_artifact(
                self._system,
                artifact if artifact is not None else plugin.to_artifact(session.artifact_type_registry),
                session,
                repositories,
            )
        except ArtifactDescriptorError as exc:
            raise PluginResolutionError(plugin, exc, "descriptor") from exc

        policy = assemble_policy(plugin_artifact, session, dependency_filter, transformer, self._comparator)

        request = build_collect_request(plugin, plugin_artifact, session, repositories)
        dependency_request = DependencyRequest(collect_request=request, filter=policy.filter, trace=trace)
        request.trace = RequestTrace.new_child(trace, dependency_request)

        try:
            root = self._system.collect_dependencies(policy.apply(session), request).root
        except DependencyCollectionError as exc:
            raise PluginResolutionError(plugin, exc, "collection") from exc

        if logger.isEnabledFor(logging.DEBUG):
            root.accept(GraphLogger())

        dependency_request.root = root
        try:
            self._system.resolve_dependencies(session, dependency_request)
        except DependencyResolutionError as exc:
            cause = exc.__cause__ if exc.__cause__ is not None else exc
            raise PluginResolutionError(plugin, cause, "resolution") from cause
        return root
