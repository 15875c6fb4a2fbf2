"""Plugin class path resolution.

- ``resolver``: ``PluginDependenciesResolver``, the public entry point.
- ``policy``: classic/default policy selection by plugin prerequisites.
- ``enrichment``: reading the prerequisites from the plugin descriptor.
- ``selectors``: the classic scope selector and the wagon excluder.
- ``injector``: the plexus-utils injecting transformer.
- ``graph_logger``: debug rendering of collected graphs.
- ``versions``: version ordering used for the prerequisites check.
"""

from plugindeps.core.plugin.enrichment import (
    PREREQUISITES_PROPERTY,
    REPOSITORY_CONTEXT,
    create_plugin_artifact,
)
from plugindeps.core.plugin.graph_logger import GraphLogger, describe_node
from plugindeps.core.plugin.injector import PlexusUtilsInjector
from plugindeps.core.plugin.policy import (
    DEFAULT_PREREQUISITES,
    DEFAULT_RESOLUTION_PREREQUISITES,
    PluginResolutionPolicy,
    assemble_policy,
    is_classic_resolution,
    verbose_session,
)
from plugindeps.core.plugin.resolver import PluginDependenciesResolver, build_collect_request
from plugindeps.core.plugin.selectors import ClassicScopeDependencySelector, WagonExcluder
from plugindeps.core.plugin.versions import MavenVersionComparator, VersionComparator

__all__ = [
    "PREREQUISITES_PROPERTY",
    "REPOSITORY_CONTEXT",
    "create_plugin_artifact",
    "GraphLogger",
    "describe_node",
    "PlexusUtilsInjector",
    "DEFAULT_PREREQUISITES",
    "DEFAULT_RESOLUTION_PREREQUISITES",
    "PluginResolutionPolicy",
    "assemble_policy",
    "is_classic_resolution",
    "verbose_session",
    "PluginDependenciesResolver",
    "build_collect_request",
    "ClassicScopeDependencySelector",
    "WagonExcluder",
    "MavenVersionComparator",
    "VersionComparator",
]
