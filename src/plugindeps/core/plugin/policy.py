"""Choosing how a plugin's dependency graph is shaped.

Plugins declaring a build-tool prerequisite below ``3`` get the *classic*
policy, which reproduces the scope handling and dependency management they
were originally built against. Everything else gets the *default* policy,
which is the session's own configuration.

- classic: selector is classic scope AND optional AND exclusion AND wagon
  excluder; manager is ``ClassicDependencyManager``.
- default: selector is the session selector AND wagon excluder; manager is
  the session manager.

Both chain the session transformer with an optional extra transformer and
resolve through ``scope not in (provided, test)`` AND the caller's filter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from plugindeps.core.artifact.models import PROP_REQUIRED_MAVEN_VERSION, PROVIDED, TEST, Artifact
from plugindeps.core.graph.collection import (
    DependencyFilter,
    DependencyGraphTransformer,
    DependencyManager,
    DependencySelector,
)
from plugindeps.core.graph.filters import AndDependencyFilter, ScopeDependencyFilter
from plugindeps.core.graph.managers import ClassicDependencyManager
from plugindeps.core.graph.selectors import (
    AndDependencySelector,
    ExclusionDependencySelector,
    OptionalDependencySelector,
)
from plugindeps.core.graph.transformers import ChainedDependencyGraphTransformer
from plugindeps.core.plugin.selectors import ClassicScopeDependencySelector, WagonExcluder
from plugindeps.core.plugin.versions import MavenVersionComparator, VersionComparator
from plugindeps.core.repository.session import CONFIG_PROP_VERBOSE, RepositorySystemSession

logger = logging.getLogger(__name__)

# Prerequisites assumed for plugins that declare none.
DEFAULT_PREREQUISITES = "2"

# First prerequisites version resolved with the default policy.
DEFAULT_RESOLUTION_PREREQUISITES = "3"


@dataclass(frozen=True)
class PluginResolutionPolicy:
    """The rule set for one plugin resolution.

    Attributes:
        classic: True when the classic policy applies.
        prerequisites: The prerequisites version the decision was based on.
        selector: Selector for collection.
        manager: Dependency manager for collection.
        transformer: Graph transformer for collection.
        filter: Filter for resolution.
    """

    classic: bool
    prerequisites: str
    selector: DependencySelector
    manager: DependencyManager | None
    transformer: DependencyGraphTransformer | None
    filter: DependencyFilter

    @property
    def name(self) -> str:
        return "classic" if self.classic else "default"

    def apply(self, session: RepositorySystemSession) -> RepositorySystemSession:
        """A copy of *session* collecting with this policy."""
        return session.copy(
            dependency_selector=self.selector,
            dependency_manager=self.manager,
            dependency_graph_transformer=self.transformer,
        )


def verbose_session(session: RepositorySystemSession) -> RepositorySystemSession:
    """Turn on premanaged state tracking when the graph is going to be logged.

    Returns *session* itself unless debug logging is enabled and the session
    does not configure verbosity already.
    """
    if logger.isEnabledFor(logging.DEBUG) and session.config_properties.get(CONFIG_PROP_VERBOSE) is None:
        return session.with_config_property(CONFIG_PROP_VERBOSE, True)
    return session


def is_classic_resolution(prerequisites: str, comparator: VersionComparator | None = None) -> bool:
    """True if *prerequisites* is strictly below the default resolution threshold.

    Unparseable prerequisites are treated like the legacy default.
    """
    comparator = comparator or MavenVersionComparator()
    try:
        return comparator.compare(prerequisites, DEFAULT_RESOLUTION_PREREQUISITES) < 0
    except ValueError:
        logger.warning(
            "Cannot interpret plugin prerequisites %r, assuming %s", prerequisites, DEFAULT_PREREQUISITES
        )
        return comparator.compare(DEFAULT_PREREQUISITES, DEFAULT_RESOLUTION_PREREQUISITES) < 0


def assemble_policy(
    plugin_artifact: Artifact,
    session: RepositorySystemSession,
    dependency_filter: DependencyFilter | None = None,
    transformer: DependencyGraphTransformer | None = None,
    comparator: VersionComparator | None = None,
) -> PluginResolutionPolicy:
    """Build the resolution policy for *plugin_artifact*.

    Args:
        plugin_artifact: The plugin artifact, enriched with its
            ``requiredMavenVersion`` property when it declares one.
        session: Session providing the default selector, manager and
            transformer.
        dependency_filter: Caller filter, ANDed into the resolution filter.
        transformer: Extra transformer run after the session's.
        comparator: Version ordering; the build tool's own ordering by default.

    Returns:
        A fresh ``PluginResolutionPolicy``.
    """
    prerequisites = plugin_artifact.get_property(PROP_REQUIRED_MAVEN_VERSION, DEFAULT_PREREQUISITES)
    classic = is_classic_resolution(prerequisites, comparator)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Constructing %s plugin classpath '%s' for prerequisites '%s'.",
            "classic" if classic else "default",
            plugin_artifact,
            prerequisites,
        )

    if classic:
        selector: DependencySelector = AndDependencySelector(
            ClassicScopeDependencySelector(),
            OptionalDependencySelector(),
            ExclusionDependencySelector(),
            WagonExcluder(),
        )
        manager: DependencyManager | None = ClassicDependencyManager()
    else:
        selector = AndDependencySelector.new_instance(session.dependency_selector, WagonExcluder())
        manager = session.dependency_manager

    resolution_filter = AndDependencyFilter.new_instance(
        ScopeDependencyFilter(excluded=(PROVIDED, TEST)), dependency_filter
    )
    return PluginResolutionPolicy(
        classic=classic,
        prerequisites=prerequisites,
        selector=selector,
        manager=manager,
        transformer=ChainedDependencyGraphTransformer.new_instance(
            session.dependency_graph_transformer, transformer
        ),
        filter=resolution_filter,
    )
