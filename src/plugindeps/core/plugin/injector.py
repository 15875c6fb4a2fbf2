"""Graph transformer giving every plugin a plexus-utils on its class path."""

from __future__ import annotations

import logging

from plugindeps.core.artifact.models import RUNTIME, Artifact, Dependency
from plugindeps.core.graph.collection import TransformationContext
from plugindeps.core.graph.node import DependencyNode

logger = logging.getLogger(__name__)

GROUP_ID = "org.codehaus.plexus"
ARTIFACT_ID = "plexus-utils"
VERSION = "1.1"
EXTENSION = "jar"


class PlexusUtilsInjector:
    """Adds ``plexus-utils:1.1`` below the root unless the graph already has one.

    Old build-tool cores exported plexus-utils to every plugin. Plugins
    relying on that still need it once the core stopped doing so.
    """

    def transform_graph(self, node: DependencyNode, context: TransformationContext) -> DependencyNode:
        if self._find_plexus_utils(node) is None:
            artifact = Artifact(GROUP_ID, ARTIFACT_ID, VERSION, EXTENSION)
            child = DependencyNode(Dependency(artifact, RUNTIME))
            child.repositories = list(node.repositories)
            child.request_context = node.request_context
            node.children.append(child)
            logger.debug("Injected %s into plugin class path of %s", artifact, node.artifact)
        return node

    def _find_plexus_utils(self, node: DependencyNode) -> DependencyNode | None:
        artifact = node.artifact
        if (
            artifact is not None
            and artifact.artifact_id == ARTIFACT_ID
            and artifact.group_id == GROUP_ID
            and artifact.extension == EXTENSION
            and not artifact.classifier
        ):
            return node
        for child in node.children:
            found = self._find_plexus_utils(child)
            if found is not None:
                return found
        return None

    def __repr__(self) -> str:
        return "PlexusUtilsInjector()"
