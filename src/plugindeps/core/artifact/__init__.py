"""Artifact, dependency and plugin value types.

All public names are re-exported here so callers can write
``from plugindeps.core.artifact import Artifact``.
"""

from plugindeps.core.artifact.models import (
    COMPILE,
    PROP_LOCAL_PATH,
    PROP_REQUIRED_MAVEN_VERSION,
    PROP_TYPE,
    PROVIDED,
    RUNTIME,
    SYSTEM,
    TEST,
    Artifact,
    ArtifactType,
    ArtifactTypeRegistry,
    Dependency,
    Exclusion,
    default_type_registry,
)
from plugindeps.core.artifact.plugin import (
    PLUGIN_TYPE,
    DeclaredDependency,
    PluginDescriptor,
)

__all__ = [
    "COMPILE",
    "PROVIDED",
    "RUNTIME",
    "TEST",
    "SYSTEM",
    "PROP_LOCAL_PATH",
    "PROP_REQUIRED_MAVEN_VERSION",
    "PROP_TYPE",
    "PLUGIN_TYPE",
    "Artifact",
    "ArtifactType",
    "ArtifactTypeRegistry",
    "Dependency",
    "Exclusion",
    "DeclaredDependency",
    "PluginDescriptor",
    "default_type_registry",
]
