"""A repository system over an in-memory set of descriptors.

``InMemoryRepositorySystem`` implements the ``RepositorySystem`` contract
without any transport: descriptors are ``RepositoryEntry`` objects and
artifact files are paths in a (virtual) local repository. Collection is a
plain depth-first walk that honours the session's selector, manager and
transformer; resolution honours the request filter. There is no version
range handling. Every dependency is taken at the version it declares,
after management.

It backs the CLI and the test-suite.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Sequence

from plugindeps.core.artifact.models import PROP_LOCAL_PATH, Artifact, Dependency
from plugindeps.core.graph.collection import (
    CollectionContext,
    DependencyFilter,
    DependencyManager,
    DependencySelector,
    TransformationContext,
)
from plugindeps.core.graph.node import DependencyNode, Managed
from plugindeps.core.repository.requests import (
    ArtifactDescriptorRequest,
    ArtifactDescriptorResult,
    ArtifactRequest,
    ArtifactResult,
    CollectRequest,
    CollectResult,
    DependencyRequest,
    DependencyResult,
)
from plugindeps.core.repository.session import (
    CONFIG_PROP_VERBOSE,
    RepositorySystemSession,
    RequestTrace,
)
from plugindeps.exceptions import (
    ArtifactDescriptorError,
    ArtifactResolutionError,
    DependencyCollectionError,
    DependencyResolutionError,
)

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_REPOSITORY = Path("~/.m2/repository").expanduser()


@dataclass
class RepositoryEntry:
    """One artifact known to the repository.

    Attributes:
        artifact: Coordinates of the artifact (extension/classifier of the
            main file).
        properties: Descriptor properties, e.g. ``prerequisites.maven``.
        dependencies: Declared dependencies.
        managed_dependencies: Declared dependency management.
        descriptor: Whether a descriptor is published at all; when False only
            the file exists.
        invalid: The descriptor exists but cannot be interpreted.
        available: Whether the artifact's file can be downloaded.
        file: Explicit file location; derived from the local repository
            layout when None.
    """

    artifact: Artifact
    properties: dict[str, Any] = field(default_factory=dict)
    dependencies: list[Dependency] = field(default_factory=list)
    managed_dependencies: list[Dependency] = field(default_factory=list)
    descriptor: bool = True
    invalid: bool = False
    available: bool = True
    file: Path | None = None


def _merge_dependencies(dominant: Sequence[Dependency], recessive: Sequence[Dependency]) -> list[Dependency]:
    """*dominant* plus those of *recessive* whose artifact key is not already present."""
    keys = {d.artifact.key for d in dominant}
    return list(dominant) + [d for d in recessive if d.artifact.key not in keys]


class InMemoryRepositorySystem:
    """``RepositorySystem`` backed by ``RepositoryEntry`` objects.

    Args:
        entries: Initial repository content.
        local_repository: Root of the local repository layout used for
            artifact file paths.
        unreachable: Ids of remote repositories that fail every transfer.
    """

    def __init__(
        self,
        entries: Iterable[RepositoryEntry] = (),
        local_repository: Path = DEFAULT_LOCAL_REPOSITORY,
        unreachable: Iterable[str] = (),
    ) -> None:
        self._entries: dict[tuple[str, str, str], RepositoryEntry] = {}
        self.local_repository = Path(local_repository)
        self.unreachable = frozenset(unreachable)
        for entry in entries:
            self.add(entry)

    def add(self, entry: RepositoryEntry) -> None:
        artifact = entry.artifact
        self._entries[(artifact.group_id, artifact.artifact_id, artifact.version)] = entry

    def get(self, artifact: Artifact) -> RepositoryEntry | None:
        return self._entries.get((artifact.group_id, artifact.artifact_id, artifact.version))

    def __len__(self) -> int:
        return len(self._entries)

    # -- descriptors --------------------------------------------------------

    def read_artifact_descriptor(
        self, session: RepositorySystemSession, request: ArtifactDescriptorRequest
    ) -> ArtifactDescriptorResult:
        artifact = request.artifact
        policy = session.artifact_descriptor_policy
        entry = self.get(artifact)

        if entry is None or not entry.descriptor:
            down = [r.id for r in request.repositories if r.id in self.unreachable]
            if down:
                raise ArtifactDescriptorError(artifact, f"could not transfer from {', '.join(down)}")
            if policy.ignore_missing:
                logger.debug("Missing descriptor for %s ignored", artifact)
                return ArtifactDescriptorResult(artifact)
            raise ArtifactDescriptorError(artifact, "descriptor not found")

        if entry.invalid:
            if policy.ignore_invalid:
                logger.debug("Invalid descriptor for %s ignored", artifact)
                return ArtifactDescriptorResult(artifact)
            raise ArtifactDescriptorError(artifact, "descriptor is invalid")

        return ArtifactDescriptorResult(
            artifact=artifact,
            properties=dict(entry.properties),
            dependencies=list(entry.dependencies),
            managed_dependencies=list(entry.managed_dependencies),
        )

    # -- collection ---------------------------------------------------------

    def collect_dependencies(self, session: RepositorySystemSession, request: CollectRequest) -> CollectResult:
        if request.root is None and not request.dependencies:
            raise DependencyCollectionError("Nothing to collect: no root and no dependencies")

        dependencies: list[Dependency] = list(request.dependencies)
        managed: list[Dependency] = list(request.managed_dependencies)
        root_artifact = None
        if request.root is not None:
            root_artifact = request.root.artifact
            descriptor_request = ArtifactDescriptorRequest(
                artifact=root_artifact,
                repositories=list(request.repositories),
                request_context=request.request_context,
                trace=RequestTrace.new_child(request.trace, request),
            )
            try:
                descriptor = self.read_artifact_descriptor(session, descriptor_request)
            except ArtifactDescriptorError as exc:
                raise DependencyCollectionError(
                    f"Failed to collect dependencies at {root_artifact}: {exc}", request.root
                ) from exc
            dependencies = _merge_dependencies(dependencies, descriptor.dependencies)
            managed = _merge_dependencies(managed, descriptor.managed_dependencies)

        root = DependencyNode(
            request.root,
            repositories=list(request.repositories),
            request_context=request.request_context,
        )
        context = CollectionContext(session, root_artifact, None, tuple(managed))
        selector = session.dependency_selector
        manager = session.dependency_manager
        walk = _CollectionWalk(self, session, request)
        walk.process(
            root,
            dependencies,
            selector.derive_child_selector(context) if selector is not None else None,
            manager.derive_child_manager(context) if manager is not None else None,
            (root_artifact.key,) if root_artifact is not None else (),
        )
        if walk.errors:
            raise DependencyCollectionError(
                "Failed to collect dependencies: " + "; ".join(walk.errors), request.root
            ) from walk.first_cause

        transformer = session.dependency_graph_transformer
        if transformer is not None:
            root = transformer.transform_graph(root, TransformationContext(session))
        return CollectResult(request, root)

    # -- resolution ---------------------------------------------------------

    def resolve_dependencies(self, session: RepositorySystemSession, request: DependencyRequest) -> DependencyResult:
        root = request.root
        if root is None:
            if request.collect_request is None:
                raise DependencyResolutionError("Nothing to resolve: no graph and no collect request")
            try:
                root = self.collect_dependencies(session, request.collect_request).root
            except DependencyCollectionError as exc:
                raise DependencyResolutionError(str(exc), exc.root) from exc

        missing: list[Artifact] = []
        resolved: list[Artifact] = []
        self._resolve_node(root, [], request.filter, resolved, missing)
        if missing:
            cause = ArtifactResolutionError(missing, "not available in any repository")
            raise DependencyResolutionError(f"Failed to resolve dependencies of {root}", root) from cause
        return DependencyResult(request, root, resolved)

    def _resolve_node(
        self,
        node: DependencyNode,
        parents: list[DependencyNode],
        dependency_filter: DependencyFilter | None,
        resolved: list[Artifact],
        missing: list[Artifact],
    ) -> None:
        accepted = dependency_filter is None or dependency_filter.accept(node, parents)
        if accepted and node.artifact is not None:
            location = self._locate(node.artifact)
            if location is None:
                missing.append(node.artifact)
            else:
                node.set_artifact(node.artifact.with_file(location))
                resolved.append(node.artifact)
        for child in node.children:
            self._resolve_node(child, [node, *parents], dependency_filter, resolved, missing)

    def resolve_artifact(self, session: RepositorySystemSession, request: ArtifactRequest) -> ArtifactResult:
        location = self._locate(request.artifact)
        if location is None:
            raise ArtifactResolutionError([request.artifact], "not available in any repository")
        repository = request.repositories[0] if request.repositories else None
        return ArtifactResult(request, request.artifact.with_file(location), repository)

    def _locate(self, artifact: Artifact) -> Path | None:
        local_path = artifact.get_property(PROP_LOCAL_PATH)
        if local_path:
            return Path(local_path)
        entry = self.get(artifact)
        if entry is None or not entry.available:
            return None
        if entry.file is not None:
            return entry.file
        classifier = f"-{artifact.classifier}" if artifact.classifier else ""
        return (
            self.local_repository.joinpath(*artifact.group_id.split("."))
            / artifact.artifact_id
            / artifact.version
            / f"{artifact.artifact_id}-{artifact.version}{classifier}.{artifact.extension}"
        )


class _CollectionWalk:
    """State of one depth-first collection."""

    def __init__(
        self,
        system: InMemoryRepositorySystem,
        session: RepositorySystemSession,
        request: CollectRequest,
    ) -> None:
        self.system = system
        self.session = session
        self.request = request
        self.verbose = session.config_boolean(CONFIG_PROP_VERBOSE)
        self.errors: list[str] = []
        self.first_cause: BaseException | None = None

    def process(
        self,
        parent: DependencyNode,
        dependencies: Sequence[Dependency],
        selector: DependencySelector | None,
        manager: DependencyManager | None,
        path: tuple[str, ...],
    ) -> None:
        for declared in dependencies:
            if selector is not None and not selector.select_dependency(declared):
                continue
            node = self._managed_node(declared, manager)
            parent.children.append(node)

            dependency = node.dependency
            key = dependency.artifact.key
            if key in path:
                logger.debug("Cycle through %s, not descending", dependency.artifact)
                continue

            descriptor_request = ArtifactDescriptorRequest(
                artifact=dependency.artifact,
                repositories=list(self.request.repositories),
                request_context=self.request.request_context,
                trace=RequestTrace.new_child(self.request.trace, self.request),
            )
            try:
                descriptor = self.system.read_artifact_descriptor(self.session, descriptor_request)
            except ArtifactDescriptorError as exc:
                self.errors.append(str(exc))
                if self.first_cause is None:
                    self.first_cause = exc
                continue

            context = CollectionContext(
                self.session, None, dependency, tuple(descriptor.managed_dependencies)
            )
            self.process(
                node,
                descriptor.dependencies,
                selector.derive_child_selector(context) if selector is not None else None,
                manager.derive_child_manager(context) if manager is not None else None,
                path + (key,),
            )

    def _managed_node(self, dependency: Dependency, manager: DependencyManager | None) -> DependencyNode:
        management = manager.manage_dependency(dependency) if manager is not None else None
        managed: set[Managed] = set()
        premanaged: dict[Managed, Any] = {}
        if management is not None:
            artifact = dependency.artifact
            if management.version is not None:
                managed.add(Managed.VERSION)
                premanaged[Managed.VERSION] = artifact.version
                artifact = artifact.with_version(management.version)
            if management.properties is not None:
                managed.add(Managed.PROPERTIES)
                premanaged[Managed.PROPERTIES] = dict(artifact.properties)
                artifact = artifact.with_properties(management.properties)
            dependency = dependency.with_artifact(artifact)
            if management.scope is not None:
                managed.add(Managed.SCOPE)
                premanaged[Managed.SCOPE] = dependency.scope
                dependency = dependency.with_scope(management.scope)
            if management.optional is not None:
                managed.add(Managed.OPTIONAL)
                premanaged[Managed.OPTIONAL] = dependency.optional
                dependency = dependency.with_optional(management.optional)
            if management.exclusions is not None:
                managed.add(Managed.EXCLUSIONS)
                premanaged[Managed.EXCLUSIONS] = dependency.exclusions
                dependency = dependency.with_exclusions(management.exclusions)

        return DependencyNode(
            dependency,
            managed=frozenset(managed),
            premanaged=premanaged if self.verbose else {},
            repositories=list(self.request.repositories),
            request_context=self.request.request_context,
        )
