"""GraphService — dependency graph construction and summary statistics.

:class:`GraphBuilder` is the core: a single pass over the inventory that
turns each package's manifest into regular and peer links, then appends
the synthetic root links for local packages. It is a pure function of its
three inputs (inventory, resolution index, manifest store) and aborts on
the first fatal error.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

from depmap.domain.errors import DepmapError, MalformedManifestError
from depmap.domain.graph import DependencyGraph, GraphLink
from depmap.domain.ids import ROOT_ID
from depmap.domain.manifest import (
    ManifestSectionError,
    declared_dependencies,
    declared_peer_names,
)
from depmap.domain.types import LinkType, NodeKind
from depmap.infrastructure.graph.engine import to_networkx
from depmap.services.base import BaseService
from depmap.services.result import ServiceResult
from depmap.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from depmap.domain.records import PackageRecord
    from depmap.domain.resolution import ResolutionIndex
    from depmap.infrastructure.manifests import ManifestStore

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Project inventory + resolution index + manifests onto a graph."""

    def __init__(self, resolutions: ResolutionIndex, manifests: ManifestStore) -> None:
        self._resolutions = resolutions
        self._manifests = manifests

    def package_links(self, package: PackageRecord) -> list[GraphLink]:
        """Outgoing links of one package: regular links first, then peer links."""
        manifest = self._manifests.load(package.location)
        try:
            dependencies = declared_dependencies(manifest, package.locality)
            peer_names = declared_peer_names(manifest, package.locality)
        except ManifestSectionError as exc:
            raise MalformedManifestError(package.location, str(exc)) from exc

        source = package.key
        links = [
            GraphLink.regular(source, self._resolutions.resolve(name, range_))
            for name, range_ in dependencies.items()
        ]
        links.extend(GraphLink.peer(source, name) for name in peer_names)
        return links

    @staticmethod
    def root_links(packages: Iterable[PackageRecord]) -> list[GraphLink]:
        """One ``root -> package`` link per local package, in inventory order."""
        return [GraphLink.regular(ROOT_ID, p.key) for p in packages if p.is_local]

    def build(self, packages: Sequence[PackageRecord]) -> DependencyGraph:
        links: list[GraphLink] = []
        for package in packages:
            links.extend(self.package_links(package))
        links.extend(self.root_links(packages))

        nodes = [p.key for p in packages]
        nodes.append(ROOT_ID)

        logger.debug(
            "Built graph: %d nodes, %d links (%d peer)",
            len(nodes),
            len(links),
            sum(1 for link in links if link.type is LinkType.PEER),
        )
        return DependencyGraph(nodes=nodes, links=links)


def build_graph(
    packages: Sequence[PackageRecord],
    resolutions: ResolutionIndex,
    manifests: ManifestStore,
) -> DependencyGraph:
    """Build the dependency graph from explicit inputs."""
    return GraphBuilder(resolutions, manifests).build(packages)


class GraphService(BaseService):
    """Builds the workspace graph and summarizes it."""

    def assemble(self) -> DependencyGraph:
        """Load inputs and build the graph. Raises :class:`DepmapError`."""
        ws = self._workspace
        with trace_span("load_inputs") as span:
            packages = ws.packages
            resolutions = ws.resolutions
            if span:
                span.annotate("packages", len(packages))
                span.annotate("resolutions", len(resolutions))
        with trace_span("build_graph") as span:
            graph = build_graph(packages, resolutions, ws.manifests)
            if span:
                span.annotate("links", graph.link_count)
        return graph

    @traced
    def build(self) -> ServiceResult:
        """Build the graph; ``data`` is exactly the ``{nodes, links}`` document."""
        try:
            graph = self.assemble()
        except DepmapError as exc:
            return ServiceResult.failure("build_graph", exc)
        return ServiceResult(ok=True, op="build_graph", data=graph.to_dict())

    @traced
    def stats(self, *, top: int = 10) -> ServiceResult:
        """Summarize the graph: counts by kind and the most-depended-on packages.

        Dependents are counted over the networkx projection, so repeated
        links between the same pair count once. Root links are excluded.
        """
        try:
            graph = self.assemble()
        except DepmapError as exc:
            return ServiceResult.failure("stats", exc)

        packages = self._workspace.packages
        g = to_networkx(graph)

        dependents: list[dict[str, Any]] = []
        for node_id, kind in g.nodes(data="kind"):
            if kind in (NodeKind.ROOT, NodeKind.NAME_REF):
                continue
            count = sum(
                1
                for src, _, link_type in g.in_edges(node_id, data="type")
                if link_type == LinkType.REGULAR and src != ROOT_ID
            )
            if count:
                dependents.append({"id": node_id, "dependents": count})
        dependents.sort(key=lambda item: (-item["dependents"], item["id"]))

        peer_links = graph.links_of_type(LinkType.PEER)
        regular_links = graph.links_of_type(LinkType.REGULAR)
        root_links = [link for link in regular_links if link.source == ROOT_ID]

        return ServiceResult(
            ok=True,
            op="stats",
            data={
                "package_count": len(packages),
                "local_count": sum(1 for p in packages if p.is_local),
                "node_count": graph.node_count,
                "distinct_node_count": len(set(graph.nodes)),
                "link_count": graph.link_count,
                "regular_count": len(regular_links) - len(root_links),
                "root_count": len(root_links),
                "peer_count": len(peer_links),
                "peer_name_count": len({link.target for link in peer_links}),
                "count": len(dependents[:top]),
                "items": dependents[:top],
            },
        )
