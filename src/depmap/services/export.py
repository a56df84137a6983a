"""ExportService — serialize the dependency graph as JSON or DOT."""

from __future__ import annotations

from typing import Any

from depmap.domain.errors import DepmapError
from depmap.infrastructure.graph.engine import to_dot
from depmap.services.base import BaseService
from depmap.services.graph import GraphService
from depmap.services.result import ServiceError, ServiceResult
from depmap.services.telemetry import traced

EXPORT_FORMATS = ("json", "dot")


class ExportService(BaseService):
    """Render the workspace graph to a document string."""

    @traced
    def export_graph(self, *, fmt: str = "json", indent: int = 2) -> ServiceResult:
        """Export the dependency graph.

        Formats:
        - ``json`` — ``{"nodes": [...], "links": [...]}`` with *indent* spaces
        - ``dot`` — Graphviz DOT language

        Returns the document in ``data["content"]`` with a trailing newline.
        """
        if fmt not in EXPORT_FORMATS:
            return ServiceResult(
                ok=False,
                op="export_graph",
                error=ServiceError(
                    code="INVALID_FORMAT",
                    message=f"Unknown graph format: {fmt}",
                    detail={"format": fmt, "valid": list(EXPORT_FORMATS)},
                ),
            )

        try:
            graph = GraphService(self._workspace).assemble()
        except DepmapError as exc:
            return ServiceResult.failure("export_graph", exc)

        content = graph.to_json(indent=indent) + "\n" if fmt == "json" else to_dot(graph)

        payload: dict[str, Any] = {
            "format": fmt,
            "content": content,
            "node_count": graph.node_count,
            "link_count": graph.link_count,
        }
        return ServiceResult(ok=True, op="export_graph", data=payload)
