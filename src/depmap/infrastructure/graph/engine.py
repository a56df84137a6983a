"""NetworkX projection of a DependencyGraph for analysis and DOT export.

The projection is a ``DiGraph``: repeated node ids and parallel links
collapse here, while the JSON output keeps them. Peer-link targets become
``name_ref`` nodes so they are never confused with resolved packages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

import networkx as nx

from depmap.domain.ids import ROOT_ID
from depmap.domain.types import NodeKind

if TYPE_CHECKING:
    from depmap.domain.graph import DependencyGraph

_Graph: TypeAlias = nx.DiGraph


def to_networkx(graph: DependencyGraph) -> _Graph:
    """Build a DiGraph with ``kind`` node and ``type`` edge attributes."""
    g: _Graph = nx.DiGraph()
    for node_id in graph.nodes:
        kind = NodeKind.ROOT if node_id == ROOT_ID else NodeKind.PACKAGE
        g.add_node(node_id, kind=str(kind))

    for link in graph.links:
        if not link.targets_node and link.target not in g:
            g.add_node(link.target, kind=str(NodeKind.NAME_REF))
        g.add_edge(link.source, link.target, type=str(link.type))
    return g


def to_dot(graph: DependencyGraph) -> str:
    """Generate Graphviz DOT notation.

    Peer links are dashed and name references are drawn as ellipses.
    """
    g = to_networkx(graph)
    lines = ["digraph dependencies {", "  rankdir=LR;", "  node [shape=box];"]

    for node_id, attrs in g.nodes(data=True):
        kind = attrs.get("kind", NodeKind.PACKAGE)
        safe_id = _quote(node_id)
        if kind == NodeKind.ROOT:
            lines.append(f"  {safe_id} [shape=doublecircle];")
        elif kind == NodeKind.NAME_REF:
            lines.append(f"  {safe_id} [shape=ellipse style=dashed];")
        else:
            lines.append(f"  {safe_id};")

    for src, tgt, attrs in g.edges(data=True):
        style = ' [style=dashed label="peer"]' if attrs.get("type") == "peer" else ""
        lines.append(f"  {_quote(src)} -> {_quote(tgt)}{style};")

    lines.append("}")
    return "\n".join(lines) + "\n"


def _quote(node_id: str) -> str:
    escaped = node_id.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
