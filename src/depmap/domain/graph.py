"""Graph value types and JSON output shaping.

``DependencyGraph.to_dict()`` is the wire format::

    {"nodes": ["a@1.0.0", "root"],
     "links": [{"source": "root", "target": "a@1.0.0", "type": "regular"}]}
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from depmap.domain.ids import ROOT_ID
from depmap.domain.types import LinkType


@dataclass(frozen=True)
class GraphLink:
    """A directed edge.

    Regular links point at a node id. Peer links point at a bare package
    name that is generally not in the node list.
    """

    source: str
    target: str
    type: LinkType

    @classmethod
    def regular(cls, source: str, target: str) -> GraphLink:
        return cls(source=source, target=target, type=LinkType.REGULAR)

    @classmethod
    def peer(cls, source: str, name: str) -> GraphLink:
        return cls(source=source, target=name, type=LinkType.PEER)

    @property
    def targets_node(self) -> bool:
        return self.type.targets_node

    def to_dict(self) -> dict[str, str]:
        return {"source": self.source, "target": self.target, "type": str(self.type)}


@dataclass(frozen=True)
class DependencyGraph:
    """Nodes in inventory order (``root`` last) and links in emission order."""

    nodes: list[str] = field(default_factory=lambda: [ROOT_ID])
    links: list[GraphLink] = field(default_factory=list)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def link_count(self) -> int:
        return len(self.links)

    def links_of_type(self, link_type: LinkType) -> list[GraphLink]:
        return [link for link in self.links if link.type is link_type]

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": list(self.nodes),
            "links": [link.to_dict() for link in self.links],
        }

    def to_json(self, *, indent: int = 2) -> str:
        """Serialize as pretty-printed JSON (no trailing newline)."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
