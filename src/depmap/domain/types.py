"""Link and locality classification enums."""

from __future__ import annotations

from enum import StrEnum


class LinkType(StrEnum):
    """Kinds of edges in the dependency graph."""

    REGULAR = "regular"
    PEER = "peer"

    @property
    def targets_node(self) -> bool:
        """Whether the link target is a node id rather than a bare package name."""
        return self is LinkType.REGULAR


class Locality(StrEnum):
    """Where a package instance lives relative to the project root."""

    LOCAL = "local"
    EXTERNAL = "external"


class NodeKind(StrEnum):
    """Node roles in the analysis (networkx) view of a graph."""

    PACKAGE = "package"
    ROOT = "root"
    NAME_REF = "name_ref"
