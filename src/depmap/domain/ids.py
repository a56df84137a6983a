"""Package identity.

A node id is ``{name}@{version}``. Two inventory records with the same
name and version share an id. The synthetic workspace node is ``root``.

INVARIANT: Peer-link targets are bare names and never carry a version.
"""

from __future__ import annotations

ROOT_ID = "root"


def make_uniq_key(name: str, version: str) -> str:
    """Return the node id for a (name, version) pair."""
    return f"{name}@{version}"


def make_resolution_key(name: str, range_: str) -> str:
    """Return the resolution-table key for a declared (name, range) pair.

    Examples:
        >>> make_resolution_key("lodash", "^4.17.0")
        'lodash@^4.17.0'
        >>> make_resolution_key("@babel/core", "7.x")
        '@babel/core@7.x'
    """
    return f"{name}@{range_}"
