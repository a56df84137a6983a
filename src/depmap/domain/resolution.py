"""ResolutionIndex — exact-match lookup from (name, range) to a node id.

The index replays decisions a resolver already made. It never interprets
semver ranges: ``lodash@^4.0.0`` and ``lodash@^4.0`` are unrelated keys.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Literal

from depmap.domain.errors import DuplicateResolutionError, ResolutionNotFoundError
from depmap.domain.ids import make_resolution_key, make_uniq_key
from depmap.domain.records import ResolutionRecord

logger = logging.getLogger(__name__)

DuplicatePolicy = Literal["first", "reject"]


class ResolutionIndex:
    """Lookup table built once from the resolution records.

    Duplicate keys are handled per *duplicates*:

    * ``"first"`` — the first record in table order wins; each duplicated
      key is logged once as a warning.
    * ``"reject"`` — construction fails with :class:`DuplicateResolutionError`.
    """

    def __init__(
        self,
        records: Iterable[ResolutionRecord],
        *,
        duplicates: DuplicatePolicy = "first",
    ) -> None:
        self._versions: dict[str, str] = {}
        seen: dict[str, list[str]] = {}
        for record in records:
            seen.setdefault(record.key, []).append(record.version)
            self._versions.setdefault(record.key, record.version)

        for key, versions in seen.items():
            if len(versions) < 2:
                continue
            if duplicates == "reject":
                raise DuplicateResolutionError(key, versions)
            logger.warning(
                "Duplicate resolution key %s (%d entries); using %s",
                key,
                len(versions),
                versions[0],
            )

    def __len__(self) -> int:
        return len(self._versions)

    def __contains__(self, key: object) -> bool:
        return key in self._versions

    def version_for(self, name: str, range_: str) -> str:
        """Return the concrete version chosen for ``name@range_``."""
        key = make_resolution_key(name, range_)
        try:
            return self._versions[key]
        except KeyError:
            raise ResolutionNotFoundError(name, range_) from None

    def resolve(self, name: str, range_: str) -> str:
        """Resolve a declared dependency to its target node id."""
        return make_uniq_key(name, self.version_for(name, range_))
