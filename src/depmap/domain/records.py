"""Input records — installed package instances and resolution decisions.

Pure data, no I/O. Loading and validation of the on-disk tables lives in
:mod:`depmap.infrastructure.tables`.
"""

from __future__ import annotations

from dataclasses import dataclass

from depmap.domain.ids import make_uniq_key
from depmap.domain.types import Locality


def classify_locality(location: str, project_root: str) -> Locality:
    """Classify a package location against the project root.

    A plain string-prefix test: any location starting with *project_root*
    is local, including siblings such as ``/work/app-other`` for a root of
    ``/work/app``.
    """
    if location.startswith(project_root):
        return Locality.LOCAL
    return Locality.EXTERNAL


@dataclass(frozen=True)
class PackageRecord:
    """One installed package instance from the inventory."""

    name: str
    version: str
    location: str
    locality: Locality = Locality.EXTERNAL

    @classmethod
    def ingest(cls, name: str, version: str, location: str, *, project_root: str) -> PackageRecord:
        """Build a record, classifying its locality once."""
        return cls(
            name=name,
            version=version,
            location=location,
            locality=classify_locality(location, project_root),
        )

    @property
    def key(self) -> str:
        return make_uniq_key(self.name, self.version)

    @property
    def is_local(self) -> bool:
        return self.locality is Locality.LOCAL


@dataclass(frozen=True)
class ResolutionRecord:
    """A memoized resolution decision: ``name@range`` -> concrete version."""

    key: str
    version: str
