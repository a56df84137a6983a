"""Package manifest schema and the dependency-set accessors.

Only the four sections that shape the graph are modeled; every other
manifest key is ignored. Absent and ``null`` sections read as empty.

Locality drives both accessors:

- Local packages are built from source, so their ``devDependencies``
  count as edges.
- Local packages satisfy their own peer requirements, so they declare
  no peer edges.

``dependencies`` is read for every package and is validated on load. The
other sections are kept as decoded and checked by the accessor that reads
them, so a malformed section the package's locality never consults does
not fail the build.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from depmap.domain.types import Locality

_RANGES: TypeAdapter[dict[str, str]] = TypeAdapter(dict[str, str])
_NAMED: TypeAdapter[dict[str, Any]] = TypeAdapter(dict[str, Any])


class ManifestSectionError(ValueError):
    """A section read for this package's locality has the wrong shape."""

    def __init__(self, section: str, reason: str) -> None:
        super().__init__(f"{section}: {reason}")
        self.section = section


class Manifest(BaseModel):
    """The dependency sections of a ``package.json``-style descriptor."""

    model_config = {"frozen": True, "populate_by_name": True}

    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: Any = Field(default_factory=dict, alias="devDependencies")
    peer_dependencies: Any = Field(default_factory=dict, alias="peerDependencies")
    peer_dependencies_meta: Any = Field(default_factory=dict, alias="peerDependenciesMeta")

    @field_validator("*", mode="before")
    @classmethod
    def _null_section_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value


T = TypeVar("T")


def _read_section(adapter: TypeAdapter[T], value: Any, section: str) -> T:
    try:
        return adapter.validate_python(value)
    except ValidationError as exc:
        err = exc.errors()[0]
        loc = ".".join(str(part) for part in err["loc"])
        raise ManifestSectionError(section, f"{loc}: {err['msg']}" if loc else err["msg"]) from exc


def declared_dependencies(manifest: Manifest, locality: Locality) -> dict[str, str]:
    """Return the ``name -> range`` pairs that become regular edges.

    For local packages ``devDependencies`` are merged over ``dependencies``:
    a name in both keeps its first position and takes the dev range.

    Raises:
        ManifestSectionError: a local package's ``devDependencies`` is not a
            mapping of names to range strings.
    """
    if locality is Locality.LOCAL:
        dev = _read_section(_RANGES, manifest.dev_dependencies, "devDependencies")
        return {**manifest.dependencies, **dev}
    return dict(manifest.dependencies)


def declared_peer_names(manifest: Manifest, locality: Locality) -> list[str]:
    """Return the bare names that become peer edges, in declaration order.

    Names from ``peerDependencies`` come first, followed by names only
    listed in ``peerDependenciesMeta``. Only the keys are read.

    Raises:
        ManifestSectionError: an external package's peer section is not a
            mapping.
    """
    if locality is Locality.LOCAL:
        return []
    names = dict.fromkeys(_read_section(_NAMED, manifest.peer_dependencies, "peerDependencies"))
    meta = _read_section(_NAMED, manifest.peer_dependencies_meta, "peerDependenciesMeta")
    names.update(dict.fromkeys(meta))
    return list(names)
