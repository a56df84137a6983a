"""Manifest stores — where the builder gets each package's descriptor.

The graph builder depends on the :class:`ManifestStore` protocol only.
:class:`FileManifestStore` reads ``package.json`` files from disk;
:class:`InMemoryManifestStore` serves fixtures.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError

from depmap.domain.errors import MalformedManifestError, ManifestNotFoundError
from depmap.domain.manifest import Manifest

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_NAME = "package.json"


class ManifestStore(Protocol):
    """Loads the manifest for a package location."""

    def load(self, location: str) -> Manifest:
        """Return the manifest, or raise ``ManifestNotFoundError``."""
        ...


def parse_manifest(location: str, data: Any) -> Manifest:
    """Validate decoded manifest data into a :class:`Manifest`."""
    if not isinstance(data, dict):
        raise MalformedManifestError(location, f"expected an object, got {type(data).__name__}")
    try:
        return Manifest.model_validate(data)
    except ValidationError as exc:
        err = exc.errors()[0]
        loc = ".".join(str(part) for part in err["loc"])
        raise MalformedManifestError(location, f"{loc}: {err['msg']}") from exc


class FileManifestStore:
    """Read manifests from the filesystem.

    A location naming a file is read as-is; a directory location is joined
    with *manifest_name*. Manifests are read on every call; the builder
    asks for each location once.
    """

    def __init__(self, manifest_name: str = DEFAULT_MANIFEST_NAME) -> None:
        self._manifest_name = manifest_name

    def path_for(self, location: str) -> Path:
        path = Path(location)
        if path.is_file():
            return path
        return path / self._manifest_name

    def load(self, location: str) -> Manifest:
        path = self.path_for(location)
        try:
            raw = path.read_text(encoding="utf-8")
        except (FileNotFoundError, NotADirectoryError):
            raise ManifestNotFoundError(location, str(path)) from None
        except UnicodeDecodeError as exc:
            raise MalformedManifestError(location, f"invalid UTF-8: {exc}") from exc
        except OSError as exc:
            raise MalformedManifestError(location, f"unreadable: {exc.strerror or exc}") from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise MalformedManifestError(location, f"invalid JSON: {exc}") from exc
        logger.debug("Loaded manifest %s", path)
        return parse_manifest(location, data)


class InMemoryManifestStore:
    """Serve manifests from a ``location -> data`` mapping."""

    def __init__(self, manifests: Mapping[str, Manifest | Mapping[str, Any]]) -> None:
        self._manifests = dict(manifests)

    def load(self, location: str) -> Manifest:
        try:
            entry = self._manifests[location]
        except KeyError:
            raise ManifestNotFoundError(location) from None
        if isinstance(entry, Manifest):
            return entry
        return parse_manifest(location, dict(entry))
