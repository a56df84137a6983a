"""Error taxonomy for graph construction.

Every failure is fatal: the build aborts and no graph is emitted.
Services translate these into ``ServiceError`` payloads via ``code``
and ``detail``.
"""

from __future__ import annotations

from typing import Any


class DepmapError(Exception):
    """Base class for all depmap failures."""

    code = "DEPMAP_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ResolutionNotFoundError(DepmapError):
    """A declared (name, range) pair has no entry in the resolution table."""

    code = "RESOLUTION_NOT_FOUND"

    def __init__(self, name: str, range_: str) -> None:
        key = f"{name}@{range_}"
        super().__init__(
            f"No resolution for '{key}'",
            name=name,
            range=range_,
            key=key,
        )


class DuplicateResolutionError(DepmapError):
    """The resolution table maps one key more than once (reject policy)."""

    code = "DUPLICATE_RESOLUTION"

    def __init__(self, key: str, versions: list[str]) -> None:
        super().__init__(
            f"Resolution key '{key}' appears {len(versions)} times",
            key=key,
            versions=versions,
        )


class ManifestNotFoundError(DepmapError):
    """No manifest exists for a package location."""

    code = "MANIFEST_NOT_FOUND"

    def __init__(self, location: str, path: str | None = None) -> None:
        super().__init__(
            f"No manifest found for '{location}'",
            location=location,
            path=path or location,
        )


class MalformedManifestError(DepmapError):
    """A manifest exists but cannot be decoded into dependency sections."""

    code = "MALFORMED_MANIFEST"

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(
            f"Malformed manifest for '{location}': {reason}",
            location=location,
            reason=reason,
        )


class InputNotFoundError(DepmapError):
    """An input table file is missing."""

    code = "INPUT_NOT_FOUND"

    def __init__(self, table: str, path: str) -> None:
        super().__init__(f"{table.capitalize()} file not found: {path}", table=table, path=path)


class MalformedInputError(DepmapError):
    """An input table is not a list of well-formed records."""

    code = "MALFORMED_INPUT"

    def __init__(self, table: str, path: str, reason: str) -> None:
        super().__init__(
            f"Malformed {table} in {path}: {reason}",
            table=table,
            path=path,
            reason=reason,
        )
