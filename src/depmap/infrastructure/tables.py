"""Input table loading — the package inventory and the resolution table.

Both tables are JSON arrays read once, validated in full, and converted to
immutable domain records before any graph work starts. A table that is
missing, undecodable, or contains a malformed entry is fatal.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from depmap.domain.errors import InputNotFoundError, MalformedInputError
from depmap.domain.records import PackageRecord, ResolutionRecord

logger = logging.getLogger(__name__)


class InventoryEntry(BaseModel):
    """One ``{name, version, location}`` row of the inventory."""

    model_config = {"frozen": True, "strict": True}

    name: str
    version: str
    location: str


class ResolutionEntry(BaseModel):
    """One ``{key, version}`` row of the resolution table."""

    model_config = {"frozen": True, "strict": True}

    key: str
    version: str


_INVENTORY = TypeAdapter(list[InventoryEntry])
_RESOLUTIONS = TypeAdapter(list[ResolutionEntry])


def _read_json(path: Path, table: str) -> Any:
    """Read and decode a JSON table file."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise InputNotFoundError(table, str(path)) from None
    except UnicodeDecodeError as exc:
        raise MalformedInputError(table, str(path), f"invalid UTF-8: {exc}") from exc
    except OSError as exc:
        raise MalformedInputError(table, str(path), f"unreadable: {exc.strerror or exc}") from exc
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedInputError(table, str(path), f"invalid JSON: {exc}") from exc


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err["loc"])
    return f"{loc}: {err['msg']}" if loc else err["msg"]


def load_inventory(path: Path, *, project_root: str) -> list[PackageRecord]:
    """Load the package inventory, classifying each record's locality."""
    data = _read_json(path, "inventory")
    try:
        entries = _INVENTORY.validate_python(data)
    except ValidationError as exc:
        raise MalformedInputError("inventory", str(path), _first_error(exc)) from exc

    records = [
        PackageRecord.ingest(e.name, e.version, e.location, project_root=project_root)
        for e in entries
    ]
    logger.debug(
        "Loaded inventory %s: %d packages (%d local)",
        path,
        len(records),
        sum(1 for r in records if r.is_local),
    )
    return records


def load_resolutions(path: Path) -> list[ResolutionRecord]:
    """Load the resolution table in file order."""
    data = _read_json(path, "resolutions")
    try:
        entries = _RESOLUTIONS.validate_python(data)
    except ValidationError as exc:
        raise MalformedInputError("resolutions", str(path), _first_error(exc)) from exc

    logger.debug("Loaded resolutions %s: %d entries", path, len(entries))
    return [ResolutionRecord(key=e.key, version=e.version) for e in entries]
