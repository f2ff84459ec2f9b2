"""Loading of the static mention and channel tables."""

from __future__ import annotations

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import structlog

from github2slack.errors import TableError

logger = structlog.get_logger()

Table = Mapping[str, str]


def freeze_table(data: Any, *, source: str = "<table>") -> Table:
    """
    Validate a decoded JSON object and return a read-only view of it.

    Key order is preserved; the mention resolver depends on it.
    """
    if not isinstance(data, dict):
        raise TableError(f"{source}: expected a JSON object, got {type(data).__name__}")
    for key, value in data.items():
        if not isinstance(value, str):
            raise TableError(f"{source}: value for {key!r} must be a string")
    return MappingProxyType(dict(data))


def load_table(path: str | Path) -> Table:
    """Read a ``{"name": "id"}`` JSON file. A missing file gives an empty table."""
    p = Path(path)
    if not p.is_file():
        logger.warning("table_file_missing", path=str(p))
        return MappingProxyType({})
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise TableError(f"{p}: invalid JSON ({exc.msg})") from exc
    table = freeze_table(data, source=str(p))
    logger.info("table_loaded", path=str(p), entries=len(table))
    return table
