"""JSONL storage for report run records."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any


def _encode(value: Any) -> Any:
    # report contexts carry dates, statuses and numpy scalars from pandas rollups
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    if hasattr(value, "item"):
        return value.item()
    return str(value)


def append_jsonl(path: str | Path, record: Mapping[str, Any]) -> None:
    """Append a JSON record as a single line to the given path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        json.dump(record, handle, ensure_ascii=False, separators=(",", ":"), default=_encode)
        handle.write("\n")


def read_jsonl(path: str | Path, *, record_type: str | None = None) -> list[dict[str, Any]]:
    """Read JSON objects from a JSONL file, skipping blank or broken lines.

    ``record_type`` keeps only records whose ``record_type`` field matches.
    """
    records: list[dict[str, Any]] = []
    with Path(path).open("r", encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if not line:
                continue
            try:
                payload = json.loads(line)
            except json.JSONDecodeError:
                continue
            if not isinstance(payload, dict):
                continue
            if record_type is not None and payload.get("record_type") != record_type:
                continue
            records.append(payload)
    return records


__all__ = ["append_jsonl", "read_jsonl"]
