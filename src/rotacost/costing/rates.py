"""Per-person pay master records and the name-keyed rate index."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

__all__ = [
    "RateRecord",
    "ZERO_RATE",
    "normalize_person_key",
    "build_rate_index",
    "resolve_rate",
]


def _as_float(value: Any) -> float:
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


@dataclass(frozen=True)
class RateRecord:
    """
    Pay parameters for one person, taken from the pay master.

    Attributes
    ----------
    id:
        Person identifier (crew name) the record is joined on.
    salary:
        Monthly basic salary.
    fixed_allowance:
        Monthly fixed allowance.
    offshore_rate:
        Allowance per offshore day (offshore medics only).
    medevac_rate:
        Fee per medical-evacuation event (escort medics only).
    """

    id: str = ""
    salary: float = 0.0
    fixed_allowance: float = 0.0
    offshore_rate: float = 0.0
    medevac_rate: float = 0.0

    @classmethod
    def from_mapping(cls, entry: Mapping[str, Any]) -> "RateRecord":
        """Build a record from a pay-master row, accepting the legacy column names.

        The join key is ``crew_name`` (or ``name``); ``id`` is only used when neither is
        present, since pay-master exports carry an unrelated row id there.
        """

        identifier = ""
        for key in ("crew_name", "name", "id"):
            value = entry.get(key)
            if value is not None and not (isinstance(value, float) and math.isnan(value)):
                if str(value).strip():
                    identifier = str(value)
                    break
        return cls(
            id=identifier,
            salary=_as_float(entry.get("salary", entry.get("basic"))),
            fixed_allowance=_as_float(entry.get("fixed_allowance", entry.get("fixed_all"))),
            offshore_rate=_as_float(entry.get("offshore_rate", entry.get("oa_rate"))),
            medevac_rate=_as_float(entry.get("medevac_rate")),
        )


ZERO_RATE = RateRecord()


def normalize_person_key(name: str | None) -> str:
    """Upper-case and trim a person identifier so roster and pay master rows join."""

    if name is None:
        return ""
    return str(name).upper().strip()


def build_rate_index(records: Iterable[RateRecord | Mapping[str, Any]]) -> dict[str, RateRecord]:
    """
    Return a mapping of ``normalised id`` → ``RateRecord``.

    Duplicate identifiers are not an error: the last record wins.
    """

    index: dict[str, RateRecord] = {}
    for entry in records:
        record = entry if isinstance(entry, RateRecord) else RateRecord.from_mapping(entry)
        index[normalize_person_key(record.id)] = record
    return index


def resolve_rate(index: Mapping[str, RateRecord], person_id: str | None) -> RateRecord:
    """Look up a person's rates; unknown people resolve to the all-zero record."""

    return index.get(normalize_person_key(person_id), ZERO_RATE)
