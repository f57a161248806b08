"""Normalise raw roster payloads into :class:`Person` models.

Two raw shapes are accepted:

* the current shape, where ``cycles`` is a mapping (keyed by cycle number) or a sequence of
  cycle mappings, and
* the legacy wide shape carrying ``m1``/``d1`` ... ``mN``/``dN`` sign-on/sign-off pairs.

Roster tables stored one row per cycle can be grouped with :func:`pivot_roster_rows`.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from rotacost.roster.contract.models import Person, RotationCycle

__all__ = ["normalize_person", "normalize_people", "pivot_roster_rows", "legacy_cycles"]

_LEGACY_ON_RE = re.compile(r"^m(\d+)$")
_FIELD_ALIASES = {
    "crew_id": "id",
    "crew_name": "name",
    "roles_em": "designation",
}
_PERSON_FIELDS = ("id", "name", "post", "client", "location", "designation")
_CYCLE_FIELDS = (
    "sign_on",
    "sign_off",
    "is_offshore",
    "relief_amount",
    "standby_amount",
    "relief_days",
    "relief_rate",
    "standby_days",
    "standby_rate",
    "day_relief",
    "relief_all",
    "day_standby",
    "standby_all",
    "medevac_dates",
    "notes",
)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def _person_fields(raw: Mapping[str, Any]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for alias, target in _FIELD_ALIASES.items():
        if alias in raw and not _is_blank(raw[alias]):
            fields[target] = raw[alias]
    for target in _PERSON_FIELDS:
        if target not in fields and target in raw:
            fields[target] = raw[target]
    return fields


def legacy_cycles(raw: Mapping[str, Any]) -> list[RotationCycle]:
    """Collect ``mN``/``dN`` pairs into cycles ordered by slot number.

    Slots where both dates are blank are dropped; half-filled slots are kept so the cycle shows
    up (and is then ignored) like any other unparseable cycle.
    """

    slots: list[int] = []
    for key in raw:
        match = _LEGACY_ON_RE.match(str(key))
        if match:
            slots.append(int(match.group(1)))
    cycles: list[RotationCycle] = []
    for slot in sorted(slots):
        sign_on = raw.get(f"m{slot}")
        sign_off = raw.get(f"d{slot}")
        if _is_blank(sign_on) and _is_blank(sign_off):
            continue
        cycles.append(RotationCycle(sign_on=sign_on, sign_off=sign_off, cycle_number=slot))
    return cycles


def _cycle_from_mapping(raw: Any, number: Any = None) -> RotationCycle:
    if isinstance(raw, RotationCycle):
        return raw
    payload = {key: raw.get(key) for key in _CYCLE_FIELDS if key in raw}
    payload["cycle_number"] = raw.get("cycle_number", number)
    return RotationCycle.model_validate(payload)


def _sort_key(item: tuple[Any, Any]) -> tuple[int, str]:
    key = item[0]
    try:
        return 0, f"{int(key):012d}"
    except (TypeError, ValueError):
        return 1, str(key)


def normalize_person(raw: Person | Mapping[str, Any]) -> Person:
    """Return a validated :class:`Person` from any supported raw shape."""

    if isinstance(raw, Person):
        return raw
    fields = _person_fields(raw)
    cycles_raw = raw.get("cycles")
    if isinstance(cycles_raw, Mapping):
        cycles = [
            _cycle_from_mapping(value, key)
            for key, value in sorted(cycles_raw.items(), key=_sort_key)
        ]
    elif isinstance(cycles_raw, Sequence) and not isinstance(cycles_raw, str):
        cycles = [_cycle_from_mapping(value, index + 1) for index, value in enumerate(cycles_raw)]
    else:
        cycles = legacy_cycles(raw)
    fields["cycles"] = tuple(cycles)
    return Person.model_validate(fields)


def normalize_people(rows: Iterable[Person | Mapping[str, Any]]) -> list[Person]:
    return [normalize_person(row) for row in rows]


def pivot_roster_rows(rows: Iterable[Mapping[str, Any]]) -> list[Person]:
    """Group one-row-per-cycle roster records into people.

    Rows are keyed by ``crew_id`` (falling back to ``crew_name``); the first row seen for a key
    supplies the person fields. Rows without a ``cycle_number`` register the person without
    adding a cycle. A repeated cycle number replaces the earlier cycle.
    """

    people: dict[str, dict[str, Any]] = {}
    for row in rows:
        if "crew_id" in row:
            # per-cycle tables carry a row id in `id`
            row = {key: value for key, value in row.items() if key != "id"}
        fields = _person_fields(row)
        key = str(fields.get("id") or "").strip() or str(fields.get("name") or "").strip()
        entry = people.setdefault(key, {**fields, "cycles": {}})
        number = row.get("cycle_number")
        if _is_blank(number):
            continue
        entry["cycles"][number] = _cycle_from_mapping(row, number)
    return [normalize_person(entry) for entry in people.values()]
