"""Pydantic models describing roster inputs (people and their rotation cycles)."""

from __future__ import annotations

import math
import re
from datetime import date
from typing import Any

from pydantic import BaseModel, field_validator, model_validator

from rotacost.roster.contract.roles import RoleCategory, classify_roles
from rotacost.scheduling.timeline.dates import parse_date_lenient

__all__ = ["RotationCycle", "Person", "SECONDARY_DESIGNATION"]

SECONDARY_DESIGNATION = "SECONDARY"
_FALSE_MARKERS = {"false", "f", "0", "no", "n"}


def _coerce_amount(value: Any) -> float:
    if value is None:
        return 0.0
    if isinstance(value, str):
        stripped = value.strip().replace(",", "")
        if not stripped:
            return 0.0
        try:
            value = float(stripped)
        except ValueError:
            return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(amount) or amount < 0:
        return 0.0
    return amount


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


class RotationCycle(BaseModel):
    """One sign-on/sign-off interval of active duty.

    Attributes
    ----------
    sign_on, sign_off:
        Inclusive bounds of the rotation. Unparseable inputs become ``None`` and the cycle then
        takes no part in costing or status lookups.
    is_offshore:
        Whether the days count towards the offshore allowance. Missing values default to ``True``.
    relief_amount, standby_amount:
        Flat whole-cycle add-ons. When absent they are derived from
        ``relief_days * relief_rate`` (``standby_days * standby_rate``).
    relief_days, relief_rate, standby_days, standby_rate:
        Day counts and daily rates behind the add-ons, read from the roster columns
        ``day_relief``/``relief_all`` and ``day_standby``/``standby_all``. Zero when unknown.
    medevac_dates:
        Dates of billable medical-evacuation events recorded against the cycle.
    """

    sign_on: date | None = None
    sign_off: date | None = None
    is_offshore: bool = True
    relief_amount: float = 0.0
    standby_amount: float = 0.0
    relief_days: float = 0.0
    relief_rate: float = 0.0
    standby_days: float = 0.0
    standby_rate: float = 0.0
    medevac_dates: tuple[date, ...] = ()
    cycle_number: int | None = None
    notes: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _derive_addons(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for prefix, days_alias, rate_alias in (
            ("relief", "day_relief", "relief_all"),
            ("standby", "day_standby", "standby_all"),
        ):
            days = _coerce_amount(data.pop(days_alias, None) or data.get(f"{prefix}_days"))
            rate = _coerce_amount(data.pop(rate_alias, None) or data.get(f"{prefix}_rate"))
            data[f"{prefix}_days"] = days
            data[f"{prefix}_rate"] = rate
            if _coerce_amount(data.get(f"{prefix}_amount")) == 0.0:
                data[f"{prefix}_amount"] = days * rate
        return data

    @field_validator("sign_on", "sign_off", mode="before")
    @classmethod
    def _lenient_date(cls, value: Any) -> date | None:
        return parse_date_lenient(value)

    @field_validator("is_offshore", mode="before")
    @classmethod
    def _default_offshore(cls, value: Any) -> bool:
        if value is None or (isinstance(value, float) and math.isnan(value)):
            return True
        if isinstance(value, str):
            stripped = value.strip().lower()
            if not stripped:
                return True
            return stripped not in _FALSE_MARKERS
        return bool(value)

    @field_validator(
        "relief_amount", "standby_amount", "relief_days", "relief_rate", "standby_days", "standby_rate",
        mode="before",
    )
    @classmethod
    def _non_negative_amount(cls, value: Any) -> float:
        return _coerce_amount(value)

    @field_validator("medevac_dates", mode="before")
    @classmethod
    def _parse_medevac_dates(cls, value: Any) -> tuple[date, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            items: list[Any] = [part for part in re.split(r"[|,;]", value) if part.strip()]
        elif isinstance(value, (list, tuple)):
            items = list(value)
        else:
            items = [value]
        parsed = (parse_date_lenient(item) for item in items)
        return tuple(day for day in parsed if day is not None)

    @field_validator("cycle_number", mode="before")
    @classmethod
    def _optional_int(cls, value: Any) -> int | None:
        if value is None or value == "":
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        if math.isnan(number):
            return None
        return int(number)

    @field_validator("notes", mode="before")
    @classmethod
    def _optional_notes(cls, value: Any) -> str | None:
        return _as_text(value) or None

    def span(self) -> tuple[date, date] | None:
        """Return ``(sign_on, sign_off)`` when both dates are usable and ordered."""

        if self.sign_on is None or self.sign_off is None:
            return None
        if self.sign_on > self.sign_off:
            return None
        return self.sign_on, self.sign_off

    def contains(self, day: date) -> bool:
        span = self.span()
        return span is not None and span[0] <= day <= span[1]


class Person(BaseModel):
    """A roster entry: identity, post, affiliation and rotation cycles.

    ``roles`` is filled from ``post`` during validation unless supplied explicitly.
    """

    id: str = ""
    name: str = ""
    post: str = ""
    client: str = ""
    location: str = ""
    designation: str | None = None
    cycles: tuple[RotationCycle, ...] = ()
    roles: frozenset[RoleCategory] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def _assign_roles(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("roles"):
            data = dict(data)
            data["roles"] = classify_roles(_as_text(data.get("post")))
        return data

    @field_validator("id", "name", "post", "client", "location", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return _as_text(value)

    @field_validator("designation", mode="before")
    @classmethod
    def _designation(cls, value: Any) -> str | None:
        return _as_text(value).upper() or None

    @property
    def join_key(self) -> str:
        return self.name.upper().strip()

    @property
    def is_offshore_medic(self) -> bool:
        return RoleCategory.OFFSHORE_MEDIC in self.roles

    @property
    def is_escort_medic(self) -> bool:
        return RoleCategory.ESCORT_MEDIC in self.roles

    @property
    def is_office(self) -> bool:
        return RoleCategory.OFFICE in self.roles

    @property
    def is_secondary(self) -> bool:
        return self.designation == SECONDARY_DESIGNATION
