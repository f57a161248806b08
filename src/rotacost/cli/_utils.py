"""CLI helper utilities for rotacost."""

from __future__ import annotations

import re
from datetime import date

from rotacost.core.errors import InvalidPeriodError
from rotacost.scheduling.status import DayStatus
from rotacost.scheduling.timeline import parse_date_lenient

_PERIOD_RE = re.compile(r"^(\d{4})-(\d{1,2})$")

STATUS_GLYPHS: dict[DayStatus, str] = {
    DayStatus.OFF: ".",
    DayStatus.PRIMARY: "P",
    DayStatus.SECONDARY: "S",
    DayStatus.OFFICE_WEEKDAY: "O",
    DayStatus.OFFICE_WEEKEND: "o",
}


def parse_period(value: str) -> tuple[int, int]:
    """Parse ``YYYY-MM`` into a ``(year, month)`` pair."""

    match = _PERIOD_RE.match(value.strip())
    if not match:
        raise InvalidPeriodError(value, f"Period must look like YYYY-MM (got '{value}').")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidPeriodError(value, f"Month must be between 1 and 12 (got {month}).")
    return year, month


def parse_now(value: str | None) -> date:
    """Resolve the ``--now`` option; ``None`` means today."""

    if value is None:
        return date.today()
    parsed = parse_date_lenient(value)
    if parsed is None:
        raise InvalidPeriodError(value, f"Could not parse date '{value}'.")
    return parsed


def format_amount(value: float) -> str:
    return "-" if value == 0 else f"{value:,.2f}"


def status_strip(statuses: list[DayStatus]) -> str:
    return "".join(STATUS_GLYPHS[status] for status in statuses)


__all__ = ["STATUS_GLYPHS", "parse_period", "parse_now", "format_amount", "status_strip"]
