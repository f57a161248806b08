"""Lenient date parsing for roster inputs."""

from __future__ import annotations

import re
import warnings
from datetime import date, datetime
from typing import Any

import pandas as pd

__all__ = ["parse_date_lenient"]

_ISO_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_ISO_MON_RE = re.compile(r"^(\d{4})-([A-Za-z]{3})-(\d{2})$")
_DAY_FIRST_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_TOKEN_SPLIT_RE = re.compile(r"[\s/.,-]+")
_MONTHS = ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec")
_BLANKS = {"", "-", "N/A"}


def _safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _has_day_month_year(text: str) -> bool:
    tokens = [token for token in _TOKEN_SPLIT_RE.split(text) if token]
    return len(tokens) >= 3 and any(token[:1].isdigit() for token in tokens)


def parse_date_lenient(value: Any) -> date | None:
    """Coerce ``value`` to a calendar date, returning ``None`` instead of raising.

    Accepts ``date``/``datetime``/``pandas.Timestamp`` objects and strings in ``YYYY-MM-DD``,
    ``YYYY-Mon-DD`` (e.g. ``2025-Sep-05``), day-first ``DD/MM/YYYY`` or any other full
    day/month/year form ``pandas.to_datetime`` understands. Blank markers (``""``, ``"-"``,
    ``"N/A"``), missing values, fragments such as ``"Sep"`` or ``"2025"`` and unparseable text
    yield ``None``.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        # NaT is a datetime subclass
        if pd.isna(value):
            return None
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text in _BLANKS:
        return None
    if _ISO_RE.match(text):
        year, month, day = (int(part) for part in text.split("-"))
        return _safe_date(year, month, day)
    match = _ISO_MON_RE.match(text)
    if match:
        year, month_name, day = match.groups()
        month_name = month_name.lower()
        if month_name in _MONTHS:
            return _safe_date(int(year), _MONTHS.index(month_name) + 1, int(day))
    match = _DAY_FIRST_RE.match(text)
    if match:
        day, month, year = (int(part) for part in match.groups())
        return _safe_date(year, month, day)
    if not _has_day_month_year(text):
        return None
    with warnings.catch_warnings():
        # format inference warnings for one-off strings
        warnings.simplefilter("ignore", UserWarning)
        parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()
