"""Calendar-month primitives used by the costing and roster views."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Iterator

__all__ = [
    "MonthWindow",
    "MonthRange",
    "add_months",
    "days_in_month",
    "is_future_month",
    "month_label",
    "months_in_range",
]

DEFAULT_ANCHOR = (2025, 9)


def days_in_month(year: int, month: int) -> int:
    """Return the number of calendar days in ``month`` (leap years included)."""

    return calendar.monthrange(year, month)[1]


def add_months(year: int, month: int, offset: int) -> tuple[int, int]:
    """Shift a ``(year, month)`` pair by ``offset`` months, rolling across years."""

    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def is_future_month(year: int, month: int, now: date) -> bool:
    """Return ``True`` when ``(year, month)`` is strictly after the month containing ``now``."""

    return (year, month) > (now.year, now.month)


def month_label(year: int, month: int) -> str:
    """Short upper-case label such as ``"SEP 25"``."""

    return f"{calendar.month_abbr[month].upper()} {year % 100:02d}"


@dataclass(frozen=True, slots=True)
class MonthWindow:
    """A calendar month treated as the inclusive day range ``[start, end]``.

    Attributes
    ----------
    year, month:
        Calendar month (``month`` is 1-indexed).
    """

    year: int
    month: int

    @property
    def start(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def end(self) -> date:
        return date(self.year, self.month, days_in_month(self.year, self.month))

    @property
    def num_days(self) -> int:
        return days_in_month(self.year, self.month)

    @property
    def label(self) -> str:
        return month_label(self.year, self.month)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def overlaps(self, start: date, end: date) -> bool:
        return not (start > self.end or end < self.start)

    def is_future(self, now: date) -> bool:
        """Classify the month against ``now``; recomputed on every call."""

        return is_future_month(self.year, self.month, now)

    def next(self) -> "MonthWindow":
        year, month = add_months(self.year, self.month, 1)
        return MonthWindow(year, month)


@dataclass(frozen=True, slots=True)
class MonthRange:
    """Restartable, finite sequence of months from ``start`` through ``end`` inclusive."""

    start: MonthWindow
    end: MonthWindow

    def __iter__(self) -> Iterator[MonthWindow]:
        current = self.start
        while (current.year, current.month) <= (self.end.year, self.end.month):
            yield current
            current = current.next()

    def __len__(self) -> int:
        span = (self.end.year * 12 + self.end.month) - (self.start.year * 12 + self.start.month)
        return max(span + 1, 0)

    def actual(self, now: date) -> list[MonthWindow]:
        """Months at or before the month containing ``now``."""

        return [window for window in self if not window.is_future(now)]


def months_in_range(
    start: tuple[int, int] | MonthWindow = DEFAULT_ANCHOR,
    *,
    now: date,
    lookahead: int = 3,
) -> MonthRange:
    """Return the month window from the anchor through ``now + lookahead`` months.

    Parameters
    ----------
    start:
        Anchor month as ``(year, month)`` or :class:`MonthWindow`. Defaults to September 2025,
        the first month with roster data.
    now:
        Reference date; passed explicitly so callers can pin the clock in tests.
    lookahead:
        Number of calendar months after ``now`` to include (estimated months).
    """

    anchor = start if isinstance(start, MonthWindow) else MonthWindow(*start)
    end_year, end_month = add_months(now.year, now.month, lookahead)
    return MonthRange(anchor, MonthWindow(end_year, end_month))
