"""Per-day roster status, bar connectivity and personnel-on-board helpers."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from enum import Enum

from rotacost.roster.contract import Person
from rotacost.scheduling.timeline import MonthWindow, days_in_month

__all__ = [
    "DayStatus",
    "ConnectivityClass",
    "DayCell",
    "StatusRun",
    "OnBoardCounts",
    "day_status",
    "connectivity_class",
    "connects_to_next",
    "connects_from_previous",
    "month_status_cells",
    "status_runs",
    "has_activity_in_month",
    "active_rotation",
    "is_on_board",
    "days_on_board",
    "is_departure_alert",
    "on_board_counts",
]


class DayStatus(str, Enum):
    OFF = "OFF"
    PRIMARY = "PRIMARY"
    SECONDARY = "SECONDARY"
    OFFICE_WEEKDAY = "OFFICE_WEEKDAY"
    OFFICE_WEEKEND = "OFFICE_WEEKEND"


class ConnectivityClass(str, Enum):
    OFF = "OFF"
    ON_OFFICE = "ON_OFFICE"
    ON_PRIMARY = "ON_PRIMARY"
    ON_SECONDARY = "ON_SECONDARY"


_CONNECTIVITY = {
    DayStatus.OFF: ConnectivityClass.OFF,
    DayStatus.PRIMARY: ConnectivityClass.ON_PRIMARY,
    DayStatus.SECONDARY: ConnectivityClass.ON_SECONDARY,
    DayStatus.OFFICE_WEEKDAY: ConnectivityClass.ON_OFFICE,
    DayStatus.OFFICE_WEEKEND: ConnectivityClass.ON_OFFICE,
}


@dataclass(slots=True)
class DayCell:
    """Status of one calendar day plus whether its bar joins the neighbouring days."""

    day: int
    status: DayStatus
    is_weekend: bool
    connects_from_previous: bool
    connects_to_next: bool


@dataclass(slots=True)
class StatusRun:
    """Maximal stretch of consecutive non-``OFF`` days within a month."""

    start_day: int
    end_day: int
    statuses: tuple[DayStatus, ...]

    @property
    def length(self) -> int:
        return self.end_day - self.start_day + 1


@dataclass(slots=True)
class OnBoardCounts:
    total: int
    by_client: dict[str, int]


def _is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def day_status(person: Person, year: int, month: int, day: int) -> DayStatus:
    """Classify ``person`` on ``year-month-day``.

    Office staff are present every day (weekday/weekend variants) regardless of cycles. Other
    people are ``PRIMARY``/``SECONDARY`` when any cycle covers the day (both ends inclusive),
    otherwise ``OFF``. Days outside the month are ``OFF``.
    """

    if not 1 <= day <= days_in_month(year, month):
        return DayStatus.OFF
    target = date(year, month, day)
    if person.is_office:
        return DayStatus.OFFICE_WEEKEND if _is_weekend(target) else DayStatus.OFFICE_WEEKDAY
    for cycle in person.cycles:
        if cycle.contains(target):
            return DayStatus.SECONDARY if person.is_secondary else DayStatus.PRIMARY
    return DayStatus.OFF


def connectivity_class(status: DayStatus) -> ConnectivityClass:
    return _CONNECTIVITY[status]


def _on(person: Person, year: int, month: int, day: int) -> bool:
    return connectivity_class(day_status(person, year, month, day)) is not ConnectivityClass.OFF


def connects_to_next(person: Person, year: int, month: int, day: int) -> bool:
    """Whether the bar on ``day`` continues into ``day + 1`` (never past month end)."""

    if day < 1 or day >= days_in_month(year, month):
        return False
    # any two "on" classes connect, primary next to secondary included
    return _on(person, year, month, day) and _on(person, year, month, day + 1)


def connects_from_previous(person: Person, year: int, month: int, day: int) -> bool:
    """Whether the bar on ``day`` continues from ``day - 1`` (never before day 1)."""

    if day <= 1 or day > days_in_month(year, month):
        return False
    return _on(person, year, month, day) and _on(person, year, month, day - 1)


def month_status_cells(person: Person, year: int, month: int) -> tuple[DayCell, ...]:
    """Assemble the per-day cells for a displayed month in one pass."""

    num_days = days_in_month(year, month)
    statuses = [day_status(person, year, month, day) for day in range(1, num_days + 1)]
    on = [connectivity_class(status) is not ConnectivityClass.OFF for status in statuses]
    cells = []
    for index, status in enumerate(statuses):
        cells.append(
            DayCell(
                day=index + 1,
                status=status,
                is_weekend=_is_weekend(date(year, month, index + 1)),
                connects_from_previous=index > 0 and on[index] and on[index - 1],
                connects_to_next=index < num_days - 1 and on[index] and on[index + 1],
            )
        )
    return tuple(cells)


def status_runs(person: Person, year: int, month: int) -> tuple[StatusRun, ...]:
    runs: list[StatusRun] = []
    current: list[DayCell] = []
    for cell in month_status_cells(person, year, month):
        if cell.status is DayStatus.OFF:
            continue
        current.append(cell)
        if not cell.connects_to_next:
            runs.append(
                StatusRun(
                    start_day=current[0].day,
                    end_day=cell.day,
                    statuses=tuple(item.status for item in current),
                )
            )
            current = []
    return tuple(runs)


def has_activity_in_month(person: Person, year: int, month: int) -> bool:
    """Office staff are always active; others need a cycle overlapping the month."""

    if person.is_office:
        return True
    window = MonthWindow(year, month)
    for cycle in person.cycles:
        span = cycle.span()
        if span is not None and window.overlaps(*span):
            return True
    return False


def active_rotation(person: Person, on: date) -> tuple[date, date] | None:
    """Return the first cycle span covering ``on``; office staff have no rotation."""

    if person.is_office:
        return None
    for cycle in person.cycles:
        if cycle.contains(on):
            return cycle.span()
    return None


def is_on_board(person: Person, on: date) -> bool:
    if person.is_office:
        return not _is_weekend(on)
    return active_rotation(person, on) is not None


def days_on_board(person: Person, on: date) -> int:
    """Inclusive number of days since sign-on of the rotation covering ``on`` (0 if none)."""

    span = active_rotation(person, on)
    if span is None:
        return 0
    return (on - span[0]).days + 1


def is_departure_alert(person: Person, on: date, window_days: int = 3) -> bool:
    """Whether the covering rotation signs off within ``window_days`` of ``on``."""

    span = active_rotation(person, on)
    if span is None:
        return False
    return 0 <= (span[1] - on).days <= window_days


def on_board_counts(people: Iterable[Person], on: date) -> OnBoardCounts:
    by_client: Counter[str] = Counter()
    for person in people:
        if is_on_board(person, on):
            by_client[person.client or "Unknown"] += 1
    return OnBoardCounts(total=sum(by_client.values()), by_client=dict(by_client))
