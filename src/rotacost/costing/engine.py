"""Monthly cost calculation: intersect rotation cycles with a calendar month."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from rotacost.costing.rates import RateRecord, resolve_rate
from rotacost.roster.contract import Person, normalize_person
from rotacost.scheduling.timeline import MonthWindow

__all__ = [
    "CostRecord",
    "COST_COMPONENTS",
    "clamped_days",
    "compute_person_cost",
    "compute_month_costs",
]

COST_COMPONENTS = (
    "salary",
    "fixed_allowance",
    "offshore_pay",
    "relief",
    "standby",
    "medevac_pay",
)


@dataclass(slots=True)
class CostRecord:
    """Cost contribution of one person in one month."""

    person_id: str
    name: str
    post: str
    client: str
    location: str
    year: int
    month: int
    total_days: int = 0
    offshore_days: int = 0
    medevac_events: int = 0
    salary: float = 0.0
    fixed_allowance: float = 0.0
    offshore_pay: float = 0.0
    relief: float = 0.0
    standby: float = 0.0
    medevac_pay: float = 0.0
    total: float = 0.0

    @property
    def allowances(self) -> float:
        return self.total - self.salary


def clamped_days(start: date, end: date, window: MonthWindow) -> int:
    """Inclusive day count of ``[start, end]`` clipped to ``window``; never negative."""

    effective_start = max(start, window.start)
    effective_end = min(end, window.end)
    return max((effective_end - effective_start).days + 1, 0)


def compute_person_cost(
    person: Person,
    rate: RateRecord,
    window: MonthWindow,
    *,
    charge_fixed: bool = True,
) -> CostRecord | None:
    """Return the person's cost for ``window`` or ``None`` when no cycle overlaps it.

    Parameters
    ----------
    person:
        Normalised roster entry.
    rate:
        Pay-master record (use :data:`rotacost.costing.rates.ZERO_RATE` when unmatched).
    window:
        Target month.
    charge_fixed:
        When ``False`` the salary and fixed allowance are left at zero (the person was already
        charged through another roster entry this month).
    """

    overlapping = 0
    total_days = 0
    offshore_days = 0
    relief = 0.0
    standby = 0.0
    medevac_events = 0
    for cycle in person.cycles:
        # medevac events count on their own date, whether or not the cycle overlaps
        medevac_events += sum(1 for day in cycle.medevac_dates if window.contains(day))
        span = cycle.span()
        if span is None:
            continue
        start, end = span
        if not window.overlaps(start, end):
            continue
        days = clamped_days(start, end, window)
        overlapping += 1
        total_days += days
        if person.is_offshore_medic and cycle.is_offshore:
            offshore_days += days
        relief += cycle.relief_amount
        standby += cycle.standby_amount
    if overlapping == 0:
        return None

    salary = rate.salary if charge_fixed else 0.0
    fixed_allowance = rate.fixed_allowance if charge_fixed else 0.0
    offshore_pay = offshore_days * rate.offshore_rate if person.is_offshore_medic else 0.0
    medevac_pay = medevac_events * rate.medevac_rate if person.is_escort_medic else 0.0
    total = salary + fixed_allowance + offshore_pay + relief + standby + medevac_pay
    return CostRecord(
        person_id=person.id,
        name=person.name,
        post=person.post,
        client=person.client,
        location=person.location,
        year=window.year,
        month=window.month,
        total_days=total_days,
        offshore_days=offshore_days,
        medevac_events=medevac_events,
        salary=salary,
        fixed_allowance=fixed_allowance,
        offshore_pay=offshore_pay,
        relief=relief,
        standby=standby,
        medevac_pay=medevac_pay,
        total=total,
    )


def compute_month_costs(
    people: Iterable[Person | Mapping[str, Any]],
    rate_index: Mapping[str, RateRecord],
    year: int,
    month: int,
) -> tuple[CostRecord, ...]:
    """Compute one :class:`CostRecord` per person active in ``(year, month)``.

    People without any cycle overlapping the month are left out. Rates are joined on the
    person's name (upper-cased, trimmed); unmatched people are priced with zero rates but still
    carry their cycle relief/standby amounts. Salary and fixed allowance are charged once per
    person id; entries with a blank id are always charged.
    """

    window = MonthWindow(year, month)
    charged: set[str] = set()
    records: list[CostRecord] = []
    for raw in people:
        person = normalize_person(raw)
        charge_fixed = not person.id or person.id not in charged
        record = compute_person_cost(
            person,
            resolve_rate(rate_index, person.name),
            window,
            charge_fixed=charge_fixed,
        )
        if record is None:
            continue
        if person.id:
            charged.add(person.id)
        records.append(record)
    return tuple(records)
