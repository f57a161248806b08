"""Monthly variable-pay statement with per-cycle detail."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

import pandas as pd

from rotacost.costing.engine import clamped_days, compute_person_cost
from rotacost.costing.rates import RateRecord, resolve_rate
from rotacost.evaluation.aggregates import UNKNOWN_LABEL
from rotacost.evaluation.grouping import filter_people
from rotacost.roster.contract import (
    Person,
    RotationCycle,
    normalize_people,
    short_trade_label,
    trade_rank,
)
from rotacost.scheduling.timeline import MonthWindow

__all__ = [
    "STATEMENT_COLUMNS",
    "STATEMENT_CYCLE_COLUMNS",
    "STATEMENT_TOTAL_KEYS",
    "MonthlyStatement",
    "monthly_statement",
]

STATEMENT_COLUMNS = [
    "person_id",
    "name",
    "post",
    "client",
    "location",
    "trade",
    "cycles",
    "offshore_days",
    "offshore_rate",
    "offshore_pay",
    "relief_days",
    "relief_rate",
    "relief",
    "standby_days",
    "standby_rate",
    "standby",
    "medevac_events",
    "medevac_rate",
    "medevac_pay",
    "total",
]

STATEMENT_CYCLE_COLUMNS = [
    "person_id",
    "name",
    "cycle_number",
    "sign_on",
    "sign_off",
    "days",
    "is_offshore",
    "relief_days",
    "relief_rate",
    "relief",
    "standby_days",
    "standby_rate",
    "standby",
    "medevac_dates",
    "notes",
]

STATEMENT_TOTAL_KEYS = ("offshore_pay", "relief", "standby", "medevac_pay", "total")


@dataclass(slots=True)
class MonthlyStatement:
    """Variable pay for one month: a row per person, a row per contributing cycle, totals.

    Attributes
    ----------
    people:
        One row per person (``STATEMENT_COLUMNS``) ordered by trade rank then name.
    cycles:
        One row per cycle overlapping the month (``STATEMENT_CYCLE_COLUMNS``), in the same person
        order and by cycle number within a person.
    totals:
        Sums of ``STATEMENT_TOTAL_KEYS`` over the (filtered) people rows.
    """

    year: int
    month: int
    people: pd.DataFrame
    cycles: pd.DataFrame
    totals: dict[str, float] = field(default_factory=dict)


def _average_rate(amount: float, days: float) -> float:
    return amount / days if amount > 0 and days > 0 else 0.0


def _overlapping_cycles(person: Person, window: MonthWindow) -> list[tuple[RotationCycle, int]]:
    selected = []
    for cycle in person.cycles:
        span = cycle.span()
        if span is None or not window.overlaps(*span):
            continue
        selected.append((cycle, clamped_days(span[0], span[1], window)))
    # unnumbered cycles keep their roster order after the numbered ones
    return sorted(
        selected,
        key=lambda item: (item[0].cycle_number is None, item[0].cycle_number or 0),
    )


def _cycle_row(person: Person, cycle: RotationCycle, days: int, window: MonthWindow) -> dict:
    return {
        "person_id": person.id,
        "name": person.name,
        "cycle_number": cycle.cycle_number,
        "sign_on": cycle.sign_on,
        "sign_off": cycle.sign_off,
        "days": days,
        "is_offshore": cycle.is_offshore,
        "relief_days": cycle.relief_days,
        "relief_rate": cycle.relief_rate,
        "relief": cycle.relief_amount,
        "standby_days": cycle.standby_days,
        "standby_rate": cycle.standby_rate,
        "standby": cycle.standby_amount,
        "medevac_dates": "|".join(
            day.isoformat() for day in cycle.medevac_dates if window.contains(day)
        ),
        "notes": cycle.notes or "",
    }


def monthly_statement(
    people: Iterable[Person | Mapping[str, object]],
    rate_index: Mapping[str, RateRecord],
    year: int,
    month: int,
    *,
    search: str | None = None,
    client: str | None = None,
    trade: str | None = None,
) -> MonthlyStatement:
    """Build the variable-pay statement (offshore, relief, standby, medevac) for a month.

    Person figures come from the cost engine, so they match :func:`compute_month_costs` minus
    salary and fixed allowance. Relief and standby rates on the person row are averages
    (amount / days) over the month's cycles. ``search`` is a case-insensitive name substring;
    ``client`` and ``trade`` behave like :func:`rotacost.evaluation.filter_people`.
    """

    window = MonthWindow(year, month)
    selected = filter_people(normalize_people(people), client=client, trade=trade)
    if search and search.strip():
        needle = search.strip().lower()
        selected = [person for person in selected if needle in person.name.lower()]

    person_rows: list[dict] = []
    cycle_rows: list[dict] = []
    for person in sorted(selected, key=lambda p: (trade_rank(p.roles), p.name)):
        rate = resolve_rate(rate_index, person.name)
        record = compute_person_cost(person, rate, window, charge_fixed=False)
        if record is None:
            continue
        cycles = _overlapping_cycles(person, window)
        relief_days = sum(cycle.relief_days for cycle, _ in cycles)
        standby_days = sum(cycle.standby_days for cycle, _ in cycles)
        person_rows.append(
            {
                "person_id": person.id,
                "name": person.name,
                "post": person.post,
                "client": person.client or UNKNOWN_LABEL,
                "location": person.location or UNKNOWN_LABEL,
                "trade": short_trade_label(person.post, person.roles),
                "cycles": len(cycles),
                "offshore_days": record.offshore_days,
                "offshore_rate": rate.offshore_rate if person.is_offshore_medic else 0.0,
                "offshore_pay": record.offshore_pay,
                "relief_days": relief_days,
                "relief_rate": _average_rate(record.relief, relief_days),
                "relief": record.relief,
                "standby_days": standby_days,
                "standby_rate": _average_rate(record.standby, standby_days),
                "standby": record.standby,
                "medevac_events": record.medevac_events if person.is_escort_medic else 0,
                "medevac_rate": rate.medevac_rate if person.is_escort_medic else 0.0,
                "medevac_pay": record.medevac_pay,
                "total": record.total,
            }
        )
        cycle_rows.extend(_cycle_row(person, cycle, days, window) for cycle, days in cycles)

    people_df = pd.DataFrame(person_rows, columns=STATEMENT_COLUMNS)
    cycles_df = pd.DataFrame(cycle_rows, columns=STATEMENT_CYCLE_COLUMNS)
    totals = {
        key: float(people_df[key].sum()) if person_rows else 0.0 for key in STATEMENT_TOTAL_KEYS
    }
    return MonthlyStatement(year=year, month=month, people=people_df, cycles=cycles_df, totals=totals)
