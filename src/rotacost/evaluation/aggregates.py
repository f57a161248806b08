"""Aggregation helpers for monthly cost summaries."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import asdict, dataclass, field
from datetime import date

import pandas as pd

from rotacost.costing.engine import COST_COMPONENTS, CostRecord, compute_month_costs
from rotacost.costing.rates import RateRecord
from rotacost.roster.contract import Person, normalize_people, short_trade_label
from rotacost.scheduling.timeline import MonthWindow

__all__ = [
    "COST_RECORD_COLUMNS",
    "TREND_COLUMNS",
    "CLIENT_TRADE_COLUMNS",
    "BUDGET_COLUMNS",
    "UNKNOWN_LABEL",
    "ClientTradeSummary",
    "TrendSummary",
    "BudgetEstimate",
    "cost_dataframe",
    "monthly_trend",
    "client_totals",
    "trade_totals",
    "location_totals",
    "category_totals",
    "trend_summary",
    "client_trade_summary",
    "budget_estimate",
]

UNKNOWN_LABEL = "Unknown"

COST_RECORD_COLUMNS = [
    "person_id",
    "name",
    "post",
    "client",
    "location",
    "trade",
    "year",
    "month",
    "total_days",
    "offshore_days",
    "medevac_events",
    *COST_COMPONENTS,
    "total",
]

TREND_COLUMNS = [
    "year",
    "month",
    "label",
    "is_future",
    *COST_COMPONENTS,
    "allowances",
    "total",
]

CLIENT_TRADE_COLUMNS = ["client", "trade", "people", *COST_COMPONENTS, "total"]

BUDGET_COLUMNS = ["fixed", "variable", "total"]

CATEGORY_LABELS = {
    "salary": "Basic",
    "fixed_allowance": "Fixed All.",
    "offshore_pay": "Offshore",
    "relief": "Relief",
    "standby": "Standby",
    "medevac_pay": "Medevac",
}


def _label(value: object) -> str:
    text = "" if value is None else str(value).strip()
    return text or UNKNOWN_LABEL


def cost_dataframe(records: Sequence[CostRecord]) -> pd.DataFrame:
    """Convert cost records into a DataFrame with blank labels replaced by ``Unknown``.

    Parameters
    ----------
    records:
        Output of :func:`rotacost.costing.compute_month_costs` (one or several months).
    """
    if not records:
        return pd.DataFrame(columns=COST_RECORD_COLUMNS)
    rows = []
    for record in records:
        row = asdict(record)
        row["client"] = _label(record.client)
        row["location"] = _label(record.location)
        row["trade"] = short_trade_label(record.post)
        rows.append(row)
    return pd.DataFrame(rows).reindex(columns=COST_RECORD_COLUMNS)


def _ranked_totals(df: pd.DataFrame, key: str, top: int | None = None) -> pd.DataFrame:
    if df.empty:
        return pd.DataFrame(columns=[key, "total"])
    ranked = (
        df.groupby(key, sort=False, as_index=False)
        .agg(total=("total", "sum"))
        .sort_values("total", ascending=False, kind="stable")
        .reset_index(drop=True)
    )
    if top is not None:
        ranked = ranked.head(top)
    return ranked


def _records_for_months(
    people: Sequence[Person],
    rate_index: Mapping[str, RateRecord],
    months: Iterable[MonthWindow],
    now: date,
) -> list[CostRecord]:
    records: list[CostRecord] = []
    for window in months:
        if window.is_future(now):
            continue
        records.extend(compute_month_costs(people, rate_index, window.year, window.month))
    return records


def monthly_trend(
    people: Iterable[Person | Mapping[str, object]],
    rate_index: Mapping[str, RateRecord],
    months: Iterable[MonthWindow],
    now: date,
) -> pd.DataFrame:
    """Return one row per month with component sums and the actual/estimated flag.

    ``allowances`` is the sum of ``total - salary`` over the month's records; ``is_future`` is
    derived from ``now`` on every call.
    """

    people = normalize_people(people)
    rows = []
    for window in months:
        records = compute_month_costs(people, rate_index, window.year, window.month)
        row: dict[str, object] = {
            "year": window.year,
            "month": window.month,
            "label": window.label,
            "is_future": window.is_future(now),
        }
        for component in COST_COMPONENTS:
            row[component] = sum(getattr(record, component) for record in records)
        row["allowances"] = sum(record.total - record.salary for record in records)
        row["total"] = sum(record.total for record in records)
        rows.append(row)
    if not rows:
        return pd.DataFrame(columns=TREND_COLUMNS)
    return pd.DataFrame(rows).reindex(columns=TREND_COLUMNS)


def client_totals(records: Sequence[CostRecord]) -> pd.DataFrame:
    """Sum ``total`` per client, largest first."""

    return _ranked_totals(cost_dataframe(records), "client")


def trade_totals(
    people: Iterable[Person | Mapping[str, object]],
    rate_index: Mapping[str, RateRecord],
    months: Iterable[MonthWindow],
    now: date,
) -> pd.DataFrame:
    """Sum ``total`` per short trade label across all actual (non-future) months."""

    records = _records_for_months(normalize_people(people), rate_index, months, now)
    return _ranked_totals(cost_dataframe(records), "trade")


def location_totals(
    people: Iterable[Person | Mapping[str, object]],
    rate_index: Mapping[str, RateRecord],
    months: Iterable[MonthWindow],
    now: date,
    top: int | None = 5,
) -> pd.DataFrame:
    """Sum ``total`` per location across actual months, keeping the ``top`` largest."""

    records = _records_for_months(normalize_people(people), rate_index, months, now)
    return _ranked_totals(cost_dataframe(records), "location", top=top)


def category_totals(trend: pd.DataFrame, *, include_future: bool = False) -> pd.DataFrame:
    """Collapse a :func:`monthly_trend` frame into per-category totals.

    Categories summing to zero are dropped.
    """

    if trend.empty:
        return pd.DataFrame(columns=["category", "component", "total"])
    frame = trend if include_future else trend[~trend["is_future"].astype(bool)]
    rows = [
        {
            "category": CATEGORY_LABELS[component],
            "component": component,
            "total": float(frame[component].sum()),
        }
        for component in COST_COMPONENTS
    ]
    result = pd.DataFrame(rows)
    return result[result["total"] > 0].reset_index(drop=True)


@dataclass(slots=True)
class TrendSummary:
    """Headline figures over the actual (non-future) months of a trend."""

    actual_months: int
    total_actual: float
    monthly_average: float


def trend_summary(trend: pd.DataFrame) -> TrendSummary:
    """Actual-to-date total and the average per actual month (``0`` when there are none)."""

    if trend.empty:
        return TrendSummary(actual_months=0, total_actual=0.0, monthly_average=0.0)
    actual = trend[~trend["is_future"].astype(bool)]
    total = float(actual["total"].sum())
    count = len(actual)
    return TrendSummary(
        actual_months=count,
        total_actual=total,
        monthly_average=total / count if count else 0.0,
    )


@dataclass(slots=True)
class ClientTradeSummary:
    """Two-level (client, trade) cost buckets plus a grand total row.

    Attributes
    ----------
    buckets:
        One row per ``(client, trade)`` with headcount, component subtotals and ``total``;
        ordered by client then trade in first-seen order.
    grand_total:
        Component totals across every bucket, keyed like the bucket columns.
    """

    buckets: pd.DataFrame
    grand_total: dict[str, float] = field(default_factory=dict)


def client_trade_summary(records: Sequence[CostRecord]) -> ClientTradeSummary:
    df = cost_dataframe(records)
    value_columns = [*COST_COMPONENTS, "total"]
    if df.empty:
        return ClientTradeSummary(
            buckets=pd.DataFrame(columns=CLIENT_TRADE_COLUMNS),
            grand_total={column: 0.0 for column in value_columns},
        )
    aggregations = {column: (column, "sum") for column in value_columns}
    buckets = (
        df.groupby(["client", "trade"], sort=False, as_index=False)
        .agg(people=("name", "size"), **aggregations)
        .reindex(columns=CLIENT_TRADE_COLUMNS)
    )
    grand_total = {column: float(buckets[column].sum()) for column in value_columns}
    return ClientTradeSummary(buckets=buckets, grand_total=grand_total)


@dataclass(slots=True)
class BudgetEstimate:
    """One-month budget with a contingency buffer applied to variable pay.

    Fixed cost is salary plus fixed allowance; variable cost is every other component scaled by
    ``1 + buffer_pct / 100``.
    """

    year: int
    month: int
    buffer_pct: float
    by_client: pd.DataFrame
    by_trade: pd.DataFrame
    grand_fixed: float
    grand_variable: float
    grand_total: float


def budget_estimate(
    records: Sequence[CostRecord],
    buffer_pct: float,
    *,
    year: int,
    month: int,
) -> BudgetEstimate:
    multiplier = 1 + buffer_pct / 100
    df = cost_dataframe(records)
    if df.empty:
        empty_client = pd.DataFrame(columns=["client", *BUDGET_COLUMNS])
        empty_trade = pd.DataFrame(columns=["trade", *BUDGET_COLUMNS])
        return BudgetEstimate(year, month, buffer_pct, empty_client, empty_trade, 0.0, 0.0, 0.0)
    df["fixed"] = df["salary"] + df["fixed_allowance"]
    df["variable"] = (
        df["offshore_pay"] + df["relief"] + df["standby"] + df["medevac_pay"]
    ) * multiplier
    df["budget_total"] = df["fixed"] + df["variable"]

    def _by(key: str) -> pd.DataFrame:
        return (
            df.groupby(key, sort=False, as_index=False)
            .agg(fixed=("fixed", "sum"), variable=("variable", "sum"), total=("budget_total", "sum"))
            .sort_values("total", ascending=False, kind="stable")
            .reset_index(drop=True)
        )

    by_client = _by("client")
    return BudgetEstimate(
        year=year,
        month=month,
        buffer_pct=buffer_pct,
        by_client=by_client,
        by_trade=_by("trade"),
        grand_fixed=float(by_client["fixed"].sum()),
        grand_variable=float(by_client["variable"].sum()),
        grand_total=float(by_client["total"].sum()),
    )
