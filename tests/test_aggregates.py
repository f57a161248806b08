from __future__ import annotations

from datetime import date

import pandas as pd
import pytest

from rotacost.costing import CostRecord, compute_month_costs
from rotacost.evaluation import (
    COST_RECORD_COLUMNS,
    TREND_COLUMNS,
    budget_estimate,
    category_totals,
    client_totals,
    client_trade_summary,
    cost_dataframe,
    location_totals,
    monthly_trend,
    trade_totals,
)
from rotacost.roster.io import load_roster

NOW = date(2025, 10, 15)


@pytest.fixture
def bundle(demo_bundle):
    return load_roster(demo_bundle)


def _september(bundle):
    return compute_month_costs(bundle.people, bundle.rates, 2025, 9)


def test_cost_dataframe_columns_and_unknown_labels():
    record = CostRecord(
        person_id="", name="X", post="", client="", location=" ", year=2025, month=9, total=1.0
    )
    df = cost_dataframe([record])
    assert list(df.columns) == COST_RECORD_COLUMNS
    assert df.loc[0, "client"] == "Unknown"
    assert df.loc[0, "location"] == "Unknown"
    assert df.loc[0, "trade"] == "Unknown"
    assert cost_dataframe([]).empty
    assert list(cost_dataframe([]).columns) == COST_RECORD_COLUMNS


def test_monthly_trend_flags_future_months(bundle):
    months = bundle.config.month_range(NOW)
    trend = monthly_trend(bundle.people, bundle.rates, months, NOW)
    assert list(trend.columns) == TREND_COLUMNS
    assert trend["label"].tolist() == ["SEP 25", "OCT 25", "NOV 25", "DEC 25", "JAN 26"]
    assert trend["is_future"].tolist() == [False, False, True, True, True]
    assert trend["total"].tolist() == pytest.approx([14780, 11650, 7800, 4300, 0])
    september = trend.iloc[0]
    assert september["allowances"] == pytest.approx(september["total"] - september["salary"])

    later = monthly_trend(bundle.people, bundle.rates, months, date(2025, 12, 1))
    assert later["is_future"].tolist() == [False, False, False, False, True]


def test_client_totals_sorted_descending(bundle):
    df = client_totals(_september(bundle))
    assert df["client"].tolist() == ["SBA", "SKA"]
    assert df["total"].tolist() == pytest.approx([7950, 6830])
    assert client_totals([]).empty


def test_trade_and_location_totals_use_actual_months(bundle):
    months = bundle.config.month_range(NOW)
    trades = trade_totals(bundle.people, bundle.rates, months, NOW)
    assert trades["trade"].tolist() == ["OM", "OHN", "EM"]
    assert trades["total"].tolist() == pytest.approx([11030, 8600, 6800])

    locations = location_totals(bundle.people, bundle.rates, months, NOW, top=2)
    assert locations["location"].tolist() == ["BARAM", "SBA OFFICE"]


def test_category_totals_drop_zero_categories(bundle):
    months = bundle.config.month_range(NOW)
    trend = monthly_trend(bundle.people, bundle.rates, months, NOW)
    categories = category_totals(trend)
    totals = dict(zip(categories["component"], categories["total"]))
    assert totals == pytest.approx(
        {
            "salary": 21800,
            "fixed_allowance": 1500,
            "offshore_pay": 1400,
            "relief": 150,
            "standby": 80,
            "medevac_pay": 1500,
        }
    )
    assert sum(totals.values()) == pytest.approx(trend.loc[~trend["is_future"], "total"].sum())
    assert category_totals(pd.DataFrame(columns=TREND_COLUMNS)).empty


def test_client_trade_summary_buckets(bundle):
    summary = client_trade_summary(_september(bundle))
    buckets = summary.buckets
    assert list(zip(buckets["client"], buckets["trade"])) == [
        ("SKA", "OM"),
        ("SBA", "EM"),
        ("SBA", "OHN"),
    ]
    assert buckets["people"].tolist() == [2, 1, 1]
    assert summary.grand_total["total"] == pytest.approx(14780)
    empty = client_trade_summary([])
    assert empty.buckets.empty
    assert empty.grand_total["total"] == 0.0


def test_budget_estimate_buffers_variable_pay(bundle):
    estimate = budget_estimate(_september(bundle), 10, year=2025, month=9)
    assert estimate.grand_fixed == pytest.approx(13150)
    assert estimate.grand_variable == pytest.approx(1793)
    assert estimate.grand_total == pytest.approx(14943)
    assert estimate.by_client["client"].tolist() == ["SBA", "SKA"]
    empty = budget_estimate([], 10, year=2025, month=9)
    assert empty.grand_total == 0.0
    assert empty.by_trade.empty
