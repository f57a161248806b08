"""Evaluation layer (cost rollups, statements, roster grouping)."""

from .aggregates import (
    COST_RECORD_COLUMNS,
    TREND_COLUMNS,
    BudgetEstimate,
    ClientTradeSummary,
    TrendSummary,
    budget_estimate,
    category_totals,
    client_totals,
    client_trade_summary,
    cost_dataframe,
    location_totals,
    monthly_trend,
    trade_totals,
    trend_summary,
)
from .grouping import (
    DEFAULT_CLIENT_PRIORITY,
    GroupBoundary,
    GroupedPerson,
    client_rank,
    filter_people,
    group_people,
    sort_people,
)
from .statement import (
    STATEMENT_COLUMNS,
    STATEMENT_CYCLE_COLUMNS,
    MonthlyStatement,
    monthly_statement,
)

__all__ = [
    "COST_RECORD_COLUMNS",
    "TREND_COLUMNS",
    "BudgetEstimate",
    "ClientTradeSummary",
    "TrendSummary",
    "budget_estimate",
    "category_totals",
    "client_totals",
    "client_trade_summary",
    "cost_dataframe",
    "location_totals",
    "monthly_trend",
    "trade_totals",
    "trend_summary",
    "DEFAULT_CLIENT_PRIORITY",
    "GroupBoundary",
    "GroupedPerson",
    "client_rank",
    "filter_people",
    "group_people",
    "sort_people",
    "STATEMENT_COLUMNS",
    "STATEMENT_CYCLE_COLUMNS",
    "MonthlyStatement",
    "monthly_statement",
]
