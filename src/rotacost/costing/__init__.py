"""Costing helper exports."""

from .engine import (
    COST_COMPONENTS,
    CostRecord,
    clamped_days,
    compute_month_costs,
    compute_person_cost,
)
from .rates import RateRecord, ZERO_RATE, build_rate_index, normalize_person_key, resolve_rate

__all__ = [
    "COST_COMPONENTS",
    "CostRecord",
    "RateRecord",
    "ZERO_RATE",
    "build_rate_index",
    "clamped_days",
    "compute_month_costs",
    "compute_person_cost",
    "normalize_person_key",
    "resolve_rate",
]
