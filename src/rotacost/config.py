"""Report configuration (trend window, client ordering, budget buffer)."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, TypeAdapter, ValidationError, field_validator

from rotacost.core.errors import InvalidConfigError
from rotacost.scheduling.timeline import MonthRange, months_in_range

__all__ = ["ReportConfig", "load_config", "parse_config"]


class ReportConfig(BaseModel):
    """Tunable settings shared by the CLI reports.

    Attributes
    ----------
    anchor_year, anchor_month:
        First month of the cost trend window (defaults to September 2025).
    lookahead_months:
        Estimated months shown after the current month.
    client_priority:
        Explicit client ordering for roster views; unlisted clients get ``default_client_rank``.
    budget_buffer_pct:
        Contingency applied to variable pay in budget estimates.
    departure_alert_days:
        Sign-off horizon (days) that flags a departure on the on-board report.
    top_locations:
        Number of locations kept in the location breakdown.
    """

    anchor_year: int = 2025
    anchor_month: int = 9
    lookahead_months: int = 3
    client_priority: dict[str, int] = {"SKA": 1, "SBA": 2}
    default_client_rank: int = 3
    budget_buffer_pct: float = 10.0
    departure_alert_days: int = 3
    top_locations: int = 5

    @field_validator("anchor_month")
    @classmethod
    def _month_range(cls, value: int) -> int:
        if not 1 <= value <= 12:
            raise ValueError("anchor_month must be between 1 and 12")
        return value

    @field_validator("lookahead_months", "budget_buffer_pct", "departure_alert_days")
    @classmethod
    def _non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("report settings must be non-negative")
        return value

    @field_validator("top_locations")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("top_locations must be at least 1")
        return value

    def month_range(self, now: date) -> MonthRange:
        return months_in_range(
            (self.anchor_year, self.anchor_month), now=now, lookahead=self.lookahead_months
        )


def parse_config(payload: Any) -> ReportConfig:
    """Validate a config mapping, re-raising validation failures as ``InvalidConfigError``."""

    try:
        return TypeAdapter(ReportConfig).validate_python(payload or {})
    except ValidationError as exc:
        fields = tuple(".".join(str(part) for part in error["loc"]) for error in exc.errors())
        raise InvalidConfigError(f"Invalid report configuration: {exc}", fields) from exc


def load_config(path: str | Path) -> ReportConfig:
    with Path(path).open("r", encoding="utf-8") as handle:
        return parse_config(yaml.safe_load(handle))
