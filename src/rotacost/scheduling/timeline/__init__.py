"""Month windows, month ranges and lenient date parsing."""

from .dates import parse_date_lenient
from .models import (
    MonthRange,
    MonthWindow,
    add_months,
    days_in_month,
    is_future_month,
    month_label,
    months_in_range,
)

__all__ = [
    "MonthRange",
    "MonthWindow",
    "add_months",
    "days_in_month",
    "is_future_month",
    "month_label",
    "months_in_range",
    "parse_date_lenient",
]
