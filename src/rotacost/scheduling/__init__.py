"""Scheduling utilities (month timeline, day status and rotation runs)."""

from .timeline import MonthRange, MonthWindow, months_in_range

__all__ = ["MonthRange", "MonthWindow", "months_in_range"]
