"""Roster contract models (Pydantic schemas, role classification, normalisation)."""

from .models import SECONDARY_DESIGNATION, Person, RotationCycle
from .normalize import legacy_cycles, normalize_people, normalize_person, pivot_roster_rows
from .roles import (
    RoleCategory,
    classify_roles,
    full_trade_name,
    short_trade_label,
    trade_rank,
)

__all__ = [
    "Person",
    "RotationCycle",
    "RoleCategory",
    "SECONDARY_DESIGNATION",
    "classify_roles",
    "full_trade_name",
    "short_trade_label",
    "trade_rank",
    "legacy_cycles",
    "normalize_person",
    "normalize_people",
    "pivot_roster_rows",
]
