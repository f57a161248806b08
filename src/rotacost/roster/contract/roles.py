"""Role categories and trade labels derived from free-text post titles."""

from __future__ import annotations

from enum import Enum

__all__ = [
    "RoleCategory",
    "classify_roles",
    "full_trade_name",
    "short_trade_label",
    "trade_rank",
]


class RoleCategory(str, Enum):
    OFFSHORE_MEDIC = "offshore_medic"
    ESCORT_MEDIC = "escort_medic"
    OFFICE = "office"


def classify_roles(post: str | None) -> frozenset[RoleCategory]:
    """Return the role categories implied by a post label.

    Categories are independent flags: a post may match several (or none). Matching is a
    case-insensitive substring test against ``OFFSHORE MEDIC``, ``ESCORT MEDIC`` and the
    office markers ``IM``/``OHN``.
    """

    up = (post or "").upper()
    roles: set[RoleCategory] = set()
    if "OFFSHORE MEDIC" in up:
        roles.add(RoleCategory.OFFSHORE_MEDIC)
    if "ESCORT MEDIC" in up:
        roles.add(RoleCategory.ESCORT_MEDIC)
    if "IM" in up or "OHN" in up:
        roles.add(RoleCategory.OFFICE)
    return frozenset(roles)


def trade_rank(roles: frozenset[RoleCategory]) -> int:
    """Sort rank of a trade: offshore medic, escort medic, office, then everything else."""

    if RoleCategory.OFFSHORE_MEDIC in roles:
        return 1
    if RoleCategory.ESCORT_MEDIC in roles:
        return 2
    if RoleCategory.OFFICE in roles:
        return 3
    return 4


def full_trade_name(post: str | None, roles: frozenset[RoleCategory] | None = None) -> str:
    roles = classify_roles(post) if roles is None else roles
    if RoleCategory.OFFSHORE_MEDIC in roles:
        return "OFFSHORE MEDIC"
    if RoleCategory.ESCORT_MEDIC in roles:
        return "ESCORT MEDIC"
    if RoleCategory.OFFICE in roles:
        return "IMP / OHN"
    return post or ""


def short_trade_label(post: str | None, roles: frozenset[RoleCategory] | None = None) -> str:
    """Compact trade key (``OM``/``EM``/``OHN``) used to bucket cost records."""

    roles = classify_roles(post) if roles is None else roles
    if RoleCategory.OFFSHORE_MEDIC in roles:
        return "OM"
    if RoleCategory.ESCORT_MEDIC in roles:
        return "EM"
    if RoleCategory.OFFICE in roles:
        return "OHN"
    return (post or "").strip() or "Unknown"
