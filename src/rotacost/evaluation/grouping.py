"""Roster ordering and group separators for tabular/calendar views."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from rotacost.evaluation.aggregates import UNKNOWN_LABEL
from rotacost.roster.contract import Person, full_trade_name, short_trade_label, trade_rank
from rotacost.scheduling.status import has_activity_in_month

__all__ = [
    "DEFAULT_CLIENT_PRIORITY",
    "GroupBoundary",
    "GroupedPerson",
    "client_rank",
    "sort_key",
    "sort_people",
    "group_people",
    "filter_people",
]

DEFAULT_CLIENT_PRIORITY: dict[str, int] = {"SKA": 1, "SBA": 2}
_TRADE_FILTER_ALIASES = {"IMP/OHN": "OHN", "IMP / OHN": "OHN", "IM": "OHN"}


@dataclass(frozen=True, slots=True)
class GroupBoundary:
    label: str
    client: str
    trade: str
    location: str


@dataclass(frozen=True, slots=True)
class GroupedPerson:
    person: Person
    trade: str


def client_rank(
    client: str,
    priority: Mapping[str, int] | None = None,
    default_rank: int = 3,
) -> int:
    priority = DEFAULT_CLIENT_PRIORITY if priority is None else priority
    return priority.get(client, default_rank)


def sort_key(
    person: Person,
    priority: Mapping[str, int] | None = None,
    default_rank: int = 3,
) -> tuple[int, int, str, str]:
    """Composite key: client rank, trade rank, location, name."""

    return (
        client_rank(person.client, priority, default_rank),
        trade_rank(person.roles),
        person.location,
        person.name,
    )


def sort_people(
    people: Iterable[Person],
    priority: Mapping[str, int] | None = None,
    default_rank: int = 3,
) -> list[Person]:
    """Order people by client priority, trade, location and name (stable)."""

    return sorted(people, key=lambda person: sort_key(person, priority, default_rank))


def group_people(
    people: Iterable[Person],
    priority: Mapping[str, int] | None = None,
    default_rank: int = 3,
) -> list[GroupBoundary | GroupedPerson]:
    """Sort people and insert a :class:`GroupBoundary` whenever client/trade/location change."""

    grouped: list[GroupBoundary | GroupedPerson] = []
    last_key: tuple[str, str, str] | None = None
    for person in sort_people(people, priority, default_rank):
        trade = full_trade_name(person.post, person.roles)
        key = (person.client, trade, person.location)
        if key != last_key:
            grouped.append(
                GroupBoundary(
                    label=" - ".join(
                        part or UNKNOWN_LABEL for part in (person.client, trade, person.location)
                    ),
                    client=person.client,
                    trade=trade,
                    location=person.location,
                )
            )
            last_key = key
        grouped.append(GroupedPerson(person=person, trade=trade))
    return grouped


def filter_people(
    people: Sequence[Person],
    *,
    client: str | None = None,
    trade: str | None = None,
    active_in: tuple[int, int] | None = None,
) -> list[Person]:
    """Apply the roster view filters.

    Parameters
    ----------
    client:
        Keep only this client (``None`` keeps all).
    trade:
        Short trade label (``OM``, ``EM``, ``OHN``) to keep.
    active_in:
        ``(year, month)``; drops people with no activity in that month (office staff always
        pass).
    """

    wanted = None if trade is None else _TRADE_FILTER_ALIASES.get(trade.upper(), trade.upper())
    selected = []
    for person in people:
        if client is not None and person.client != client:
            continue
        if wanted is not None and short_trade_label(person.post, person.roles) != wanted:
            continue
        if active_in is not None and not has_activity_in_month(person, *active_in):
            continue
        selected.append(person)
    return selected
