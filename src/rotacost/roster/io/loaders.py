"""Roster bundle loading utilities (YAML metadata + CSV tables)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, cast

import pandas as pd
import yaml

from rotacost.config import ReportConfig, parse_config
from rotacost.costing.rates import RateRecord, build_rate_index
from rotacost.roster.contract import Person, normalize_people, pivot_roster_rows

__all__ = ["RosterBundle", "load_roster", "read_csv", "people_from_frame"]


@dataclass(slots=True)
class RosterBundle:
    """Everything a report needs: people, the rate index and report settings."""

    name: str
    people: list[Person]
    rates: dict[str, RateRecord]
    config: ReportConfig = field(default_factory=ReportConfig)
    source: Path | None = None

    def unmatched_people(self) -> list[Person]:
        return [person for person in self.people if person.join_key not in self.rates]


def read_csv(path: Path) -> pd.DataFrame:
    """Load a CSV file using pandas with UTF-8 defaults."""
    return pd.read_csv(path)


def _records(df: pd.DataFrame) -> list[dict[str, Any]]:
    # NaN cells become None so the contract validators see missing values
    cleaned = df.astype(object).where(pd.notna(df), None)
    return cast(list[dict[str, Any]], cleaned.to_dict("records"))


def people_from_frame(df: pd.DataFrame) -> list[Person]:
    """Normalise a roster table in either per-cycle (``cycle_number``) or legacy wide form."""

    rows = _records(df)
    if "cycle_number" in df.columns:
        return pivot_roster_rows(rows)
    return normalize_people(rows)


def load_roster(yaml_path: str | Path) -> RosterBundle:
    """Load a roster bundle from a YAML file.

    Parameters
    ----------
    yaml_path:
        Path to a YAML file with ``name``, ``data.roster`` and ``data.rates`` entries (CSV paths
        relative to the YAML file) and an optional ``config`` mapping.

    Returns
    -------
    RosterBundle
        Normalised people, the rate index and the validated :class:`ReportConfig`.

    Notes
    -----
    People whose cycles carry unusable dates are reported as ``[roster:<name>]`` lines; those
    cycles are kept and simply do not contribute to costs or calendars.
    """
    base_path = Path(yaml_path).resolve()
    with base_path.open("r", encoding="utf-8") as handle:
        meta = yaml.safe_load(handle) or {}
    root = base_path.parent
    data_section = meta.get("data", {})

    def require(name: str) -> Path:
        if name not in data_section:
            raise FileNotFoundError(f"{base_path} does not reference a '{name}' table")
        candidate = root / data_section[name]
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        return candidate

    name = str(meta.get("name") or base_path.stem)
    people = people_from_frame(read_csv(require("roster")))
    rates = build_rate_index(
        RateRecord.from_mapping(row) for row in _records(read_csv(require("rates")))
    )
    config = parse_config(meta.get("config"))
    _emit_cycle_warnings(people, name)
    return RosterBundle(name=name, people=people, rates=rates, config=config, source=base_path)


def _emit_cycle_warnings(people: list[Person], roster_name: str) -> None:
    for person in people:
        unusable = sum(1 for cycle in person.cycles if cycle.span() is None)
        if unusable:
            print(f"[roster:{roster_name}] {person.name}: {unusable} cycle(s) without usable dates")
