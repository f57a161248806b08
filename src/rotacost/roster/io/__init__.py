"""Roster IO helpers."""

from .loaders import RosterBundle, load_roster, people_from_frame, read_csv

__all__ = ["RosterBundle", "load_roster", "people_from_frame", "read_csv"]
