from __future__ import annotations

import warnings
from datetime import date, datetime

import pandas as pd
import pytest

from rotacost.scheduling.timeline import parse_date_lenient


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2025-09-05", date(2025, 9, 5)),
        (" 2025-09-05 ", date(2025, 9, 5)),
        ("2025-Sep-05", date(2025, 9, 5)),
        ("2025-oct-24", date(2025, 10, 24)),
        (date(2025, 1, 2), date(2025, 1, 2)),
        (datetime(2025, 1, 2, 13, 45), date(2025, 1, 2)),
        (pd.Timestamp("2025-03-04"), date(2025, 3, 4)),
        ("31/12/2025", date(2025, 12, 31)),
        ("5/9/2025", date(2025, 9, 5)),
        ("5 Sep 2025", date(2025, 9, 5)),
    ],
)
def test_parse_date_lenient_accepts_known_forms(value, expected):
    assert parse_date_lenient(value) == expected


@pytest.mark.parametrize(
    "value",
    [
        None,
        "",
        "-",
        "N/A",
        "   ",
        "not a date",
        "2025-02-30",
        "2025-Foo-01",
        "Sep",
        "2025",
        "Sep 2025",
        "31/02/2025",
        pd.NaT,
        float("nan"),
        42,
    ],
)
def test_parse_date_lenient_returns_none_for_unusable_values(value):
    assert parse_date_lenient(value) is None


def test_day_first_dates_parse_without_warnings():
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        assert parse_date_lenient("31/12/2025") == date(2025, 12, 31)
        assert parse_date_lenient("Sep 5, 2025") == date(2025, 9, 5)
    assert not [item for item in caught if issubclass(item.category, UserWarning)]
