from __future__ import annotations

from datetime import date

from hypothesis import given, settings, strategies as st

from conftest import make_person
from rotacost.scheduling.status import (
    ConnectivityClass,
    DayStatus,
    active_rotation,
    connectivity_class,
    connects_from_previous,
    connects_to_next,
    day_status,
    days_on_board,
    has_activity_in_month,
    is_departure_alert,
    is_on_board,
    month_status_cells,
    on_board_counts,
    status_runs,
)
from rotacost.scheduling.timeline import days_in_month


def _office():
    return make_person(name="Office", post="IMP / OHN", client="SBA")


def test_primary_and_secondary_statuses():
    cycle = {"sign_on": "2025-09-05", "sign_off": "2025-09-10"}
    primary = make_person(cycles=[cycle], designation="primary")
    secondary = make_person(cycles=[cycle], designation="Secondary")
    assert day_status(primary, 2025, 9, 5) is DayStatus.PRIMARY
    assert day_status(primary, 2025, 9, 10) is DayStatus.PRIMARY
    assert day_status(primary, 2025, 9, 11) is DayStatus.OFF
    assert day_status(secondary, 2025, 9, 7) is DayStatus.SECONDARY


def test_office_staff_present_every_day():
    office = _office()
    # 2025-09-05 is a Friday
    assert day_status(office, 2025, 9, 5) is DayStatus.OFFICE_WEEKDAY
    assert day_status(office, 2025, 9, 6) is DayStatus.OFFICE_WEEKEND
    assert connectivity_class(DayStatus.OFFICE_WEEKEND) is ConnectivityClass.ON_OFFICE
    assert connects_to_next(office, 2025, 9, 5)
    assert connects_from_previous(office, 2025, 9, 8)


def test_days_outside_month_are_off():
    office = _office()
    assert day_status(office, 2025, 9, 0) is DayStatus.OFF
    assert day_status(office, 2025, 9, 31) is DayStatus.OFF
    assert not connects_to_next(office, 2025, 9, 30)
    assert not connects_from_previous(office, 2025, 9, 1)


def test_bar_ends_at_sign_off():
    person = make_person(
        designation="SECONDARY",
        cycles=[{"sign_on": "2025-09-01", "sign_off": "2025-09-03"}],
    )
    assert connects_to_next(person, 2025, 9, 2)
    assert not connects_to_next(person, 2025, 9, 3)
    assert not connects_from_previous(person, 2025, 9, 4)


def test_adjacent_cycles_form_one_run():
    person = make_person(
        cycles=[
            {"sign_on": "2025-09-01", "sign_off": "2025-09-03"},
            {"sign_on": "2025-09-04", "sign_off": "2025-09-06"},
            {"sign_on": "2025-09-20", "sign_off": "2025-10-02"},
        ]
    )
    runs = status_runs(person, 2025, 9)
    assert [(run.start_day, run.end_day) for run in runs] == [(1, 6), (20, 30)]
    assert runs[0].length == 6


@settings(max_examples=50, deadline=None)
@given(
    month=st.integers(min_value=1, max_value=12),
    bounds=st.lists(
        st.tuples(st.integers(min_value=1, max_value=28), st.integers(min_value=0, max_value=6)),
        max_size=4,
    ),
    secondary=st.booleans(),
)
def test_connectivity_is_symmetric(month, bounds, secondary):
    person = make_person(
        designation="SECONDARY" if secondary else None,
        cycles=[
            {"sign_on": date(2025, month, start), "sign_off": date(2025, month, min(start + length, 28))}
            for start, length in bounds
        ],
    )
    for day in range(1, days_in_month(2025, month)):
        assert connects_to_next(person, 2025, month, day) == connects_from_previous(
            person, 2025, month, day + 1
        )


@given(year=st.integers(min_value=2000, max_value=2100), month=st.integers(min_value=1, max_value=12))
def test_office_bar_is_continuous_within_month(year, month):
    cells = month_status_cells(_office(), year, month)
    assert all(cell.connects_to_next for cell in cells[:-1])
    assert not cells[-1].connects_to_next
    assert len(cells) == days_in_month(year, month)


def test_month_status_cells_match_pointwise_queries():
    person = make_person(cycles=[{"sign_on": "2025-09-28", "sign_off": "2025-10-04"}])
    for cell in month_status_cells(person, 2025, 10):
        assert cell.status is day_status(person, 2025, 10, cell.day)
        assert cell.connects_to_next == connects_to_next(person, 2025, 10, cell.day)
        assert cell.connects_from_previous == connects_from_previous(person, 2025, 10, cell.day)


def test_activity_in_month():
    person = make_person(cycles=[{"sign_on": "2025-09-28", "sign_off": "2025-10-04"}])
    assert has_activity_in_month(person, 2025, 10)
    assert not has_activity_in_month(person, 2025, 11)
    assert has_activity_in_month(_office(), 2030, 1)


def test_on_board_helpers():
    person = make_person(client="SKA", cycles=[{"sign_on": "2025-09-20", "sign_off": "2025-10-05"}])
    assert active_rotation(person, date(2025, 10, 1)) == (date(2025, 9, 20), date(2025, 10, 5))
    assert is_on_board(person, date(2025, 10, 5))
    assert not is_on_board(person, date(2025, 10, 6))
    assert days_on_board(person, date(2025, 9, 20)) == 1
    assert days_on_board(person, date(2025, 10, 1)) == 12
    assert days_on_board(person, date(2025, 10, 6)) == 0
    assert is_departure_alert(person, date(2025, 10, 2))
    assert not is_departure_alert(person, date(2025, 10, 1))
    assert is_departure_alert(person, date(2025, 10, 1), window_days=4)


def test_on_board_counts_by_client():
    person = make_person(client="SKA", cycles=[{"sign_on": "2025-09-20", "sign_off": "2025-10-05"}])
    office = _office()
    weekday = on_board_counts([person, office], date(2025, 10, 3))
    weekend = on_board_counts([person, office], date(2025, 10, 4))
    assert weekday.total == 2
    assert weekday.by_client == {"SKA": 1, "SBA": 1}
    assert weekend.by_client == {"SKA": 1}
