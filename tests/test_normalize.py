from __future__ import annotations

from datetime import date

from rotacost.roster.contract import (
    Person,
    RoleCategory,
    RotationCycle,
    classify_roles,
    full_trade_name,
    normalize_person,
    pivot_roster_rows,
    short_trade_label,
    trade_rank,
)


def test_classify_roles_flags_are_independent():
    assert classify_roles("Offshore Medic") == {RoleCategory.OFFSHORE_MEDIC}
    assert classify_roles("OFFSHORE MEDIC / ESCORT MEDIC") == {
        RoleCategory.OFFSHORE_MEDIC,
        RoleCategory.ESCORT_MEDIC,
    }
    assert classify_roles("IMP / OHN") == {RoleCategory.OFFICE}
    assert classify_roles("Driver") == frozenset()
    assert classify_roles(None) == frozenset()


def test_trade_labels():
    assert short_trade_label("OFFSHORE MEDIC") == "OM"
    assert short_trade_label("Escort Medic") == "EM"
    assert short_trade_label("OHN") == "OHN"
    assert short_trade_label("Driver") == "Driver"
    assert short_trade_label("") == "Unknown"
    assert full_trade_name("IMP / OHN") == "IMP / OHN"
    assert full_trade_name("escort medic") == "ESCORT MEDIC"
    assert trade_rank(classify_roles("Driver")) == 4


def test_cycle_defaults_and_coercions():
    cycle = RotationCycle.model_validate(
        {
            "sign_on": "2025-Sep-01",
            "sign_off": "2025-09-14",
            "is_offshore": None,
            "relief_amount": "-50",
            "standby_amount": "1,250",
            "medevac_dates": "2025-09-03; bad ;2025-09-04",
        }
    )
    assert cycle.span() == (date(2025, 9, 1), date(2025, 9, 14))
    assert cycle.is_offshore is True
    assert cycle.relief_amount == 0.0
    assert cycle.standby_amount == 1250.0
    assert cycle.medevac_dates == (date(2025, 9, 3), date(2025, 9, 4))


def test_cycle_derives_addons_from_day_rates():
    cycle = RotationCycle.model_validate(
        {"day_relief": 3, "relief_all": 100, "day_standby": "2", "standby_all": 40}
    )
    assert cycle.relief_amount == 300
    assert cycle.standby_amount == 80


def test_reversed_cycle_has_no_span():
    cycle = RotationCycle(sign_on="2025-09-10", sign_off="2025-09-01")
    assert cycle.span() is None
    assert not cycle.contains(date(2025, 9, 5))


def test_normalize_mapping_cycles_in_key_order():
    person = normalize_person(
        {
            "id": "7",
            "name": " Aina ",
            "post": "OFFSHORE MEDIC",
            "cycles": {
                "10": {"sign_on": "2025-12-01", "sign_off": "2025-12-10"},
                "2": {"sign_on": "2025-10-01", "sign_off": "2025-10-10"},
            },
        }
    )
    assert person.name == "Aina"
    assert person.join_key == "AINA"
    assert [cycle.cycle_number for cycle in person.cycles] == [2, 10]
    assert person.is_offshore_medic


def test_normalize_legacy_slots():
    person = normalize_person(
        {
            "crew_name": "Legacy",
            "post": "ESCORT MEDIC",
            "m1": "2025-09-01",
            "d1": "2025-09-10",
            "m2": None,
            "d2": "",
            "m12": "2025-11-01",
            "d12": "N/A",
        }
    )
    assert person.name == "Legacy"
    assert [cycle.cycle_number for cycle in person.cycles] == [1, 12]
    assert person.cycles[1].span() is None


def test_normalize_passes_person_through():
    person = Person(name="Same")
    assert normalize_person(person) is person


def test_pivot_roster_rows_groups_by_crew_id():
    rows = [
        {"id": 1, "crew_id": "C1", "crew_name": "Aina", "post": "OFFSHORE MEDIC", "roles_em": "secondary",
         "cycle_number": 2, "sign_on": "2025-10-01", "sign_off": "2025-10-05"},
        {"id": 2, "crew_id": "C1", "crew_name": "Aina", "post": "OFFSHORE MEDIC", "roles_em": "secondary",
         "cycle_number": 1, "sign_on": "2025-09-01", "sign_off": "2025-09-05"},
        {"id": 3, "crew_id": "C2", "crew_name": "Bo", "post": "IMP / OHN", "cycle_number": None},
    ]
    people = pivot_roster_rows(rows)
    assert [person.id for person in people] == ["C1", "C2"]
    aina, bo = people
    assert aina.is_secondary
    assert [cycle.cycle_number for cycle in aina.cycles] == [1, 2]
    assert bo.cycles == ()
    assert bo.is_office
