from __future__ import annotations

from rotacost.costing import RateRecord, ZERO_RATE, build_rate_index, resolve_rate
from rotacost.costing.rates import normalize_person_key


def test_rate_record_accepts_legacy_columns():
    record = RateRecord.from_mapping(
        {"crew_name": "Aina Rahman", "basic": "3,000", "fixed_all": 200, "offshore_rate": None}
    )
    assert record.id == "Aina Rahman"
    assert record.salary == 3000.0
    assert record.fixed_allowance == 200.0
    assert record.offshore_rate == 0.0
    assert record.medevac_rate == 0.0


def test_rate_index_is_keyed_on_normalised_names():
    index = build_rate_index([{"id": "  aina rahman ", "salary": 1}])
    assert normalize_person_key(" Aina Rahman") == "AINA RAHMAN"
    assert resolve_rate(index, "Aina Rahman").salary == 1


def test_duplicate_rate_records_last_wins():
    index = build_rate_index(
        [RateRecord(id="P", salary=1000), RateRecord(id="p", salary=2000)]
    )
    assert len(index) == 1
    assert resolve_rate(index, "P").salary == 2000


def test_unknown_person_resolves_to_zero_rate():
    assert resolve_rate({}, "Nobody") is ZERO_RATE
    assert resolve_rate({}, None) is ZERO_RATE
    assert ZERO_RATE.salary == ZERO_RATE.offshore_rate == ZERO_RATE.medevac_rate == 0.0


def test_pay_master_row_id_does_not_shadow_crew_name():
    index = build_rate_index(
        [{"id": "7f3c2a9e", "crew_name": "P", "salary": 3000, "fixed_allowance": 200, "oa_rate": 50}]
    )
    assert set(index) == {"P"}
    assert resolve_rate(index, "p").offshore_rate == 50


def test_rate_record_falls_back_to_id_without_names():
    assert RateRecord.from_mapping({"id": "Solo", "name": None, "salary": 1}).id == "Solo"
    assert RateRecord.from_mapping({"crew_name": float("nan"), "name": "Named"}).id == "Named"
