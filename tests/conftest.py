from __future__ import annotations

from pathlib import Path

import pytest

from rotacost.costing import build_rate_index
from rotacost.roster.contract import Person, normalize_person

REPO_ROOT = Path(__file__).resolve().parents[1]
DEMO_BUNDLE = REPO_ROOT / "examples" / "demo" / "roster.yaml"


def make_person(
    name: str = "P",
    post: str = "OFFSHORE MEDIC",
    cycles: list[dict] | None = None,
    **fields,
) -> Person:
    payload = {"id": fields.pop("id", name), "name": name, "post": post, "cycles": cycles or []}
    payload.update(fields)
    return normalize_person(payload)


@pytest.fixture
def demo_bundle() -> Path:
    return DEMO_BUNDLE


@pytest.fixture
def offshore_medic() -> Person:
    return make_person(
        cycles=[{"sign_on": "2025-09-20", "sign_off": "2025-10-05", "is_offshore": True}],
        client="SKA",
        location="BARAM",
    )


@pytest.fixture
def rate_index():
    return build_rate_index(
        [{"id": "P", "salary": 3000, "fixed_allowance": 200, "offshore_rate": 50}]
    )
