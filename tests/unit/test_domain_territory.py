"""Unit tests for territory capture."""

from __future__ import annotations

import pytest

from conquest.domain import models as dm
from conquest.domain import territory as rules


def _territory(defense_rating: int = 20, strategic_value: int = 10) -> dm.Territory:
    return dm.Territory(
        id=dm.TerritoryID("jing"),
        name="Jing Province",
        region="south",
        owner_faction_id=dm.FactionID("liu-biao"),
        strategic_value=strategic_value,
        defense_rating=defense_rating,
    )


@pytest.mark.parametrize(
    ("rating", "expected"),
    [(20, 12), (10, 6), (3, 2), (1, 1), (0, 1)],
)
def test_capture_lowers_defense_but_never_to_zero(rating, expected):
    update = rules.resolve_capture(_territory(defense_rating=rating), dm.FactionID("shu"))
    assert update.defense_rating == expected
    assert update.new_owner_faction_id == "shu"


def test_apply_capture_reassigns_owner():
    territory = _territory()
    rules.apply_capture(territory, rules.resolve_capture(territory, dm.FactionID("shu")))
    assert territory.owner_faction_id == "shu"
    assert territory.defense_rating == 12


def test_capture_merit_bonus():
    assert rules.capture_merit_bonus(10) == 50
    assert rules.capture_merit_bonus(0) == 0


def test_cannot_capture_own_territory():
    territory = _territory()
    assert rules.is_capturable(territory, dm.FactionID("shu"))
    assert not rules.is_capturable(territory, dm.FactionID("liu-biao"))
