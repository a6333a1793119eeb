"""Unit tests for injuries."""

from __future__ import annotations

import pytest

from conquest.domain import injury
from conquest.domain import models as dm
from conquest.domain.enums import InjuryType


def _injury(remaining: int, penalty: dict[str, int]) -> dm.Injury:
    return dm.Injury(
        id=dm.InjuryID(f"i{remaining}"),
        player_id=dm.PlayerID("p1"),
        type=InjuryType.WOUND,
        stat_penalty=penalty,
        duration_battles=3,
        battles_remaining=remaining,
    )


def test_injury_chance_by_difficulty():
    assert injury.injury_chance(1) == pytest.approx(0.05)
    assert injury.injury_chance(5) == pytest.approx(0.25)
    assert injury.injury_chance(5, bonus=0.25) == pytest.approx(0.5)
    assert injury.injury_chance(5, bonus=2.0) == 1.0


def test_certain_injury_picks_a_definition():
    rolled = injury.roll_injury(1, "p1:0:injury", bonus=1.0)
    assert rolled in injury.INJURY_DEFINITIONS
    assert rolled == injury.roll_injury(1, "p1:0:injury", bonus=1.0)


def test_definitions():
    by_type = {d.type: d for d in injury.INJURY_DEFINITIONS}
    assert by_type[InjuryType.WOUND].stat_penalty == {"strength": -2, "defense": -1}
    assert by_type[InjuryType.BROKEN_ARM].duration_battles == 5
    assert by_type[InjuryType.FATIGUE].duration_battles == 2


def test_expired_injuries_carry_no_penalty():
    penalties = injury.sum_injury_penalties(
        [
            _injury(2, {"strength": -2, "defense": -1}),
            _injury(1, {"strength": -3}),
            _injury(0, {"speed": -5}),
        ]
    )
    assert penalties == {"strength": -5, "defense": -1}
