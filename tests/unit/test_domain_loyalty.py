"""Unit tests for loyalty rules."""

from __future__ import annotations

import pytest

from conquest.domain import loyalty
from conquest.domain import models as dm
from conquest.domain.enums import CharacterRole, LoyaltyEvent


def _character(**overrides) -> dm.Character:
    values = {
        "id": dm.CharacterID("c1"),
        "player_id": dm.PlayerID("p1"),
        "name": "Wei Yan",
    }
    values.update(overrides)
    return dm.Character(**values)


@pytest.mark.parametrize(
    ("event", "delta"),
    [
        (LoyaltyEvent.BATTLE_VICTORY, 5),
        (LoyaltyEvent.BATTLE_DEFEAT, -8),
        (LoyaltyEvent.PROMOTION, 10),
        (LoyaltyEvent.BETRAYAL_RUMOR, -15),
        (LoyaltyEvent.IDLE_DECAY, -2),
    ],
)
def test_event_deltas(event, delta):
    assert loyalty.loyalty_delta(event) == delta


def test_clamp():
    assert loyalty.clamp_loyalty(-4) == 0
    assert loyalty.clamp_loyalty(104) == 100
    assert loyalty.clamp_loyalty(55) == 55


def test_betrayal_needs_low_loyalty_and_high_ambition():
    assert loyalty.check_betrayal(_character(loyalty=29, ambition=71))
    assert not loyalty.check_betrayal(_character(loyalty=30, ambition=71))
    assert not loyalty.check_betrayal(_character(loyalty=29, ambition=70))


def test_primary_and_dead_characters_are_not_subjects():
    assert loyalty.is_loyalty_subject(_character())
    assert not loyalty.is_loyalty_subject(_character(role=CharacterRole.MAIN))
    assert not loyalty.is_loyalty_subject(_character(is_alive=False))
