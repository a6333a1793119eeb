"""Loyalty rules for dynasty characters."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import CharacterRole, LoyaltyEvent
from .models import Character, CharacterID
from .rules_config import DEFAULT_RULES, LoyaltyRules

LOYALTY_DELTAS: dict[LoyaltyEvent, int] = {
    LoyaltyEvent.BATTLE_VICTORY: 5,
    LoyaltyEvent.BATTLE_DEFEAT: -8,
    LoyaltyEvent.PROMOTION: 10,
    LoyaltyEvent.BETRAYAL_RUMOR: -15,
    LoyaltyEvent.IDLE_DECAY: -2,
}


def loyalty_delta(event: LoyaltyEvent) -> int:
    return LOYALTY_DELTAS.get(event, 0)


def clamp_loyalty(value: int) -> int:
    return max(0, min(100, value))


def is_loyalty_subject(character: Character) -> bool:
    """Loyalty events reach every living character except the primary one."""

    return character.is_alive and character.role != CharacterRole.MAIN


def check_betrayal(character: Character, rules: LoyaltyRules = DEFAULT_RULES.loyalty) -> bool:
    return (
        character.loyalty < rules.betrayal_loyalty_below
        and character.ambition > rules.betrayal_ambition_above
    )


@dataclass(slots=True)
class BetrayalEvent:
    character_id: CharacterID
    character_name: str
    stability_delta: int
