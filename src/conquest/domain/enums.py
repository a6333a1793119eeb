"""Enumerations shared across the conquest domain."""

from __future__ import annotations

from enum import StrEnum


class BattleOutcome(StrEnum):
    """Result of a resolved engagement from the attacker's point of view."""

    WON = "won"
    LOST = "lost"


class BattleStatus(StrEnum):
    """Lifecycle of a plain battle record."""

    ONGOING = "ongoing"
    WON = "won"
    LOST = "lost"


class Formation(StrEnum):
    """Army formations and their battlefield posture."""

    LINE = "line"
    WEDGE = "wedge"
    PHALANX = "phalanx"
    SKIRMISH = "skirmish"


class CharacterRole(StrEnum):
    """Roles a dynasty character may hold."""

    MAIN = "main"
    HEIR = "heir"
    OFFICER = "officer"
    ADVISOR = "advisor"


class LoyaltyEvent(StrEnum):
    """Named events that shift character loyalty."""

    BATTLE_VICTORY = "battle_victory"
    BATTLE_DEFEAT = "battle_defeat"
    PROMOTION = "promotion"
    BETRAYAL_RUMOR = "betrayal_rumor"
    IDLE_DECAY = "idle_decay"


class TimelineType(StrEnum):
    """World history track. ``historical`` only ever moves to ``divergent``."""

    HISTORICAL = "historical"
    DIVERGENT = "divergent"


class DivergenceTrigger(StrEnum):
    """Conditions that push the timeline off its historical course."""

    MAP_DOMINANCE = "map_dominance"
    LEGENDARY_KILL = "legendary_kill"
    DYNASTY_COLLAPSE = "dynasty_collapse"


class CampaignStatus(StrEnum):
    """Progress state of a player's campaign."""

    ACTIVE = "active"
    WON = "won"
    LOST = "lost"


class CourtAction(StrEnum):
    """Political actions available at court."""

    NEGOTIATE = "negotiate"
    PURGE = "purge"
    REFORM = "reform"
    PROPAGANDA = "propaganda"


class ItemRarity(StrEnum):
    """Rarity tiers for dropped equipment."""

    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"


class InjuryType(StrEnum):
    """Injuries a commander can suffer after a defeat."""

    WOUND = "wound"
    BROKEN_ARM = "broken_arm"
    FATIGUE = "fatigue"


class StatName(StrEnum):
    """The five base attributes."""

    STRENGTH = "strength"
    DEFENSE = "defense"
    STRATEGY = "strategy"
    SPEED = "speed"
    LEADERSHIP = "leadership"
