"""Injury rules."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from conquest.utils.rng import check_chance, random_choice

from .enums import InjuryType
from .models import Injury, StatModifiers
from .stats import merge_modifiers


@dataclass(frozen=True, slots=True)
class InjuryDefinition:
    type: InjuryType
    stat_penalty: StatModifiers = field(default_factory=dict)
    duration_battles: int = 1


INJURY_DEFINITIONS: tuple[InjuryDefinition, ...] = (
    InjuryDefinition(InjuryType.WOUND, {"strength": -2, "defense": -1}, 3),
    InjuryDefinition(InjuryType.BROKEN_ARM, {"strength": -3, "speed": -2}, 5),
    InjuryDefinition(InjuryType.FATIGUE, {"speed": -2, "strategy": -1, "leadership": -1}, 2),
)


def injury_chance(difficulty: int, bonus: float = 0.0) -> float:
    """5% at difficulty 1 up to 25% at difficulty 5, plus any exhaustion bonus."""

    return max(0.0, min(1.0, 0.05 + (difficulty - 1) * 0.05 + bonus))


def roll_injury(difficulty: int, seed: str, bonus: float = 0.0) -> InjuryDefinition | None:
    if not check_chance(f"{seed}:chance", injury_chance(difficulty, bonus))["success"]:
        return None
    return random_choice(f"{seed}:type", INJURY_DEFINITIONS)["choice"]


def active_injuries(injuries: Iterable[Injury]) -> list[Injury]:
    return [injury for injury in injuries if injury.battles_remaining > 0]


def sum_injury_penalties(injuries: Iterable[Injury]) -> StatModifiers:
    return merge_modifiers(injury.stat_penalty for injury in active_injuries(injuries))
