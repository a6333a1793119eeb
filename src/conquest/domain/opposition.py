"""Opposing (defender) power for territory assaults."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .models import EnemyGeneral, Territory
from .power import MultiplierContributor, stack_multipliers
from .rules_config import DEFAULT_RULES, OppositionRules


@dataclass(slots=True)
class OpposingPower:
    base_power: float
    defense_multiplier: float
    general_multiplier: float
    final_power: float


def defender_contributors(generals: Sequence[EnemyGeneral]) -> list[MultiplierContributor]:
    return [MultiplierContributor(g.power_multiplier, alive=g.alive) for g in generals]


def enemy_base_power(
    territory: Territory, rules: OppositionRules = DEFAULT_RULES.opposition
) -> float:
    """Garrison strength before multipliers, derived from defense and strategic value."""

    return (
        territory.defense_rating * rules.defense_weight
        + territory.strategic_value * rules.strategic_weight
    )


def calculate_enemy_power(
    base_power: float,
    defense_rating: float,
    generals: Sequence[MultiplierContributor],
) -> OpposingPower:
    """``base × (1 + defense/100) × stacked living-general multiplier``."""

    defense_multiplier = 1 + defense_rating / 100
    general_multiplier = stack_multipliers(generals)
    final = base_power * defense_multiplier * general_multiplier
    return OpposingPower(
        base_power=round(base_power, 2),
        defense_multiplier=round(defense_multiplier, 2),
        general_multiplier=round(general_multiplier, 2),
        final_power=round(final, 2),
    )


def pick_primary_general(generals: Sequence[EnemyGeneral]) -> EnemyGeneral | None:
    """Strongest living defender, or ``None`` when none remain."""

    living = [g for g in generals if g.alive]
    if not living:
        return None
    best = living[0]
    for general in living[1:]:
        if general.power_multiplier > best.power_multiplier:
            best = general
    return best


def pick_general_to_defeat(generals: Sequence[EnemyGeneral]) -> EnemyGeneral | None:
    """First living defender that cannot retreat; retreating generals escape capture."""

    for general in generals:
        if general.alive and not general.can_retreat:
            return general
    return None
