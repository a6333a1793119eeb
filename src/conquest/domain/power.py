"""Power composition rules.

A player's strength in a single engagement is reduced to one scalar built
from independent contributions:

* effective stats (base + equipment + injuries, each floored at zero) and level;
* army troops scaled by a morale step function;
* a formation multiplier;
* deployed officers, stacked additively around one;
* matched officer synergy pairs;
* a permanent legacy multiplier;
* optionally the court's battle power modifier.

All functions are pure; randomness never enters this module.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from .enums import Formation
from .models import BaseStats
from .rules_config import DEFAULT_RULES, PowerRules
from .stats import effective_stats


@dataclass(slots=True)
class ArmyState:
    troop_count: int
    morale: int
    formation: Formation = Formation.LINE


@dataclass(slots=True)
class MultiplierContributor:
    """An officer (either side) contributing to a stacked multiplier."""

    multiplier: float
    alive: bool = True


@dataclass(slots=True)
class PowerContext:
    """Everything that feeds the power composition for one engagement."""

    stats: BaseStats
    level: int
    equipment_bonuses: Mapping[str, int] = field(default_factory=dict)
    injury_penalties: Mapping[str, int] = field(default_factory=dict)
    army: ArmyState | None = None
    officer_multipliers: Sequence[float | MultiplierContributor] = ()
    synergy_multiplier: float = 1.0
    legacy_multiplier: float = 1.0
    court_modifier: float = 1.0


@dataclass(slots=True)
class PowerProfile:
    """Breakdown of a composed power value. Never persisted."""

    base_power: float
    army_bonus: float
    formation_multiplier: float
    general_bonus: float
    synergy_multiplier: float
    legacy_bonus: float
    court_modifier: float
    final_power: float


def stack_multipliers(contributors: Iterable[float | MultiplierContributor]) -> float:
    """Combine officer multipliers additively around one.

    ``[1.2, 1.3]`` gives ``1 + 0.2 + 0.3 = 1.5`` rather than ``1.56``.  Dead
    contributors are ignored and an empty set yields exactly ``1.0``.
    """

    total = 1.0
    for contributor in contributors:
        if isinstance(contributor, MultiplierContributor):
            if not contributor.alive:
                continue
            total += contributor.multiplier - 1
        else:
            total += contributor - 1
    return total


def morale_multiplier(morale: int, rules: PowerRules = DEFAULT_RULES.power) -> float:
    for minimum, multiplier in rules.morale_tiers:
        if morale >= minimum:
            return multiplier
    return rules.morale_floor_multiplier


def formation_multiplier(
    formation: Formation | str | None, rules: PowerRules = DEFAULT_RULES.power
) -> float:
    if formation is None:
        return 1.0
    return rules.formation_multipliers.get(str(formation), 1.0)


def army_bonus(army: ArmyState | None, rules: PowerRules = DEFAULT_RULES.power) -> float:
    if army is None:
        return 0.0
    return army.troop_count * morale_multiplier(army.morale, rules)


def base_power(stats: BaseStats, level: int, rules: PowerRules = DEFAULT_RULES.power) -> float:
    """Weighted sum of stats plus the level term. Speed carries no weight."""

    return (
        stats.strength * rules.strength_weight
        + stats.defense * rules.defense_weight
        + stats.strategy * rules.strategy_weight
        + stats.leadership * rules.leadership_weight
        + level * rules.level_weight
    )


def calculate_final_power(
    ctx: PowerContext, rules: PowerRules = DEFAULT_RULES.power
) -> PowerProfile:
    """Compose a :class:`PowerProfile` from a power context.

    Reported sub-values are rounded to two decimals independently while
    ``final_power`` is computed from the unrounded intermediates and rounded once.
    """

    stats = effective_stats(ctx.stats, ctx.equipment_bonuses, ctx.injury_penalties)
    base = base_power(stats, ctx.level, rules)
    army = army_bonus(ctx.army, rules)
    formation = formation_multiplier(ctx.army.formation if ctx.army else None, rules)
    generals = stack_multipliers(ctx.officer_multipliers)

    final = (
        (base + army)
        * formation
        * generals
        * ctx.synergy_multiplier
        * ctx.legacy_multiplier
        * ctx.court_modifier
    )

    return PowerProfile(
        base_power=round(base, 2),
        army_bonus=round(army, 2),
        formation_multiplier=formation,
        general_bonus=round(generals, 2),
        synergy_multiplier=round(ctx.synergy_multiplier, 2),
        legacy_bonus=round(ctx.legacy_multiplier, 2),
        court_modifier=round(ctx.court_modifier, 2),
        final_power=round(final, 2),
    )
