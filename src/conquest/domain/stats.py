"""Stat and modifier primitives."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .enums import BattleOutcome, StatName
from .models import BaseStats, StatModifiers

STAT_NAMES: tuple[str, ...] = tuple(stat.value for stat in StatName)


def merge_modifiers(modifiers: Iterable[Mapping[str, int]]) -> StatModifiers:
    """Sum several partial stat maps into one, skipping zero entries."""

    totals: StatModifiers = {}
    for partial in modifiers:
        for stat, value in partial.items():
            if stat not in STAT_NAMES:
                raise ValueError(f"Unknown stat: {stat}")
            if value:
                totals[stat] = totals.get(stat, 0) + value
    return totals


def effective_stats(
    base: BaseStats,
    equipment: Mapping[str, int] | None = None,
    injuries: Mapping[str, int] | None = None,
) -> BaseStats:
    """Apply equipment bonuses and injury penalties, flooring each stat at zero.

    The floor is applied per stat, so a crippling injury on one attribute never
    drags the others down.
    """

    equipment = equipment or {}
    injuries = injuries or {}
    values = {
        stat: max(0, getattr(base, stat) + equipment.get(stat, 0) + injuries.get(stat, 0))
        for stat in STAT_NAMES
    }
    return BaseStats(**values)


def apply_growth(stats: BaseStats, growth: Mapping[str, int]) -> None:
    """Add a growth map onto ``stats`` in place."""

    for stat, value in growth.items():
        setattr(stats, stat, max(0, getattr(stats, stat) + value))


def stat_growth(outcome: BattleOutcome) -> StatModifiers:
    """Every stat grows after a victory; only defense grows after a defeat."""

    if outcome == BattleOutcome.WON:
        return dict.fromkeys(STAT_NAMES, 1)
    return {StatName.DEFENSE.value: 1}
