"""War exhaustion rules.

Exhaustion couples both ways with combat: the current gauge degrades the
power a commander can bring to the field, and every resolved engagement
moves the gauge.  The stored value never leaves ``[0, 100]``.
"""

from __future__ import annotations

from dataclasses import dataclass

from .enums import BattleOutcome
from .rounding import round_half_up
from .rules_config import DEFAULT_RULES, ExhaustionRules


@dataclass(frozen=True, slots=True)
class ExhaustionPenalties:
    injury_chance_bonus: float
    xp_multiplier: float
    morale_gain_multiplier: float


NO_PENALTIES = ExhaustionPenalties(0.0, 1.0, 1.0)
MODERATE_PENALTIES = ExhaustionPenalties(0.10, 0.8, 1.0)
SEVERE_PENALTIES = ExhaustionPenalties(0.25, 0.6, 0.5)


def exhaustion_penalties(
    exhaustion: int, rules: ExhaustionRules = DEFAULT_RULES.exhaustion
) -> ExhaustionPenalties:
    """Map the gauge onto its penalty tier (<70 none, 70-89 moderate, 90+ severe)."""

    if exhaustion >= rules.severe_threshold:
        return SEVERE_PENALTIES
    if exhaustion >= rules.moderate_threshold:
        return MODERATE_PENALTIES
    return NO_PENALTIES


def effective_power(
    final_power: float, exhaustion: int, rules: ExhaustionRules = DEFAULT_RULES.exhaustion
) -> float:
    return final_power * exhaustion_penalties(exhaustion, rules).xp_multiplier


def calculate_exhaustion_delta(
    outcome: BattleOutcome,
    casualties: int,
    current: int,
    rules: ExhaustionRules = DEFAULT_RULES.exhaustion,
) -> int:
    """Change in exhaustion after an engagement, clamped against ``current``.

    Defeats start higher and accrue casualty burden twice as fast as victories.
    """

    won = outcome == BattleOutcome.WON
    divisor = rules.win_casualty_divisor if won else rules.loss_casualty_divisor
    burden = round_half_up(casualties / divisor)
    raw = (rules.win_base if won else rules.loss_base) + burden
    return max(rules.minimum - current, min(rules.maximum - current, raw))


def apply_exhaustion_delta(
    current: int, delta: int, rules: ExhaustionRules = DEFAULT_RULES.exhaustion
) -> int:
    return max(rules.minimum, min(rules.maximum, current + delta))
