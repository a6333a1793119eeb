"""Court politics rules."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import CourtAction
from .models import CourtState
from .rules_config import DEFAULT_RULES, CourtRules


@dataclass(frozen=True, slots=True)
class CourtDeltas:
    stability: int
    legitimacy: int
    morale: int
    corruption: int
    detail: str


ACTION_EFFECTS: dict[CourtAction, CourtDeltas] = {
    CourtAction.NEGOTIATE: CourtDeltas(
        5, 10, 5, -2, "Diplomatic negotiations bolstered court legitimacy."
    ),
    CourtAction.PURGE: CourtDeltas(
        -20, 5, -10, -15, "The purge rooted out corruption but shook the court's stability."
    ),
    CourtAction.REFORM: CourtDeltas(
        15, 5, 5, -5, "Administrative reforms strengthened the dynasty."
    ),
    CourtAction.PROPAGANDA: CourtDeltas(
        5, 5, 15, 2, "Propaganda campaigns lifted troop morale but deepened corruption."
    ),
}


def _clamp(value: int) -> int:
    return max(0, min(100, value))


def shift_court(
    court: CourtState,
    *,
    stability: int = 0,
    legitimacy: int = 0,
    morale: int = 0,
    corruption: int = 0,
) -> None:
    """Apply deltas in place, keeping every gauge within ``[0, 100]``."""

    court.stability = _clamp(court.stability + stability)
    court.legitimacy = _clamp(court.legitimacy + legitimacy)
    court.morale = _clamp(court.morale + morale)
    court.corruption = _clamp(court.corruption + corruption)


def apply_court_action(court: CourtState, action: CourtAction) -> CourtDeltas:
    fx = ACTION_EFFECTS[action]
    shift_court(
        court,
        stability=fx.stability,
        legitimacy=fx.legitimacy,
        morale=fx.morale,
        corruption=fx.corruption,
    )
    court.last_action = action.value
    return fx


def battle_power_modifier(court: CourtState, rules: CourtRules = DEFAULT_RULES.court) -> float:
    """Court morale and stability nudge battle power within ``[0.75, 1.10]``.

    Dormant unless the engine is configured to apply it.
    """

    raw = (
        1
        + (court.morale - 50) / rules.morale_divisor
        + (court.stability - 50) / rules.stability_divisor
    )
    return max(rules.power_modifier_min, min(rules.power_modifier_max, raw))
