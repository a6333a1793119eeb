"""Declarative rule configuration for the conquest domain."""

from __future__ import annotations

from dataclasses import dataclass, field


def _formations() -> dict[str, float]:
    return {"line": 1.0, "wedge": 1.1, "phalanx": 1.15, "skirmish": 0.9}


@dataclass(frozen=True, slots=True)
class PowerRules:
    """Weights used when composing player power."""

    strength_weight: float = 2.0
    defense_weight: float = 1.0
    strategy_weight: float = 1.5
    leadership_weight: float = 2.0
    level_weight: float = 1.2
    # (minimum morale, multiplier), checked top-down
    morale_tiers: tuple[tuple[int, float], ...] = ((80, 1.15), (50, 1.0), (30, 0.9))
    morale_floor_multiplier: float = 0.75
    formation_multipliers: dict[str, float] = field(default_factory=_formations)


@dataclass(frozen=True, slots=True)
class OppositionRules:
    defense_weight: float = 1.5
    strategic_weight: float = 1.0


@dataclass(frozen=True, slots=True)
class RewardRules:
    loss_experience_fraction: float = 0.25
    level_experience_step: int = 100
    morale_gain_on_win: int = 5
    morale_loss_on_defeat: int = -10


@dataclass(frozen=True, slots=True)
class ExhaustionRules:
    """War exhaustion gauge tuning."""

    minimum: int = 0
    maximum: int = 100
    win_base: int = -5
    loss_base: int = 15
    win_casualty_divisor: int = 20
    loss_casualty_divisor: int = 10
    moderate_threshold: int = 70
    severe_threshold: int = 90


@dataclass(frozen=True, slots=True)
class CaptureRules:
    merit_per_strategic_value: int = 5
    defense_retained_fraction: float = 0.6
    minimum_defense: int = 1
    leadership_per_capture: int = 1
    leadership_per_general: int = 1


@dataclass(frozen=True, slots=True)
class TimelineRules:
    map_dominance_share: float = 0.8
    collapse_stability: int = 20
    default_stability: int = 100


@dataclass(frozen=True, slots=True)
class LoyaltyRules:
    betrayal_loyalty_below: int = 30
    betrayal_ambition_above: int = 70
    betrayal_stability_delta: int = -15
    unstable_court_below: int = 50
    unstable_corruption_gain: int = 2


@dataclass(frozen=True, slots=True)
class SuccessionRules:
    death_exhaustion_threshold: int = 90


@dataclass(frozen=True, slots=True)
class CourtRules:
    """Bounds for the court's influence on battle power."""

    power_modifier_min: float = 0.75
    power_modifier_max: float = 1.10
    morale_divisor: float = 400.0
    stability_divisor: float = 800.0


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    power: PowerRules = PowerRules()
    opposition: OppositionRules = OppositionRules()
    rewards: RewardRules = RewardRules()
    exhaustion: ExhaustionRules = ExhaustionRules()
    capture: CaptureRules = CaptureRules()
    timeline: TimelineRules = TimelineRules()
    loyalty: LoyaltyRules = LoyaltyRules()
    succession: SuccessionRules = SuccessionRules()
    court: CourtRules = CourtRules()


DEFAULT_RULES = RulesConfig()
