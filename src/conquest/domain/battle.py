"""Outcome, casualty and reward rules."""

from __future__ import annotations

from dataclasses import dataclass

from conquest.utils.rng import check_chance, weighted_choice

from .enums import BattleOutcome, ItemRarity
from .models import BattleTemplate, Player
from .rounding import round_half_up
from .rules_config import DEFAULT_RULES, RewardRules

DROP_CHANCES: dict[int, float] = {1: 0.30, 2: 0.40, 3: 0.50, 4: 0.60, 5: 0.75}
RARITY_WEIGHTS: dict[int, tuple[float, float, float]] = {
    1: (0.80, 0.18, 0.02),
    2: (0.80, 0.18, 0.02),
    3: (0.50, 0.40, 0.10),
    4: (0.20, 0.50, 0.30),
    5: (0.20, 0.50, 0.30),
}
RARITY_ORDER = (ItemRarity.COMMON, ItemRarity.RARE, ItemRarity.EPIC)


@dataclass(slots=True)
class Rewards:
    merit_gained: int
    exp_gained: int


@dataclass(slots=True)
class ItemDrop:
    dropped: bool
    rarity: ItemRarity | None = None


def resolve_outcome(attacker_power: float, defender_power: float) -> BattleOutcome:
    """Ties go to the attacker."""

    if attacker_power >= defender_power:
        return BattleOutcome.WON
    return BattleOutcome.LOST


def calculate_casualties(attacker_power: float, defender_power: float) -> int:
    """Percentage gap between the two sides relative to the stronger one.

    Two sides of exactly zero power fight to a bloodless draw (``0``).
    """

    if attacker_power == 0 and defender_power == 0:
        return 0
    ratio = abs(attacker_power - defender_power) / max(attacker_power, defender_power)
    return round_half_up(ratio * 100)


def calculate_rewards(
    template: BattleTemplate,
    outcome: BattleOutcome,
    rules: RewardRules = DEFAULT_RULES.rewards,
) -> Rewards:
    if outcome == BattleOutcome.WON:
        return Rewards(merit_gained=template.merit_reward, exp_gained=template.exp_reward)
    return Rewards(
        merit_gained=0,
        exp_gained=int(template.exp_reward * rules.loss_experience_fraction),
    )


def apply_level_up(player: Player, rules: RewardRules = DEFAULT_RULES.rewards) -> bool:
    """Promote the player one level if experience crossed the threshold."""

    threshold = player.level * rules.level_experience_step
    if player.experience >= threshold:
        player.experience -= threshold
        player.level += 1
        return True
    return False


def roll_item_drop(difficulty: int, seed: str) -> ItemDrop:
    """Decide whether a victory drops an item and of which rarity."""

    chance = DROP_CHANCES.get(difficulty, DROP_CHANCES[1])
    if not check_chance(f"{seed}:drop", chance)["success"]:
        return ItemDrop(dropped=False)
    weights = RARITY_WEIGHTS.get(difficulty, RARITY_WEIGHTS[1])
    rarity = weighted_choice(f"{seed}:rarity", RARITY_ORDER, weights)["choice"]
    return ItemDrop(dropped=True, rarity=rarity)


def relationship_gain(difficulty: int) -> int:
    """Officer relationship earned by a victory, 4 to 12 depending on difficulty."""

    return 2 + difficulty * 2


def morale_change(
    outcome: BattleOutcome,
    gain_multiplier: float = 1.0,
    rules: RewardRules = DEFAULT_RULES.rewards,
) -> int:
    if outcome == BattleOutcome.WON:
        return round_half_up(rules.morale_gain_on_win * gain_multiplier)
    return rules.morale_loss_on_defeat
