"""Succession rules.

A death check only *triggers* succession.  Choosing the successor is a
separate, player-confirmed step with its own priority order.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .enums import CharacterRole
from .models import Character, CharacterID, Player
from .rules_config import DEFAULT_RULES, SuccessionRules


@dataclass(slots=True)
class SuccessionCandidate:
    id: CharacterID
    role: CharacterRole
    loyalty: int
    alive: bool


@dataclass(frozen=True, slots=True)
class SuccessionResult:
    successor_id: CharacterID | None
    stability_delta: int
    morale_delta: int
    legitimacy_delta: int
    no_candidates: bool


def death_condition(
    war_exhaustion: int,
    last_battle_was_loss: bool,
    rules: SuccessionRules = DEFAULT_RULES.succession,
) -> bool:
    return war_exhaustion >= rules.death_exhaustion_threshold and last_battle_was_loss


def resolve_successor(candidates: Sequence[SuccessionCandidate]) -> SuccessionResult:
    """Pick a successor: a living heir, else the most loyal living non-primary character."""

    living = [c for c in candidates if c.alive]

    for candidate in living:
        if candidate.role == CharacterRole.HEIR:
            return SuccessionResult(candidate.id, -10, -10, -5, no_candidates=False)

    others = sorted(
        (c for c in living if c.role != CharacterRole.MAIN),
        key=lambda c: c.loyalty,
        reverse=True,
    )
    if others:
        return SuccessionResult(others[0].id, -20, -15, -10, no_candidates=False)

    # the dynasty is leaderless
    return SuccessionResult(None, -30, -25, -20, no_candidates=True)


@dataclass(slots=True)
class SuccessionState:
    """What the player sees on the succession confirmation screen."""

    pending: bool
    deceased_name: str | None = None
    candidates: list[Character] = field(default_factory=list)
    stability_delta: int = 0
    morale_delta: int = 0
    legitimacy_delta: int = 0


@dataclass(slots=True)
class SuccessionConfirmation:
    player: Player
    successor: Character
    result: SuccessionResult
