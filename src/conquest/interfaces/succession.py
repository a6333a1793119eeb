"""Succession Service Protocol Interface."""

from collections.abc import Sequence
from typing import Protocol

from conquest.domain.models import CharacterID, Player, PlayerID
from conquest.domain.succession import (
    SuccessionCandidate,
    SuccessionConfirmation,
    SuccessionResult,
    SuccessionState,
)


class ISuccessionService(Protocol):
    """Protocol defining the contract for death triggers and successor selection.

    Triggering succession and resolving it are separate steps: the
    orchestrator only ever triggers, the player confirms.
    """

    def resolve_death_condition(self, war_exhaustion: int, last_battle_was_loss: bool) -> bool:
        """Whether the active character dies after this engagement."""
        ...

    def resolve_successor(self, candidates: Sequence[SuccessionCandidate]) -> SuccessionResult:
        """Pick a successor and the court deltas that come with them."""
        ...

    def trigger_death(self, player: Player) -> bool:
        """Mark the active character dead and flag succession as pending.

        Args:
            player: The in-memory player; it is saved by this call

        Returns:
            ``False`` when succession was already pending
        """
        ...

    def get_succession_state(self, player_id: PlayerID) -> SuccessionState:
        ...

    def confirm_succession(
        self, player_id: PlayerID, successor_id: CharacterID
    ) -> SuccessionConfirmation:
        ...
