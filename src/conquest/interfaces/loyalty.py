"""Loyalty Service Protocol Interface.

This module defines the protocol for services that move the loyalty of a
player's dynasty characters.
"""

from typing import Protocol

from conquest.domain.enums import LoyaltyEvent
from conquest.domain.loyalty import BetrayalEvent
from conquest.domain.models import CharacterID, PlayerID


class ILoyaltyService(Protocol):
    """Protocol defining loyalty event dispatch and betrayal processing."""

    def apply_event(self, player_id: PlayerID, event: LoyaltyEvent) -> dict[CharacterID, int]:
        """Apply a named loyalty event to every living non-primary character.

        Args:
            player_id: Owner of the characters
            event: The loyalty event to apply

        Returns:
            Mapping of character id to the new, clamped loyalty value
        """
        ...

    def process_betrayals(self, player_id: PlayerID) -> list[BetrayalEvent]:
        """Defect every character whose loyalty and ambition meet the betrayal condition."""
        ...
