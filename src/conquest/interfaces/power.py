"""Power Service Protocol Interface."""

from typing import Protocol

from conquest.domain.models import Player
from conquest.domain.power import PowerContext, PowerProfile
from conquest.domain.synergy import SynergyPair


class IPowerService(Protocol):
    """Protocol for assembling a player's composed power from persisted state."""

    def build_context(self, player: Player) -> PowerContext:
        """Gather every contribution (equipment, injuries, army, officers, legacy).

        Args:
            player: The attacking player

        Returns:
            PowerContext ready for composition
        """
        ...

    def build_profile(self, player: Player) -> PowerProfile:
        """Compose the player's power profile for one engagement."""
        ...

    def active_synergies(self, player: Player) -> list[SynergyPair]:
        """Synergy pairs matched by the player's deployed officers."""
        ...
