"""Campaign Service Protocol Interface."""

from typing import Protocol

from conquest.domain.models import PlayerCampaign, PlayerID, TerritoryID


class ICampaignService(Protocol):
    """Protocol defining campaign progress bookkeeping."""

    def record_progress(
        self,
        player_id: PlayerID,
        territory_id: TerritoryID,
        defeated_general_name: str | None = None,
    ) -> PlayerCampaign | None:
        """Append a capture (and defeat), then re-check victory.

        Args:
            player_id: Player whose active campaign is updated
            territory_id: Territory just captured; recorded once
            defeated_general_name: Name of the general defeated in the capture

        Returns:
            The updated campaign, or ``None`` when the player has no active campaign
        """
        ...
