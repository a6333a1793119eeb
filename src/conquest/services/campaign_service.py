"""Campaign Service for the conquest engine."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import uuid4

from conquest.domain.campaign import (
    CampaignProgress,
    campaign_progress,
    check_victory,
    record_capture,
    record_general_defeat,
)
from conquest.domain.enums import CampaignStatus
from conquest.domain.models import (
    CampaignDefinition,
    CampaignID,
    Player,
    PlayerCampaign,
    PlayerCampaignID,
    PlayerID,
    Territory,
    TerritoryID,
)
from conquest.errors import EntityNotFoundError, PreconditionError
from conquest.repository import JsonDocumentStore


@dataclass(slots=True)
class CampaignView:
    campaign: PlayerCampaign
    definition: CampaignDefinition
    progress: CampaignProgress
    captured_territory_names: list[str]


class CampaignService:
    """Start campaigns and keep their progress in step with conquests."""

    def __init__(self, store: JsonDocumentStore):
        self.store = store

    def _active(self, player_id: PlayerID) -> PlayerCampaign | None:
        return self.store.find_one(
            PlayerCampaign,
            lambda pc: pc.player_id == player_id and pc.status == CampaignStatus.ACTIVE,
        )

    def start_campaign(self, player_id: PlayerID, campaign_id: CampaignID) -> PlayerCampaign:
        """Begin a campaign. A player may only run one at a time."""

        self.store.require(Player, player_id)
        self.store.require(CampaignDefinition, campaign_id)
        if self._active(player_id) is not None:
            raise PreconditionError("You already have an active campaign")

        progress = PlayerCampaign(
            id=PlayerCampaignID(uuid4().hex),
            player_id=player_id,
            campaign_id=campaign_id,
            started_at=datetime.now(UTC),
        )
        return self.store.save(progress)

    def get_active_campaign(self, player_id: PlayerID) -> CampaignView:
        progress = self._active(player_id)
        if progress is None:
            raise EntityNotFoundError("Active campaign", player_id)
        definition = self.store.require(CampaignDefinition, progress.campaign_id)

        names = []
        for territory_id in progress.territories_captured:
            territory = self.store.get(Territory, territory_id)
            if territory is not None:
                names.append(territory.name)

        return CampaignView(
            campaign=progress,
            definition=definition,
            progress=campaign_progress(progress, definition),
            captured_territory_names=names,
        )

    def record_progress(
        self,
        player_id: PlayerID,
        territory_id: TerritoryID,
        defeated_general_name: str | None = None,
    ) -> PlayerCampaign | None:
        progress = self._active(player_id)
        if progress is None:
            return None

        record_capture(progress, territory_id)
        if defeated_general_name is not None:
            record_general_defeat(progress, defeated_general_name)

        definition = self.store.get(CampaignDefinition, progress.campaign_id)
        if definition is not None:
            check_victory(progress, definition, datetime.now(UTC))

        return self.store.save(progress)
