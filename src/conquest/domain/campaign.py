"""Campaign progress bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .enums import CampaignStatus
from .models import CampaignDefinition, PlayerCampaign, TerritoryID

ENEMY_SUFFIX = " (enemy)"


@dataclass(slots=True)
class CampaignProgress:
    territories_remaining: int
    generals_remaining: int
    generals_defeated_log: list[str]


def record_capture(progress: PlayerCampaign, territory_id: TerritoryID) -> bool:
    """Append a captured territory once. Returns ``False`` if it was already recorded."""

    if territory_id in progress.territories_captured:
        return False
    progress.territories_captured.append(territory_id)
    return True


def record_general_defeat(progress: PlayerCampaign, general_name: str) -> None:
    progress.generals_defeated += 1
    progress.generals_defeated_log.append(general_name.removesuffix(ENEMY_SUFFIX))


def victory_reached(progress: PlayerCampaign, definition: CampaignDefinition) -> bool:
    return (
        len(progress.territories_captured) >= definition.territories_required
        and progress.generals_defeated >= definition.generals_required
    )


def check_victory(
    progress: PlayerCampaign, definition: CampaignDefinition, now: datetime
) -> bool:
    """Mark an active campaign won once both thresholds are met."""

    if progress.status != CampaignStatus.ACTIVE:
        return progress.status == CampaignStatus.WON
    if victory_reached(progress, definition):
        progress.status = CampaignStatus.WON
        progress.completed_at = now
        return True
    return False


def campaign_progress(progress: PlayerCampaign, definition: CampaignDefinition) -> CampaignProgress:
    return CampaignProgress(
        territories_remaining=max(
            0, definition.territories_required - len(progress.territories_captured)
        ),
        generals_remaining=max(0, definition.generals_required - progress.generals_defeated),
        generals_defeated_log=list(progress.generals_defeated_log),
    )
