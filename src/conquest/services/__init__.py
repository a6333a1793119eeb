"""Persistence-aware services for the conquest engine."""

from conquest.services.battle_service import BattleReport, BattleService
from conquest.services.campaign_service import CampaignService, CampaignView
from conquest.services.conquest_service import ConquestResult, ConquestService, SideEffect
from conquest.services.court_service import CourtActionReport, CourtService, CourtView
from conquest.services.loyalty_service import LoyaltyService
from conquest.services.power_service import PowerService
from conquest.services.succession_service import SuccessionService
from conquest.services.timeline_service import TimelineService
from conquest.services.world_service import TerritoryView, WorldService

__all__ = [
    "BattleReport",
    "BattleService",
    "CampaignService",
    "CampaignView",
    "ConquestResult",
    "ConquestService",
    "CourtActionReport",
    "CourtService",
    "CourtView",
    "LoyaltyService",
    "PowerService",
    "SideEffect",
    "SuccessionService",
    "TerritoryView",
    "TimelineService",
    "WorldService",
]
