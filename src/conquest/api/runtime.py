"""Runtime primitives backing the conquest HTTP API."""

from __future__ import annotations

import logging

from conquest.config import EngineConfig, Settings, get_settings
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.factory import (
    create_battle_service,
    create_conquest_service,
    create_court_service,
)
from conquest.repository import JsonDocumentStore
from conquest.services import (
    CampaignService,
    LoyaltyService,
    SuccessionService,
    TimelineService,
    WorldService,
)
from conquest.utils.locks import KeyedLocks

logger = logging.getLogger(__name__)


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self, *, settings: Settings | None = None, rules: RulesConfig = DEFAULT_RULES
    ) -> None:
        self.settings = settings or get_settings()
        self.config = EngineConfig.from_settings(self.settings)
        self.rules = rules
        self.store = JsonDocumentStore(self.settings.data_dir)
        self.locks = KeyedLocks()
        self.battles = create_battle_service(
            self.store, self.config, locks=self.locks, rules=rules
        )
        self.conquest = create_conquest_service(
            self.store, self.config, locks=self.locks, rules=rules
        )
        self.world = WorldService(self.store, rules)
        self.succession = SuccessionService(self.store, rules)
        self.timeline = TimelineService(self.store, rules)
        self.campaigns = CampaignService(self.store)
        self.loyalty = LoyaltyService(self.store, rules)
        self.court = create_court_service(self.store, locks=self.locks)
        logger.info("conquest engine state ready (data dir %s)", self.settings.data_dir)

    async def shutdown(self) -> None:
        logger.info("conquest engine state shut down")


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
