"""Service Factory for the conquest engine.

This module provides factory functions for creating service instances with
proper dependency wiring. Use these functions in production code to ensure
all service dependencies are correctly initialized.

For testing, inject protocol-based fakes instead of using these factories.

Example:
    # Production usage
    from conquest.factory import create_conquest_service
    conquest = create_conquest_service(store)

    # Testing usage
    from conquest.services.conquest_service import ConquestService

    class FakeTimeline:
        def check_and_apply_divergence(self, dynasty_id, faction_id, **kwargs):
            raise RuntimeError("timeline store offline")

    conquest = ConquestService(store, power, loyalty, succession, FakeTimeline(), campaigns)
"""

from conquest.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.repository import JsonDocumentStore
from conquest.services.battle_service import BattleService
from conquest.services.campaign_service import CampaignService
from conquest.services.conquest_service import ConquestService
from conquest.services.court_service import CourtService
from conquest.services.loyalty_service import LoyaltyService
from conquest.services.power_service import PowerService
from conquest.services.succession_service import SuccessionService
from conquest.services.timeline_service import TimelineService
from conquest.services.world_service import WorldService
from conquest.utils.locks import KeyedLocks


def create_power_service(
    store: JsonDocumentStore,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    rules: RulesConfig = DEFAULT_RULES,
) -> PowerService:
    """Create a PowerService.

    Args:
        store: Document store
        config: Engine switches (court modifier etc.)
        rules: Game rule constants

    Returns:
        Fully initialized PowerService
    """
    return PowerService(store, config, rules)


def create_battle_service(
    store: JsonDocumentStore,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    *,
    locks: KeyedLocks | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> BattleService:
    """Create a BattleService with its PowerService dependency."""
    power = create_power_service(store, config, rules)
    return BattleService(store, power, config, locks=locks, rules=rules)


def create_conquest_service(
    store: JsonDocumentStore,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    *,
    locks: KeyedLocks | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> ConquestService:
    """Create a ConquestService with every cascade collaborator.

    Args:
        store: Document store shared by all collaborators
        config: Engine switches
        locks: Lock registry; share one with the BattleService so both
            serialize on the same player keys
        rules: Game rule constants

    Returns:
        Fully initialized ConquestService
    """
    return ConquestService(
        store,
        create_power_service(store, config, rules),
        LoyaltyService(store, rules),
        SuccessionService(store, rules),
        TimelineService(store, rules),
        CampaignService(store),
        locks=locks,
        rules=rules,
    )


def create_world_service(
    store: JsonDocumentStore, rules: RulesConfig = DEFAULT_RULES
) -> WorldService:
    return WorldService(store, rules)


def create_court_service(
    store: JsonDocumentStore, *, locks: KeyedLocks | None = None
) -> CourtService:
    """Create a CourtService.

    Args:
        store: Document store
        locks: Lock registry; share it with the other player-mutating services

    Returns:
        Fully initialized CourtService
    """
    return CourtService(store, locks=locks)
