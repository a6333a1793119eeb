"""Loyalty Service for the conquest engine."""

import logging

from conquest.domain.court import shift_court
from conquest.domain.enums import CharacterRole, LoyaltyEvent
from conquest.domain.loyalty import (
    BetrayalEvent,
    check_betrayal,
    clamp_loyalty,
    is_loyalty_subject,
    loyalty_delta,
)
from conquest.domain.models import Character, CharacterID, CourtState, Player, PlayerID
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.repository import JsonDocumentStore

logger = logging.getLogger(__name__)


class LoyaltyService:
    """Apply loyalty events and betrayals to a player's characters."""

    def __init__(self, store: JsonDocumentStore, rules: RulesConfig = DEFAULT_RULES):
        self.store = store
        self.rules = rules

    def _subjects(self, player_id: PlayerID) -> list[Character]:
        return self.store.find(
            Character, lambda c: c.player_id == player_id and is_loyalty_subject(c)
        )

    def apply_event(self, player_id: PlayerID, event: LoyaltyEvent) -> dict[CharacterID, int]:
        """Shift loyalty of every living non-primary character, clamped to ``[0, 100]``."""

        delta = loyalty_delta(event)
        updates: dict[CharacterID, int] = {}
        for character in self._subjects(player_id):
            character.loyalty = clamp_loyalty(character.loyalty + delta)
            self.store.save(character)
            updates[character.id] = character.loyalty
        return updates

    def process_betrayals(self, player_id: PlayerID) -> list[BetrayalEvent]:
        """Defect disloyal, ambitious characters and shake the court for each.

        Every defection costs stability; a court already below the unstable
        threshold also grows more corrupt.
        """
        player = self.store.require(Player, player_id)
        rules = self.rules.loyalty
        betrayals: list[BetrayalEvent] = []

        for character in self._subjects(player_id):
            if not check_betrayal(character, rules):
                continue
            character.role = CharacterRole.OFFICER
            character.is_alive = False
            self.store.save(character)

            court = self.store.find_one(CourtState, lambda c: c.dynasty_id == player.dynasty_id)
            if court is not None:
                shift_court(court, stability=rules.betrayal_stability_delta)
                if court.stability < rules.unstable_court_below:
                    shift_court(court, corruption=rules.unstable_corruption_gain)
                self.store.save(court)

            logger.info("character %s defected from player %s", character.id, player_id)
            betrayals.append(
                BetrayalEvent(
                    character_id=character.id,
                    character_name=character.name,
                    stability_delta=rules.betrayal_stability_delta,
                )
            )
        return betrayals

    def tick_decay(
        self, player_id: PlayerID
    ) -> tuple[dict[CharacterID, int], list[BetrayalEvent]]:
        """Idle loyalty decay followed by a betrayal sweep."""

        affected = self.apply_event(player_id, LoyaltyEvent.IDLE_DECAY)
        return affected, self.process_betrayals(player_id)
