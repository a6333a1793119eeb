"""Succession Service for the conquest engine.

Succession has two halves.  :meth:`SuccessionService.trigger_death` is called
by the conquest orchestrator after a crushing defeat and only marks the
active character dead.  The player later inspects the candidates through
:meth:`SuccessionService.get_succession_state` and installs an heir with
:meth:`SuccessionService.confirm_succession`, which is where the court pays
for the transition.
"""

import logging
from collections.abc import Sequence

from conquest.domain.court import shift_court
from conquest.domain.enums import CharacterRole
from conquest.domain.models import Character, CharacterID, CourtState, Player, PlayerID
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.domain.succession import (
    SuccessionCandidate,
    SuccessionConfirmation,
    SuccessionResult,
    SuccessionState,
    death_condition,
    resolve_successor,
)
from conquest.errors import EntityNotFoundError, PreconditionError
from conquest.repository import JsonDocumentStore

logger = logging.getLogger(__name__)


def _candidates(characters: Sequence[Character]) -> list[SuccessionCandidate]:
    return [SuccessionCandidate(c.id, c.role, c.loyalty, c.is_alive) for c in characters]


class SuccessionService:
    """Trigger and resolve dynastic succession."""

    def __init__(self, store: JsonDocumentStore, rules: RulesConfig = DEFAULT_RULES):
        self.store = store
        self.rules = rules

    def resolve_death_condition(self, war_exhaustion: int, last_battle_was_loss: bool) -> bool:
        return death_condition(war_exhaustion, last_battle_was_loss, self.rules.succession)

    def resolve_successor(self, candidates: Sequence[SuccessionCandidate]) -> SuccessionResult:
        return resolve_successor(candidates)

    def _living_heirs(self, player_id: PlayerID) -> list[Character]:
        return self.store.find(
            Character,
            lambda c: c.player_id == player_id and c.is_alive and c.role != CharacterRole.MAIN,
        )

    def trigger_death(self, player: Player) -> bool:
        """Kill the active character and flag succession as pending.

        Re-triggering while a succession is already pending is a no-op.
        """
        if player.succession_pending:
            return False

        if player.active_character_id is not None:
            character = self.store.get(Character, player.active_character_id)
            if character is not None:
                character.is_alive = False
                self.store.save(character)

        player.succession_pending = True
        self.store.save(player)
        logger.info("succession triggered for player %s", player.id)
        return True

    def get_succession_state(self, player_id: PlayerID) -> SuccessionState:
        player = self.store.require(Player, player_id)
        if not player.succession_pending:
            return SuccessionState(pending=False)

        deceased = (
            self.store.get(Character, player.active_character_id)
            if player.active_character_id is not None
            else None
        )
        living = self._living_heirs(player_id)
        result = resolve_successor(_candidates(living))
        return SuccessionState(
            pending=True,
            deceased_name=deceased.name if deceased is not None else "the fallen commander",
            candidates=living,
            stability_delta=result.stability_delta,
            morale_delta=result.morale_delta,
            legitimacy_delta=result.legitimacy_delta,
        )

    def confirm_succession(
        self, player_id: PlayerID, successor_id: CharacterID
    ) -> SuccessionConfirmation:
        """Install ``successor_id`` as the new primary character.

        Raises:
            EntityNotFoundError: If the player, or a living successor owned by
                them, does not exist
            PreconditionError: If no succession is pending
        """
        player = self.store.require(Player, player_id)
        if not player.succession_pending:
            raise PreconditionError("No pending succession")

        successor = self.store.get(Character, successor_id)
        if successor is None or successor.player_id != player_id or not successor.is_alive:
            raise EntityNotFoundError("Successor", successor_id)

        # Deltas are priced against the field as it stood before the promotion.
        result = resolve_successor(_candidates(self._living_heirs(player_id)))

        successor.role = CharacterRole.MAIN
        self.store.save(successor)

        court = self.store.find_one(CourtState, lambda c: c.dynasty_id == player.dynasty_id)
        if court is not None:
            shift_court(
                court,
                stability=result.stability_delta,
                morale=result.morale_delta,
                legitimacy=result.legitimacy_delta,
            )
            self.store.save(court)

        player.active_character_id = successor.id
        player.succession_pending = False
        self.store.save(player)
        logger.info("player %s succeeded by character %s", player_id, successor.id)
        return SuccessionConfirmation(player=player, successor=successor, result=result)
