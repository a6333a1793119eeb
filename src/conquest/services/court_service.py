"""Court Service for the conquest engine."""

import logging
from dataclasses import dataclass

from conquest.domain.court import CourtDeltas, apply_court_action
from conquest.domain.enums import CourtAction
from conquest.domain.models import CourtState, Player, PlayerID
from conquest.errors import PreconditionError
from conquest.repository import JsonDocumentStore
from conquest.utils.locks import KeyedLocks

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CourtView:
    court: CourtState
    political_turns_remaining: int


@dataclass(slots=True)
class CourtActionReport:
    court: CourtState
    player: Player
    action: CourtAction
    deltas: CourtDeltas


class CourtService:
    """Spend a player's political turns on court actions."""

    def __init__(self, store: JsonDocumentStore, *, locks: KeyedLocks | None = None):
        self.store = store
        self.locks = locks or KeyedLocks()

    def _court_for(self, player: Player) -> CourtState:
        court = self.store.find_one(CourtState, lambda c: c.dynasty_id == player.dynasty_id)
        if court is None:
            # not persisted until the first action lands
            court = CourtState(id=f"court-{player.dynasty_id}", dynasty_id=player.dynasty_id)
        return court

    def get_court_state(self, player_id: PlayerID) -> CourtView:
        player = self.store.require(Player, player_id)
        return CourtView(self._court_for(player), player.political_turns)

    def execute_action(self, player_id: PlayerID, action: CourtAction) -> CourtActionReport:
        """Apply ``action`` to the player's court and spend one political turn.

        Raises:
            EntityNotFoundError: Unknown player.
            PreconditionError: The player has no political turns left.
        """
        with self.locks.hold(f"player:{player_id}"):
            player = self.store.require(Player, player_id)
            if player.political_turns <= 0:
                raise PreconditionError("No political turns remaining")

            court = self._court_for(player)
            deltas = apply_court_action(court, action)
            player.political_turns -= 1
            self.store.save(court)
            self.store.save(player)

        logger.info(
            "player %s took court action %s (%d political turns left)",
            player_id,
            action.value,
            player.political_turns,
        )
        return CourtActionReport(court=court, player=player, action=action, deltas=deltas)
