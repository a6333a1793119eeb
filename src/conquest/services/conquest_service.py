"""Conquest Service: territory assault orchestration.

An assault is a sequential saga rather than a transaction.  The primary
steps (loading, power resolution, exhaustion, capture and general defeat)
either all run or the request fails before anything is written.  The
cascade that follows (timeline divergence, campaign progress, loyalty and
the succession trigger) is best-effort: every step runs in isolation and its
success or failure is reported as a :class:`SideEffect` next to the primary
result.  A failed cascade step is never retried and never rolls back the
capture.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from conquest.domain.battle import calculate_casualties, resolve_outcome
from conquest.domain.enums import BattleOutcome, LoyaltyEvent
from conquest.domain.exhaustion import (
    apply_exhaustion_delta,
    calculate_exhaustion_delta,
    exhaustion_penalties,
)
from conquest.domain.models import EnemyGeneral, Player, PlayerID, Territory, TerritoryID
from conquest.domain.opposition import (
    calculate_enemy_power,
    defender_contributors,
    enemy_base_power,
    pick_general_to_defeat,
)
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.domain.territory import (
    apply_capture,
    capture_merit_bonus,
    is_capturable,
    resolve_capture,
)
from conquest.errors import OwnershipConflictError
from conquest.interfaces import (
    ICampaignService,
    ILoyaltyService,
    IPowerService,
    ISuccessionService,
    ITimelineService,
)
from conquest.repository import JsonDocumentStore
from conquest.utils.locks import KeyedLocks

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SideEffect:
    """Outcome of one best-effort cascade step."""

    step: str
    ok: bool
    error: str | None = None
    detail: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ConquestResult:
    outcome: BattleOutcome
    territory: Territory | None
    merit_bonus: int
    leadership_gained: int
    exhaustion_change: int
    enemy_general_defeated: EnemyGeneral | None
    player_power: float
    enemy_power: float
    casualties: int
    succession_triggered: bool = False
    side_effects: list[SideEffect] = field(default_factory=list)

    @property
    def failed_steps(self) -> list[str]:
        return [effect.step for effect in self.side_effects if not effect.ok]


class ConquestService:
    """Resolve territory assaults and drive their consequences."""

    def __init__(
        self,
        store: JsonDocumentStore,
        power: IPowerService,
        loyalty: ILoyaltyService,
        succession: ISuccessionService,
        timeline: ITimelineService,
        campaigns: ICampaignService,
        *,
        locks: KeyedLocks | None = None,
        rules: RulesConfig = DEFAULT_RULES,
    ):
        self.store = store
        self.power = power
        self.loyalty = loyalty
        self.succession = succession
        self.timeline = timeline
        self.campaigns = campaigns
        self.locks = locks or KeyedLocks()
        self.rules = rules

    def attack_territory(self, player_id: PlayerID, territory_id: TerritoryID) -> ConquestResult:
        """Assault a territory on behalf of a player.

        Requests sharing a player or a territory are serialized.

        Args:
            player_id: The attacking player
            territory_id: The territory under assault

        Returns:
            ConquestResult with the primary outcome and one SideEffect per
            cascade step that ran

        Raises:
            EntityNotFoundError: If the player or territory does not exist
            OwnershipConflictError: If the player's faction already owns the territory
        """
        with self.locks.hold(f"player:{player_id}", f"territory:{territory_id}"):
            return self._attack(player_id, territory_id)

    def _attack(self, player_id: PlayerID, territory_id: TerritoryID) -> ConquestResult:
        player = self.store.require(Player, player_id)
        territory = self.store.require(Territory, territory_id)
        if not is_capturable(territory, player.faction_id):
            raise OwnershipConflictError("You already own this territory")
        generals = self.store.find(
            EnemyGeneral, lambda g: g.territory_id == territory.id and g.alive
        )

        profile = self.power.build_profile(player)
        penalties = exhaustion_penalties(player.war_exhaustion, self.rules.exhaustion)
        player_power = profile.final_power * penalties.xp_multiplier
        enemy = calculate_enemy_power(
            enemy_base_power(territory, self.rules.opposition),
            territory.defense_rating,
            defender_contributors(generals),
        )
        outcome = resolve_outcome(player_power, enemy.final_power)
        casualties = calculate_casualties(player_power, enemy.final_power)

        exhaustion_change = calculate_exhaustion_delta(
            outcome, casualties, player.war_exhaustion, self.rules.exhaustion
        )
        player.war_exhaustion = apply_exhaustion_delta(
            player.war_exhaustion, exhaustion_change, self.rules.exhaustion
        )

        won = outcome == BattleOutcome.WON
        merit_bonus = 0
        leadership_gained = 0
        captured: Territory | None = None
        defeated: EnemyGeneral | None = None

        if won:
            capture = self.rules.capture
            merit_bonus = capture_merit_bonus(territory.strategic_value, capture)
            player.merit += merit_bonus
            leadership_gained += capture.leadership_per_capture

            apply_capture(territory, resolve_capture(territory, player.faction_id, capture))
            self.store.save(territory)
            captured = territory

            defeated = pick_general_to_defeat(generals)
            if defeated is not None:
                defeated.alive = False
                self.store.save(defeated)
                leadership_gained += capture.leadership_per_general

            player.stats.leadership += leadership_gained
            logger.info(
                "player %s captured territory %s (merit +%d)", player.id, territory.id, merit_bonus
            )

        self.store.save(player)

        result = ConquestResult(
            outcome=outcome,
            territory=captured,
            merit_bonus=merit_bonus,
            leadership_gained=leadership_gained,
            exhaustion_change=exhaustion_change,
            enemy_general_defeated=defeated,
            player_power=round(player_power, 2),
            enemy_power=enemy.final_power,
            casualties=casualties,
        )

        if won:
            legendary = defeated is not None and defeated.legendary
            result.side_effects.append(
                self._best_effort(
                    "timeline",
                    player.id,
                    lambda: self._check_timeline(player, legendary),
                )
            )
            result.side_effects.append(
                self._best_effort(
                    "campaign",
                    player.id,
                    lambda: self._record_campaign(player, territory, defeated),
                )
            )

        event = LoyaltyEvent.BATTLE_VICTORY if won else LoyaltyEvent.BATTLE_DEFEAT
        result.side_effects.append(
            self._best_effort(
                "loyalty",
                player.id,
                lambda: {"updated": self.loyalty.apply_event(player.id, event)},
            )
        )

        if (
            not won
            and not player.succession_pending
            and self.succession.resolve_death_condition(player.war_exhaustion, True)
        ):
            effect = self._best_effort(
                "succession",
                player.id,
                lambda: {"triggered": self.succession.trigger_death(player)},
            )
            result.side_effects.append(effect)
            result.succession_triggered = effect.ok and bool(effect.detail.get("triggered"))

        return result

    def _check_timeline(self, player: Player, legendary: bool) -> dict[str, Any]:
        report = self.timeline.check_and_apply_divergence(
            player.dynasty_id, player.faction_id, killed_general_was_legendary=legendary
        )
        return {
            "diverged": report.diverged,
            "trigger": report.trigger,
            "timeline": report.timeline,
            "detail": report.detail,
        }

    def _record_campaign(
        self, player: Player, territory: Territory, defeated: EnemyGeneral | None
    ) -> dict[str, Any]:
        progress = self.campaigns.record_progress(
            player.id, territory.id, defeated.name if defeated is not None else None
        )
        if progress is None:
            return {"campaign_id": None}
        return {"campaign_id": progress.id, "status": progress.status}

    @staticmethod
    def _best_effort(
        step: str, player_id: PlayerID, fn: Callable[[], dict[str, Any]]
    ) -> SideEffect:
        try:
            detail = fn()
        except Exception as exc:
            logger.warning("%s step failed for player %s: %s", step, player_id, exc)
            return SideEffect(step=step, ok=False, error=str(exc) or type(exc).__name__)
        return SideEffect(step=step, ok=True, detail=detail)
