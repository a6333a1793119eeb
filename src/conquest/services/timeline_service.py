"""Timeline Service for the conquest engine."""

import logging

from conquest.domain.enums import DivergenceTrigger, TimelineType
from conquest.domain.models import AiFaction, CourtState, Dynasty, DynastyID, FactionID, Territory
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.domain.timeline import (
    DivergenceReport,
    DivergenceSnapshot,
    DivergentWorld,
    check_divergence,
    divergent_world,
)
from conquest.repository import JsonDocumentStore

logger = logging.getLogger(__name__)

SHADOW_FACTION_REGIONS = ["north", "central", "south"]


class TimelineService:
    """Check divergence triggers against the live world and apply the fallout."""

    def __init__(self, store: JsonDocumentStore, rules: RulesConfig = DEFAULT_RULES):
        self.store = store
        self.rules = rules

    def check_divergence(self, snapshot: DivergenceSnapshot) -> DivergenceTrigger | None:
        return check_divergence(snapshot, self.rules.timeline)

    def describe_world(self, trigger: DivergenceTrigger) -> DivergentWorld:
        return divergent_world(trigger)

    def snapshot(
        self, dynasty: Dynasty, faction_id: FactionID, killed_general_was_legendary: bool
    ) -> DivergenceSnapshot:
        territories = self.store.find(Territory)
        court = self.store.find_one(CourtState, lambda c: c.dynasty_id == dynasty.id)
        return DivergenceSnapshot(
            total_territories=len(territories),
            player_controlled_territories=sum(
                1 for t in territories if t.owner_faction_id == faction_id
            ),
            killed_general_was_legendary=killed_general_was_legendary,
            dynasty_stability=(
                court.stability if court is not None else self.rules.timeline.default_stability
            ),
            current_timeline=dynasty.timeline,
        )

    def check_and_apply_divergence(
        self,
        dynasty_id: DynastyID,
        faction_id: FactionID,
        *,
        killed_general_was_legendary: bool = False,
    ) -> DivergenceReport:
        """Flip the dynasty's timeline and raise a shadow faction if a trigger fires."""

        dynasty = self.store.require(Dynasty, dynasty_id)
        trigger = self.check_divergence(
            self.snapshot(dynasty, faction_id, killed_general_was_legendary)
        )
        if trigger is None:
            return DivergenceReport(
                diverged=False, timeline=dynasty.timeline, detail="History remains on course."
            )

        world = self.describe_world(trigger)
        dynasty.timeline = TimelineType.DIVERGENT
        self.store.save(dynasty)

        shadow_id = f"shadow-{dynasty_id}"
        if self.store.get(AiFaction, shadow_id) is None:
            self.store.save(
                AiFaction(
                    id=shadow_id,
                    faction_id=FactionID(shadow_id),
                    aggression=world.ai_faction_aggression,
                    preferred_regions=list(SHADOW_FACTION_REGIONS),
                )
            )

        logger.info("timeline diverged for dynasty %s via %s", dynasty_id, trigger)
        return DivergenceReport(
            diverged=True, timeline=TimelineType.DIVERGENT, detail=world.detail, trigger=trigger
        )

    def divergence_status(self, dynasty_id: DynastyID) -> DivergenceReport:
        dynasty = self.store.require(Dynasty, dynasty_id)
        if dynasty.timeline == TimelineType.DIVERGENT:
            return DivergenceReport(
                diverged=True,
                timeline=dynasty.timeline,
                detail="The timeline has diverged from history.",
            )
        return DivergenceReport(
            diverged=False,
            timeline=dynasty.timeline,
            detail="History remains on its original course.",
        )
