"""Timeline divergence rules.

``historical`` moves to ``divergent`` once and never back.  Triggers are
checked in priority order and the first match wins.
"""

from __future__ import annotations

from dataclasses import dataclass

from .enums import DivergenceTrigger, TimelineType
from .rules_config import DEFAULT_RULES, TimelineRules


@dataclass(slots=True)
class DivergenceSnapshot:
    total_territories: int
    player_controlled_territories: int
    killed_general_was_legendary: bool
    dynasty_stability: int
    current_timeline: TimelineType


@dataclass(frozen=True, slots=True)
class DivergentWorld:
    detail: str
    ai_faction_aggression: int


DIVERGENT_WORLDS: dict[DivergenceTrigger, DivergentWorld] = {
    DivergenceTrigger.MAP_DOMINANCE: DivergentWorld(
        "Your overwhelming dominance has fractured history. "
        "A new challenger rises from the shadows.",
        90,
    ),
    DivergenceTrigger.LEGENDARY_KILL: DivergentWorld(
        "The death of a legend has shattered the historical timeline. Unknown forces gather.",
        80,
    ),
    DivergenceTrigger.DYNASTY_COLLAPSE: DivergentWorld(
        "Chaos consumes the dynasty. The old order falls and a new era is born from the ashes.",
        95,
    ),
}


def check_divergence(
    snapshot: DivergenceSnapshot, rules: TimelineRules = DEFAULT_RULES.timeline
) -> DivergenceTrigger | None:
    if snapshot.current_timeline == TimelineType.DIVERGENT:
        return None

    share = (
        snapshot.player_controlled_territories / snapshot.total_territories
        if snapshot.total_territories > 0
        else 0.0
    )
    if share > rules.map_dominance_share:
        return DivergenceTrigger.MAP_DOMINANCE
    if snapshot.killed_general_was_legendary:
        return DivergenceTrigger.LEGENDARY_KILL
    if snapshot.dynasty_stability < rules.collapse_stability:
        return DivergenceTrigger.DYNASTY_COLLAPSE
    return None


def divergent_world(trigger: DivergenceTrigger) -> DivergentWorld:
    return DIVERGENT_WORLDS[trigger]


@dataclass(slots=True)
class DivergenceReport:
    diverged: bool
    timeline: TimelineType
    detail: str
    trigger: DivergenceTrigger | None = None
