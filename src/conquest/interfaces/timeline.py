"""Timeline Service Protocol Interface."""

from typing import Protocol

from conquest.domain.enums import DivergenceTrigger
from conquest.domain.models import DynastyID, FactionID
from conquest.domain.timeline import DivergenceReport, DivergenceSnapshot, DivergentWorld


class ITimelineService(Protocol):
    """Protocol defining timeline divergence checks and the world mutation they cause."""

    def check_divergence(self, snapshot: DivergenceSnapshot) -> DivergenceTrigger | None:
        """Return the first matching trigger, or ``None``."""
        ...

    def describe_world(self, trigger: DivergenceTrigger) -> DivergentWorld:
        """Describe the world mutation a trigger causes."""
        ...

    def check_and_apply_divergence(
        self,
        dynasty_id: DynastyID,
        faction_id: FactionID,
        *,
        killed_general_was_legendary: bool = False,
    ) -> DivergenceReport:
        """Snapshot the world, check triggers and persist the mutation if one fires.

        Args:
            dynasty_id: Dynasty whose timeline is checked
            faction_id: Faction counted as player-controlled on the map
            killed_general_was_legendary: Whether a legendary general just fell

        Returns:
            DivergenceReport describing the (possibly unchanged) timeline
        """
        ...

    def divergence_status(self, dynasty_id: DynastyID) -> DivergenceReport:
        ...
