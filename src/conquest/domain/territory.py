"""Territory capture rules."""

from __future__ import annotations

from dataclasses import dataclass

from .models import FactionID, Territory, TerritoryID
from .rounding import round_half_up
from .rules_config import DEFAULT_RULES, CaptureRules


@dataclass(slots=True)
class TerritoryUpdate:
    territory_id: TerritoryID
    new_owner_faction_id: FactionID
    defense_rating: int


def is_capturable(territory: Territory, attacker_faction_id: FactionID) -> bool:
    return territory.owner_faction_id != attacker_faction_id


def capture_merit_bonus(
    strategic_value: float, rules: CaptureRules = DEFAULT_RULES.capture
) -> int:
    return round_half_up(strategic_value * rules.merit_per_strategic_value)


def resolve_capture(
    territory: Territory,
    new_owner: FactionID,
    rules: CaptureRules = DEFAULT_RULES.capture,
) -> TerritoryUpdate:
    """The routed garrison leaves 60% of the defenses standing, never less than 1."""

    return TerritoryUpdate(
        territory_id=territory.id,
        new_owner_faction_id=new_owner,
        defense_rating=max(
            rules.minimum_defense,
            round_half_up(territory.defense_rating * rules.defense_retained_fraction),
        ),
    )


def apply_capture(territory: Territory, update: TerritoryUpdate) -> None:
    territory.owner_faction_id = update.new_owner_faction_id
    territory.defense_rating = update.defense_rating
