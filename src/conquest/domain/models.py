"""Dataclasses describing every persisted conquest entity.

Each entity is stored as an independent document.  The ``collection`` class
variable names the document collection and ``version`` backs the store's
conditional update, so two writers that loaded the same revision cannot both
win.  Nothing here touches storage; the repository adapter handles that.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, NewType

from .enums import (
    BattleStatus,
    CampaignStatus,
    CharacterRole,
    Formation,
    InjuryType,
    ItemRarity,
    TimelineType,
)

# --- Strongly typed identifiers -------------------------------------------------

PlayerID = NewType("PlayerID", str)
FactionID = NewType("FactionID", str)
DynastyID = NewType("DynastyID", str)
TerritoryID = NewType("TerritoryID", str)
EnemyGeneralID = NewType("EnemyGeneralID", str)
CharacterID = NewType("CharacterID", str)
OfficerID = NewType("OfficerID", str)
ItemID = NewType("ItemID", str)
InjuryID = NewType("InjuryID", str)
TemplateID = NewType("TemplateID", str)
BattleID = NewType("BattleID", str)
CampaignID = NewType("CampaignID", str)
PlayerCampaignID = NewType("PlayerCampaignID", str)

# Partial stat maps (equipment bonuses, injury penalties, growth).
StatModifiers = dict[str, int]


# --- Value objects --------------------------------------------------------------


@dataclass(slots=True)
class BaseStats:
    """The five base attributes of a commander."""

    strength: int = 5
    defense: int = 5
    strategy: int = 5
    speed: int = 5
    leadership: int = 1


@dataclass(slots=True)
class InventoryEntry:
    item_id: ItemID
    equipped: bool = False


# --- Documents ------------------------------------------------------------------


@dataclass(slots=True)
class Player:
    """The player's commander and the gauges the engine mutates."""

    collection: ClassVar[str] = "players"

    id: PlayerID
    username: str
    dynasty_id: DynastyID
    faction_id: FactionID
    stats: BaseStats = field(default_factory=BaseStats)
    level: int = 1
    experience: int = 0
    merit: int = 0
    gold: int = 100
    is_alive: bool = True
    war_exhaustion: int = 0
    active_character_id: CharacterID | None = None
    political_turns: int = 3
    succession_pending: bool = False
    version: int = 0


@dataclass(slots=True)
class Territory:
    collection: ClassVar[str] = "territories"

    id: TerritoryID
    name: str
    region: str
    owner_faction_id: FactionID
    strategic_value: int = 10
    defense_rating: int = 10
    connected_territory_ids: list[TerritoryID] = field(default_factory=list)
    version: int = 0


@dataclass(slots=True)
class EnemyGeneral:
    """Defending general stationed in a territory."""

    collection: ClassVar[str] = "enemy_generals"

    id: EnemyGeneralID
    name: str
    faction_id: FactionID
    territory_id: TerritoryID
    level: int = 1
    power_multiplier: float = 1.1
    alive: bool = True
    can_retreat: bool = False
    legendary: bool = False
    version: int = 0


@dataclass(slots=True)
class Character:
    """Member of the player's dynasty (primary, heir, officer or advisor)."""

    collection: ClassVar[str] = "characters"

    id: CharacterID
    player_id: PlayerID
    name: str
    role: CharacterRole = CharacterRole.OFFICER
    loyalty: int = 50
    ambition: int = 50
    stats: BaseStats = field(default_factory=BaseStats)
    is_alive: bool = True
    version: int = 0


@dataclass(slots=True)
class Officer:
    """Recruited general who can be deployed alongside the player."""

    collection: ClassVar[str] = "officers"

    id: OfficerID
    player_id: PlayerID
    name: str
    power_multiplier: float = 1.0
    deployed: bool = False
    alive: bool = True
    relationship: int = 0
    version: int = 0


@dataclass(slots=True)
class PlayerArmy:
    collection: ClassVar[str] = "armies"

    id: str
    player_id: PlayerID
    troop_count: int = 0
    morale: int = 50
    formation: Formation = Formation.LINE
    troop_type: str = "infantry"
    version: int = 0


@dataclass(slots=True)
class Item:
    collection: ClassVar[str] = "items"

    id: ItemID
    name: str
    rarity: ItemRarity
    stat_bonus: StatModifiers = field(default_factory=dict)
    version: int = 0


@dataclass(slots=True)
class Inventory:
    collection: ClassVar[str] = "inventories"

    id: str
    player_id: PlayerID
    items: list[InventoryEntry] = field(default_factory=list)
    version: int = 0


@dataclass(slots=True)
class Injury:
    collection: ClassVar[str] = "injuries"

    id: InjuryID
    player_id: PlayerID
    type: InjuryType
    stat_penalty: StatModifiers
    duration_battles: int
    battles_remaining: int
    version: int = 0


@dataclass(slots=True)
class Legacy:
    """Permanent cross-playthrough prestige."""

    collection: ClassVar[str] = "legacies"

    id: str
    player_id: PlayerID
    dynasties_completed: int = 0
    power_multiplier: float = 1.0
    version: int = 0


@dataclass(slots=True)
class BattleTemplate:
    collection: ClassVar[str] = "battle_templates"

    id: TemplateID
    name: str
    enemy_power: float
    merit_reward: int
    exp_reward: int
    difficulty: int = 1
    version: int = 0


@dataclass(slots=True)
class BattleRecord:
    collection: ClassVar[str] = "battles"

    id: BattleID
    player_id: PlayerID
    template_id: TemplateID
    enemy_power: float
    status: BattleStatus
    merit_gained: int = 0
    exp_gained: int = 0
    casualties: int = 0
    started_at: datetime | None = None
    ended_at: datetime | None = None
    version: int = 0


@dataclass(slots=True)
class CampaignDefinition:
    collection: ClassVar[str] = "campaigns"

    id: CampaignID
    name: str
    dynasty_id: DynastyID
    territories_required: int
    generals_required: int
    version: int = 0


@dataclass(slots=True)
class PlayerCampaign:
    """A player's progress through a campaign definition."""

    collection: ClassVar[str] = "player_campaigns"

    id: PlayerCampaignID
    player_id: PlayerID
    campaign_id: CampaignID
    territories_captured: list[TerritoryID] = field(default_factory=list)
    generals_defeated: int = 0
    generals_defeated_log: list[str] = field(default_factory=list)
    status: CampaignStatus = CampaignStatus.ACTIVE
    started_at: datetime | None = None
    completed_at: datetime | None = None
    version: int = 0


@dataclass(slots=True)
class Dynasty:
    collection: ClassVar[str] = "dynasties"

    id: DynastyID
    name: str
    timeline: TimelineType = TimelineType.HISTORICAL
    version: int = 0


@dataclass(slots=True)
class CourtState:
    """Political standing of a dynasty; one document per dynasty."""

    collection: ClassVar[str] = "courts"

    id: str
    dynasty_id: DynastyID
    stability: int = 100
    legitimacy: int = 50
    morale: int = 50
    corruption: int = 0
    last_action: str | None = None
    version: int = 0


@dataclass(slots=True)
class AiFaction:
    collection: ClassVar[str] = "ai_factions"

    id: str
    faction_id: FactionID
    aggression: int
    expansion_rate: int = 1
    preferred_regions: list[str] = field(default_factory=list)
    version: int = 0
