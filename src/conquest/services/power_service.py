"""Power Service for the conquest engine.

Loads everything a player brings to a fight from the document store and
hands it to the pure power composition rules.
"""

from conquest.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from conquest.domain.court import battle_power_modifier
from conquest.domain.injury import sum_injury_penalties
from conquest.domain.models import (
    CourtState,
    Injury,
    Inventory,
    Item,
    Legacy,
    Officer,
    Player,
    PlayerArmy,
    StatModifiers,
)
from conquest.domain.power import (
    ArmyState,
    MultiplierContributor,
    PowerContext,
    PowerProfile,
    calculate_final_power,
)
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.domain.stats import merge_modifiers
from conquest.domain.synergy import SynergyPair, calculate_synergy_bonus
from conquest.repository import JsonDocumentStore


class PowerService:
    """Assemble a :class:`PowerContext` for a player and compose it."""

    def __init__(
        self,
        store: JsonDocumentStore,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        rules: RulesConfig = DEFAULT_RULES,
    ):
        self.store = store
        self.config = config
        self.rules = rules

    def equipment_bonuses(self, player: Player) -> StatModifiers:
        inventory = self.store.find_one(Inventory, lambda inv: inv.player_id == player.id)
        if inventory is None:
            return {}
        bonuses = []
        for entry in inventory.items:
            if not entry.equipped:
                continue
            item = self.store.get(Item, entry.item_id)
            if item is not None:
                bonuses.append(item.stat_bonus)
        return merge_modifiers(bonuses)

    def injury_penalties(self, player: Player) -> StatModifiers:
        injuries = self.store.find(Injury, lambda i: i.player_id == player.id)
        return sum_injury_penalties(injuries)

    def deployed_officers(self, player: Player) -> list[Officer]:
        return self.store.find(Officer, lambda o: o.player_id == player.id and o.deployed)

    def active_synergies(self, player: Player) -> list[SynergyPair]:
        names = [o.name for o in self.deployed_officers(player) if o.alive]
        return calculate_synergy_bonus(names)[1]

    def court_modifier(self, player: Player) -> float:
        if not self.config.apply_court_power_modifier:
            return 1.0
        court = self.store.find_one(CourtState, lambda c: c.dynasty_id == player.dynasty_id)
        if court is None:
            return 1.0
        return battle_power_modifier(court, self.rules.court)

    def build_context(self, player: Player) -> PowerContext:
        """Gather every contribution to the player's power.

        Args:
            player: The player about to fight

        Returns:
            PowerContext with equipment, injuries, army, officers, synergy,
            legacy and (when enabled) court contributions filled in
        """
        officers = self.deployed_officers(player)
        synergy, _ = calculate_synergy_bonus(o.name for o in officers if o.alive)

        army_doc = self.store.find_one(PlayerArmy, lambda a: a.player_id == player.id)
        army = (
            ArmyState(army_doc.troop_count, army_doc.morale, army_doc.formation)
            if army_doc is not None
            else None
        )

        legacy = self.store.find_one(Legacy, lambda lg: lg.player_id == player.id)
        legacy_multiplier = max(1.0, legacy.power_multiplier) if legacy is not None else 1.0

        return PowerContext(
            stats=player.stats,
            level=player.level,
            equipment_bonuses=self.equipment_bonuses(player),
            injury_penalties=self.injury_penalties(player),
            army=army,
            officer_multipliers=[
                MultiplierContributor(o.power_multiplier, alive=o.alive) for o in officers
            ],
            synergy_multiplier=synergy,
            legacy_multiplier=legacy_multiplier,
            court_modifier=self.court_modifier(player),
        )

    def build_profile(self, player: Player) -> PowerProfile:
        return calculate_final_power(self.build_context(player), self.rules.power)
