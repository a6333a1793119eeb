"""Battle Service for the conquest engine.

Plain battles are fought against a template rather than a territory.  They
reuse the power composition of territory assaults but skip the conquest
cascade: the player is rewarded, their army's morale moves, officers grow
closer, injuries heal or are suffered, and a victory may drop an item.
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from conquest.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from conquest.domain.battle import (
    apply_level_up,
    calculate_casualties,
    calculate_rewards,
    morale_change,
    relationship_gain,
    resolve_outcome,
    roll_item_drop,
)
from conquest.domain.enums import BattleOutcome, BattleStatus
from conquest.domain.exhaustion import exhaustion_penalties
from conquest.domain.injury import active_injuries, roll_injury
from conquest.domain.models import (
    BattleID,
    BattleRecord,
    BattleTemplate,
    Injury,
    InjuryID,
    Inventory,
    InventoryEntry,
    Item,
    Officer,
    Player,
    PlayerArmy,
    PlayerID,
    TemplateID,
)
from conquest.domain.power import PowerProfile
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.domain.stats import apply_growth, stat_growth
from conquest.domain.synergy import SynergyPair
from conquest.interfaces import IPowerService
from conquest.repository import JsonDocumentStore
from conquest.utils.locks import KeyedLocks
from conquest.utils.rng import generate_seed, random_choice

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BattleReport:
    battle: BattleRecord
    player: Player
    power: PowerProfile
    dropped_item: Item | None = None
    new_injury: Injury | None = None
    morale_change: int | None = None
    active_synergies: list[SynergyPair] = field(default_factory=list)


class BattleService:
    """Resolve plain template battles."""

    def __init__(
        self,
        store: JsonDocumentStore,
        power: IPowerService,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        *,
        locks: KeyedLocks | None = None,
        rules: RulesConfig = DEFAULT_RULES,
    ):
        self.store = store
        self.power = power
        self.config = config
        self.locks = locks or KeyedLocks()
        self.rules = rules

    def fight(self, player_id: PlayerID, template_id: TemplateID) -> BattleReport:
        """Start and immediately resolve a battle against a template.

        Args:
            player_id: The player fighting
            template_id: The battle template to fight

        Returns:
            BattleReport with the resolved record, updated player and any drop

        Raises:
            EntityNotFoundError: If the player or template does not exist
        """
        with self.locks.hold(f"player:{player_id}"):
            return self._fight(player_id, template_id)

    def _fight(self, player_id: PlayerID, template_id: TemplateID) -> BattleReport:
        player = self.store.require(Player, player_id)
        template = self.store.require(BattleTemplate, template_id)
        now = datetime.now(UTC)

        history = self.store.find(BattleRecord, lambda b: b.player_id == player_id)
        for stale in history:
            if stale.status == BattleStatus.ONGOING:
                stale.status = BattleStatus.LOST
                stale.ended_at = now
                self.store.save(stale)
        sequence = len(history)

        injuries = active_injuries(self.store.find(Injury, lambda i: i.player_id == player_id))
        profile = self.power.build_profile(player)
        synergies = self.power.active_synergies(player)

        outcome = resolve_outcome(profile.final_power, template.enemy_power)
        casualties = calculate_casualties(profile.final_power, template.enemy_power)
        rewards = calculate_rewards(template, outcome, self.rules.rewards)
        won = outcome == BattleOutcome.WON

        battle = self.store.save(
            BattleRecord(
                id=BattleID(uuid4().hex),
                player_id=player_id,
                template_id=template_id,
                enemy_power=template.enemy_power,
                status=BattleStatus(outcome.value),
                merit_gained=rewards.merit_gained,
                exp_gained=rewards.exp_gained,
                casualties=casualties,
                started_at=now,
                ended_at=now,
            )
        )

        player.merit += rewards.merit_gained
        player.experience += rewards.exp_gained
        if won:
            player.gold += template.merit_reward
        apply_growth(player.stats, stat_growth(outcome))
        if apply_level_up(player, self.rules.rewards):
            logger.info("player %s reached level %d", player_id, player.level)
        self.store.save(player)

        penalties = exhaustion_penalties(player.war_exhaustion, self.rules.exhaustion)
        report = BattleReport(
            battle=battle, player=player, power=profile, active_synergies=synergies
        )

        army = self.store.find_one(PlayerArmy, lambda a: a.player_id == player_id)
        if army is not None:
            change = morale_change(outcome, penalties.morale_gain_multiplier, self.rules.rewards)
            army.morale = max(0, min(100, army.morale + change))
            self.store.save(army)
            report.morale_change = change

        if won:
            gain = relationship_gain(template.difficulty)
            for officer in self.store.find(Officer, lambda o: o.player_id == player_id):
                officer.relationship += gain
                self.store.save(officer)

        for injury in injuries:
            injury.battles_remaining -= 1
            self.store.save(injury)

        if won:
            report.dropped_item = self._roll_drop(player, template, sequence)
        else:
            report.new_injury = self._roll_injury(
                player, template, sequence, penalties.injury_chance_bonus
            )

        return report

    def _roll_injury(
        self, player: Player, template: BattleTemplate, sequence: int, bonus: float
    ) -> Injury | None:
        seed = generate_seed(player.id, sequence, "injury")
        definition = roll_injury(template.difficulty, seed, bonus)
        if definition is None:
            return None
        injury = Injury(
            id=InjuryID(uuid4().hex),
            player_id=player.id,
            type=definition.type,
            stat_penalty=dict(definition.stat_penalty),
            duration_battles=definition.duration_battles,
            battles_remaining=definition.duration_battles,
        )
        logger.info("player %s suffered %s", player.id, definition.type)
        return self.store.save(injury)

    def _roll_drop(self, player: Player, template: BattleTemplate, sequence: int) -> Item | None:
        seed = generate_seed(player.id, sequence, self.config.item_drop_seed_salt)
        drop = roll_item_drop(template.difficulty, seed)
        if not drop.dropped:
            return None
        pool = self.store.find(Item, lambda item: item.rarity == drop.rarity)
        if not pool:
            return None
        item = random_choice(f"{seed}:pick", pool)["choice"]

        inventory = self.store.find_one(Inventory, lambda inv: inv.player_id == player.id)
        if inventory is None:
            inventory = Inventory(id=f"inventory-{player.id}", player_id=player.id)
        inventory.items.append(InventoryEntry(item_id=item.id))
        self.store.save(inventory)
        return item
