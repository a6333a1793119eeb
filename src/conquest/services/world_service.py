"""World Service: read-only map views."""

from dataclasses import dataclass, field

from conquest.domain.models import EnemyGeneral, Territory, TerritoryID
from conquest.domain.opposition import (
    calculate_enemy_power,
    defender_contributors,
    enemy_base_power,
    pick_primary_general,
)
from conquest.domain.rules_config import DEFAULT_RULES, RulesConfig
from conquest.repository import JsonDocumentStore


@dataclass(slots=True)
class TerritoryView:
    territory: Territory
    defenders: list[EnemyGeneral] = field(default_factory=list)
    primary_general: EnemyGeneral | None = None
    enemy_power: float = 0.0


class WorldService:
    """Territories together with the generals still defending them."""

    def __init__(self, store: JsonDocumentStore, rules: RulesConfig = DEFAULT_RULES):
        self.store = store
        self.rules = rules

    def _view(self, territory: Territory, defenders: list[EnemyGeneral]) -> TerritoryView:
        enemy = calculate_enemy_power(
            enemy_base_power(territory, self.rules.opposition),
            territory.defense_rating,
            defender_contributors(defenders),
        )
        return TerritoryView(
            territory=territory,
            defenders=defenders,
            primary_general=pick_primary_general(defenders),
            enemy_power=enemy.final_power,
        )

    def get_world_map(self) -> list[TerritoryView]:
        living = self.store.find(EnemyGeneral, lambda g: g.alive)
        by_territory: dict[str, list[EnemyGeneral]] = {}
        for general in living:
            by_territory.setdefault(general.territory_id, []).append(general)
        return [
            self._view(territory, by_territory.get(territory.id, []))
            for territory in self.store.find(Territory)
        ]

    def get_territory(self, territory_id: TerritoryID) -> TerritoryView:
        territory = self.store.require(Territory, territory_id)
        defenders = self.store.find(
            EnemyGeneral, lambda g: g.territory_id == territory_id and g.alive
        )
        return self._view(territory, defenders)
