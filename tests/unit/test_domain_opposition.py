"""Unit tests for defender power."""

from __future__ import annotations

import pytest

from conquest.domain import models as dm
from conquest.domain import opposition
from conquest.domain.battle import calculate_casualties, resolve_outcome
from conquest.domain.enums import BattleOutcome
from conquest.domain.power import MultiplierContributor


def _general(gid: str, multiplier: float = 1.1, **kwargs) -> dm.EnemyGeneral:
    return dm.EnemyGeneral(
        id=dm.EnemyGeneralID(gid),
        name=f"{gid} (enemy)",
        faction_id=dm.FactionID("wu"),
        territory_id=dm.TerritoryID("t1"),
        power_multiplier=multiplier,
        **kwargs,
    )


def test_enemy_power_scales_by_defense_and_generals():
    enemy = opposition.calculate_enemy_power(100, 10, [MultiplierContributor(1.2)])

    assert enemy.defense_multiplier == pytest.approx(1.1)
    assert enemy.general_multiplier == pytest.approx(1.2)
    assert enemy.final_power == pytest.approx(132.0)


def test_dead_defenders_do_not_contribute():
    generals = [MultiplierContributor(1.5, alive=False), MultiplierContributor(1.2)]
    enemy = opposition.calculate_enemy_power(100, 10, generals)
    assert enemy.final_power == pytest.approx(132.0)


def test_no_defenders_leaves_base_times_defense():
    enemy = opposition.calculate_enemy_power(40, 0, [])
    assert enemy.general_multiplier == 1.0
    assert enemy.final_power == pytest.approx(40.0)


def test_stronger_attacker_wins_with_proportional_casualties():
    attacker = opposition.calculate_enemy_power(100, 10, [MultiplierContributor(1.2)])

    assert resolve_outcome(attacker.final_power, 100) == BattleOutcome.WON
    assert calculate_casualties(attacker.final_power, 100) == 24


def test_enemy_base_power_from_territory():
    territory = dm.Territory(
        id=dm.TerritoryID("t1"),
        name="Xiangyang",
        region="central",
        owner_faction_id=dm.FactionID("wu"),
        strategic_value=10,
        defense_rating=20,
    )
    assert opposition.enemy_base_power(territory) == pytest.approx(40.0)


def test_defender_contributors_carry_alive_flag():
    contributors = opposition.defender_contributors([_general("a"), _general("b", alive=False)])
    assert [c.alive for c in contributors] == [True, False]


def test_pick_general_to_defeat_skips_retreating_and_dead():
    generals = [
        _general("dead", alive=False),
        _general("runner", can_retreat=True),
        _general("stalwart"),
    ]
    assert opposition.pick_general_to_defeat(generals).id == "stalwart"


def test_pick_general_to_defeat_when_all_can_retreat():
    assert opposition.pick_general_to_defeat([_general("runner", can_retreat=True)]) is None


def test_pick_primary_general_prefers_strongest_living():
    generals = [_general("a", 1.1), _general("b", 1.4, alive=False), _general("c", 1.3)]
    assert opposition.pick_primary_general(generals).id == "c"
    assert opposition.pick_primary_general([]) is None
