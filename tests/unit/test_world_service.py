"""Tests for WorldService."""

from __future__ import annotations

import pytest

from conquest.domain import models as dm
from conquest.errors import EntityNotFoundError
from conquest.factory import create_world_service


def _seed(store) -> None:
    store.save(
        dm.Territory(
            id=dm.TerritoryID("hulao"),
            name="Hulao Gate",
            region="central",
            owner_faction_id=dm.FactionID("dong"),
            strategic_value=40,
            defense_rating=20,
        )
    )
    store.save(
        dm.Territory(
            id=dm.TerritoryID("luoyang"),
            name="Luoyang",
            region="central",
            owner_faction_id=dm.FactionID("dong"),
            strategic_value=100,
            defense_rating=0,
        )
    )
    for gid, multiplier, alive in (("lu-bu", 1.5, True), ("hua-xiong", 1.2, False)):
        store.save(
            dm.EnemyGeneral(
                id=dm.EnemyGeneralID(gid),
                name=gid,
                faction_id=dm.FactionID("dong"),
                territory_id=dm.TerritoryID("hulao"),
                power_multiplier=multiplier,
                alive=alive,
            )
        )


def test_world_map_lists_living_defenders(store):
    _seed(store)
    views = {view.territory.id: view for view in create_world_service(store).get_world_map()}

    hulao = views["hulao"]
    assert [g.id for g in hulao.defenders] == ["lu-bu"]
    assert hulao.primary_general.id == "lu-bu"
    # (20 * 1.5 + 40) * 1.2 * 1.5
    assert hulao.enemy_power == pytest.approx(126.0)

    assert views["luoyang"].defenders == []
    assert views["luoyang"].primary_general is None
    assert views["luoyang"].enemy_power == pytest.approx(100.0)


def test_single_territory(store):
    _seed(store)
    service = create_world_service(store)

    assert service.get_territory(dm.TerritoryID("hulao")).enemy_power == pytest.approx(126.0)
    with pytest.raises(EntityNotFoundError, match="Territory not found"):
        service.get_territory(dm.TerritoryID("xuchang"))
