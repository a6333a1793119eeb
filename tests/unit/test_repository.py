"""Tests for the JSON document store."""

from __future__ import annotations

import threading
from datetime import UTC, datetime

import pytest

from conquest.domain import models as dm
from conquest.domain.enums import BattleStatus, CharacterRole
from conquest.errors import EntityNotFoundError, StaleWriteError
from conquest.repository import JsonDocumentStore


def _player(pid: str = "p1") -> dm.Player:
    return dm.Player(
        id=dm.PlayerID(pid),
        username=f"user-{pid}",
        dynasty_id=dm.DynastyID("d1"),
        faction_id=dm.FactionID("shu"),
    )


def test_save_and_load_document(store):
    player = _player()
    player.stats.strength = 9

    saved = store.save(player)
    assert saved.version == 1

    loaded = store.require(dm.Player, dm.PlayerID("p1"))
    assert loaded == player
    assert (store.base_path / "players" / "p1.json").exists()


def test_enums_and_datetimes_survive(store):
    record = dm.BattleRecord(
        id=dm.BattleID("b1"),
        player_id=dm.PlayerID("p1"),
        template_id=dm.TemplateID("skirmish"),
        enemy_power=20.0,
        status=BattleStatus.WON,
        started_at=datetime(2025, 1, 1, tzinfo=UTC),
    )
    store.save(record)

    loaded = store.require(dm.BattleRecord, dm.BattleID("b1"))
    assert loaded.status == BattleStatus.WON
    assert loaded.started_at == datetime(2025, 1, 1, tzinfo=UTC)


def test_missing_document(store):
    assert store.get(dm.Player, "ghost") is None
    with pytest.raises(EntityNotFoundError, match="Player not found"):
        store.require(dm.Player, "ghost")


def test_find_filters_and_orders(store):
    for cid, role in (("c2", CharacterRole.OFFICER), ("c1", CharacterRole.HEIR)):
        store.save(
            dm.Character(id=dm.CharacterID(cid), player_id=dm.PlayerID("p1"), name=cid, role=role)
        )

    assert [c.id for c in store.find(dm.Character)] == ["c1", "c2"]
    heir = store.find_one(dm.Character, lambda c: c.role == CharacterRole.HEIR)
    assert heir is not None and heir.id == "c1"
    assert store.find(dm.Territory) == []


def test_stale_copy_cannot_overwrite(store):
    store.save(_player())
    first = store.require(dm.Player, "p1")
    second = store.require(dm.Player, "p1")

    first.merit = 10
    store.save(first)

    second.merit = 99
    with pytest.raises(StaleWriteError) as excinfo:
        store.save(second)
    assert (excinfo.value.expected, excinfo.value.found) == (1, 2)
    assert store.require(dm.Player, "p1").merit == 10


def test_new_document_with_taken_id_is_stale(store):
    store.save(_player())
    with pytest.raises(StaleWriteError):
        store.save(_player())


def test_delete(tmp_path):
    store = JsonDocumentStore(tmp_path)
    store.save(_player())
    store.delete(dm.Player, "p1")
    store.delete(dm.Player, "p1")
    assert store.get(dm.Player, "p1") is None


def _territory() -> dm.Territory:
    return dm.Territory(
        id=dm.TerritoryID("t1"),
        name="Jing Province",
        region="south",
        owner_faction_id=dm.FactionID("liu-biao"),
        connected_territory_ids=[dm.TerritoryID(f"t{n}") for n in range(2, 40)],
    )


def test_reads_never_see_a_partial_write(store):
    territory = store.save(_territory())
    stop = threading.Event()
    writer_errors: list[Exception] = []

    def writer():
        try:
            while not stop.is_set():
                territory.defense_rating = (territory.defense_rating + 1) % 50
                store.save(territory)
        except Exception as exc:  # surfaced through the assertion below
            writer_errors.append(exc)

    thread = threading.Thread(target=writer)
    thread.start()
    try:
        for _ in range(1000):
            (loaded,) = store.find(dm.Territory)
            assert loaded.name == "Jing Province"
            assert store.require(dm.Territory, "t1").region == "south"
    finally:
        stop.set()
        thread.join()

    assert writer_errors == []
    assert store.require(dm.Territory, "t1").version == territory.version


def test_no_temporary_files_are_left_behind(store):
    player = store.save(_player())
    player.merit = 5
    store.save(player)

    assert sorted(p.name for p in (store.base_path / "players").iterdir()) == ["p1.json"]


def test_two_stores_on_one_directory_read_consistently(tmp_path):
    first = JsonDocumentStore(tmp_path)
    second = JsonDocumentStore(tmp_path)
    territory = first.save(_territory())
    stop = threading.Event()

    def writer():
        while not stop.is_set():
            territory.defense_rating = (territory.defense_rating + 1) % 50
            first.save(territory)

    thread = threading.Thread(target=writer)
    thread.start()
    try:
        for _ in range(500):
            assert second.require(dm.Territory, "t1").name == "Jing Province"
    finally:
        stop.set()
        thread.join()
