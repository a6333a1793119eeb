"""Tests for TimelineService."""

from __future__ import annotations

import pytest

from conquest.domain import models as dm
from conquest.domain.enums import DivergenceTrigger, TimelineType
from conquest.errors import EntityNotFoundError
from conquest.services import TimelineService


def _seed(store, *, owned: int, total: int = 10) -> None:
    store.save(dm.Dynasty(id=dm.DynastyID("d1"), name="Han"))
    for index in range(total):
        owner = "shu" if index < owned else "wei"
        store.save(
            dm.Territory(
                id=dm.TerritoryID(f"t{index:02d}"),
                name=f"Territory {index}",
                region="central",
                owner_faction_id=dm.FactionID(owner),
            )
        )


def test_history_stays_on_course(store):
    _seed(store, owned=8)
    report = TimelineService(store).check_and_apply_divergence(
        dm.DynastyID("d1"), dm.FactionID("shu")
    )

    assert report.diverged is False
    assert report.timeline == TimelineType.HISTORICAL
    assert store.find(dm.AiFaction) == []


def test_dominance_spawns_shadow_faction_once(store):
    _seed(store, owned=9)
    service = TimelineService(store)

    report = service.check_and_apply_divergence(dm.DynastyID("d1"), dm.FactionID("shu"))

    assert report.diverged is True
    assert report.trigger == DivergenceTrigger.MAP_DOMINANCE
    shadow = store.require(dm.AiFaction, "shadow-d1")
    assert shadow.aggression == 90
    assert shadow.preferred_regions == ["north", "central", "south"]

    again = service.check_and_apply_divergence(dm.DynastyID("d1"), dm.FactionID("shu"))
    assert again.diverged is False
    assert again.timeline == TimelineType.DIVERGENT
    assert len(store.find(dm.AiFaction)) == 1


def test_legendary_kill(store):
    _seed(store, owned=1)
    report = TimelineService(store).check_and_apply_divergence(
        dm.DynastyID("d1"), dm.FactionID("shu"), killed_general_was_legendary=True
    )
    assert report.trigger == DivergenceTrigger.LEGENDARY_KILL
    assert store.require(dm.AiFaction, "shadow-d1").aggression == 80


def test_collapsing_court(store):
    _seed(store, owned=1)
    store.save(dm.CourtState(id="court-d1", dynasty_id=dm.DynastyID("d1"), stability=19))

    report = TimelineService(store).check_and_apply_divergence(
        dm.DynastyID("d1"), dm.FactionID("shu")
    )
    assert report.trigger == DivergenceTrigger.DYNASTY_COLLAPSE


def test_missing_court_counts_as_stable(store):
    _seed(store, owned=1)
    dynasty = store.require(dm.Dynasty, "d1")
    snapshot = TimelineService(store).snapshot(dynasty, dm.FactionID("shu"), False)

    assert snapshot.dynasty_stability == 100
    assert (snapshot.player_controlled_territories, snapshot.total_territories) == (1, 10)


def test_divergence_status(store):
    _seed(store, owned=0)
    service = TimelineService(store)
    assert service.divergence_status(dm.DynastyID("d1")).diverged is False

    dynasty = store.require(dm.Dynasty, "d1")
    dynasty.timeline = TimelineType.DIVERGENT
    store.save(dynasty)
    assert service.divergence_status(dm.DynastyID("d1")).diverged is True

    with pytest.raises(EntityNotFoundError):
        service.divergence_status(dm.DynastyID("jin"))
