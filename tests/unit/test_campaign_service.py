"""Tests for CampaignService."""

from __future__ import annotations

import pytest

from conquest.domain import models as dm
from conquest.domain.enums import CampaignStatus
from conquest.errors import EntityNotFoundError, PreconditionError
from conquest.services import CampaignService


@pytest.fixture
def campaigns(store):
    store.save(
        dm.Player(
            id=dm.PlayerID("p1"),
            username="cao",
            dynasty_id=dm.DynastyID("wei"),
            faction_id=dm.FactionID("wei"),
        )
    )
    store.save(
        dm.CampaignDefinition(
            id=dm.CampaignID("guandu"),
            name="Battle of Guandu",
            dynasty_id=dm.DynastyID("wei"),
            territories_required=2,
            generals_required=1,
        )
    )
    for tid, name in (("t1", "Baima"), ("t2", "Wuchao")):
        store.save(
            dm.Territory(
                id=dm.TerritoryID(tid),
                name=name,
                region="north",
                owner_faction_id=dm.FactionID("yuan"),
            )
        )
    return CampaignService(store)


def test_start_and_view(campaigns):
    started = campaigns.start_campaign(dm.PlayerID("p1"), dm.CampaignID("guandu"))
    assert started.status == CampaignStatus.ACTIVE
    assert started.started_at is not None

    view = campaigns.get_active_campaign(dm.PlayerID("p1"))
    assert view.campaign.id == started.id
    assert view.definition.name == "Battle of Guandu"
    assert (view.progress.territories_remaining, view.progress.generals_remaining) == (2, 1)


def test_only_one_active_campaign(campaigns):
    campaigns.start_campaign(dm.PlayerID("p1"), dm.CampaignID("guandu"))
    with pytest.raises(PreconditionError, match="already have an active campaign"):
        campaigns.start_campaign(dm.PlayerID("p1"), dm.CampaignID("guandu"))


def test_start_requires_known_player_and_campaign(campaigns):
    with pytest.raises(EntityNotFoundError, match="Player not found"):
        campaigns.start_campaign(dm.PlayerID("ghost"), dm.CampaignID("guandu"))
    with pytest.raises(EntityNotFoundError, match="CampaignDefinition not found"):
        campaigns.start_campaign(dm.PlayerID("p1"), dm.CampaignID("chibi"))


def test_no_active_campaign(campaigns):
    assert campaigns.record_progress(dm.PlayerID("p1"), dm.TerritoryID("t1")) is None
    with pytest.raises(EntityNotFoundError, match="Active campaign not found"):
        campaigns.get_active_campaign(dm.PlayerID("p1"))


def test_progress_until_victory(campaigns):
    campaigns.start_campaign(dm.PlayerID("p1"), dm.CampaignID("guandu"))

    first = campaigns.record_progress(dm.PlayerID("p1"), dm.TerritoryID("t1"), "Yan Liang (enemy)")
    assert first.status == CampaignStatus.ACTIVE

    view = campaigns.get_active_campaign(dm.PlayerID("p1"))
    assert view.captured_territory_names == ["Baima"]
    assert view.progress.generals_defeated_log == ["Yan Liang"]

    # recapturing counts once
    campaigns.record_progress(dm.PlayerID("p1"), dm.TerritoryID("t1"))
    won = campaigns.record_progress(dm.PlayerID("p1"), dm.TerritoryID("t2"))

    assert won.territories_captured == ["t1", "t2"]
    assert won.status == CampaignStatus.WON
    assert won.completed_at is not None

    with pytest.raises(EntityNotFoundError):
        campaigns.get_active_campaign(dm.PlayerID("p1"))
    # a finished campaign frees the slot for a new one
    campaigns.start_campaign(dm.PlayerID("p1"), dm.CampaignID("guandu"))
