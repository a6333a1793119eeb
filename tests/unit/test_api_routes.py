"""Integration tests for the FastAPI layer."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from conquest.api.app import create_app
from conquest.api.runtime import ApiState
from conquest.config import Settings
from conquest.domain import models as dm
from conquest.domain.enums import CharacterRole
from conquest.repository import JsonDocumentStore


def _make_app(tmp_path):
    def factory() -> ApiState:
        return ApiState(settings=Settings(data_dir=tmp_path))

    app = create_app(state_factory=factory)
    transport = ASGITransport(app=app)
    return app, transport


def _seed(tmp_path, *, exhaustion: int = 0, pending: bool = False) -> None:
    store = JsonDocumentStore(tmp_path)
    store.save(dm.Dynasty(id=dm.DynastyID("han"), name="Han"))
    store.save(dm.CourtState(id="court-han", dynasty_id=dm.DynastyID("han")))
    store.save(
        dm.Player(
            id=dm.PlayerID("p1"),
            username="liu",
            dynasty_id=dm.DynastyID("han"),
            faction_id=dm.FactionID("shu"),
            war_exhaustion=exhaustion,
            active_character_id=dm.CharacterID("liu-bei"),
            succession_pending=pending,
        )
    )
    store.save(
        dm.Character(
            id=dm.CharacterID("liu-bei"),
            player_id=dm.PlayerID("p1"),
            name="Liu Bei",
            role=CharacterRole.MAIN,
            is_alive=not pending,
        )
    )
    store.save(
        dm.Character(
            id=dm.CharacterID("liu-shan"),
            player_id=dm.PlayerID("p1"),
            name="Liu Shan",
            role=CharacterRole.HEIR,
        )
    )
    for tid, name, value in (("jing", "Jing Province", 10), ("yi", "Yi Province", 500)):
        store.save(
            dm.Territory(
                id=dm.TerritoryID(tid),
                name=name,
                region="south",
                owner_faction_id=dm.FactionID("liu-biao"),
                strategic_value=value,
                defense_rating=0,
            )
        )
    store.save(
        dm.BattleTemplate(
            id=dm.TemplateID("bandits"),
            name="Bandits",
            enemy_power=20.0,
            merit_reward=30,
            exp_reward=40,
        )
    )
    store.save(
        dm.CampaignDefinition(
            id=dm.CampaignID("southern"),
            name="Southern Campaign",
            dynasty_id=dm.DynastyID("han"),
            territories_required=1,
            generals_required=0,
        )
    )


@pytest.mark.asyncio
async def test_health_and_world(tmp_path):
    _seed(tmp_path)
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "rules_version": "1.0",
            "court_power_modifier": False,
        }

        response = await client.get("/world")
        assert response.status_code == 200
        territories = {t["id"]: t for t in response.json()}
        assert set(territories) == {"jing", "yi"}
        assert territories["jing"]["enemy_power"] == 10.0
        assert territories["jing"]["primary_general"] is None


@pytest.mark.asyncio
async def test_battle_endpoint(tmp_path):
    _seed(tmp_path)
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.post(
            "/battles", json={"player_id": "p1", "template_id": "bandits"}
        )
        assert response.status_code == 201
        payload = response.json()
        assert payload["battle"]["status"] == "won"
        assert payload["final_power"] == pytest.approx(25.7)
        assert payload["player"]["merit"] == 30
        assert payload["power_breakdown"]["base_power"] == pytest.approx(25.7)

        response = await client.post(
            "/battles", json={"player_id": "p1", "template_id": "dragons"}
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "BattleTemplate not found"

        response = await client.post("/battles", json={"player_id": "", "template_id": "x"})
        assert response.status_code == 422


@pytest.mark.asyncio
async def test_attack_and_campaign_via_api(tmp_path):
    _seed(tmp_path)
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.get("/players/p1/campaign")
        assert response.status_code == 404

        response = await client.post("/players/p1/campaign", json={"campaign_id": "southern"})
        assert response.status_code == 201
        assert response.json()["territories_remaining"] == 1

        response = await client.post("/players/p1/campaign", json={"campaign_id": "southern"})
        assert response.status_code == 400

        response = await client.post("/territories/jing/attack", json={"player_id": "p1"})
        assert response.status_code == 200
        result = response.json()
        assert result["outcome"] == "won"
        assert result["merit_bonus"] == 50
        assert result["territory"]["owner_faction_id"] == "shu"
        assert [e["step"] for e in result["side_effects"]] == ["timeline", "campaign", "loyalty"]
        assert all(e["ok"] for e in result["side_effects"])
        campaign = result["side_effects"][1]["detail"]
        assert campaign["status"] == "won"

        response = await client.post("/territories/jing/attack", json={"player_id": "p1"})
        assert response.status_code == 409
        assert response.json()["detail"] == "You already own this territory"

        response = await client.get("/dynasties/han/timeline")
        assert response.status_code == 200
        assert response.json()["diverged"] is False

    store = JsonDocumentStore(tmp_path)
    assert store.require(dm.Territory, "jing").defense_rating == 1


@pytest.mark.asyncio
async def test_failed_assault_and_succession(tmp_path):
    _seed(tmp_path, exhaustion=95)
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.post("/territories/yi/attack", json={"player_id": "p1"})
        assert response.status_code == 200
        result = response.json()
        assert result["outcome"] == "lost"
        assert result["territory"] is None
        assert result["succession_triggered"] is True

        response = await client.get("/players/p1/succession")
        assert response.status_code == 200
        state = response.json()
        assert state["pending"] is True
        assert state["deceased_name"] == "Liu Bei"
        assert [c["id"] for c in state["candidates"]] == ["liu-shan"]

        response = await client.post(
            "/players/p1/succession/confirm", json={"successor_id": "liu-bei"}
        )
        assert response.status_code == 404

        response = await client.post(
            "/players/p1/succession/confirm", json={"successor_id": "liu-shan"}
        )
        assert response.status_code == 200
        confirmed = response.json()
        assert confirmed["successor"]["role"] == "main"
        assert confirmed["player"]["succession_pending"] is False
        assert confirmed["stability_delta"] == -10

        response = await client.post(
            "/players/p1/succession/confirm", json={"successor_id": "liu-shan"}
        )
        assert response.status_code == 400


@pytest.mark.asyncio
async def test_court_actions_spend_political_turns(tmp_path):
    _seed(tmp_path)
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.get("/players/p1/court")
        assert response.status_code == 200
        assert response.json()["political_turns_remaining"] == 3

        for expected_turns in (2, 1, 0):
            response = await client.post(
                "/players/p1/court/actions", json={"action": "negotiate"}
            )
            assert response.status_code == 200
            payload = response.json()
            assert payload["court"]["political_turns_remaining"] == expected_turns
            assert payload["deltas"]["legitimacy"] == 10

        assert payload["court"]["legitimacy"] == 80
        assert payload["court"]["last_action"] == "negotiate"

        response = await client.post("/players/p1/court/actions", json={"action": "negotiate"})
        assert response.status_code == 400
        assert response.json()["detail"] == "No political turns remaining"

        response = await client.post("/players/p1/court/actions", json={"action": "bribe"})
        assert response.status_code == 422

        response = await client.get("/players/ghost/court")
        assert response.status_code == 404


@pytest.mark.asyncio
async def test_loyalty_tick(tmp_path):
    _seed(tmp_path)
    store = JsonDocumentStore(tmp_path)
    store.save(
        dm.Character(
            id=dm.CharacterID("lu-bu"),
            player_id=dm.PlayerID("p1"),
            name="Lu Bu",
            role=CharacterRole.OFFICER,
            loyalty=31,
            ambition=95,
        )
    )
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.post("/players/p1/loyalty/tick")
        assert response.status_code == 200
        payload = response.json()
        assert payload["affected"] == {"liu-shan": 48, "lu-bu": 29}
        assert payload["betrayals"] == [
            {"character_id": "lu-bu", "character_name": "Lu Bu", "stability_delta": -15}
        ]

        response = await client.post("/players/ghost/loyalty/tick")
        assert response.status_code == 404

    store = JsonDocumentStore(tmp_path)
    assert store.require(dm.Character, "lu-bu").is_alive is False
    assert store.require(dm.CourtState, "court-han").stability == 85
