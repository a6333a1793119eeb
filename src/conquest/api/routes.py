"""HTTP routes for the conquest engine API."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from conquest.api.runtime import ApiState
from conquest.domain import models as dm
from conquest.domain.enums import CourtAction
from conquest.errors import (
    ConquestError,
    EntityNotFoundError,
    OwnershipConflictError,
    StaleWriteError,
)
from conquest.services import BattleReport, ConquestResult, CourtView, TerritoryView

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


def _http_error(exc: ConquestError) -> HTTPException:
    if isinstance(exc, EntityNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, (OwnershipConflictError, StaleWriteError)):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=str(exc))


class GeneralSummary(BaseModel):
    id: str
    name: str
    level: int
    power_multiplier: float
    can_retreat: bool
    legendary: bool


class TerritorySummary(BaseModel):
    id: str
    name: str
    region: str
    owner_faction_id: str
    strategic_value: int
    defense_rating: int
    connected_territory_ids: list[str]
    enemy_power: float = 0.0
    defenders: list[GeneralSummary] = Field(default_factory=list)
    primary_general: GeneralSummary | None = None


class PlayerSnapshot(BaseModel):
    id: str
    username: str
    level: int
    experience: int
    merit: int
    gold: int
    war_exhaustion: int
    stats: dict[str, int]
    succession_pending: bool


class SideEffectSummary(BaseModel):
    step: str
    ok: bool
    error: str | None
    detail: dict[str, Any]


class AttackRequest(BaseModel):
    player_id: str = Field(min_length=1)


class ConquestResponse(BaseModel):
    outcome: str
    territory: TerritorySummary | None
    merit_bonus: int
    leadership_gained: int
    exhaustion_change: int
    enemy_general_defeated: GeneralSummary | None
    player_power: float
    enemy_power: float
    casualties: int
    succession_triggered: bool
    side_effects: list[SideEffectSummary]


class BattleRequest(BaseModel):
    player_id: str = Field(min_length=1)
    template_id: str = Field(min_length=1)


class BattleSummary(BaseModel):
    id: str
    template_id: str
    status: str
    enemy_power: float
    merit_gained: int
    exp_gained: int
    casualties: int
    started_at: datetime | None
    ended_at: datetime | None


class ItemSummary(BaseModel):
    id: str
    name: str
    rarity: str
    stat_bonus: dict[str, int]


class BattleResponse(BaseModel):
    battle: BattleSummary
    player: PlayerSnapshot
    final_power: float
    power_breakdown: dict[str, float]
    dropped_item: ItemSummary | None
    new_injury: dict[str, Any] | None
    morale_change: int | None
    active_synergies: list[str]


class CharacterSummary(BaseModel):
    id: str
    name: str
    role: str
    loyalty: int
    ambition: int
    is_alive: bool


class SuccessionStateResponse(BaseModel):
    pending: bool
    deceased_name: str | None
    candidates: list[CharacterSummary]
    stability_delta: int
    morale_delta: int
    legitimacy_delta: int


class ConfirmSuccessionRequest(BaseModel):
    successor_id: str = Field(min_length=1)


class ConfirmSuccessionResponse(BaseModel):
    player: PlayerSnapshot
    successor: CharacterSummary
    stability_delta: int
    morale_delta: int
    legitimacy_delta: int


class StartCampaignRequest(BaseModel):
    campaign_id: str = Field(min_length=1)


class CampaignResponse(BaseModel):
    id: str
    campaign_id: str
    name: str
    status: str
    territories_captured: list[str]
    captured_territory_names: list[str]
    generals_defeated: int
    generals_defeated_log: list[str]
    territories_remaining: int
    generals_remaining: int


class CourtSummary(BaseModel):
    dynasty_id: str
    stability: int
    legitimacy: int
    morale: int
    corruption: int
    last_action: str | None
    political_turns_remaining: int


class CourtActionRequest(BaseModel):
    action: CourtAction


class CourtActionResponse(BaseModel):
    court: CourtSummary
    action: str
    detail: str
    deltas: dict[str, int]


class BetrayalSummary(BaseModel):
    character_id: str
    character_name: str
    stability_delta: int


class LoyaltyTickResponse(BaseModel):
    affected: dict[str, int]
    betrayals: list[BetrayalSummary]


class TimelineResponse(BaseModel):
    diverged: bool
    timeline: str
    detail: str


def _general(general: dm.EnemyGeneral | None) -> GeneralSummary | None:
    if general is None:
        return None
    return GeneralSummary(
        id=general.id,
        name=general.name,
        level=general.level,
        power_multiplier=general.power_multiplier,
        can_retreat=general.can_retreat,
        legendary=general.legendary,
    )


def _territory(territory: dm.Territory, view: TerritoryView | None = None) -> TerritorySummary:
    summary = TerritorySummary(
        id=territory.id,
        name=territory.name,
        region=territory.region,
        owner_faction_id=territory.owner_faction_id,
        strategic_value=territory.strategic_value,
        defense_rating=territory.defense_rating,
        connected_territory_ids=list(territory.connected_territory_ids),
    )
    if view is not None:
        summary.enemy_power = view.enemy_power
        summary.defenders = [_general(g) for g in view.defenders]
        summary.primary_general = _general(view.primary_general)
    return summary


def _player(player: dm.Player) -> PlayerSnapshot:
    return PlayerSnapshot(
        id=player.id,
        username=player.username,
        level=player.level,
        experience=player.experience,
        merit=player.merit,
        gold=player.gold,
        war_exhaustion=player.war_exhaustion,
        stats=asdict(player.stats),
        succession_pending=player.succession_pending,
    )


def _character(character: dm.Character) -> CharacterSummary:
    return CharacterSummary(
        id=character.id,
        name=character.name,
        role=str(character.role),
        loyalty=character.loyalty,
        ambition=character.ambition,
        is_alive=character.is_alive,
    )


def _conquest(result: ConquestResult) -> ConquestResponse:
    return ConquestResponse(
        outcome=str(result.outcome),
        territory=_territory(result.territory) if result.territory is not None else None,
        merit_bonus=result.merit_bonus,
        leadership_gained=result.leadership_gained,
        exhaustion_change=result.exhaustion_change,
        enemy_general_defeated=_general(result.enemy_general_defeated),
        player_power=result.player_power,
        enemy_power=result.enemy_power,
        casualties=result.casualties,
        succession_triggered=result.succession_triggered,
        side_effects=[
            SideEffectSummary(step=e.step, ok=e.ok, error=e.error, detail=e.detail)
            for e in result.side_effects
        ],
    )


def _battle(report: BattleReport) -> BattleResponse:
    battle = report.battle
    item = report.dropped_item
    return BattleResponse(
        battle=BattleSummary(
            id=battle.id,
            template_id=battle.template_id,
            status=str(battle.status),
            enemy_power=battle.enemy_power,
            merit_gained=battle.merit_gained,
            exp_gained=battle.exp_gained,
            casualties=battle.casualties,
            started_at=battle.started_at,
            ended_at=battle.ended_at,
        ),
        player=_player(report.player),
        final_power=report.power.final_power,
        power_breakdown=asdict(report.power),
        dropped_item=(
            ItemSummary(
                id=item.id, name=item.name, rarity=str(item.rarity), stat_bonus=item.stat_bonus
            )
            if item is not None
            else None
        ),
        new_injury=(
            {
                "type": report.new_injury.type.value,
                "stat_penalty": report.new_injury.stat_penalty,
                "battles_remaining": report.new_injury.battles_remaining,
            }
            if report.new_injury is not None
            else None
        ),
        morale_change=report.morale_change,
        active_synergies=[pair.name for pair in report.active_synergies],
    )


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "rules_version": state.settings.rules_version,
        "court_power_modifier": state.config.apply_court_power_modifier,
    }


@router.get("/world", response_model=list[TerritorySummary])
async def world_map(state: ApiStateDep) -> list[TerritorySummary]:
    return [_territory(view.territory, view) for view in state.world.get_world_map()]


@router.post("/battles", response_model=BattleResponse, status_code=status.HTTP_201_CREATED)
async def fight_battle(request: BattleRequest, state: ApiStateDep) -> BattleResponse:
    try:
        report = state.battles.fight(
            dm.PlayerID(request.player_id), dm.TemplateID(request.template_id)
        )
    except ConquestError as exc:
        raise _http_error(exc) from exc
    return _battle(report)


@router.post("/territories/{territory_id}/attack", response_model=ConquestResponse)
async def attack_territory(
    territory_id: str, request: AttackRequest, state: ApiStateDep
) -> ConquestResponse:
    try:
        result = state.conquest.attack_territory(
            dm.PlayerID(request.player_id), dm.TerritoryID(territory_id)
        )
    except ConquestError as exc:
        raise _http_error(exc) from exc
    return _conquest(result)


@router.get("/players/{player_id}/succession", response_model=SuccessionStateResponse)
async def succession_state(player_id: str, state: ApiStateDep) -> SuccessionStateResponse:
    try:
        succession = state.succession.get_succession_state(dm.PlayerID(player_id))
    except ConquestError as exc:
        raise _http_error(exc) from exc
    return SuccessionStateResponse(
        pending=succession.pending,
        deceased_name=succession.deceased_name,
        candidates=[_character(c) for c in succession.candidates],
        stability_delta=succession.stability_delta,
        morale_delta=succession.morale_delta,
        legitimacy_delta=succession.legitimacy_delta,
    )


@router.post("/players/{player_id}/succession/confirm", response_model=ConfirmSuccessionResponse)
async def confirm_succession(
    player_id: str, request: ConfirmSuccessionRequest, state: ApiStateDep
) -> ConfirmSuccessionResponse:
    try:
        confirmation = state.succession.confirm_succession(
            dm.PlayerID(player_id), dm.CharacterID(request.successor_id)
        )
    except ConquestError as exc:
        raise _http_error(exc) from exc
    return ConfirmSuccessionResponse(
        player=_player(confirmation.player),
        successor=_character(confirmation.successor),
        stability_delta=confirmation.result.stability_delta,
        morale_delta=confirmation.result.morale_delta,
        legitimacy_delta=confirmation.result.legitimacy_delta,
    )


def _campaign_response(state: ApiState, player_id: str) -> CampaignResponse:
    view = state.campaigns.get_active_campaign(dm.PlayerID(player_id))
    return CampaignResponse(
        id=view.campaign.id,
        campaign_id=view.campaign.campaign_id,
        name=view.definition.name,
        status=str(view.campaign.status),
        territories_captured=list(view.campaign.territories_captured),
        captured_territory_names=view.captured_territory_names,
        generals_defeated=view.campaign.generals_defeated,
        generals_defeated_log=view.progress.generals_defeated_log,
        territories_remaining=view.progress.territories_remaining,
        generals_remaining=view.progress.generals_remaining,
    )


@router.get("/players/{player_id}/campaign", response_model=CampaignResponse)
async def active_campaign(player_id: str, state: ApiStateDep) -> CampaignResponse:
    try:
        return _campaign_response(state, player_id)
    except ConquestError as exc:
        raise _http_error(exc) from exc


@router.post(
    "/players/{player_id}/campaign",
    response_model=CampaignResponse,
    status_code=status.HTTP_201_CREATED,
)
async def start_campaign(
    player_id: str, request: StartCampaignRequest, state: ApiStateDep
) -> CampaignResponse:
    try:
        state.campaigns.start_campaign(dm.PlayerID(player_id), dm.CampaignID(request.campaign_id))
        return _campaign_response(state, player_id)
    except ConquestError as exc:
        raise _http_error(exc) from exc


@router.get("/dynasties/{dynasty_id}/timeline", response_model=TimelineResponse)
async def timeline_status(dynasty_id: str, state: ApiStateDep) -> TimelineResponse:
    try:
        report = state.timeline.divergence_status(dm.DynastyID(dynasty_id))
    except ConquestError as exc:
        raise _http_error(exc) from exc
    return TimelineResponse(
        diverged=report.diverged, timeline=str(report.timeline), detail=report.detail
    )


def _court(view: CourtView) -> CourtSummary:
    court = view.court
    return CourtSummary(
        dynasty_id=court.dynasty_id,
        stability=court.stability,
        legitimacy=court.legitimacy,
        morale=court.morale,
        corruption=court.corruption,
        last_action=court.last_action,
        political_turns_remaining=view.political_turns_remaining,
    )


@router.get("/players/{player_id}/court", response_model=CourtSummary)
async def court_state(player_id: str, state: ApiStateDep) -> CourtSummary:
    try:
        view = state.court.get_court_state(dm.PlayerID(player_id))
    except ConquestError as exc:
        raise _http_error(exc) from exc
    return _court(view)


@router.post("/players/{player_id}/court/actions", response_model=CourtActionResponse)
async def court_action(
    player_id: str, request: CourtActionRequest, state: ApiStateDep
) -> CourtActionResponse:
    try:
        report = state.court.execute_action(dm.PlayerID(player_id), request.action)
    except ConquestError as exc:
        raise _http_error(exc) from exc
    fx = report.deltas
    return CourtActionResponse(
        court=_court(CourtView(report.court, report.player.political_turns)),
        action=report.action.value,
        detail=fx.detail,
        deltas={
            "stability": fx.stability,
            "legitimacy": fx.legitimacy,
            "morale": fx.morale,
            "corruption": fx.corruption,
        },
    )


@router.post("/players/{player_id}/loyalty/tick", response_model=LoyaltyTickResponse)
async def loyalty_tick(player_id: str, state: ApiStateDep) -> LoyaltyTickResponse:
    pid = dm.PlayerID(player_id)
    try:
        with state.locks.hold(f"player:{pid}"):
            state.store.require(dm.Player, pid)
            affected, betrayals = state.loyalty.tick_decay(pid)
    except ConquestError as exc:
        raise _http_error(exc) from exc
    return LoyaltyTickResponse(
        affected=dict(affected),
        betrayals=[
            BetrayalSummary(
                character_id=b.character_id,
                character_name=b.character_name,
                stability_delta=b.stability_delta,
            )
            for b in betrayals
        ],
    )
