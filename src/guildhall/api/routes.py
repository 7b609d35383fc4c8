"""HTTP routes for the Guildhall API.

Every handler runs one service call inside its own session and answers with
a ``{"success": true, ...}`` envelope. Failures are raised as exceptions and
rendered by ``guildhall.api.errors``.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from guildhall.api import payloads
from guildhall.api.errors import failure
from guildhall.api.runtime import ApiState
from guildhall.database import check_database_health, session_scope
from guildhall.schemas import (
    ClanCreate,
    ClanLeave,
    ClanTransferOwnership,
    ClanUpdate,
    GameCreate,
    GameUpdate,
    MembershipAction,
    MembershipApplication,
    MembershipInvitation,
    MembershipInvitationAnswer,
    PlayerCreate,
    PlayerUpdate,
)
from guildhall.services import clan_service, game_service, membership_service, player_service
from guildhall.services.membership_service import ApprovalAction, LevelAction

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


def get_db(state: ApiStateDep) -> Generator[Session]:
    yield from session_scope(state.session_factory)


SessionDep = Annotated[Session, Depends(get_db)]


@router.get("/healthcheck")
def healthcheck(state: ApiStateDep):
    if not check_database_health(state.engine):
        return failure(500, "database unreachable")
    return {"success": True, "healthy": True}


# Games


@router.post("/games")
def create_game(payload: GameCreate, db: SessionDep) -> dict[str, object]:
    game = game_service.create_game(db, payload)
    return {"success": True, "publicID": game.public_id}


@router.put("/games/{public_id}")
def update_game(public_id: str, payload: GameUpdate, db: SessionDep) -> dict[str, object]:
    game_service.update_game(db, public_id, payload)
    return {"success": True}


# Players


@router.post("/{game_id}/players")
def create_player(game_id: str, payload: PlayerCreate, db: SessionDep) -> dict[str, object]:
    player = player_service.create_player(db, game_id, payload)
    return {"success": True, "publicID": player.public_id}


@router.put("/{game_id}/players/{public_id}")
def update_player(
    game_id: str, public_id: str, payload: PlayerUpdate, db: SessionDep
) -> dict[str, object]:
    player_service.update_player(db, game_id, public_id, payload)
    return {"success": True}


# Clans


@router.post("/{game_id}/clans")
def create_clan(game_id: str, payload: ClanCreate, db: SessionDep) -> dict[str, object]:
    clan = clan_service.create_clan(db, game_id, payload)
    return {"success": True, "publicID": clan.public_id}


@router.get("/{game_id}/clans")
def list_clans(game_id: str, db: SessionDep) -> dict[str, object]:
    clans = clan_service.list_clans(db, game_id)
    return {"success": True, "clans": [payloads.clan_summary(c) for c in clans]}


@router.get("/{game_id}/clan-search")
def search_clans(
    game_id: str,
    db: SessionDep,
    state: ApiStateDep,
    term: Annotated[str, Query()] = "",
) -> dict[str, object]:
    clans = clan_service.search_clans(db, game_id, term, state.settings.search_limit)
    return {"success": True, "clans": [payloads.clan_summary(c) for c in clans]}


@router.get("/{game_id}/clans/{public_id}")
def retrieve_clan(game_id: str, public_id: str, db: SessionDep) -> dict[str, object]:
    clan = clan_service.get_clan_details(db, game_id, public_id)
    return {"success": True, **payloads.clan_detail(clan)}


@router.put("/{game_id}/clans/{public_id}")
def update_clan(
    game_id: str, public_id: str, payload: ClanUpdate, db: SessionDep
) -> dict[str, object]:
    clan_service.update_clan(db, game_id, public_id, payload)
    return {"success": True}


@router.post("/{game_id}/clans/{public_id}/leave")
def leave_clan(
    game_id: str, public_id: str, payload: ClanLeave, db: SessionDep
) -> dict[str, object]:
    result = clan_service.leave_clan(db, game_id, public_id, payload.owner_public_id)
    return {"success": True, **payloads.leave_result(result)}


@router.post("/{game_id}/clans/{public_id}/transfer-ownership")
def transfer_clan_ownership(
    game_id: str, public_id: str, payload: ClanTransferOwnership, db: SessionDep
) -> dict[str, object]:
    clan = clan_service.transfer_clan_ownership(
        db, game_id, public_id, payload.owner_public_id, payload.player_public_id
    )
    return {
        "success": True,
        "previousOwnerPublicID": payload.owner_public_id,
        "newOwner": payloads.player_summary(clan.owner),
    }


# Memberships


@router.post("/{game_id}/clans/{clan_id}/memberships/application")
def apply_for_membership(
    game_id: str, clan_id: str, payload: MembershipApplication, db: SessionDep
) -> dict[str, object]:
    membership = membership_service.apply_for_membership(
        db, game_id, clan_id, payload.player_public_id, payload.level
    )
    return {"success": True, "approved": membership.approved}


@router.post("/{game_id}/clans/{clan_id}/memberships/application/{action}")
def answer_application(
    game_id: str,
    clan_id: str,
    action: ApprovalAction,
    payload: MembershipAction,
    db: SessionDep,
) -> dict[str, object]:
    membership = membership_service.answer_application(
        db, game_id, clan_id, payload.player_public_id, payload.requestor_public_id, action
    )
    return {"success": True, "approved": membership.approved}


@router.post("/{game_id}/clans/{clan_id}/memberships/invitation")
def invite_member(
    game_id: str, clan_id: str, payload: MembershipInvitation, db: SessionDep
) -> dict[str, object]:
    membership = membership_service.invite_member(
        db,
        game_id,
        clan_id,
        payload.player_public_id,
        payload.requestor_public_id,
        payload.level,
    )
    return {"success": True, "approved": membership.approved}


@router.post("/{game_id}/clans/{clan_id}/memberships/invitation/{action}")
def answer_invitation(
    game_id: str,
    clan_id: str,
    action: ApprovalAction,
    payload: MembershipInvitationAnswer,
    db: SessionDep,
) -> dict[str, object]:
    membership = membership_service.answer_invitation(
        db, game_id, clan_id, payload.player_public_id, action
    )
    return {"success": True, "approved": membership.approved}


@router.post("/{game_id}/clans/{clan_id}/memberships/delete")
def delete_membership(
    game_id: str, clan_id: str, payload: MembershipAction, db: SessionDep
) -> dict[str, object]:
    membership_service.delete_membership(
        db, game_id, clan_id, payload.player_public_id, payload.requestor_public_id
    )
    return {"success": True}


@router.post("/{game_id}/clans/{clan_id}/memberships/{action}")
def change_member_level(
    game_id: str,
    clan_id: str,
    action: LevelAction,
    payload: MembershipAction,
    db: SessionDep,
) -> dict[str, object]:
    membership = membership_service.change_member_level(
        db, game_id, clan_id, payload.player_public_id, payload.requestor_public_id, action
    )
    return {"success": True, "level": membership.level}
