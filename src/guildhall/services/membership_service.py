"""Membership Ledger Service for Guildhall.

Applications, invitations, their approval or denial, promotions, demotions
and removals. The game's policy is read from the store on every call, so a
policy update applies to the very next request.

Requestor rules:
    - The clan owner may do anything below.
    - Inviting needs ``min_level_to_create_invitation``.
    - Answering applications needs ``min_level_to_accept_application``.
    - Promoting (demoting) needs the target's level plus the promote
      (demote) offset. Removing someone else uses the demote offset.
"""

import logging
from enum import StrEnum

from sqlalchemy.orm import Session

from guildhall.domain.policy import GamePolicy
from guildhall.errors import MembershipError, ModelNotFoundError
from guildhall.models import Clan, Membership, Player
from guildhall.services.clan_service import get_clan
from guildhall.services.game_service import get_game_policy
from guildhall.services.ledger import find_active_membership, find_clan_membership, is_banned_from
from guildhall.services.player_service import get_player

logger = logging.getLogger(__name__)


class ApprovalAction(StrEnum):
    APPROVE = "approve"
    DENY = "deny"


class LevelAction(StrEnum):
    PROMOTE = "promote"
    DEMOTE = "demote"


def _ensure_can_join(
    session: Session, policy: GamePolicy, clan: Clan, player: Player, level: int
) -> None:
    if not policy.level_in_range(level):
        raise MembershipError(f"Level {level} is not valid for game {clan.game_id}")
    if is_banned_from(session, clan, player):
        raise MembershipError(f"Player {player.public_id} was banned from clan {clan.public_id}")
    if find_active_membership(session, clan.game_id, player.id) is not None:
        raise MembershipError(
            f"Player {player.public_id} already has a membership in game {clan.game_id}"
        )


def _requestor_level(clan: Clan, requestor: Player) -> int | None:
    """Level the requestor acts with in ``clan``; ``None`` if not a member."""
    membership = next(
        (
            m
            for m in clan.memberships
            if m.player_id == requestor.id and m.approved and m.is_active
        ),
        None,
    )
    return membership.level if membership is not None else None


def _ensure_requestor_level(clan: Clan, requestor: Player, required: int, action: str) -> None:
    if requestor.id == clan.owner_id:
        return
    level = _requestor_level(clan, requestor)
    if level is None or level < required:
        raise MembershipError(
            f"Player {requestor.public_id} cannot {action} in clan {clan.public_id}"
        )


def _pending_membership(
    session: Session, clan: Clan, player: Player, *, application: bool
) -> Membership:
    membership = find_clan_membership(session, clan, player)
    if (
        membership is None
        or membership.approved
        or not membership.is_active
        or (membership.requestor_id == player.id) != application
    ):
        raise ModelNotFoundError("Membership", player.public_id)
    return membership


def _approved_membership(session: Session, clan: Clan, player: Player) -> Membership:
    membership = find_clan_membership(session, clan, player)
    if membership is None or not membership.approved or not membership.is_active:
        raise ModelNotFoundError("Membership", player.public_id)
    return membership


def apply_for_membership(
    session: Session, game_id: str, clan_public_id: str, player_public_id: str, level: int
) -> Membership:
    """Create a pending membership requested by the player themselves.

    Raises:
        MembershipError: If the game disallows applications, the level is out
            of bounds, or the player is banned or already in a clan
    """
    policy = get_game_policy(session, game_id)
    if not policy.allow_application:
        raise MembershipError(f"Game {game_id} does not allow applications")
    clan = get_clan(session, game_id, clan_public_id)
    player = get_player(session, game_id, player_public_id)
    _ensure_can_join(session, policy, clan, player, level)

    try:
        membership = Membership(
            game_id=game_id,
            clan_id=clan.id,
            player_id=player.id,
            requestor_id=player.id,
            level=level,
        )
        session.add(membership)
        session.commit()
        return membership
    except Exception:
        session.rollback()
        raise


def invite_member(
    session: Session,
    game_id: str,
    clan_public_id: str,
    player_public_id: str,
    requestor_public_id: str,
    level: int,
) -> Membership:
    """Create a pending invitation on behalf of a sufficiently ranked member."""
    policy = get_game_policy(session, game_id)
    clan = get_clan(session, game_id, clan_public_id)
    requestor = get_player(session, game_id, requestor_public_id)
    _ensure_requestor_level(clan, requestor, policy.min_level_to_create_invitation, "invite")
    player = get_player(session, game_id, player_public_id)
    _ensure_can_join(session, policy, clan, player, level)

    try:
        membership = Membership(
            game_id=game_id,
            clan_id=clan.id,
            player_id=player.id,
            requestor_id=requestor.id,
            level=level,
        )
        session.add(membership)
        session.commit()
        return membership
    except Exception:
        session.rollback()
        raise


def _answer(session: Session, membership: Membership, action: ApprovalAction) -> Membership:
    try:
        if action is ApprovalAction.APPROVE:
            membership.approved = True
        else:
            membership.denied = True
        session.commit()
        return membership
    except Exception:
        session.rollback()
        raise


def answer_application(
    session: Session,
    game_id: str,
    clan_public_id: str,
    player_public_id: str,
    requestor_public_id: str,
    action: ApprovalAction,
) -> Membership:
    """Approve or deny a player's pending application."""
    policy = get_game_policy(session, game_id)
    clan = get_clan(session, game_id, clan_public_id)
    player = get_player(session, game_id, player_public_id)
    membership = _pending_membership(session, clan, player, application=True)
    requestor = get_player(session, game_id, requestor_public_id)
    _ensure_requestor_level(
        clan, requestor, policy.min_level_to_accept_application, f"{action} applications"
    )
    return _answer(session, membership, action)


def answer_invitation(
    session: Session,
    game_id: str,
    clan_public_id: str,
    player_public_id: str,
    action: ApprovalAction,
) -> Membership:
    """Let an invited player accept or refuse their invitation."""
    clan = get_clan(session, game_id, clan_public_id)
    player = get_player(session, game_id, player_public_id)
    membership = _pending_membership(session, clan, player, application=False)
    return _answer(session, membership, action)


def change_member_level(
    session: Session,
    game_id: str,
    clan_public_id: str,
    player_public_id: str,
    requestor_public_id: str,
    action: LevelAction,
) -> Membership:
    """Promote or demote an approved member by one level.

    Raises:
        MembershipError: If the target is the owner, the requestor ranks too
            low, or the new level leaves the game's bounds
    """
    policy = get_game_policy(session, game_id)
    clan = get_clan(session, game_id, clan_public_id)
    player = get_player(session, game_id, player_public_id)
    membership = _approved_membership(session, clan, player)
    if player.id == clan.owner_id:
        raise MembershipError(f"Clan owner cannot be {action}d")

    requestor = get_player(session, game_id, requestor_public_id)
    if action is LevelAction.PROMOTE:
        offset, step = policy.min_level_offset_to_promote_member, 1
    else:
        offset, step = policy.min_level_offset_to_demote_member, -1
    _ensure_requestor_level(clan, requestor, membership.level + offset, f"{action} {player.public_id}")

    new_level = membership.level + step
    if not policy.level_in_range(new_level):
        raise MembershipError(f"Level {new_level} is not valid for game {game_id}")

    try:
        membership.level = new_level
        session.commit()
        return membership
    except Exception:
        session.rollback()
        raise


def delete_membership(
    session: Session,
    game_id: str,
    clan_public_id: str,
    player_public_id: str,
    requestor_public_id: str,
) -> None:
    """Remove a member from a clan.

    A player leaving on their own just drops the row. Removal by someone
    else bans the player from this clan. The owner must use leave instead.
    """
    policy = get_game_policy(session, game_id)
    clan = get_clan(session, game_id, clan_public_id)
    player = get_player(session, game_id, player_public_id)
    membership = find_clan_membership(session, clan, player)
    if membership is None or not membership.is_active:
        raise ModelNotFoundError("Membership", player_public_id)
    if player.id == clan.owner_id:
        raise MembershipError("Clan owner must leave the clan instead of deleting their membership")

    requestor = get_player(session, game_id, requestor_public_id)
    if requestor.id != player.id:
        _ensure_requestor_level(
            clan,
            requestor,
            membership.level + policy.min_level_offset_to_demote_member,
            f"remove {player.public_id}",
        )

    try:
        if requestor.id == player.id:
            session.delete(membership)
        else:
            membership.banned = True
        session.commit()
        logger.info(
            "player %s removed from clan %s by %s", player_public_id, clan_public_id, requestor_public_id
        )
    except Exception:
        session.rollback()
        raise
