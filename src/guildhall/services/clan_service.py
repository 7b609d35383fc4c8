"""Clan Service for Guildhall.

This module provides clan creation and updates, the read-side projections
(listing, detail and search) and the ownership protocol used by both
leave-with-succession and explicit transfers.

Ownership assertions that do not match the clan's current owner fail with
the same ``Clan was not found with id: ...`` error as a missing clan.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session, selectinload

from guildhall.domain.succession import choose_successor
from guildhall.errors import MembershipError, ModelNotFoundError
from guildhall.models import Clan, Membership, Player
from guildhall.schemas import ClanCreate, ClanUpdate
from guildhall.services.game_service import get_game
from guildhall.services.ledger import find_active_membership
from guildhall.services.player_service import get_player

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LeaveResult:
    """Outcome of an owner leaving their clan."""

    clan_public_id: str
    previous_owner: Player
    new_owner: Player | None
    clan_deleted: bool = False


def get_clan(session: Session, game_id: str, public_id: str) -> Clan:
    """Load a clan by public identifier within a game.

    Raises:
        ModelNotFoundError: If the game has no such clan
    """
    clan = session.scalars(
        select(Clan).where(Clan.game_id == game_id, Clan.public_id == public_id)
    ).one_or_none()
    if clan is None:
        raise ModelNotFoundError("Clan", public_id)
    return clan


def get_owned_clan(
    session: Session, game_id: str, public_id: str, owner_public_id: str
) -> Clan:
    """Load and lock a clan, asserting ``owner_public_id`` is its owner.

    The clan row is read ``FOR UPDATE`` so the owner check and the write
    that follows happen in one unit on backends with row locks.

    Raises:
        ModelNotFoundError: If the clan does not exist or is owned by
            somebody else; both cases produce the same message
    """
    clan = session.scalars(
        select(Clan)
        .join(Player, Clan.owner_id == Player.id)
        .where(
            Clan.game_id == game_id,
            Clan.public_id == public_id,
            Player.public_id == owner_public_id,
        )
        .with_for_update(of=Clan)
        .execution_options(populate_existing=True)
    ).one_or_none()
    if clan is None:
        logger.warning(
            "ownership assertion failed for clan %s in game %s", public_id, game_id
        )
        raise ModelNotFoundError("Clan", public_id)
    return clan


def create_clan(session: Session, game_id: str, payload: ClanCreate) -> Clan:
    """Create a clan owned by an existing player.

    The owner gets an approved membership at the game's maximum level.

    Raises:
        ModelNotFoundError: If the owner is not a player of the game
        MembershipError: If the owner already belongs to a clan in the game
        sqlalchemy.exc.DBAPIError: If the store rejects the clan row
    """
    owner = get_player(session, game_id, payload.owner_public_id)
    game = get_game(session, game_id)
    if find_active_membership(session, game_id, owner.id) is not None:
        raise MembershipError(
            f"Player {owner.public_id} already has a membership in game {game_id}"
        )

    try:
        clan = Clan(
            game_id=game_id,
            public_id=payload.public_id,
            name=payload.name,
            metadata_=payload.metadata,
            owner_id=owner.id,
        )
        session.add(clan)
        session.flush()  # Get ID for the owner membership

        session.add(
            Membership(
                game_id=game_id,
                clan_id=clan.id,
                player_id=owner.id,
                requestor_id=owner.id,
                level=game.max_membership_level,
                approved=True,
            )
        )
        session.commit()
        return clan
    except Exception:
        session.rollback()
        raise


def update_clan(session: Session, game_id: str, public_id: str, payload: ClanUpdate) -> Clan:
    """Rename a clan or replace its metadata; only the owner may do this."""
    clan = get_owned_clan(session, game_id, public_id, payload.owner_public_id)
    try:
        clan.name = payload.name
        clan.metadata_ = payload.metadata
        session.commit()
        return clan
    except Exception:
        session.rollback()
        raise


def reassign_clan_owner(
    session: Session, clan: Clan, previous_owner_id: int, new_owner_id: int
) -> None:
    """Move ownership of ``clan`` with a compare-and-swap on the owner column.

    This is the only place the owner of an existing clan is written. The
    update matches only while the owner is still ``previous_owner_id``;
    if a concurrent call got there first, no row matches and the caller
    sees the same error as a stale owner assertion. The caller commits.

    Raises:
        ModelNotFoundError: If ownership already moved
    """
    result = session.execute(
        update(Clan)
        .where(Clan.id == clan.id, Clan.owner_id == previous_owner_id)
        .values(owner_id=new_owner_id)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        logger.warning(
            "lost ownership race on clan %s (expected owner %s)", clan.public_id, previous_owner_id
        )
        raise ModelNotFoundError("Clan", clan.public_id)
    session.refresh(clan)


def remove_owned_clan(session: Session, clan: Clan, owner_id: int) -> None:
    """Delete ``clan`` and its memberships while ``owner_id`` still owns it.

    Guarded the same way as ``reassign_clan_owner``: if ownership moved or
    the clan is already gone, nothing is deleted. The caller commits.

    Raises:
        ModelNotFoundError: If the clan is no longer owned by ``owner_id``
    """
    result = session.execute(delete(Clan).where(Clan.id == clan.id, Clan.owner_id == owner_id))
    if result.rowcount != 1:
        logger.warning(
            "lost ownership race on clan %s (expected owner %s)", clan.public_id, owner_id
        )
        raise ModelNotFoundError("Clan", clan.public_id)
    session.execute(delete(Membership).where(Membership.clan_id == clan.id))


def leave_clan(session: Session, game_id: str, public_id: str, owner_public_id: str) -> LeaveResult:
    """Let the owner leave; the earliest-joined member inherits the clan.

    The former owner keeps their membership at its current level. When
    nobody is eligible to take over, the clan and its memberships are
    deleted.

    Raises:
        ModelNotFoundError: If the clan does not exist or the owner does not match
    """
    try:
        clan = get_owned_clan(session, game_id, public_id, owner_public_id)
        previous_owner = clan.owner
        successor = choose_successor(clan.memberships, clan.owner_id)

        if successor is None:
            remove_owned_clan(session, clan, previous_owner.id)
            session.commit()
            logger.info("clan %s deleted after its last member %s left", public_id, owner_public_id)
            return LeaveResult(
                clan_public_id=public_id,
                previous_owner=previous_owner,
                new_owner=None,
                clan_deleted=True,
            )

        reassign_clan_owner(session, clan, previous_owner.id, successor.player_id)
        session.commit()
        logger.info(
            "clan %s ownership passed from %s to %s",
            public_id,
            previous_owner.public_id,
            successor.player.public_id,
        )
        return LeaveResult(
            clan_public_id=public_id,
            previous_owner=previous_owner,
            new_owner=successor.player,
        )
    except Exception:
        session.rollback()
        raise


def transfer_clan_ownership(
    session: Session,
    game_id: str,
    public_id: str,
    owner_public_id: str,
    player_public_id: str,
) -> Clan:
    """Hand a clan over to one of its approved members.

    The owner assertion is checked first, then the target membership. No
    state changes unless both pass.

    Raises:
        ModelNotFoundError: If the clan/owner pair does not match, the target
            player does not exist, or the target is not a member of the clan
    """
    try:
        clan = get_owned_clan(session, game_id, public_id, owner_public_id)
        player = get_player(session, game_id, player_public_id)
        membership = next(
            (
                m
                for m in clan.memberships
                if m.player_id == player.id and m.approved and m.is_active
            ),
            None,
        )
        if membership is None:
            raise ModelNotFoundError("Membership", player_public_id)

        previous_owner_id = clan.owner_id
        reassign_clan_owner(session, clan, previous_owner_id, player.id)
        session.commit()
        logger.info(
            "clan %s ownership transferred from %s to %s", public_id, owner_public_id, player_public_id
        )
        return clan
    except Exception:
        session.rollback()
        raise


def list_clans(session: Session, game_id: str) -> list[Clan]:
    """Return every clan of a game ordered by name, then creation order."""
    return list(
        session.scalars(select(Clan).where(Clan.game_id == game_id).order_by(Clan.name, Clan.id))
    )


def search_clans(session: Session, game_id: str, term: str, limit: int) -> list[Clan]:
    """Case-insensitive substring search on clan names.

    Results are ordered by name and then creation order, so identical
    searches return identical pages. A blank term matches nothing.
    """
    term = term.strip()
    if not term:
        return []
    return list(
        session.scalars(
            select(Clan)
            .where(Clan.game_id == game_id, Clan.name.icontains(term, autoescape=True))
            .order_by(Clan.name, Clan.id)
            .limit(limit)
        )
    )


def get_clan_details(session: Session, game_id: str, public_id: str) -> Clan:
    """Load a clan with its owner and memberships (and their players)."""
    clan = session.scalars(
        select(Clan)
        .where(Clan.game_id == game_id, Clan.public_id == public_id)
        .options(
            selectinload(Clan.owner),
            selectinload(Clan.memberships).selectinload(Membership.player),
        )
    ).one_or_none()
    if clan is None:
        raise ModelNotFoundError("Clan", public_id)
    return clan
