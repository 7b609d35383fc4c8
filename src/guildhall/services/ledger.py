"""Membership ledger queries shared by the clan and membership services."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from guildhall.models import Clan, Membership, Player


def find_active_membership(session: Session, game_id: str, player_id: int) -> Membership | None:
    """Return the player's active membership in any clan of the game."""
    return session.scalars(
        select(Membership).where(
            Membership.game_id == game_id,
            Membership.player_id == player_id,
            Membership.denied.is_(False),
            Membership.banned.is_(False),
        )
    ).first()


def find_clan_membership(session: Session, clan: Clan, player: Player) -> Membership | None:
    """Return the most recent membership row of ``player`` in ``clan``."""
    return session.scalars(
        select(Membership)
        .where(Membership.clan_id == clan.id, Membership.player_id == player.id)
        .order_by(Membership.id.desc())
    ).first()


def is_banned_from(session: Session, clan: Clan, player: Player) -> bool:
    return (
        session.scalars(
            select(Membership.id).where(
                Membership.clan_id == clan.id,
                Membership.player_id == player.id,
                Membership.banned.is_(True),
            )
        ).first()
        is not None
    )
