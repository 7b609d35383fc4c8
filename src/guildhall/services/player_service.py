"""Player directory: lookup and minimal maintenance of players in a game."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from guildhall.errors import ModelNotFoundError
from guildhall.models import Player
from guildhall.schemas import PlayerCreate, PlayerUpdate
from guildhall.services.game_service import get_game


def get_player(session: Session, game_id: str, public_id: str) -> Player:
    """Load a player by public identifier within a game.

    Raises:
        ModelNotFoundError: If the game has no such player
    """
    player = session.scalars(
        select(Player).where(Player.game_id == game_id, Player.public_id == public_id)
    ).one_or_none()
    if player is None:
        raise ModelNotFoundError("Player", public_id)
    return player


def create_player(session: Session, game_id: str, payload: PlayerCreate) -> Player:
    """Register a new player in an existing game."""
    get_game(session, game_id)
    try:
        player = Player(
            game_id=game_id,
            public_id=payload.public_id,
            name=payload.name,
            metadata_=payload.metadata,
        )
        session.add(player)
        session.commit()
        return player
    except Exception:
        session.rollback()
        raise


def update_player(session: Session, game_id: str, public_id: str, payload: PlayerUpdate) -> Player:
    """Rename a player or replace their metadata."""
    player = get_player(session, game_id, public_id)
    try:
        player.name = payload.name
        player.metadata_ = payload.metadata
        session.commit()
        return player
    except Exception:
        session.rollback()
        raise
