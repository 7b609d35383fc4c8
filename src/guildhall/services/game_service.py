"""Game Service for Guildhall.

Creates and updates games. Every write validates the complete resulting
membership policy first and reports all violations at once.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from guildhall.domain.policy import GamePolicy, ensure_valid_game_policy
from guildhall.errors import ModelNotFoundError
from guildhall.models import Game
from guildhall.schemas import GameCreate, GameUpdate


def get_game(session: Session, public_id: str) -> Game:
    """Load a game by public identifier.

    Raises:
        ModelNotFoundError: If no game uses ``public_id``
    """
    game = session.scalars(select(Game).where(Game.public_id == public_id)).one_or_none()
    if game is None:
        raise ModelNotFoundError("Game", public_id)
    return game


def get_game_policy(session: Session, public_id: str) -> GamePolicy:
    """Read the current policy of a game straight from the store."""
    return GamePolicy.from_game(get_game(session, public_id))


def create_game(session: Session, payload: GameCreate) -> Game:
    """Validate and persist a new game.

    Args:
        session: Database session
        payload: Requested game fields

    Returns:
        The persisted game

    Raises:
        PolicyValidationError: If any policy rule is violated
        sqlalchemy.exc.DBAPIError: If the store rejects the row
    """
    ensure_valid_game_policy(payload.policy())

    try:
        game = Game(
            public_id=payload.public_id,
            name=payload.name,
            metadata_=payload.metadata,
            **payload.policy_fields(),
        )
        session.add(game)
        session.commit()
        return game
    except Exception:
        session.rollback()
        raise


def update_game(session: Session, public_id: str, payload: GameUpdate) -> Game:
    """Apply ``payload`` to an existing game.

    The policy that would result from the update is validated as a whole,
    so a change to one threshold is checked against the stored values of
    the others. The public identifier itself never changes.

    Raises:
        ModelNotFoundError: If the game does not exist
        PolicyValidationError: If the resulting policy is invalid
    """
    game = get_game(session, public_id)
    changes = payload.model_dump(exclude_unset=True, exclude={"public_id"})

    current = GamePolicy.from_game(game)
    merged = GamePolicy(
        **{
            field: changes.get(field, getattr(current, field))
            for field in GamePolicy.__dataclass_fields__
        }
    )
    ensure_valid_game_policy(merged)

    try:
        for field, value in changes.items():
            setattr(game, "metadata_" if field == "metadata" else field, value)
        session.commit()
        return game
    except Exception:
        session.rollback()
        raise
