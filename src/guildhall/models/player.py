"""Player model for the Guildhall clan service."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import PUBLIC_ID_MAX_LENGTH, Base, TimestampMixin, json_metadata_check, length_check

if TYPE_CHECKING:
    from .game import Game
    from .membership import Membership


class Player(Base, TimestampMixin):
    """Represents a player inside exactly one game.

    Attributes:
        id: Primary key (never exposed)
        game_id: Public identifier of the owning game
        public_id: Identifier unique within the game
        name: Display name
        metadata_: Opaque JSON text
    """

    __tablename__ = "players"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # Foreign keys
    game_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("games.public_id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Identity
    public_id: Mapped[str] = mapped_column(String(PUBLIC_ID_MAX_LENGTH), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    metadata_: Mapped[str] = mapped_column("metadata", Text, nullable=False, default="{}")

    # Relationships
    game: Mapped["Game"] = relationship("Game", back_populates="players")
    memberships: Mapped[list["Membership"]] = relationship(
        "Membership",
        back_populates="player",
        foreign_keys="Membership.player_id",
    )

    # Table constraints
    __table_args__ = (
        UniqueConstraint("game_id", "public_id", name="uq_players_game_public_id"),
        length_check("players", "public_id", PUBLIC_ID_MAX_LENGTH),
        json_metadata_check("players"),
    )

    def __repr__(self) -> str:
        return f"<Player(id={self.id}, game_id='{self.game_id}', public_id='{self.public_id}')>"
