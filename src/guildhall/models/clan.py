"""Clan model for the Guildhall clan service.

A clan always has exactly one owner. The owner column is only ever rewritten
through ``services.clan_service.reassign_clan_owner``.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import PUBLIC_ID_MAX_LENGTH, Base, TimestampMixin, json_metadata_check, length_check

if TYPE_CHECKING:
    from .game import Game
    from .membership import Membership
    from .player import Player


class Clan(Base, TimestampMixin):
    """Represents a named group of players within a game.

    Attributes:
        id: Primary key (never exposed)
        game_id: Public identifier of the owning game
        public_id: Identifier unique within the game
        name: Display name, used for listing order and search
        metadata_: Opaque JSON text, validated by the store
        owner_id: Player currently owning the clan
    """

    __tablename__ = "clans"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # Foreign keys
    game_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("games.public_id", ondelete="CASCADE"), nullable=False, index=True
    )
    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("players.id", ondelete="RESTRICT"), nullable=False
    )

    # Identity
    public_id: Mapped[str] = mapped_column(String(PUBLIC_ID_MAX_LENGTH), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    metadata_: Mapped[str] = mapped_column("metadata", Text, nullable=False, default="{}")

    # Relationships
    game: Mapped["Game"] = relationship("Game", back_populates="clans")
    owner: Mapped["Player"] = relationship("Player", foreign_keys=[owner_id])
    memberships: Mapped[list["Membership"]] = relationship(
        "Membership",
        back_populates="clan",
        cascade="all, delete-orphan",
        order_by="Membership.id",
    )

    # Table constraints
    __table_args__ = (
        UniqueConstraint("game_id", "public_id", name="uq_clans_game_public_id"),
        length_check("clans", "public_id", PUBLIC_ID_MAX_LENGTH),
        json_metadata_check("clans"),
    )

    def __repr__(self) -> str:
        return f"<Clan(id={self.id}, public_id='{self.public_id}', owner_id={self.owner_id})>"
