"""Game model for the Guildhall clan service.

A Game is the tenant every player, clan and membership is scoped to. It
carries the numeric membership policy its clans are validated against.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import (
    GAME_PUBLIC_ID_MAX_LENGTH,
    Base,
    TimestampMixin,
    json_metadata_check,
    length_check,
)

if TYPE_CHECKING:
    from .clan import Clan
    from .player import Player


class Game(Base, TimestampMixin):
    """Represents a game that hosts clans.

    Attributes:
        id: Primary key (never exposed)
        public_id: Caller-supplied unique identifier, at most 36 characters
        name: Display name
        metadata_: Opaque JSON text, validated by the store
        min_membership_level: Lowest level a membership may hold
        max_membership_level: Highest level a membership may hold
        min_level_to_accept_application: Level needed to approve applications
        min_level_to_create_invitation: Level needed to invite players
        min_level_offset_to_promote_member: Levels above the target needed to promote
        min_level_offset_to_demote_member: Levels above the target needed to demote
        allow_application: Whether players may apply to clans on their own
    """

    __tablename__ = "games"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # Identity
    public_id: Mapped[str] = mapped_column(
        String(GAME_PUBLIC_ID_MAX_LENGTH), nullable=False, unique=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    metadata_: Mapped[str] = mapped_column("metadata", Text, nullable=False, default="{}")

    # Membership policy
    min_membership_level: Mapped[int] = mapped_column(Integer, nullable=False)
    max_membership_level: Mapped[int] = mapped_column(Integer, nullable=False)
    min_level_to_accept_application: Mapped[int] = mapped_column(Integer, nullable=False)
    min_level_to_create_invitation: Mapped[int] = mapped_column(Integer, nullable=False)
    min_level_offset_to_promote_member: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1
    )
    min_level_offset_to_demote_member: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1
    )
    allow_application: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    players: Mapped[list["Player"]] = relationship(
        "Player", back_populates="game", cascade="all, delete-orphan"
    )
    clans: Mapped[list["Clan"]] = relationship(
        "Clan", back_populates="game", cascade="all, delete-orphan"
    )

    # Table constraints
    __table_args__ = (
        length_check("games", "public_id", GAME_PUBLIC_ID_MAX_LENGTH),
        json_metadata_check("games"),
    )

    def __repr__(self) -> str:
        return f"<Game(id={self.id}, public_id='{self.public_id}', name='{self.name}')>"
