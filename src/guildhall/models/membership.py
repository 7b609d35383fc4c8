"""Membership model for the Guildhall clan service.

This module contains the ledger row that ties a player to a clan, including
the level the player holds and the approval/ban state of the request.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .clan import Clan
    from .player import Player


class Membership(Base, TimestampMixin):
    """Represents a player's membership (or pending request) in a clan.

    A membership is active while it is neither denied nor banned. The ledger
    allows at most one active membership per player and game.

    Attributes:
        id: Primary key (never exposed)
        game_id: Public identifier of the game
        clan_id: Clan the membership belongs to
        player_id: Member player
        requestor_id: Player who created the request (the applicant or the inviter)
        level: Numeric rank within the clan
        approved: Whether the membership was accepted
        denied: Whether the request was refused
        banned: Whether the player was removed from the clan by someone else
    """

    __tablename__ = "memberships"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # Foreign keys
    game_id: Mapped[str] = mapped_column(String(36), nullable=False)
    clan_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("clans.id", ondelete="CASCADE"), nullable=False
    )
    player_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("players.id", ondelete="CASCADE"), nullable=False
    )
    requestor_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("players.id", ondelete="CASCADE"), nullable=False
    )

    # State
    level: Mapped[int] = mapped_column(Integer, nullable=False)
    approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    denied: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    banned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    clan: Mapped["Clan"] = relationship("Clan", back_populates="memberships")
    player: Mapped["Player"] = relationship(
        "Player", back_populates="memberships", foreign_keys=[player_id]
    )
    requestor: Mapped["Player"] = relationship("Player", foreign_keys=[requestor_id])

    __table_args__ = (
        Index("ix_memberships_game_player", "game_id", "player_id"),
        Index("ix_memberships_clan_created", "clan_id", "created_at"),
    )

    @property
    def is_active(self) -> bool:
        return not self.denied and not self.banned

    def __repr__(self) -> str:
        return (
            f"<Membership(id={self.id}, clan_id={self.clan_id}, player_id={self.player_id}, "
            f"level={self.level}, approved={self.approved})>"
        )
