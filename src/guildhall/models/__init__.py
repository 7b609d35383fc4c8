"""SQLAlchemy models for the Guildhall clan service.

This module exports all database models and the declarative base.
"""

from .base import Base, TimestampMixin, utc_now
from .clan import Clan
from .game import Game
from .membership import Membership
from .player import Player

__all__ = [
    "Base",
    "Clan",
    "Game",
    "Membership",
    "Player",
    "TimestampMixin",
    "utc_now",
]
