from .clan import ClanCreate, ClanLeave, ClanTransferOwnership, ClanUpdate
from .game import GameCreate, GameUpdate
from .membership import (
    MembershipAction,
    MembershipApplication,
    MembershipInvitation,
    MembershipInvitationAnswer,
)
from .player import PlayerCreate, PlayerUpdate

__all__ = [
    "ClanCreate",
    "ClanLeave",
    "ClanTransferOwnership",
    "ClanUpdate",
    "GameCreate",
    "GameUpdate",
    "MembershipAction",
    "MembershipApplication",
    "MembershipInvitation",
    "MembershipInvitationAnswer",
    "PlayerCreate",
    "PlayerUpdate",
]
