"""Game membership policy and its validation rules."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from guildhall.errors import PolicyValidationError

if TYPE_CHECKING:
    from guildhall.models import Game


@dataclass(frozen=True, slots=True)
class GamePolicy:
    """Immutable snapshot of a game's membership policy."""

    min_membership_level: int
    max_membership_level: int
    min_level_to_accept_application: int
    min_level_to_create_invitation: int
    min_level_offset_to_promote_member: int = 1
    min_level_offset_to_demote_member: int = 1
    allow_application: bool = True

    @classmethod
    def from_game(cls, game: Game) -> GamePolicy:
        return cls(
            min_membership_level=game.min_membership_level,
            max_membership_level=game.max_membership_level,
            min_level_to_accept_application=game.min_level_to_accept_application,
            min_level_to_create_invitation=game.min_level_to_create_invitation,
            min_level_offset_to_promote_member=game.min_level_offset_to_promote_member,
            min_level_offset_to_demote_member=game.min_level_offset_to_demote_member,
            allow_application=game.allow_application,
        )

    def level_in_range(self, level: int) -> bool:
        return self.min_membership_level <= level <= self.max_membership_level


# Evaluated in this order; every rule runs even when an earlier one fails.
POLICY_RULES: tuple[tuple[Callable[[GamePolicy], bool], str], ...] = (
    (
        lambda p: p.max_membership_level >= p.min_membership_level,
        "MaxMembershipLevel should be greater or equal to MinMembershipLevel",
    ),
    (
        lambda p: p.min_level_to_accept_application >= p.min_membership_level,
        "MinLevelToAcceptApplication should be greater or equal to MinMembershipLevel",
    ),
    (
        lambda p: p.min_level_to_create_invitation >= p.min_membership_level,
        "MinLevelToCreateInvitation should be greater or equal to MinMembershipLevel",
    ),
)


def validate_game_policy(policy: GamePolicy) -> list[str]:
    """Return the message of every violated rule, in rule order."""

    return [message for check, message in POLICY_RULES if not check(policy)]


def ensure_valid_game_policy(policy: GamePolicy) -> None:
    """Raise ``PolicyValidationError`` carrying all violations, if any."""

    reasons = validate_game_policy(policy)
    if reasons:
        raise PolicyValidationError(reasons)
