"""Pure domain rules for Guildhall: game policy and clan succession."""

from guildhall.domain.policy import (
    POLICY_RULES,
    GamePolicy,
    ensure_valid_game_policy,
    validate_game_policy,
)
from guildhall.domain.succession import choose_successor, is_eligible_successor

__all__ = [
    "POLICY_RULES",
    "GamePolicy",
    "choose_successor",
    "ensure_valid_game_policy",
    "is_eligible_successor",
    "validate_game_policy",
]
