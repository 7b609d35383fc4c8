"""Service layer for Guildhall.

Services own transactions: each mutating function commits on success and
rolls back before re-raising on failure.
"""

from guildhall.services import clan_service, game_service, membership_service, player_service

__all__ = ["clan_service", "game_service", "membership_service", "player_service"]
