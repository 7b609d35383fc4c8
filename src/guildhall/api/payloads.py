"""JSON projections of the ORM models.

Internal numeric identifiers never appear in these payloads.
"""

from __future__ import annotations

from guildhall.models import Clan, Membership, Player
from guildhall.services.clan_service import LeaveResult


def player_summary(player: Player | None) -> dict[str, object] | None:
    if player is None:
        return None
    return {"publicID": player.public_id, "name": player.name}


def clan_summary(clan: Clan) -> dict[str, object]:
    """Listing and search entry."""
    return {"publicID": clan.public_id, "name": clan.name, "metadata": clan.metadata_}


def membership_payload(membership: Membership) -> dict[str, object]:
    return {
        "player": player_summary(membership.player),
        "level": membership.level,
        "approved": membership.approved,
    }


def clan_detail(clan: Clan) -> dict[str, object]:
    """Detail view; the clan's own public id is already in the request path."""
    return {
        "name": clan.name,
        "metadata": clan.metadata_,
        "owner": player_summary(clan.owner),
        "members": [membership_payload(m) for m in clan.memberships if m.is_active],
    }


def leave_result(result: LeaveResult) -> dict[str, object]:
    return {
        "previousOwner": player_summary(result.previous_owner),
        "newOwner": player_summary(result.new_owner),
        "isDeleted": result.clan_deleted,
    }
