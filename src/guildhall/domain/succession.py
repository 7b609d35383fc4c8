"""Succession rules: who takes over a clan when its owner leaves."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from guildhall.models import Membership


def is_eligible_successor(membership: Membership, owner_id: int) -> bool:
    """Approved, active members other than the owner may inherit a clan."""

    return membership.player_id != owner_id and membership.approved and membership.is_active


def choose_successor(memberships: Iterable[Membership], owner_id: int) -> Membership | None:
    """Pick the member who joined first.

    Ties on ``created_at`` fall back to the insertion order of the rows so the
    choice is stable across calls. Returns ``None`` when the owner is the
    only eligible member.
    """

    candidates = [m for m in memberships if is_eligible_successor(m, owner_id)]
    if not candidates:
        return None
    return min(candidates, key=_join_order)


def _join_order(membership: Membership) -> tuple[datetime, int]:
    # SQLite hands back naive timestamps while fresh rows still carry tzinfo
    return membership.created_at.replace(tzinfo=None), membership.id
