"""Ownership changes racing through separate sessions on one SQLite file."""

import pytest

from guildhall.config import Settings
from guildhall.database import build_session_factory, create_db_engine, init_db
from guildhall.domain.succession import choose_successor
from guildhall.errors import ModelNotFoundError
from guildhall.schemas import ClanCreate, GameCreate, PlayerCreate
from guildhall.services import clan_service, game_service, membership_service, player_service
from guildhall.services.ledger import find_active_membership
from guildhall.services.membership_service import ApprovalAction

GAME_ID = "race-game"


@pytest.fixture
def session_factory(tmp_path):
    engine = create_db_engine(Settings(database_url=f"sqlite:///{tmp_path / 'race.db'}"))
    init_db(engine)
    try:
        yield build_session_factory(engine)
    finally:
        engine.dispose()


@pytest.fixture
def seeded(session_factory):
    """A clan ``c1`` owned by ``owner`` with approved members m1 and m2."""
    with session_factory() as session:
        game_service.create_game(
            session,
            GameCreate.model_validate(
                {
                    "publicID": GAME_ID,
                    "name": "Race",
                    "minMembershipLevel": 1,
                    "maxMembershipLevel": 10,
                    "minLevelToAcceptApplication": 5,
                    "minLevelToCreateInvitation": 5,
                }
            ),
        )
        for public_id in ("owner", "m1", "m2"):
            player_service.create_player(
                session, GAME_ID, PlayerCreate.model_validate({"publicID": public_id, "name": public_id})
            )
        clan_service.create_clan(
            session,
            GAME_ID,
            ClanCreate.model_validate({"publicID": "c1", "name": "c1", "ownerPublicID": "owner"}),
        )
        for member in ("m1", "m2"):
            membership_service.apply_for_membership(session, GAME_ID, "c1", member, 1)
            membership_service.answer_application(
                session, GAME_ID, "c1", member, "owner", ApprovalAction.APPROVE
            )
    return session_factory


def _owner_of(session_factory, clan_public_id: str) -> str:
    with session_factory() as session:
        return clan_service.get_clan(session, GAME_ID, clan_public_id).owner.public_id


def test_leave_loses_to_a_transfer_committed_after_its_check(seeded):
    with seeded() as slow, seeded() as fast:
        clan = clan_service.get_owned_clan(slow, GAME_ID, "c1", "owner")
        successor = choose_successor(clan.memberships, clan.owner_id)
        assert successor.player.public_id == "m1"

        clan_service.transfer_clan_ownership(fast, GAME_ID, "c1", "owner", "m2")

        with pytest.raises(ModelNotFoundError, match="Clan was not found with id: c1"):
            clan_service.reassign_clan_owner(slow, clan, clan.owner_id, successor.player_id)
        slow.rollback()

    assert _owner_of(seeded, "c1") == "m2"


def test_two_leaves_with_the_same_owner(seeded):
    with seeded() as first, seeded() as second:
        clan = clan_service.get_owned_clan(second, GAME_ID, "c1", "owner")
        stale_owner_id = clan.owner_id

        result = clan_service.leave_clan(first, GAME_ID, "c1", "owner")
        assert result.new_owner.public_id == "m1"

        with pytest.raises(ModelNotFoundError):
            clan_service.reassign_clan_owner(second, clan, stale_owner_id, clan.memberships[2].player_id)
        second.rollback()

        with pytest.raises(ModelNotFoundError):
            clan_service.leave_clan(second, GAME_ID, "c1", "owner")

    assert _owner_of(seeded, "c1") == "m1"


def test_sole_owner_leaving_twice_deletes_once(seeded):
    with seeded() as session:
        player_service.create_player(
            session, GAME_ID, PlayerCreate.model_validate({"publicID": "loner", "name": "loner"})
        )
        clan_service.create_clan(
            session,
            GAME_ID,
            ClanCreate.model_validate({"publicID": "solo", "name": "solo", "ownerPublicID": "loner"}),
        )

    with seeded() as first, seeded() as second:
        clan = clan_service.get_owned_clan(second, GAME_ID, "solo", "loner")
        assert choose_successor(clan.memberships, clan.owner_id) is None

        result = clan_service.leave_clan(first, GAME_ID, "solo", "loner")
        assert result.clan_deleted is True

        with pytest.raises(ModelNotFoundError, match="Clan was not found with id: solo"):
            clan_service.remove_owned_clan(second, clan, clan.owner_id)
        second.rollback()

    with seeded() as session:
        with pytest.raises(ModelNotFoundError):
            clan_service.get_clan(session, GAME_ID, "solo")
        loner = player_service.get_player(session, GAME_ID, "loner")
        assert find_active_membership(session, GAME_ID, loner.id) is None
