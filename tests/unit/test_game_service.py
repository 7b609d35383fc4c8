"""Unit tests for the game service."""

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from guildhall.errors import ModelNotFoundError, PolicyValidationError
from guildhall.schemas import GameCreate, GameUpdate
from guildhall.services.game_service import create_game, get_game, get_game_policy, update_game


def _payload(**overrides) -> GameCreate:
    values = {
        "publicID": "created-game",
        "name": "Created",
        "metadata": '{"x": 1}',
        "minMembershipLevel": 1,
        "maxMembershipLevel": 10,
        "minLevelToAcceptApplication": 1,
        "minLevelToCreateInvitation": 1,
        "minLevelOffsetToPromoteMember": 1,
        "minLevelOffsetToDemoteMember": 1,
        "allowApplication": True,
    }
    values.update(overrides)
    return GameCreate.model_validate(values)


def test_create_game_persists_every_field(session):
    create_game(session, _payload())

    game = get_game(session, "created-game")
    assert game.name == "Created"
    assert game.metadata_ == '{"x": 1}'
    assert game.min_membership_level == 1
    assert game.max_membership_level == 10
    assert game.allow_application is True


def test_create_game_reports_all_violations(session):
    with pytest.raises(PolicyValidationError) as exc_info:
        create_game(session, _payload(minMembershipLevel=15))

    assert len(exc_info.value.reasons) == 3
    with pytest.raises(ModelNotFoundError):
        get_game(session, "created-game")


def test_create_game_surfaces_store_errors(session):
    with pytest.raises(IntegrityError):
        create_game(session, _payload(metadata="not-json"))

    # The session is usable again after the rollback
    create_game(session, _payload())


def test_get_game_not_found(session):
    with pytest.raises(ModelNotFoundError, match="Game was not found with id: missing"):
        get_game(session, "missing")


def test_update_game_changes_fields(session, game):
    update_game(
        session,
        game.public_id,
        GameUpdate.model_validate({"name": "Renamed", "metadata": '{"y": 10}', "maxMembershipLevel": 20}),
    )

    stored = get_game(session, game.public_id)
    assert stored.name == "Renamed"
    assert stored.metadata_ == '{"y": 10}'
    assert stored.max_membership_level == 20
    assert stored.min_membership_level == 1


def test_update_game_validates_complete_resulting_policy(session, game):
    # Only the minimum changes, but it breaks all three rules against stored values
    with pytest.raises(PolicyValidationError) as exc_info:
        update_game(session, game.public_id, GameUpdate.model_validate({"minMembershipLevel": 11}))

    assert exc_info.value.reasons == [
        "MaxMembershipLevel should be greater or equal to MinMembershipLevel",
        "MinLevelToAcceptApplication should be greater or equal to MinMembershipLevel",
        "MinLevelToCreateInvitation should be greater or equal to MinMembershipLevel",
    ]
    assert get_game(session, game.public_id).min_membership_level == 1


def test_update_game_ignores_payload_public_id(session, game):
    update_game(session, game.public_id, GameUpdate.model_validate({"publicID": "other"}))

    assert get_game(session, game.public_id).public_id == game.public_id


def test_update_missing_game(session):
    with pytest.raises(ModelNotFoundError):
        update_game(session, "missing", GameUpdate.model_validate({"name": "x"}))


def test_policy_is_read_fresh(session, game):
    assert get_game_policy(session, game.public_id).allow_application is True

    update_game(session, game.public_id, GameUpdate.model_validate({"allowApplication": False}))

    assert get_game_policy(session, game.public_id).allow_application is False


def test_update_payload_rejects_explicit_null():
    with pytest.raises(ValidationError, match="must not be null"):
        GameUpdate.model_validate({"minMembershipLevel": None})

    assert GameUpdate.model_validate({"name": "x"}).model_dump(exclude_unset=True) == {"name": "x"}
