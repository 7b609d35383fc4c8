"""Shared pytest fixtures.

Adds the ``src/`` directory to ``sys.path`` so tests can import the
``guildhall`` package without an editable install, and provides in-memory
SQLite sessions plus small builders for games, players and clans.
"""

import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from guildhall.models import Base, Clan, Game, Membership, Player  # noqa: E402

GAME_ID = "test-game"


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing and dispose it after use."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session(engine):
    """Create a new database session for a test."""
    Session = sessionmaker(bind=engine)  # noqa: N806
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def game(session):
    """Create a game with levels 1..10 and offsets of 1."""
    game = Game(
        public_id=GAME_ID,
        name="Test Game",
        metadata_='{"x": 1}',
        min_membership_level=1,
        max_membership_level=10,
        min_level_to_accept_application=5,
        min_level_to_create_invitation=5,
        min_level_offset_to_promote_member=1,
        min_level_offset_to_demote_member=1,
        allow_application=True,
    )
    session.add(game)
    session.commit()
    return game


@pytest.fixture
def make_player(session, game):
    """Return a builder that inserts a player into the test game."""

    def _make(public_id: str, name: str | None = None) -> Player:
        player = Player(game_id=game.public_id, public_id=public_id, name=name or public_id)
        session.add(player)
        session.commit()
        return player

    return _make


@pytest.fixture
def make_clan(session, game, make_player):
    """Return a builder for a clan with an owner and approved members.

    Members are given increasing ``created_at`` values in list order, so the
    first public id in ``members`` is the earliest to have joined.
    """

    def _make(
        public_id: str,
        *,
        name: str | None = None,
        owner: str | None = None,
        members: tuple[str, ...] = (),
        member_level: int = 1,
    ) -> Clan:
        owner_player = make_player(owner or f"{public_id}-owner")
        clan = Clan(
            game_id=game.public_id,
            public_id=public_id,
            name=name or public_id,
            metadata_="{}",
            owner_id=owner_player.id,
        )
        session.add(clan)
        session.flush()

        joined = datetime(2024, 1, 1, tzinfo=UTC)
        session.add(
            Membership(
                game_id=game.public_id,
                clan_id=clan.id,
                player_id=owner_player.id,
                requestor_id=owner_player.id,
                level=game.max_membership_level,
                approved=True,
                created_at=joined,
            )
        )
        for offset, member_id in enumerate(members, start=1):
            player = make_player(member_id)
            session.add(
                Membership(
                    game_id=game.public_id,
                    clan_id=clan.id,
                    player_id=player.id,
                    requestor_id=player.id,
                    level=member_level,
                    approved=True,
                    created_at=joined + timedelta(hours=offset),
                )
            )
        session.commit()
        return clan

    return _make
