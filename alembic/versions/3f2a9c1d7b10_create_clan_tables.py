"""Create games, players, clans and memberships tables

Revision ID: 3f2a9c1d7b10
Revises:
Create Date: 2026-10-19 10:12:41.220314

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _metadata_checks(table: str) -> list[sa.CheckConstraint]:
    # json_valid() only exists on SQLite
    if op.get_bind().dialect.name != 'sqlite':
        return []
    return [sa.CheckConstraint('json_valid(metadata)', name=f'ck_{table}_metadata_json')]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'games',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('public_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('metadata', sa.Text(), nullable=False),
        sa.Column('min_membership_level', sa.Integer(), nullable=False),
        sa.Column('max_membership_level', sa.Integer(), nullable=False),
        sa.Column('min_level_to_accept_application', sa.Integer(), nullable=False),
        sa.Column('min_level_to_create_invitation', sa.Integer(), nullable=False),
        sa.Column('min_level_offset_to_promote_member', sa.Integer(), nullable=False),
        sa.Column('min_level_offset_to_demote_member', sa.Integer(), nullable=False),
        sa.Column('allow_application', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('public_id'),
        sa.CheckConstraint('length(public_id) <= 36', name='ck_games_public_id_length'),
        *_metadata_checks('games'),
    )

    op.create_table(
        'players',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('game_id', sa.String(length=36), sa.ForeignKey('games.public_id', ondelete='CASCADE'), nullable=False),
        sa.Column('public_id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('metadata', sa.Text(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('game_id', 'public_id', name='uq_players_game_public_id'),
        sa.CheckConstraint('length(public_id) <= 255', name='ck_players_public_id_length'),
        *_metadata_checks('players'),
    )
    op.create_index('ix_players_game_id', 'players', ['game_id'])

    op.create_table(
        'clans',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('game_id', sa.String(length=36), sa.ForeignKey('games.public_id', ondelete='CASCADE'), nullable=False),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('players.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('public_id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('metadata', sa.Text(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('game_id', 'public_id', name='uq_clans_game_public_id'),
        sa.CheckConstraint('length(public_id) <= 255', name='ck_clans_public_id_length'),
        *_metadata_checks('clans'),
    )
    op.create_index('ix_clans_game_id', 'clans', ['game_id'])
    op.create_index('ix_clans_name', 'clans', ['name'])

    op.create_table(
        'memberships',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('game_id', sa.String(length=36), nullable=False),
        sa.Column('clan_id', sa.Integer(), sa.ForeignKey('clans.id', ondelete='CASCADE'), nullable=False),
        sa.Column('player_id', sa.Integer(), sa.ForeignKey('players.id', ondelete='CASCADE'), nullable=False),
        sa.Column('requestor_id', sa.Integer(), sa.ForeignKey('players.id', ondelete='CASCADE'), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('approved', sa.Boolean(), nullable=False),
        sa.Column('denied', sa.Boolean(), nullable=False),
        sa.Column('banned', sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_memberships_game_player', 'memberships', ['game_id', 'player_id'])
    op.create_index('ix_memberships_clan_created', 'memberships', ['clan_id', 'created_at'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_memberships_clan_created', table_name='memberships')
    op.drop_index('ix_memberships_game_player', table_name='memberships')
    op.drop_table('memberships')
    op.drop_index('ix_clans_name', table_name='clans')
    op.drop_index('ix_clans_game_id', table_name='clans')
    op.drop_table('clans')
    op.drop_index('ix_players_game_id', table_name='players')
    op.drop_table('players')
    op.drop_table('games')
