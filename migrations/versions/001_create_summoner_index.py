"""Create summoner_index table

Revision ID: 001
Revises: 
Create Date: 2026-01-10 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table('summoner_index',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('puuid', sa.String(length=78), nullable=False),
        sa.Column('game_name', sa.String(length=32), nullable=False),
        sa.Column('tag_line', sa.String(length=32), nullable=False),
        sa.Column('platform', sa.String(length=16), nullable=False),
        sa.Column('cluster', sa.String(length=16), nullable=False),
        sa.Column('seen', sa.Integer(), nullable=False),
        sa.Column('first_seen', sa.BigInteger(), nullable=False),
        sa.Column('last_seen', sa.BigInteger(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_index('uq_summoner_index_puuid', 'summoner_index', ['puuid'], unique=True)
    op.create_index('idx_summoner_index_game_name', 'summoner_index', ['game_name'])


def downgrade() -> None:
    op.drop_index('idx_summoner_index_game_name', table_name='summoner_index')
    op.drop_index('uq_summoner_index_puuid', table_name='summoner_index')
    op.drop_table('summoner_index')
