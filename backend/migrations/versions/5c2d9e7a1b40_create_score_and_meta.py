"""create score and meta tables

Revision ID: 5c2d9e7a1b40
Revises:
Create Date: 2026-10-17 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2d9e7a1b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'score' not in existing_tables:
        op.create_table(
            'score',
            sa.Column('channel_id', sa.String(length=64), nullable=False),
            sa.Column('user_id', sa.String(length=64), nullable=False),
            sa.Column('username', sa.String(length=128), nullable=False),
            sa.Column('avg_ms', sa.Integer(), nullable=False),
            sa.Column('best_ms', sa.Integer(), nullable=False),
            sa.Column('updated_at', sa.BigInteger(), nullable=False),
            sa.PrimaryKeyConstraint('channel_id', 'user_id'),
        )
        op.create_index('ix_score_channel_rank', 'score', ['channel_id', 'avg_ms', 'best_ms'])

    if 'meta' not in existing_tables:
        op.create_table(
            'meta',
            sa.Column('key', sa.String(length=128), nullable=False),
            sa.Column('value', sa.Text(), nullable=True),
            sa.PrimaryKeyConstraint('key'),
        )


def downgrade():
    op.drop_table('meta')
    op.drop_index('ix_score_channel_rank', table_name='score')
    op.drop_table('score')
