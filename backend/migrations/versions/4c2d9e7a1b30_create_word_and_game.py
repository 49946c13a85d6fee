"""create word and game tables

Revision ID: 4c2d9e7a1b30
Revises:
Create Date: 2026-10-18 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4c2d9e7a1b30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'word',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('word', sa.String(length=128), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('category', 'word', name='uq_word_category_word'),
    )
    with op.batch_alter_table('word') as batch_op:
        batch_op.create_index(batch_op.f('ix_word_category'), ['category'], unique=False)

    op.create_table(
        'game',
        sa.Column('id', sa.String(length=24), nullable=False),
        sa.Column('level', sa.String(length=64), nullable=False),
        sa.Column('answer', sa.String(length=128), nullable=False),
        sa.Column('progress', sa.String(length=128), nullable=False),
        sa.Column('attempts', sa.Integer(), nullable=False),
        sa.Column('over', sa.Boolean(), nullable=False),
        sa.Column('guessed_letters', sa.Text(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('game') as batch_op:
        batch_op.create_index(batch_op.f('ix_game_expires_at'), ['expires_at'], unique=False)


def downgrade():
    with op.batch_alter_table('game') as batch_op:
        batch_op.drop_index(batch_op.f('ix_game_expires_at'))
    op.drop_table('game')

    with op.batch_alter_table('word') as batch_op:
        batch_op.drop_index(batch_op.f('ix_word_category'))
    op.drop_table('word')
