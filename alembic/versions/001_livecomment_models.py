"""Livecomment models migration.

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates tables for livecomments, NG words and livecomment reports. The users,
themes, icons and livestreams tables belong to the surrounding system and
must already exist.
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'livecomments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('livestream_id', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.Column('tip', sa.BigInteger(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['livestream_id'], ['livestreams.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_livecomments_user_id', 'livecomments', ['user_id'])
    op.create_index(
        'ix_livecomments_livestream_id_created_at',
        'livecomments',
        ['livestream_id', 'created_at'],
    )

    op.create_table(
        'ng_words',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('livestream_id', sa.Integer(), nullable=False),
        sa.Column('word', sa.Text(), nullable=False),
        sa.Column('created_at', sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['livestream_id'], ['livestreams.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_ng_words_livestream_id_user_id',
        'ng_words',
        ['livestream_id', 'user_id'],
    )

    # Reports go away with the comment they point at
    op.create_table(
        'livecomment_reports',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('livestream_id', sa.Integer(), nullable=False),
        sa.Column('livecomment_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['livestream_id'], ['livestreams.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['livecomment_id'], ['livecomments.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_livecomment_reports_livestream_id',
        'livecomment_reports',
        ['livestream_id'],
    )
    op.create_index(
        'ix_livecomment_reports_livecomment_id',
        'livecomment_reports',
        ['livecomment_id'],
    )


def downgrade() -> None:
    op.drop_index('ix_livecomment_reports_livecomment_id', table_name='livecomment_reports')
    op.drop_index('ix_livecomment_reports_livestream_id', table_name='livecomment_reports')
    op.drop_table('livecomment_reports')

    op.drop_index('ix_ng_words_livestream_id_user_id', table_name='ng_words')
    op.drop_table('ng_words')

    op.drop_index('ix_livecomments_livestream_id_created_at', table_name='livecomments')
    op.drop_index('ix_livecomments_user_id', table_name='livecomments')
    op.drop_table('livecomments')
