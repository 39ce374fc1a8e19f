"""Initial schema: users, swipes, matches.

Revision ID: 001
Revises:
Create Date: 2026-10-12 12:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Users table
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('username', sa.String(50), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('birthday', sa.Date(), nullable=False),
        sa.Column('gender', sa.String(20), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(500), nullable=True),

        # Discovery preferences
        sa.Column('seeking_gender', sa.String(20), nullable=False, server_default='any'),
        sa.Column('min_age_preference', sa.Integer(), nullable=False, server_default='18'),
        sa.Column('max_age_preference', sa.Integer(), nullable=False, server_default='99'),

        # Location
        sa.Column('city', sa.String(200), nullable=True),
        sa.Column('country', sa.String(100), nullable=True),

        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username', name='uq_users_username'),
        sa.CheckConstraint(
            'min_age_preference >= 18 AND min_age_preference <= max_age_preference'
            ' AND max_age_preference <= 120',
            name='user_age_preference_check',
        ),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    # Discovery scans in sign-up order
    op.create_index('ix_users_created_at_id', 'users', ['created_at', 'id'])

    # Swipes table
    op.create_table(
        'swipes',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('swiper_id', sa.Uuid(), nullable=False),
        sa.Column('target_id', sa.Uuid(), nullable=False),
        sa.Column('decision', sa.String(10), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['swiper_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['target_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('swiper_id', 'target_id', name='uq_swipe_pair'),
        sa.CheckConstraint('swiper_id <> target_id', name='swipe_no_self_check'),
        sa.CheckConstraint("decision IN ('LIKE', 'PASS')", name='swipe_decision_check'),
    )
    op.create_index('ix_swipes_swiper_id', 'swipes', ['swiper_id'])
    op.create_index('ix_swipes_target_id', 'swipes', ['target_id'])

    # Matches table
    op.create_table(
        'matches',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_a_id', sa.Uuid(), nullable=False),
        sa.Column('user_b_id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_a_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_b_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_a_id', 'user_b_id', name='uq_match_pair'),
        sa.CheckConstraint('user_a_id < user_b_id', name='match_user_order_check'),
    )
    op.create_index('ix_matches_user_a_id', 'matches', ['user_a_id'])
    op.create_index('ix_matches_user_b_id', 'matches', ['user_b_id'])


def downgrade() -> None:
    op.drop_table('matches')
    op.drop_table('swipes')
    op.drop_table('users')
