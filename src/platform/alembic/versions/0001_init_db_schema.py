"""init_db_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18

Schema:
- user: Accounts (username + email, both unique)
- seat: Fixed coach layout, 80 seats in rows of 7, seeded here
- booking: Bookings with the booked seat ids and an active/cancelled status
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TOTAL_SEATS = 80
SEATS_PER_ROW = 7


def upgrade() -> None:
    """Create all tables and seed the seat layout."""

    # ========== STEP 1: Create tables ==========

    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_username'), 'user', ['username'], unique=True)
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)

    seat_table = op.create_table(
        'seat',
        sa.Column('id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('seat_number', sa.Integer(), nullable=False),
        sa.Column('row_number', sa.Integer(), nullable=False),
        sa.Column('seat_position', sa.Integer(), nullable=False),
        sa.Column('is_available', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('seat_number'),
    )
    op.create_index('ix_seat_row_position', 'seat', ['row_number', 'seat_position'])

    op.create_table(
        'booking',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('reference', sa.String(length=32), nullable=False),
        sa.Column('seat_ids', postgresql.ARRAY(sa.Integer()), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('reference'),
    )
    op.create_index(op.f('ix_booking_user_id'), 'booking', ['user_id'])
    op.create_index(op.f('ix_booking_status'), 'booking', ['status'])

    # ========== STEP 2: Seed seats ==========

    op.bulk_insert(
        seat_table,
        [
            {
                'id': seat_id,
                'seat_number': seat_id,
                'row_number': (seat_id - 1) // SEATS_PER_ROW + 1,
                'seat_position': (seat_id - 1) % SEATS_PER_ROW + 1,
                'is_available': True,
            }
            for seat_id in range(1, TOTAL_SEATS + 1)
        ],
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index(op.f('ix_booking_status'), table_name='booking')
    op.drop_index(op.f('ix_booking_user_id'), table_name='booking')
    op.drop_table('booking')
    op.drop_index('ix_seat_row_position', table_name='seat')
    op.drop_table('seat')
    op.drop_index(op.f('ix_user_email'), table_name='user')
    op.drop_index(op.f('ix_user_username'), table_name='user')
    op.drop_table('user')
