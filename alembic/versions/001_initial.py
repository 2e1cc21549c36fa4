"""Initial migration

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

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
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), unique=True, nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255)),
        sa.Column('phone', sa.String(20)),
        sa.Column('role', sa.Enum('CUSTOMER', 'STAFF', name='userrole'), nullable=False),
        sa.Column('is_active', sa.Boolean(), default=True),
        sa.Column('refresh_token', sa.String(500)),
        sa.Column('last_login', sa.DateTime()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create tables table
    op.create_table(
        'tables',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('table_number', sa.String(20), unique=True, nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('location', sa.String(30), nullable=False),
        sa.Column('area', sa.String(100), nullable=False),
        sa.Column('features', sa.JSON(), default=list),
        sa.Column('price_per_person', sa.Numeric(10, 2)),
        sa.Column('is_active', sa.Boolean(), default=True),
        sa.Column('current_status', sa.String(20), default='available'),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create time_slots table
    op.create_table(
        'time_slots',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.String(5), nullable=False),
        sa.Column('end_time', sa.String(5), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('max_party_size', sa.Integer(), nullable=False),
        sa.Column('location', sa.String(30), nullable=False),
        sa.Column('area', sa.String(100), nullable=False),
        sa.Column('features', sa.JSON(), default=list),
        sa.Column('special_pricing', sa.Numeric(10, 2)),
        sa.Column('special_notes', sa.Text()),
        sa.Column('is_available', sa.Boolean(), default=True),
        sa.Column('created_by', sa.Uuid(), sa.ForeignKey('users.id', ondelete='SET NULL')),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create reservations table
    op.create_table(
        'reservations',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('customer_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('time_slot_id', sa.Uuid(), sa.ForeignKey('time_slots.id', ondelete='SET NULL')),
        sa.Column('table_id', sa.Uuid(), sa.ForeignKey('tables.id', ondelete='SET NULL')),
        sa.Column('party_size', sa.Integer(), nullable=False),
        sa.Column('reservation_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.String(5), nullable=False),
        sa.Column('end_time', sa.String(5), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('special_requests', sa.Text()),
        sa.Column('customer_notes', sa.Text()),
        sa.Column('staff_notes', sa.Text()),
        sa.Column('is_walk_in', sa.Boolean(), default=False),
        sa.Column('price_per_person_at_booking', sa.Numeric(10, 2)),
        sa.Column('total_price', sa.Numeric(10, 2)),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create reviews table
    op.create_table(
        'reviews',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('customer_id', sa.Uuid(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column(
            'reservation_id',
            sa.Uuid(),
            sa.ForeignKey('reservations.id', ondelete='CASCADE'),
            unique=True,
            nullable=False,
        ),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('food_rating', sa.Integer()),
        sa.Column('service_rating', sa.Integer()),
        sa.Column('ambiance_rating', sa.Integer()),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.Column('is_verified', sa.Boolean(), default=False),
        sa.Column('is_public', sa.Boolean(), default=True),
        sa.Column('staff_response', sa.Text()),
        sa.Column('responded_by', sa.Uuid(), sa.ForeignKey('users.id', ondelete='SET NULL')),
        sa.Column('responded_at', sa.DateTime()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create indexes
    op.create_index('ix_time_slots_date_location_available', 'time_slots', ['date', 'location', 'is_available'])
    op.create_index('ix_reservations_table_date_start', 'reservations', ['table_id', 'reservation_date', 'start_time'])
    op.create_index('ix_reservations_customer_date', 'reservations', ['customer_id', 'reservation_date'])
    op.create_index('ix_reservations_status_date', 'reservations', ['status', 'reservation_date'])
    op.create_index('ix_reviews_rating_created', 'reviews', ['rating', 'created_at'])
    op.create_index('ix_reviews_public_verified', 'reviews', ['is_public', 'is_verified'])


def downgrade() -> None:
    op.drop_table('reviews')
    op.drop_table('reservations')
    op.drop_table('time_slots')
    op.drop_table('tables')
    op.drop_table('users')
    sa.Enum(name='userrole').drop(op.get_bind(), checkfirst=True)
