"""Initial schema

Revision ID: 3f2a9c1d7b10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


CATEGORY_VALUES = ('plumbing', 'electrical', 'landscaping')


def upgrade() -> None:
    """Create every HomeHelp table."""
    op.create_table(
        'users',
        sa.Column('uid', sa.String(length=26), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('role', sa.Enum('customer', 'provider', 'admin', name='user_role_enum'),
                  server_default='customer', nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('profile_image', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default='1', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('uid')
    )
    op.create_index(op.f('ix_users_uid'), 'users', ['uid'], unique=False)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_city'), 'users', ['city'], unique=False)

    op.create_table(
        'services',
        sa.Column('uid', sa.String(length=26), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.Enum(*CATEGORY_VALUES, name='service_category_enum'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('uid'),
        sa.UniqueConstraint('name')
    )
    op.create_index(op.f('ix_services_uid'), 'services', ['uid'], unique=False)
    op.create_index(op.f('ix_services_category'), 'services', ['category'], unique=False)

    op.create_table(
        'provider_profiles',
        sa.Column('uid', sa.String(length=26), nullable=False),
        sa.Column('user_id', sa.String(length=26), nullable=False),
        sa.Column('hourly_rate', sa.Float(), nullable=False),
        sa.Column('is_verified', sa.Boolean(), server_default='0', nullable=False),
        sa.Column('category', sa.Enum(*CATEGORY_VALUES, name='provider_category_enum'), nullable=False),
        sa.Column('work_images', sa.JSON(), nullable=True, comment='portfolio image URLs'),
        sa.Column('years_of_experience', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.uid'], ),
        sa.PrimaryKeyConstraint('uid')
    )
    op.create_index(op.f('ix_provider_profiles_uid'), 'provider_profiles', ['uid'], unique=False)
    op.create_index(op.f('ix_provider_profiles_user_id'), 'provider_profiles', ['user_id'], unique=True)
    op.create_index(op.f('ix_provider_profiles_category'), 'provider_profiles', ['category'], unique=False)

    op.create_table(
        'provider_service_link',
        sa.Column('provider_id', sa.String(length=26), nullable=False),
        sa.Column('service_id', sa.String(length=26), nullable=False),
        sa.ForeignKeyConstraint(['provider_id'], ['provider_profiles.uid'], ),
        sa.ForeignKeyConstraint(['service_id'], ['services.uid'], ),
        sa.PrimaryKeyConstraint('provider_id', 'service_id')
    )

    op.create_table(
        'credentials',
        sa.Column('uid', sa.String(length=26), nullable=False),
        sa.Column('provider_id', sa.String(length=26), nullable=False),
        sa.Column('document_name', sa.String(length=200), nullable=False),
        sa.Column('document_url', sa.String(length=500), nullable=False),
        sa.Column('is_verified', sa.Boolean(), server_default='0', nullable=False),
        sa.Column('submitted_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('verified_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['provider_id'], ['provider_profiles.uid'], ),
        sa.PrimaryKeyConstraint('uid')
    )
    op.create_index(op.f('ix_credentials_uid'), 'credentials', ['uid'], unique=False)
    op.create_index(op.f('ix_credentials_provider_id'), 'credentials', ['provider_id'], unique=False)

    op.create_table(
        'bookings',
        sa.Column('uid', sa.String(length=26), nullable=False),
        sa.Column('customer_id', sa.String(length=26), nullable=False),
        sa.Column('provider_id', sa.String(length=26), nullable=False),
        sa.Column('service_id', sa.String(length=26), nullable=False),
        sa.Column('status', sa.Enum('requested', 'accepted', 'completed', 'approved', 'rejected', 'cancelled',
                                    name='booking_status_enum'),
                  server_default='requested', nullable=False),
        sa.Column('scheduled_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('duration_hours', sa.Float(), nullable=False),
        sa.Column('total_amount', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['customer_id'], ['users.uid'], ),
        sa.ForeignKeyConstraint(['provider_id'], ['users.uid'], ),
        sa.ForeignKeyConstraint(['service_id'], ['services.uid'], ),
        sa.PrimaryKeyConstraint('uid')
    )
    op.create_index(op.f('ix_bookings_uid'), 'bookings', ['uid'], unique=False)
    op.create_index(op.f('ix_bookings_customer_id'), 'bookings', ['customer_id'], unique=False)
    op.create_index(op.f('ix_bookings_provider_id'), 'bookings', ['provider_id'], unique=False)
    op.create_index(op.f('ix_bookings_service_id'), 'bookings', ['service_id'], unique=False)

    op.create_table(
        'payments',
        sa.Column('uid', sa.String(length=26), nullable=False),
        sa.Column('booking_id', sa.String(length=26), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('status', sa.Enum('pending', 'completed', 'failed', 'refunded', name='payment_status_enum'),
                  server_default='pending', nullable=False),
        sa.Column('payment_method', sa.String(length=50), nullable=True),
        sa.Column('transaction_id', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.uid'], ),
        sa.PrimaryKeyConstraint('uid')
    )
    op.create_index(op.f('ix_payments_uid'), 'payments', ['uid'], unique=False)
    op.create_index(op.f('ix_payments_booking_id'), 'payments', ['booking_id'], unique=True)

    op.create_table(
        'reviews',
        sa.Column('uid', sa.String(length=26), nullable=False),
        sa.Column('booking_id', sa.String(length=26), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False, comment='1..5'),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.uid'], ),
        sa.PrimaryKeyConstraint('uid')
    )
    op.create_index(op.f('ix_reviews_uid'), 'reviews', ['uid'], unique=False)
    op.create_index(op.f('ix_reviews_booking_id'), 'reviews', ['booking_id'], unique=True)


def downgrade() -> None:
    """Drop every HomeHelp table."""
    op.drop_table('reviews')
    op.drop_table('payments')
    op.drop_table('bookings')
    op.drop_table('credentials')
    op.drop_table('provider_service_link')
    op.drop_table('provider_profiles')
    op.drop_table('services')
    op.drop_table('users')
