"""init_db_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- app_user: senders, riders and admins (rider fields nullable for senders)
- gift_order: gift orders with sender/rider snapshots, money and media URLs
- otp_verification: short-lived verification codes bound to contact channels
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str, *, nullable: bool = True, default_now: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=sa.text('now()') if default_now else None,
        nullable=nullable,
    )


def upgrade() -> None:
    """Create all tables."""

    # ========== app_user ==========
    op.create_table(
        'app_user',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone_number', sa.String(length=20), nullable=False),
        sa.Column('full_name', sa.String(length=100), nullable=False),
        sa.Column('user_type', sa.String(length=10), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('cnic', sa.String(length=15), nullable=True),
        sa.Column('city', sa.String(length=50), nullable=True),
        sa.Column('rider_status', sa.String(length=10), nullable=True),
        sa.Column('status_reason', sa.Text(), nullable=True),
        sa.Column('profile_image_url', sa.Text(), nullable=True),
        sa.Column('average_rating', sa.Numeric(3, 2), server_default='0', nullable=False),
        sa.Column('total_deliveries', sa.Integer(), server_default='0', nullable=False),
        sa.Column('is_email_verified', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('is_phone_verified', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('login_attempts', sa.Integer(), server_default='0', nullable=False),
        sa.Column('is_blocked', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('blocked_reason', sa.Text(), nullable=True),
        _timestamp('last_login_at'),
        sa.Column('is_admin', sa.Boolean(), server_default=sa.false(), nullable=False),
        _timestamp('created_at', nullable=False, default_now=True),
        _timestamp('updated_at', nullable=False, default_now=True),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("user_type IN ('sender', 'rider')", name='ck_app_user_user_type'),
        sa.CheckConstraint(
            "rider_status IS NULL OR rider_status IN ('pending', 'approved', 'rejected', 'banned')",
            name='ck_app_user_rider_status',
        ),
    )
    op.create_index(op.f('ix_app_user_email'), 'app_user', ['email'], unique=True)

    # ========== gift_order ==========
    op.create_table(
        'gift_order',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('sender_id', sa.Integer(), nullable=False),
        sa.Column('sender_name', sa.String(length=100), nullable=False),
        sa.Column('sender_phone', sa.String(length=20), nullable=False),
        sa.Column('sender_city', sa.String(length=50), nullable=True),
        sa.Column('gift_name', sa.String(length=100), nullable=False),
        sa.Column('product_link', sa.Text(), nullable=True),
        sa.Column('personal_message', sa.Text(), nullable=True),
        sa.Column('request_video', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('receiver_name', sa.String(length=100), nullable=False),
        sa.Column('receiver_address', sa.String(length=200), nullable=False),
        sa.Column('receiver_city', sa.String(length=50), nullable=False),
        sa.Column('receiver_phone', sa.String(length=20), nullable=False),
        sa.Column('delivery_fee', sa.Numeric(12, 2), nullable=False),
        sa.Column('tip', sa.Numeric(12, 2), nullable=True),
        sa.Column('estimated_product_price', sa.Numeric(12, 2), nullable=True),
        sa.Column('actual_product_price', sa.Numeric(12, 2), nullable=True),
        sa.Column('total_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('payment_status', sa.String(length=10), nullable=False),
        sa.Column('payment_method', sa.String(length=30), nullable=True),
        sa.Column('status', sa.String(length=10), nullable=False),
        sa.Column('rider_id', sa.Integer(), nullable=True),
        sa.Column('rider_name', sa.String(length=100), nullable=True),
        sa.Column('rider_phone', sa.String(length=20), nullable=True),
        _timestamp('created_at', nullable=False, default_now=True),
        _timestamp('accepted_at'),
        _timestamp('delivered_at'),
        _timestamp('updated_at', nullable=False, default_now=True),
        _timestamp('cancelled_at'),
        sa.Column('gift_image_url', sa.Text(), nullable=True),
        sa.Column('receipt_image_url', sa.Text(), nullable=True),
        sa.Column('payment_proof_url', sa.Text(), nullable=True),
        sa.Column('reaction_video_url', sa.Text(), nullable=True),
        sa.Column('delivery_latitude', sa.Float(), nullable=True),
        sa.Column('delivery_longitude', sa.Float(), nullable=True),
        sa.Column('rating', sa.SmallInteger(), nullable=True),
        sa.Column('review', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['sender_id'], ['app_user.id']),
        sa.ForeignKeyConstraint(['rider_id'], ['app_user.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'purchased', 'inTransit', 'delivered', 'cancelled')",
            name='ck_gift_order_status',
        ),
        sa.CheckConstraint(
            "payment_status IN ('pending', 'confirmed', 'disputed', 'refunded')",
            name='ck_gift_order_payment_status',
        ),
        sa.CheckConstraint(
            'rating IS NULL OR rating BETWEEN 1 AND 5', name='ck_gift_order_rating_range'
        ),
        sa.CheckConstraint(
            "(status = 'pending' AND rider_id IS NULL) "
            "OR (status IN ('accepted', 'purchased', 'inTransit', 'delivered') AND rider_id IS NOT NULL) "
            "OR status = 'cancelled'",
            name='ck_gift_order_rider_matches_status',
        ),
    )
    op.create_index(
        'ix_gift_order_status_receiver_city',
        'gift_order',
        ['status', 'receiver_city', 'created_at'],
    )
    op.create_index('ix_gift_order_sender_id', 'gift_order', ['sender_id'])
    op.create_index('ix_gift_order_rider_id', 'gift_order', ['rider_id'])

    # ========== otp_verification ==========
    op.create_table(
        'otp_verification',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('phone_number', sa.String(length=20), nullable=True),
        sa.Column('cnic_number', sa.String(length=15), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('otp_type', sa.String(length=10), nullable=False),
        sa.Column('otp_code', sa.String(length=10), nullable=False),
        sa.Column('status', sa.String(length=10), nullable=False),
        sa.Column('attempts', sa.Integer(), server_default='0', nullable=False),
        sa.Column('max_attempts', sa.Integer(), server_default='3', nullable=False),
        _timestamp('expires_at', nullable=False),
        _timestamp('created_at', nullable=False, default_now=True),
        _timestamp('verified_at'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('attempts <= max_attempts', name='ck_otp_attempts_capped'),
    )
    op.create_index(
        'ix_otp_verification_bundle',
        'otp_verification',
        ['otp_type', 'phone_number', 'email', 'cnic_number', 'status'],
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index('ix_otp_verification_bundle', table_name='otp_verification')
    op.drop_table('otp_verification')
    op.drop_index('ix_gift_order_rider_id', table_name='gift_order')
    op.drop_index('ix_gift_order_sender_id', table_name='gift_order')
    op.drop_index('ix_gift_order_status_receiver_city', table_name='gift_order')
    op.drop_table('gift_order')
    op.drop_index(op.f('ix_app_user_email'), table_name='app_user')
    op.drop_table('app_user')
