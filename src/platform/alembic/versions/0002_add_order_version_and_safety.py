"""add_order_version_and_safety

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19

Changes:
- gift_order.version: bumped on every write, checked by conditional updates
- user_report: reports one user files against another
- safety_alert: panic / dispute alerts raised during a delivery
- security_event: append-only audit trail of sign-ins, lockouts, blocks and reports
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ARRAY, UUID


# revision identifiers, used by Alembic.
revision: str = '0002'
down_revision: Union[str, Sequence[str], None] = '0001'
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
    # ========== gift_order.version ==========
    op.add_column(
        'gift_order', sa.Column('version', sa.Integer(), server_default='0', nullable=False)
    )

    # ========== user_report ==========
    op.create_table(
        'user_report',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('reporter_id', sa.Integer(), nullable=False),
        sa.Column('reporter_name', sa.String(length=100), nullable=False),
        sa.Column('reported_user_id', sa.Integer(), nullable=False),
        sa.Column('reported_user_name', sa.String(length=100), nullable=False),
        sa.Column('report_type', sa.String(length=20), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('order_id', UUID(as_uuid=True), nullable=True),
        sa.Column('evidence', ARRAY(sa.Text()), server_default='{}', nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        _timestamp('created_at', nullable=False, default_now=True),
        _timestamp('updated_at', nullable=False, default_now=True),
        sa.ForeignKeyConstraint(['reporter_id'], ['app_user.id']),
        sa.ForeignKeyConstraint(['reported_user_id'], ['app_user.id']),
        sa.ForeignKeyConstraint(['order_id'], ['gift_order.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            "report_type IN ('misconduct', 'safety', 'fraud', 'harassment', 'other')",
            name='ck_user_report_type',
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'underReview', 'resolved', 'dismissed')",
            name='ck_user_report_status',
        ),
        sa.CheckConstraint('reporter_id <> reported_user_id', name='ck_user_report_not_self'),
    )
    op.create_index(
        'ix_user_report_reporter_created', 'user_report', ['reporter_id', 'created_at']
    )

    # ========== safety_alert ==========
    op.create_table(
        'safety_alert',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('user_name', sa.String(length=100), nullable=False),
        sa.Column('alert_type', sa.String(length=20), nullable=False),
        sa.Column('order_id', UUID(as_uuid=True), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('is_resolved', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('admin_response', sa.Text(), nullable=True),
        _timestamp('created_at', nullable=False, default_now=True),
        _timestamp('resolved_at'),
        sa.ForeignKeyConstraint(['user_id'], ['app_user.id']),
        sa.ForeignKeyConstraint(['order_id'], ['gift_order.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            "alert_type IN ('panic', 'suspicious', 'delay', 'dispute')",
            name='ck_safety_alert_type',
        ),
        sa.CheckConstraint(
            '(latitude IS NULL) = (longitude IS NULL)', name='ck_safety_alert_location_pair'
        ),
    )
    op.create_index('ix_safety_alert_user_created', 'safety_alert', ['user_id', 'created_at'])

    # ========== security_event ==========
    op.create_table(
        'security_event',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('action', sa.String(length=50), nullable=False),
        sa.Column('details', sa.Text(), nullable=False),
        sa.Column('severity', sa.String(length=10), nullable=False),
        sa.Column('ip_address', sa.String(length=45), nullable=True),
        sa.Column('user_agent', sa.Text(), nullable=True),
        _timestamp('created_at', nullable=False, default_now=True),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            "severity IN ('low', 'medium', 'high', 'critical')",
            name='ck_security_event_severity',
        ),
    )
    op.create_index('ix_security_event_created', 'security_event', ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_security_event_created', table_name='security_event')
    op.drop_table('security_event')
    op.drop_index('ix_safety_alert_user_created', table_name='safety_alert')
    op.drop_table('safety_alert')
    op.drop_index('ix_user_report_reporter_created', table_name='user_report')
    op.drop_table('user_report')
    op.drop_column('gift_order', 'version')
