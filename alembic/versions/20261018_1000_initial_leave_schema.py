"""Initial leave schema: organizations, profiles, balances, requests, notifications, audit

Revision ID: 20261018_initial
Revises:
Create Date: 2026-10-18 10:00
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261018_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# SQLAlchemy Enum зберігає імена членів
user_role = sa.Enum('ADMIN', 'WORKER', 'ORG_MANAGER', 'SALES_MANAGER', 'ADMINISTRATOR', name='userrole')
leave_type = sa.Enum('VACATION', 'ROL', 'SICK_LEAVE', name='leaverequesttype')
leave_status = sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='leaverequeststatus')
notification_type = sa.Enum('ANNOUNCEMENT', 'ASSIGNMENT', 'LEAVE_REQUEST', 'LEAVE_RESPONSE', name='notificationtype')


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'organizations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('slug', sa.String(100), nullable=False, unique=True),
        *_timestamps(),
    )

    op.create_table(
        'profiles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(200), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('position', sa.String(100), nullable=True),
        sa.Column('role', user_role, nullable=False),
        sa.Column('organization_id', sa.Integer(), sa.ForeignKey('organizations.id', ondelete='CASCADE'), nullable=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index(op.f('ix_profiles_email'), 'profiles', ['email'], unique=True)
    op.create_index(op.f('ix_profiles_organization_id'), 'profiles', ['organization_id'])

    op.create_table(
        'leave_balances',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('worker_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('organization_id', sa.Integer(), sa.ForeignKey('organizations.id', ondelete='CASCADE'), nullable=True),
        sa.Column('vacation_hours', sa.Numeric(7, 2), nullable=False),
        sa.Column('rol_hours', sa.Numeric(7, 2), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('worker_id', name='uq_leave_balances_worker'),
    )
    op.create_index(op.f('ix_leave_balances_worker_id'), 'leave_balances', ['worker_id'])
    op.create_index(op.f('ix_leave_balances_organization_id'), 'leave_balances', ['organization_id'])

    op.create_table(
        'leave_requests',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('worker_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('organization_id', sa.Integer(), sa.ForeignKey('organizations.id', ondelete='CASCADE'), nullable=True),
        sa.Column('request_type', leave_type, nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('hours_requested', sa.Numeric(7, 2), nullable=False),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('certificate_url', sa.String(500), nullable=True),
        sa.Column('status', leave_status, nullable=False),
        sa.Column('reviewed_by', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='SET NULL'), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f('ix_leave_requests_worker_id'), 'leave_requests', ['worker_id'])
    op.create_index(op.f('ix_leave_requests_organization_id'), 'leave_requests', ['organization_id'])
    op.create_index(op.f('ix_leave_requests_status'), 'leave_requests', ['status'])

    op.create_table(
        'notification_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('organization_id', sa.Integer(), sa.ForeignKey('organizations.id', ondelete='CASCADE'), nullable=True),
        sa.Column('notification_type', notification_type, nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('entity_type', sa.String(50), nullable=True),
        sa.Column('entity_id', sa.Integer(), nullable=True),
        sa.Column('sent_at', sa.DateTime(), nullable=False),
        sa.Column('read_at', sa.DateTime(), nullable=True),
    )
    op.create_index(op.f('ix_notification_logs_user_id'), 'notification_logs', ['user_id'])
    op.create_index(op.f('ix_notification_logs_sent_at'), 'notification_logs', ['sent_at'])

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('action', sa.String(30), nullable=False),
        sa.Column('table_name', sa.String(50), nullable=False),
        sa.Column('record_id', sa.Integer(), nullable=True),
        sa.Column('old_data', sa.JSON(), nullable=True),
        sa.Column('new_data', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index(op.f('ix_audit_logs_user_id'), 'audit_logs', ['user_id'])
    op.create_index(op.f('ix_audit_logs_action'), 'audit_logs', ['action'])


def downgrade() -> None:
    op.drop_table('audit_logs')
    op.drop_table('notification_logs')
    op.drop_table('leave_requests')
    op.drop_table('leave_balances')
    op.drop_table('profiles')
    op.drop_table('organizations')
    for enum in (notification_type, leave_status, leave_type, user_role):
        enum.drop(op.get_bind(), checkfirst=True)
