"""initial_schema

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9b7d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

gym_role = sa.Enum('owner', 'admin', 'staff', 'coach', 'member', name='gym_role')
instance_status = sa.Enum('scheduled', 'cancelled', 'completed', name='instance_status')
registration_status = sa.Enum('reserved', 'checked_in', 'cancelled', 'no_show', name='registration_status')
payment_status = sa.Enum('pending', 'succeeded', 'failed', 'refunded', name='payment_status')
membership_status = sa.Enum('active', 'frozen', 'cancelled', 'delinquent', name='membership_status')


def upgrade() -> None:
    op.create_table(
        'gyms',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('timezone', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_gyms_slug', 'gyms', ['slug'], unique=True)

    op.create_table(
        'user_profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('full_name', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('avatar_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True)),
    )
    op.create_index('ix_user_profiles_email', 'user_profiles', ['email'], unique=True)

    op.create_table(
        'gym_users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('gym_id', sa.String(36), sa.ForeignKey('gyms.id'), nullable=False),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('user_profiles.id'), nullable=False),
        sa.Column('role', gym_role, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.UniqueConstraint('gym_id', 'user_id', name='uq_gym_user'),
    )
    op.create_index('ix_gym_users_gym_id', 'gym_users', ['gym_id'])

    op.create_table(
        'classes',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('gym_id', sa.String(36), sa.ForeignKey('gyms.id'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('discipline', sa.String(), nullable=False),
        sa.Column('skill_level', sa.String(), nullable=False),
        sa.Column('default_duration_minutes', sa.Integer(), nullable=False),
        sa.Column('default_capacity', sa.Integer(), nullable=True),
        sa.Column('default_coach_user_id', sa.String(36), sa.ForeignKey('user_profiles.id'), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
        sa.CheckConstraint('default_duration_minutes > 0', name='ck_classes_duration_positive'),
        sa.UniqueConstraint('gym_id', 'name', name='uq_classes_gym_name'),
    )
    op.create_index('ix_classes_gym_id', 'classes', ['gym_id'])

    op.create_table(
        'class_schedule_slots',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('class_template_id', sa.String(36), sa.ForeignKey('classes.id'), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('hour', sa.Integer(), nullable=False),
        sa.Column('minute', sa.Integer(), nullable=False),
        sa.UniqueConstraint('class_template_id', 'day_of_week', 'hour', 'minute', name='uq_schedule_slot'),
        sa.CheckConstraint('day_of_week BETWEEN 0 AND 6', name='ck_slot_day'),
        sa.CheckConstraint('hour BETWEEN 0 AND 23', name='ck_slot_hour'),
        sa.CheckConstraint('minute BETWEEN 0 AND 59', name='ck_slot_minute'),
    )
    op.create_index('ix_class_schedule_slots_class_template_id', 'class_schedule_slots', ['class_template_id'])

    op.create_table(
        'class_instances',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('class_template_id', sa.String(36), sa.ForeignKey('classes.id'), nullable=False),
        sa.Column('gym_id', sa.String(36), sa.ForeignKey('gyms.id'), nullable=False),
        sa.Column('coach_user_id', sa.String(36), sa.ForeignKey('user_profiles.id'), nullable=True),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('max_capacity', sa.Integer(), nullable=False),
        sa.Column('status', instance_status, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.UniqueConstraint('class_template_id', 'start_time', name='uq_instance_template_start'),
        sa.CheckConstraint('end_time > start_time', name='ck_instance_time_order'),
        sa.CheckConstraint('max_capacity >= 0', name='ck_instance_capacity'),
    )
    op.create_index('idx_instance_gym_start', 'class_instances', ['gym_id', 'start_time'])

    op.create_table(
        'class_registrations',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('class_instance_id', sa.String(36), sa.ForeignKey('class_instances.id'), nullable=False),
        sa.Column('member_id', sa.String(36), sa.ForeignKey('user_profiles.id'), nullable=False),
        sa.Column('status', registration_status, nullable=False),
        sa.Column('checked_in_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_class_registrations_class_instance_id', 'class_registrations', ['class_instance_id'])
    op.create_index(
        'uq_active_registration',
        'class_registrations',
        ['class_instance_id', 'member_id'],
        unique=True,
        postgresql_where=sa.text("status != 'cancelled'"),
    )

    op.create_table(
        'membership_plans',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('gym_id', sa.String(36), sa.ForeignKey('gyms.id'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price_cents', sa.Integer(), nullable=False),
        sa.Column('billing_interval', sa.String(), nullable=False),
        sa.Column('max_classes_per_interval', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index('ix_membership_plans_gym_id', 'membership_plans', ['gym_id'])

    op.create_table(
        'memberships',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('gym_id', sa.String(36), sa.ForeignKey('gyms.id'), nullable=False),
        sa.Column('member_id', sa.String(36), sa.ForeignKey('user_profiles.id'), nullable=False),
        sa.Column('membership_plan_id', sa.String(36), sa.ForeignKey('membership_plans.id'), nullable=False),
        sa.Column('status', membership_status, nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
    )
    op.create_index('ix_memberships_gym_id', 'memberships', ['gym_id'])

    op.create_table(
        'payments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('gym_id', sa.String(36), sa.ForeignKey('gyms.id'), nullable=False),
        sa.Column('member_id', sa.String(36), sa.ForeignKey('user_profiles.id'), nullable=False),
        sa.Column('membership_id', sa.String(36), sa.ForeignKey('memberships.id'), nullable=True),
        sa.Column('amount_cents', sa.Integer(), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('status', payment_status, nullable=False),
        sa.Column('paid_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('external_reference', sa.String(), nullable=True, unique=True),
        sa.Column('created_at', sa.DateTime(timezone=True)),
        sa.CheckConstraint('amount_cents >= 0', name='ck_payment_amount'),
    )
    op.create_index('idx_payment_gym_status_paid', 'payments', ['gym_id', 'status', 'paid_at'])


def downgrade() -> None:
    op.drop_table('payments')
    op.drop_table('memberships')
    op.drop_table('membership_plans')
    op.drop_index('uq_active_registration', table_name='class_registrations')
    op.drop_table('class_registrations')
    op.drop_table('class_instances')
    op.drop_table('class_schedule_slots')
    op.drop_table('classes')
    op.drop_table('gym_users')
    op.drop_table('user_profiles')
    op.drop_table('gyms')
    for enum_type in (membership_status, payment_status, registration_status, instance_status, gym_role):
        enum_type.drop(op.get_bind(), checkfirst=True)
