"""Initial farm schema: profiles, farms, animals, activities, reminders, push

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 08:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(with_updated: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]
    if with_updated:
        columns.append(
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False)
        )
    return columns


def upgrade() -> None:
    op.create_table(
        'profiles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('external_user_id', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('phone_number', sa.String(length=30), nullable=True),
        sa.Column('avatar_url', sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_profiles'),
        sa.UniqueConstraint('external_user_id', name='uq_profiles_external_user_id'),
    )

    op.create_table(
        'farms',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('farm_name', sa.String(length=100), nullable=False),
        sa.Column('province', sa.String(length=50), nullable=False),
        sa.Column('farm_code', sa.String(length=32), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_farms'),
        sa.ForeignKeyConstraint(['owner_id'], ['profiles.id'], name='fk_farms_owner_id_profiles', ondelete='CASCADE'),
        sa.UniqueConstraint('farm_code', name='uq_farms_farm_code'),
    )
    op.create_index('ix_farms_owner', 'farms', ['owner_id'])

    op.create_table(
        'farm_members',
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('role', sa.String(length=7), nullable=False),
        sa.Column('joined_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('farm_id', 'user_id', name='pk_farm_members'),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id'], name='fk_farm_members_farm_id_farms', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id'], name='fk_farm_members_user_id_profiles', ondelete='CASCADE'),
    )

    op.create_table(
        'animals',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('animal_code', sa.String(length=13), nullable=False),
        sa.Column('animal_type', sa.String(length=20), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('sex', sa.String(length=10), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('color', sa.String(length=50), nullable=True),
        sa.Column('weight_kg', sa.Integer(), nullable=True),
        sa.Column('height_cm', sa.Integer(), nullable=True),
        sa.Column('mother_name', sa.String(length=100), nullable=True),
        sa.Column('father_name', sa.String(length=100), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='ACTIVE'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_animals'),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id'], name='fk_animals_farm_id_farms', ondelete='CASCADE'),
        sa.UniqueConstraint('farm_id', 'animal_code', name='ux_animals_farm_code'),
    )
    op.create_index('ix_animals_farm_status', 'animals', ['farm_id', 'status'])

    op.create_table(
        'activities',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('animal_id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('activity_date', sa.Date(), nullable=False),
        sa.Column('reminder_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='PENDING'),
        sa.Column('created_by', sa.Uuid(), nullable=False),
        sa.Column('completed_by', sa.Uuid(), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_activities'),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id'], name='fk_activities_farm_id_farms', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['animal_id'], ['animals.id'], name='fk_activities_animal_id_animals', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['created_by'], ['profiles.id'], name='fk_activities_created_by_profiles'),
        sa.ForeignKeyConstraint(['completed_by'], ['profiles.id'], name='fk_activities_completed_by_profiles'),
    )
    op.create_index('ix_activities_farm_status', 'activities', ['farm_id', 'status'])
    op.create_index('ix_activities_animal', 'activities', ['animal_id'])
    op.create_index('ix_activities_reminder_date', 'activities', ['reminder_date'])

    op.create_table(
        'activity_reminders',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('activity_id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('reminder_date', sa.Date(), nullable=False),
        sa.Column('reminder_time', sa.Time(), nullable=False, server_default='06:00:00'),
        sa.Column('notification_sent', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('sent_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(with_updated=False),
        sa.PrimaryKeyConstraint('id', name='pk_activity_reminders'),
        sa.ForeignKeyConstraint(['activity_id'], ['activities.id'], name='fk_activity_reminders_activity_id_activities', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id'], name='fk_activity_reminders_farm_id_farms', ondelete='CASCADE'),
        sa.UniqueConstraint('activity_id', name='uq_activity_reminders_activity_id'),
    )
    op.create_index('ix_activity_reminders_date_sent', 'activity_reminders', ['reminder_date', 'notification_sent'])

    op.create_table(
        'push_subscriptions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('endpoint', sa.Text(), nullable=False),
        sa.Column('p256dh_key', sa.Text(), nullable=False),
        sa.Column('auth_key', sa.Text(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('last_used_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_push_subscriptions'),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id'], name='fk_push_subscriptions_user_id_profiles', ondelete='CASCADE'),
        sa.UniqueConstraint('user_id', 'endpoint', name='ux_push_subscriptions_user_endpoint'),
    )
    op.create_index('ix_push_subscriptions_user_active', 'push_subscriptions', ['user_id', 'is_active'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('activity_id', sa.Uuid(), nullable=True),
        sa.Column('type', sa.String(length=30), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('push_sent', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('push_sent_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(with_updated=False),
        sa.PrimaryKeyConstraint('id', name='pk_notifications'),
        sa.ForeignKeyConstraint(['user_id'], ['profiles.id'], name='fk_notifications_user_id_profiles', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id'], name='fk_notifications_farm_id_farms', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['activity_id'], ['activities.id'], name='fk_notifications_activity_id_activities', ondelete='SET NULL'),
    )
    op.create_index('ix_notifications_user_created', 'notifications', ['user_id', 'created_at'])


def downgrade() -> None:
    op.drop_index('ix_notifications_user_created', table_name='notifications')
    op.drop_table('notifications')
    op.drop_index('ix_push_subscriptions_user_active', table_name='push_subscriptions')
    op.drop_table('push_subscriptions')
    op.drop_index('ix_activity_reminders_date_sent', table_name='activity_reminders')
    op.drop_table('activity_reminders')
    op.drop_index('ix_activities_reminder_date', table_name='activities')
    op.drop_index('ix_activities_animal', table_name='activities')
    op.drop_index('ix_activities_farm_status', table_name='activities')
    op.drop_table('activities')
    op.drop_index('ix_animals_farm_status', table_name='animals')
    op.drop_table('animals')
    op.drop_table('farm_members')
    op.drop_index('ix_farms_owner', table_name='farms')
    op.drop_table('farms')
    op.drop_table('profiles')
