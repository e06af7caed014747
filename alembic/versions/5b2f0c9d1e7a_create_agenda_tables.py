"""create_agenda_tables

Revision ID: 5b2f0c9d1e7a
Revises:
Create Date: 2026-10-19 09:12:44.318207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b2f0c9d1e7a'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('resource_id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('resource_id')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'agenda_sources',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('resource_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('url', sa.String(length=2048), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('resource_id')
    )
    op.create_index(op.f('ix_agenda_sources_id'), 'agenda_sources', ['id'], unique=False)
    op.create_index('idx_agenda_sources_user_id', 'agenda_sources', ['user_id'], unique=False)
    op.create_index('idx_agenda_sources_updated_at', 'agenda_sources', ['updated_at'], unique=False)

    op.create_table(
        'agenda_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('resource_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('agenda_source_id', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['agenda_source_id'], ['agenda_sources.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('resource_id')
    )
    op.create_index(op.f('ix_agenda_items_id'), 'agenda_items', ['id'], unique=False)
    op.create_index('idx_agenda_items_start_time', 'agenda_items', ['start_time'], unique=False)
    op.create_index(
        'idx_agenda_items_user_source', 'agenda_items', ['user_id', 'agenda_source_id'], unique=False
    )

    op.create_table(
        'agenda_invites',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('resource_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('not_before', sa.DateTime(timezone=True), nullable=False),
        sa.Column('not_after', sa.DateTime(timezone=True), nullable=False),
        sa.Column('padding_before', sa.BigInteger(), nullable=False),
        sa.Column('padding_after', sa.BigInteger(), nullable=False),
        sa.Column('slot_sizes', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_agenda_invites_id'), 'agenda_invites', ['id'], unique=False)
    op.create_index(
        op.f('ix_agenda_invites_resource_id'), 'agenda_invites', ['resource_id'], unique=True
    )
    op.create_index('idx_agenda_invites_user_id', 'agenda_invites', ['user_id'], unique=False)
    op.create_index('idx_agenda_invites_expires_at', 'agenda_invites', ['expires_at'], unique=False)

    op.create_table(
        'invite_sources',
        sa.Column('agenda_invite_id', sa.Integer(), nullable=False),
        sa.Column('agenda_source_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['agenda_invite_id'], ['agenda_invites.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['agenda_source_id'], ['agenda_sources.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('agenda_invite_id', 'agenda_source_id')
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('invite_sources')
    op.drop_index('idx_agenda_invites_expires_at', table_name='agenda_invites')
    op.drop_index('idx_agenda_invites_user_id', table_name='agenda_invites')
    op.drop_index(op.f('ix_agenda_invites_resource_id'), table_name='agenda_invites')
    op.drop_index(op.f('ix_agenda_invites_id'), table_name='agenda_invites')
    op.drop_table('agenda_invites')
    op.drop_index('idx_agenda_items_user_source', table_name='agenda_items')
    op.drop_index('idx_agenda_items_start_time', table_name='agenda_items')
    op.drop_index(op.f('ix_agenda_items_id'), table_name='agenda_items')
    op.drop_table('agenda_items')
    op.drop_index('idx_agenda_sources_updated_at', table_name='agenda_sources')
    op.drop_index('idx_agenda_sources_user_id', table_name='agenda_sources')
    op.drop_index(op.f('ix_agenda_sources_id'), table_name='agenda_sources')
    op.drop_table('agenda_sources')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
