"""create user, task, prospect and implementation tables

Revision ID: 3f9a1c2b7d10
Revises:
Create Date: 2025-12-16 19:33:57.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '3f9a1c2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'user',
        sa.Column('id_user', sa.Integer(), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('full_name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column('hashed_password', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('date_creation', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id_user')
    )
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)

    op.create_table(
        'task',
        sa.Column('id_task', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('title', sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(length=3000), nullable=True),
        sa.Column('scheduled_date', sa.Date(), nullable=False),
        sa.Column('status', sa.Enum('PENDING', 'COMPLETED', name='taskstatus'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id_user'], name='task_user_id_fkey', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id_task')
    )
    op.create_index(op.f('ix_task_user_id'), 'task', ['user_id'], unique=False)
    op.create_index(op.f('ix_task_scheduled_date'), 'task', ['scheduled_date'], unique=False)
    op.create_index(op.f('ix_task_status'), 'task', ['status'], unique=False)

    op.create_table(
        'prospect',
        sa.Column('id_prospect', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('company', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column('contact', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(length=3000), nullable=True),
        sa.Column(
            'status',
            sa.Enum('NEW', 'CONTACTED', 'NEGOTIATING', 'CONVERTED', 'LOST', name='prospectstatus'),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id_user'], name='prospect_user_id_fkey', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id_prospect')
    )
    op.create_index(op.f('ix_prospect_user_id'), 'prospect', ['user_id'], unique=False)
    op.create_index(op.f('ix_prospect_status'), 'prospect', ['status'], unique=False)
    op.create_index(op.f('ix_prospect_created_at'), 'prospect', ['created_at'], unique=False)

    op.create_table(
        'implementation',
        sa.Column('id_implementation', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('client_name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(length=3000), nullable=True),
        sa.Column('recurrence_value', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('recurrence_start_date', sa.Date(), nullable=True),
        sa.Column('recurrence_end_date', sa.Date(), nullable=True),
        sa.Column(
            'status',
            sa.Enum('ACTIVE', 'PAUSED', 'CANCELLED', 'COMPLETED', name='implementationstatus'),
            nullable=False,
        ),
        sa.Column('delivery_completed', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id_user'], name='implementation_user_id_fkey', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id_implementation')
    )
    op.create_index(op.f('ix_implementation_user_id'), 'implementation', ['user_id'], unique=False)
    op.create_index(op.f('ix_implementation_status'), 'implementation', ['status'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_implementation_status'), table_name='implementation')
    op.drop_index(op.f('ix_implementation_user_id'), table_name='implementation')
    op.drop_table('implementation')
    op.drop_index(op.f('ix_prospect_created_at'), table_name='prospect')
    op.drop_index(op.f('ix_prospect_status'), table_name='prospect')
    op.drop_index(op.f('ix_prospect_user_id'), table_name='prospect')
    op.drop_table('prospect')
    op.drop_index(op.f('ix_task_status'), table_name='task')
    op.drop_index(op.f('ix_task_scheduled_date'), table_name='task')
    op.drop_index(op.f('ix_task_user_id'), table_name='task')
    op.drop_table('task')
    op.drop_index(op.f('ix_user_email'), table_name='user')
    op.drop_table('user')
    sa.Enum(name='implementationstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='prospectstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='taskstatus').drop(op.get_bind(), checkfirst=True)
