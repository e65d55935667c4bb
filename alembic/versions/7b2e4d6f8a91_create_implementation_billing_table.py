"""create implementation_billing table

Revision ID: 7b2e4d6f8a91
Revises: 3f9a1c2b7d10
Create Date: 2025-12-16 19:40:12.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '7b2e4d6f8a91'
down_revision: Union[str, Sequence[str], None] = '3f9a1c2b7d10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Billings are owned through their implementation; deleting it removes them
    op.create_table(
        'implementation_billing',
        sa.Column('id_billing', sa.Integer(), nullable=False),
        sa.Column('implementation_id', sa.Integer(), nullable=False),
        sa.Column('billing_date', sa.Date(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('is_paid', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('paid_at', sa.DateTime(), nullable=True),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(
            ['implementation_id'],
            ['implementation.id_implementation'],
            name='implementation_billing_implementation_id_fkey',
            ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id_billing')
    )
    op.create_index(
        op.f('ix_implementation_billing_implementation_id'),
        'implementation_billing',
        ['implementation_id'],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(
        op.f('ix_implementation_billing_implementation_id'),
        table_name='implementation_billing',
    )
    op.drop_table('implementation_billing')
