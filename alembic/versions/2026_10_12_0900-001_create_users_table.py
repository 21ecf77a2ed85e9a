"""Create users table

Revision ID: 001
Revises:
Create Date: 2026-10-12 09:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users table."""
    op.create_table('users', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False, server_default='18'),
        sa.Column('phone', sqlmodel.sql.sqltypes.AutoString(length=32), nullable=True),
        sa.Column('avatar', sqlmodel.sql.sqltypes.AutoString(length=512), nullable=False),
        sa.Column('address_street', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('address_city', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('address_state', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('address_country', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False,
                  server_default='USA'),
        sa.Column('address_zip_code', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=True),
        sa.Column('status', sqlmodel.sql.sqltypes.AutoString(length=16), nullable=False, server_default='active'),
        sa.Column('role', sqlmodel.sql.sqltypes.AutoString(length=16), nullable=False, server_default='user'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_address_city'), 'users', ['address_city'], unique=False)
    op.create_index(op.f('ix_users_status'), 'users', ['status'], unique=False)
    op.create_index(op.f('ix_users_created_at'), 'users', ['created_at'], unique=False)


def downgrade() -> None:
    """Drop users table."""
    op.drop_index(op.f('ix_users_created_at'), table_name='users')
    op.drop_index(op.f('ix_users_status'), table_name='users')
    op.drop_index(op.f('ix_users_address_city'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
