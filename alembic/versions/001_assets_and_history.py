"""Assets with verification logs and complaints

Revision ID: 001_assets_and_history
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_assets_and_history'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create assets table
    op.create_table(
        'assets',
        sa.Column('id', sa.String(32), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('category', sa.String(20), nullable=False),
        sa.Column('serial_number', sa.String(100), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='Active'),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('image_url', sa.String(500), nullable=True),
        sa.Column('added_by', sa.String(255), nullable=True),
        sa.Column('purchase_date', sa.Date(), nullable=True),
        sa.Column('created_date', sa.Date(), nullable=True),
        sa.Column('last_verified_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('verified_by', sa.String(255), nullable=True),
        sa.Column('is_qr_generated', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('qr_data', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_assets_serial_number', 'assets', ['serial_number'], unique=True)
    op.create_index('ix_assets_deleted_at', 'assets', ['deleted_at'], unique=False)

    # Create verification_logs table
    op.create_table(
        'verification_logs',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('asset_id', sa.String(32), nullable=False),
        sa.Column('asset_name', sa.String(255), nullable=False),
        sa.Column('verified_by', sa.String(255), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['asset_id'], ['assets.id'], name='fk_verification_logs_asset_id_assets'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_verification_logs_asset_id', 'verification_logs', ['asset_id'], unique=False)
    op.create_index(
        'ix_verification_logs_asset_timestamp',
        'verification_logs',
        ['asset_id', 'timestamp'],
        unique=False,
    )

    # Create complaints table
    op.create_table(
        'complaints',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('asset_id', sa.String(32), nullable=False),
        sa.Column('asset_name', sa.String(255), nullable=False),
        sa.Column('reported_by', sa.String(255), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='Pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('resolved_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['asset_id'], ['assets.id'], name='fk_complaints_asset_id_assets'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_complaints_asset_id', 'complaints', ['asset_id'], unique=False)
    op.create_index('ix_complaints_status', 'complaints', ['status'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_complaints_status', table_name='complaints')
    op.drop_index('ix_complaints_asset_id', table_name='complaints')
    op.drop_table('complaints')

    op.drop_index('ix_verification_logs_asset_timestamp', table_name='verification_logs')
    op.drop_index('ix_verification_logs_asset_id', table_name='verification_logs')
    op.drop_table('verification_logs')

    op.drop_index('ix_assets_deleted_at', table_name='assets')
    op.drop_index('ix_assets_serial_number', table_name='assets')
    op.drop_table('assets')
