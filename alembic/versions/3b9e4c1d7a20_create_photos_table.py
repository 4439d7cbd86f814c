"""create_photos_table

Revision ID: 3b9e4c1d7a20
Revises:
Create Date: 2026-10-12 10:21:43.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b9e4c1d7a20'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'photos',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('storage_path', sa.String(), nullable=True),
        # Legacy storage columns, read as fallbacks for storage_path
        sa.Column('thumbnail_path', sa.String(), nullable=True),
        sa.Column('full_size_path', sa.String(), nullable=True),
        sa.Column('camera', sa.String(), nullable=True),
        sa.Column('lens', sa.String(), nullable=True),
        sa.Column('aperture', sa.String(), nullable=True),
        sa.Column('shutter_speed', sa.String(), nullable=True),
        sa.Column('iso', sa.String(), nullable=True),
        sa.Column('focal_length', sa.String(), nullable=True),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('date_taken', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    # Category filter and date ordering drive every gallery query
    op.create_index(op.f('ix_photos_category'), 'photos', ['category'], unique=False)
    op.create_index(op.f('ix_photos_date_taken'), 'photos', ['date_taken'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_photos_date_taken'), table_name='photos')
    op.drop_index(op.f('ix_photos_category'), table_name='photos')
    op.drop_table('photos')
