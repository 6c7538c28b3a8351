"""
Create bookmarks table.

Revision ID: 4c2e8f1a9b3d
Revises:
Create Date: 2026-10-19 10:12:44.318207

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = '4c2e8f1a9b3d'
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'bookmarks',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('site_url', sa.Text(), nullable=False),
        sa.Column('site_description', sa.Text(), nullable=False),
        sa.Column('rating', sa.SmallInteger(), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_bookmarks_rating_range'),
        sa.CheckConstraint('length(site_url) >= 5', name='ck_bookmarks_site_url_length'),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('bookmarks')
