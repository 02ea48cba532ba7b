"""create url_checks table

Revision ID: 20261018_0002
Revises: 20261018_0001
Create Date: 2026-10-18 10:05:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261018_0002"
down_revision = "20261018_0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "url_checks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("url_id", sa.Integer(), nullable=False),
        sa.Column("status_code", sa.Integer(), nullable=False),
        sa.Column("h1", sa.Text(), nullable=True),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True, comment="content of <meta name=description>"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["url_id"], ["urls.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_url_checks_url_id_created_at",
        "url_checks",
        ["url_id", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_url_checks_url_id_created_at", table_name="url_checks")
    op.drop_table("url_checks")
