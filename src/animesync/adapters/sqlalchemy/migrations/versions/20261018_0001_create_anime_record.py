"""create anime_record

Revision ID: 0001
Revises:
Create Date: 2026-10-18 00:00:00
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "anime_record",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column("title_eng", sa.String(), nullable=True),
        sa.Column("title_alt", sa.String(), nullable=True),
        sa.Column("score", sa.Float(), nullable=True),
        sa.Column("episodes", sa.Integer(), nullable=True),
        sa.Column(
            "status",
            sa.Enum("ONGOING", "RELEASED", "OTHER", name="animestatus", native_enum=False),
            nullable=True,
        ),
        sa.Column("url", sa.String(), nullable=True),
        sa.Column("genres", sa.JSON(), nullable=True),
        sa.Column("studios", sa.JSON(), nullable=True),
        sa.Column("external_links", sa.JSON(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_anime_record")),
    )


def downgrade() -> None:
    op.drop_table("anime_record")
