"""Baseline schema: monitor and tag tables.

Revision ID: 001_baseline
Revises: None
Create Date: 2026-03-02

Existing databases created by ``init_database`` get stamped at this
revision without running it.
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision: str = "001_baseline"
down_revision: str | None = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


def upgrade() -> None:
    op.create_table(
        "monitor",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("version", sa.Integer, nullable=False, server_default="0"),
        sa.Column("name", sa.String(40), nullable=False),
        sa.Column("manufacturer", sa.String(40), nullable=False),
        sa.Column("price", sa.Numeric(8, 2), nullable=False),
        sa.Column("stock", sa.Integer, nullable=False, server_default="0"),
        sa.Column("curved", sa.Boolean),
        sa.Column("refresh_rate", sa.String(8)),
        sa.Column("release", sa.Date),
        sa.Column("created", sa.DateTime(timezone=True), nullable=False),
        sa.Column("modified", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_monitor_name", "monitor", ["name"])
    op.create_index("ix_monitor_manufacturer", "monitor", ["manufacturer"])

    op.create_table(
        "tag",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "monitor_id",
            sa.String(36),
            sa.ForeignKey("monitor.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("label", sa.String(32), nullable=False),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
    )
    op.create_index("ix_tag_monitor_id", "tag", ["monitor_id"])


def downgrade() -> None:
    op.drop_index("ix_tag_monitor_id", table_name="tag")
    op.drop_table("tag")
    op.drop_index("ix_monitor_manufacturer", table_name="monitor")
    op.drop_index("ix_monitor_name", table_name="monitor")
    op.drop_table("monitor")
