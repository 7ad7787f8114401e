"""SQLAlchemy Core table definitions for the monitorsvc database.

The tables are the persistence mapping for :class:`monitorsvc.domain.monitor.Monitor`
and :class:`monitorsvc.domain.monitor.Tag`; the repository layer maps rows
to those models so the record shape stays independent of the columns.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
)

metadata = MetaData()

monitor = Table(
    "monitor",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("version", Integer, nullable=False, default=0, server_default="0"),
    Column("name", String(40), nullable=False),
    Column("manufacturer", String(40), nullable=False),
    Column("price", Numeric(8, 2, asdecimal=False), nullable=False),
    Column("stock", Integer, nullable=False, default=0, server_default="0"),
    Column("curved", Boolean),
    Column("refresh_rate", String(8)),
    Column("release", Date),
    Column("created", DateTime(timezone=True), nullable=False),
    Column("modified", DateTime(timezone=True), nullable=False),
)

tag = Table(
    "tag",
    metadata,
    Column("id", String(36), primary_key=True),
    Column(
        "monitor_id",
        String(36),
        ForeignKey("monitor.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("label", String(32), nullable=False),
    Column("position", Integer, nullable=False, default=0, server_default="0"),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_monitor_name", monitor.c.name)
Index("ix_monitor_manufacturer", monitor.c.manufacturer)
Index("ix_tag_monitor_id", tag.c.monitor_id)
