"""SQLAlchemy metadata definitions for audit log tables."""

from __future__ import annotations

import sqlalchemy as sa

metadata = sa.MetaData()
sqlite_bigint = sa.BigInteger().with_variant(sa.Integer(), "sqlite")

activities = sa.Table(
    "activities",
    metadata,
    sa.Column("id", sqlite_bigint, primary_key=True, autoincrement=True),
    sa.Column(
        "ts",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("CURRENT_TIMESTAMP"),
    ),
    sa.Column("activity_type", sa.Text(), nullable=False),
    sa.Column("action_code", sa.Integer(), nullable=False),
    sa.Column("action_label", sa.Text(), nullable=False),
    sa.Column("payload", sa.JSON(), nullable=False, server_default=sa.text("'{}'")),
)

sa.Index("ix_activities_activity_type_ts", activities.c.activity_type, activities.c.ts)
sa.Index(
    "ix_activities_activity_type_action_code",
    activities.c.activity_type,
    activities.c.action_code,
)
