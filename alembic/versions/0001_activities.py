"""Create the activities table for content security audit records."""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_activities"
down_revision = None
branch_labels = None
depends_on = None

sqlite_bigint = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def upgrade() -> None:
    op.create_table(
        "activities",
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
    op.create_index(
        "ix_activities_activity_type_ts",
        "activities",
        ["activity_type", "ts"],
        unique=False,
    )
    op.create_index(
        "ix_activities_activity_type_action_code",
        "activities",
        ["activity_type", "action_code"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_activities_activity_type_action_code", table_name="activities")
    op.drop_index("ix_activities_activity_type_ts", table_name="activities")
    op.drop_table("activities")
