from __future__ import annotations

from pathlib import Path

import pytest
import sqlalchemy as sa
from alembic.config import Config

from alembic import command
from content_security_audit.application.ports.activity_repository_port import (
    ActivityCreateInput,
)
from content_security_audit.infrastructure.db.activity_repository import (
    SqlAlchemyActivityRepository,
)
from content_security_audit.infrastructure.db.session import (
    create_session_factory,
    dispose_session_factory,
)


def _upgrade_head(tmp_path: Path, filename: str) -> tuple[str, str]:
    db_path = tmp_path / filename
    sync_url = f"sqlite+pysqlite:///{db_path}"
    async_url = f"sqlite+aiosqlite:///{db_path}"

    alembic_config = Config("alembic.ini")
    alembic_config.set_main_option("sqlalchemy.url", sync_url)
    command.upgrade(alembic_config, "head")

    return sync_url, async_url


def test_migration_creates_activities_table(tmp_path: Path) -> None:
    sync_url, _ = _upgrade_head(tmp_path, "activities_schema.db")
    engine = sa.create_engine(sync_url)

    inspector = sa.inspect(engine)
    columns = {column["name"] for column in inspector.get_columns("activities")}
    indexes = {index["name"] for index in inspector.get_indexes("activities")}

    assert columns == {"id", "ts", "activity_type", "action_code", "action_label", "payload"}
    assert "ix_activities_activity_type_ts" in indexes
    assert "audit_log_alembic_version" in inspector.get_table_names()


@pytest.mark.asyncio
async def test_save_appends_rows_and_returns_increasing_ids(tmp_path: Path) -> None:
    sync_url, async_url = _upgrade_head(tmp_path, "activities_save.db")
    session_factory = create_session_factory(async_url)
    repo = SqlAlchemyActivityRepository(session_factory)

    first_id = await repo.save(
        ActivityCreateInput(
            activity_type="ContentSecurity",
            action_code=5,
            action_label="ItemSaved",
            data={"Message": "first"},
        )
    )
    second_id = await repo.save(
        ActivityCreateInput(
            activity_type="ContentSecurity",
            action_code=1,
            action_label="Replace",
            data={"Message": "second"},
        )
    )
    await dispose_session_factory(session_factory)

    assert second_id > first_id

    engine = sa.create_engine(sync_url)
    with engine.connect() as connection:
        rows = connection.execute(
            sa.text(
                "SELECT id, activity_type, action_code, action_label, payload "
                "FROM activities ORDER BY id"
            )
        ).mappings().all()

    assert [row["id"] for row in rows] == [first_id, second_id]
    assert rows[0]["activity_type"] == "ContentSecurity"
    assert rows[0]["action_code"] == 5
    assert rows[0]["action_label"] == "ItemSaved"
    assert '"Message": "first"' in rows[0]["payload"]
    assert rows[1]["action_label"] == "Replace"
