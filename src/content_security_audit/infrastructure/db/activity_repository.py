"""SQLAlchemy adapter for append-only activity records."""

from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from content_security_audit.application.ports.activity_repository_port import (
    ActivityCreateInput,
    ActivityRepositoryPort,
)
from content_security_audit.infrastructure.db.metadata import activities


class SqlAlchemyActivityRepository(ActivityRepositoryPort):
    """Activity repository backed by SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def save(self, payload: ActivityCreateInput) -> int:
        """Insert an activity row and return its numeric id."""

        statement = sa.insert(activities).values(
            activity_type=payload.activity_type,
            action_code=payload.action_code,
            action_label=payload.action_label,
            payload=payload.data,
        ).returning(activities.c.id)

        async with self._session_factory() as session:
            result = await session.execute(statement)
            await session.commit()

        inserted_id = result.scalar_one()
        return int(inserted_id)
