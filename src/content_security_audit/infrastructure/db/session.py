"""Async SQLAlchemy session factory helpers for the activity store."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine


def create_session_factory(database_url: str) -> async_sessionmaker[AsyncSession]:
    """Create the activity store session factory for database_url."""

    engine = create_async_engine(database_url, pool_pre_ping=True)
    return async_sessionmaker(engine, expire_on_commit=False)


async def dispose_session_factory(session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Close pooled connections of the engine bound to session_factory."""

    engine = session_factory.kw.get("bind")
    if engine is not None:
        await engine.dispose()
