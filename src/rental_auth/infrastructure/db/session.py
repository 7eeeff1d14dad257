"""Async SQLAlchemy session factory helpers."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from rental_auth.infrastructure.db.metadata import metadata


def create_session_factory(database_url: str) -> async_sessionmaker[AsyncSession]:
    """Create a reusable async session factory for the provided database URL."""

    engine = create_async_engine(database_url)
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_schema(session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Create any missing account tables on the factory's bound engine."""

    engine: AsyncEngine = session_factory.kw["bind"]
    async with engine.begin() as connection:
        await connection.run_sync(metadata.create_all)
