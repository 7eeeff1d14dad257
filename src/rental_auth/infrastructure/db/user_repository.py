"""SQLAlchemy adapter for user lookup and password digest persistence."""

from __future__ import annotations

from datetime import datetime
from typing import Any, cast
from uuid import UUID, uuid4

import sqlalchemy as sa
from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rental_auth.application.ports.user_repository_port import (
    UserCreateInput,
    UserRecord,
    UserRepositoryPort,
)
from rental_auth.domain.auth.errors import EmailAlreadyRegisteredError
from rental_auth.domain.auth.roles import Role
from rental_auth.infrastructure.db.metadata import users


class SqlAlchemyUserRepository(UserRepositoryPort):
    """User repository backed by SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_by_id(self, *, user_id: UUID) -> UserRecord | None:
        """Return user by id or None."""

        return await self._fetch_one(users.c.id == user_id)

    async def get_by_email(self, *, email: str) -> UserRecord | None:
        """Return user by exact normalized email or None."""

        return await self._fetch_one(users.c.email == email)

    async def create_user(self, payload: UserCreateInput) -> UserRecord:
        """Insert one user row and return it; duplicates raise a domain error."""

        statement = sa.insert(users).values(
            id=uuid4(),
            email=payload.email,
            name=payload.name,
            password_hash=payload.password_hash,
            role=payload.role.value,
            image=payload.image,
        ).returning(*users.c)

        async with self._session_factory() as session:
            try:
                result = await session.execute(statement)
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise EmailAlreadyRegisteredError(email=payload.email) from exc

        row = result.mappings().one()
        return _to_user_record(row)

    async def update_password_hash(self, *, user_id: UUID, password_hash: str) -> bool:
        """Replace one stored digest in a single statement."""

        statement = (
            sa.update(users)
            .where(users.c.id == user_id)
            .values(password_hash=password_hash, updated_at=sa.text("CURRENT_TIMESTAMP"))
        )

        async with self._session_factory() as session:
            result = cast(CursorResult[Any], await session.execute(statement))
            await session.commit()

        return bool(result.rowcount)

    async def _fetch_one(self, criterion: sa.ColumnElement[bool]) -> UserRecord | None:
        statement = sa.select(*users.c).where(criterion).limit(1)

        async with self._session_factory() as session:
            result = await session.execute(statement)

        row = result.mappings().first()
        if row is None:
            return None
        return _to_user_record(row)


def _to_user_record(row: sa.RowMapping) -> UserRecord:
    raw_user_id = row["id"]
    user_id = raw_user_id if isinstance(raw_user_id, UUID) else UUID(str(raw_user_id))
    return UserRecord(
        user_id=user_id,
        email=cast(str, row["email"]),
        name=cast(str | None, row["name"]),
        password_hash=cast(str | None, row["password_hash"]),
        role=Role(cast(str, row["role"])),
        email_verified_at=cast(datetime | None, row["email_verified_at"]),
        image=cast(str | None, row["image"]),
        created_at=cast(datetime, row["created_at"]),
        updated_at=cast(datetime, row["updated_at"]),
    )
