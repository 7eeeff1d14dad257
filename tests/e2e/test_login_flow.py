from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from uuid import UUID

import bcrypt
import pytest

from rental_auth.application.ports.user_repository_port import UserCreateInput
from rental_auth.application.services.auth_service import AuthOutcome
from rental_auth.config.settings import Settings
from rental_auth.domain.auth.authorization import is_authenticated, is_landlord_or_admin
from rental_auth.domain.auth.roles import Role
from rental_auth.infrastructure.db.session import create_schema
from rental_auth.infrastructure.db.user_repository import SqlAlchemyUserRepository
from rental_auth.infrastructure.runtime import AuthRuntime, build_auth_runtime


async def _runtime(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> AuthRuntime:
    for key in ("PASSWORD_WORK_FACTOR", "REQUIRE_VERIFIED_EMAIL", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'auth.db'}")
    runtime = build_auth_runtime(Settings(_env_file=None))
    await create_schema(runtime.session_factory)
    return runtime


@pytest.mark.asyncio
async def test_register_then_login_returns_identity_and_rejects_wrong_password(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    runtime = await _runtime(tmp_path, monkeypatch)
    users = SqlAlchemyUserRepository(runtime.session_factory)

    identity = await runtime.registration_service.register(
        email="Landlord@Example.com",
        password="Secret123!",
        role=Role.LANDLORD,
    )
    stored = await users.get_by_email(email="landlord@example.com")
    assert stored is not None and stored.password_hash is not None
    assert runtime.password_hasher.get_work_factor(stored.password_hash) == 12

    success = await runtime.auth_service.authenticate(
        email="landlord@example.com",
        password="Secret123!",
    )
    failure = await runtime.auth_service.authenticate(
        email="landlord@example.com",
        password="WrongPass1!",
    )

    assert success.outcome is AuthOutcome.SUCCESS
    assert success.identity == identity
    assert stored.password_hash not in repr(success)
    assert failure.outcome is AuthOutcome.AUTHENTICATION_FAILED
    assert failure.identity is None

    session = runtime.new_session(success.identity, now=datetime(2026, 1, 1, tzinfo=UTC))
    assert is_authenticated(session) and is_landlord_or_admin(session.identity)


@pytest.mark.asyncio
async def test_stale_digest_is_upgraded_on_login(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    runtime = await _runtime(tmp_path, monkeypatch)
    users = SqlAlchemyUserRepository(runtime.session_factory)
    legacy_hash = bcrypt.hashpw(b"Secret123!", bcrypt.gensalt(rounds=10)).decode("utf-8")
    created = await users.create_user(
        UserCreateInput(email="tenant@example.com", password_hash=legacy_hash)
    )

    result = await runtime.auth_service.authenticate(
        email="tenant@example.com",
        password="Secret123!",
    )

    upgraded = await users.get_by_id(user_id=created.user_id)
    assert result.outcome is AuthOutcome.SUCCESS
    assert upgraded is not None and upgraded.password_hash is not None
    assert upgraded.password_hash != legacy_hash
    assert runtime.password_hasher.get_work_factor(upgraded.password_hash) == 12


@pytest.mark.asyncio
async def test_rehash_persistence_failure_does_not_fail_login(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    runtime = await _runtime(tmp_path, monkeypatch)
    users = SqlAlchemyUserRepository(runtime.session_factory)
    legacy_hash = bcrypt.hashpw(b"Secret123!", bcrypt.gensalt(rounds=10)).decode("utf-8")
    await users.create_user(UserCreateInput(email="tenant@example.com", password_hash=legacy_hash))

    attempted: list[UUID] = []

    async def failing_update(
        self: SqlAlchemyUserRepository,
        *,
        user_id: UUID,
        password_hash: str,
    ) -> bool:
        _ = (self, password_hash)
        attempted.append(user_id)
        raise ConnectionError("write failed")

    monkeypatch.setattr(SqlAlchemyUserRepository, "update_password_hash", failing_update)

    result = await runtime.auth_service.authenticate(
        email="tenant@example.com",
        password="Secret123!",
    )

    assert result.outcome is AuthOutcome.SUCCESS
    assert len(attempted) == 1
    stored = await users.get_by_email(email="tenant@example.com")
    assert stored is not None and stored.password_hash == legacy_hash
