from __future__ import annotations

import dataclasses
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from rental_auth.domain.auth.identity import Identity, build_session
from rental_auth.domain.auth.roles import Role


def _identity() -> Identity:
    return Identity(user_id=uuid4(), email="tenant@example.com", role=Role.TENANT, name="Tenant")


def test_build_session_wraps_identity_with_expiry() -> None:
    identity = _identity()
    now = datetime(2026, 1, 1, tzinfo=UTC)

    session = build_session(identity, now=now, max_age=timedelta(days=30))

    assert session.identity is identity
    assert session.expires_at == datetime(2026, 1, 31, tzinfo=UTC)
    assert session.is_expired(now=now) is False
    assert session.is_expired(now=session.expires_at) is True


def test_build_session_rejects_naive_timestamps() -> None:
    with pytest.raises(ValueError):
        build_session(_identity(), now=datetime(2026, 1, 1), max_age=timedelta(days=1))


def test_build_session_rejects_non_positive_max_age() -> None:
    with pytest.raises(ValueError):
        build_session(_identity(), now=datetime.now(tz=UTC), max_age=timedelta(0))


def test_identity_and_session_are_immutable() -> None:
    identity = _identity()
    session = build_session(identity, now=datetime.now(tz=UTC), max_age=timedelta(hours=1))

    with pytest.raises(dataclasses.FrozenInstanceError):
        identity.role = Role.ADMIN  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        session.identity = None  # type: ignore[misc]


def test_identity_exposes_no_secret_fields() -> None:
    field_names = {field.name for field in dataclasses.fields(Identity)}

    assert "password_hash" not in field_names
