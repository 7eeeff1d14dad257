"""Authenticated principal and session value types."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID

from rental_auth.domain.auth.roles import Role


@dataclass(frozen=True)
class Identity:
    """Public record of an authenticated user. Holds no secret material."""

    user_id: UUID
    email: str
    role: Role
    name: str | None = None
    email_verified_at: datetime | None = None
    image: str | None = None


@dataclass(frozen=True)
class Session:
    """Session wrapper around an identity; `identity=None` means anonymous."""

    identity: Identity | None
    expires_at: datetime

    def is_expired(self, *, now: datetime) -> bool:
        """Return whether the session lifetime has elapsed at `now`."""

        return now >= self.expires_at


def build_session(identity: Identity, *, now: datetime, max_age: timedelta) -> Session:
    """Return a new session for one identity, expiring `max_age` after `now`."""

    if now.tzinfo is None:
        raise ValueError("session timestamps must be timezone-aware")
    if max_age <= timedelta(0):
        raise ValueError("session max age must be positive")
    return Session(identity=identity, expires_at=now + max_age)
