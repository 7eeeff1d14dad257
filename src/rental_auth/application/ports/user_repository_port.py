"""Port for the external user store consumed by authentication services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from rental_auth.domain.auth.identity import Identity
from rental_auth.domain.auth.roles import Role


@dataclass(frozen=True)
class UserRecord:
    """User persistence model, including the stored password digest."""

    user_id: UUID
    email: str
    name: str | None
    password_hash: str | None
    role: Role
    email_verified_at: datetime | None
    image: str | None
    created_at: datetime
    updated_at: datetime

    def to_identity(self) -> Identity:
        """Return the public identity fields without the digest."""

        return Identity(
            user_id=self.user_id,
            email=self.email,
            name=self.name,
            role=self.role,
            email_verified_at=self.email_verified_at,
            image=self.image,
        )


@dataclass(frozen=True)
class UserCreateInput:
    """Payload for inserting one user account."""

    email: str
    password_hash: str | None
    role: Role = Role.TENANT
    name: str | None = None
    image: str | None = None


class UserRepositoryPort(Protocol):
    """User repository contract."""

    async def get_by_id(self, *, user_id: UUID) -> UserRecord | None:
        """Return user by id or None."""

    async def get_by_email(self, *, email: str) -> UserRecord | None:
        """Return user by normalized email or None."""

    async def create_user(self, payload: UserCreateInput) -> UserRecord:
        """Insert one user; raise EmailAlreadyRegisteredError on duplicates."""

    async def update_password_hash(self, *, user_id: UUID, password_hash: str) -> bool:
        """Replace one stored digest; return False when no user matched."""
