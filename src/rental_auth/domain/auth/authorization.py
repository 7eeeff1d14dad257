"""Role-based authorization predicates over identities and sessions.

Every predicate tolerates a missing argument and answers `False` instead of
raising. Callers compose them, e.g. `is_authenticated(s) and is_admin(s.identity)`.
"""

from __future__ import annotations

from typing import TypeGuard

from rental_auth.domain.auth.identity import Identity, Session
from rental_auth.domain.auth.roles import Role


def has_role(identity: Identity | None, role: Role) -> bool:
    """Return whether the identity exists and carries exactly `role`."""

    return identity is not None and identity.role == role


def is_admin(identity: Identity | None) -> bool:
    """Return whether the identity is an admin."""

    return has_role(identity, Role.ADMIN)


def is_landlord_or_admin(identity: Identity | None) -> bool:
    """Return whether the identity may perform landlord-level actions."""

    return identity is not None and identity.role in (Role.LANDLORD, Role.ADMIN)


def is_authenticated(session: Session | None) -> TypeGuard[Session]:
    """Return whether the session exists and wraps an identity."""

    return session is not None and session.identity is not None
