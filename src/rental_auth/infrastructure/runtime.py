"""Composition root wiring authentication services from settings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rental_auth.application.services.auth_service import AuthService
from rental_auth.application.services.registration_service import RegistrationService
from rental_auth.application.services.rehash_advisor import RehashAdvisor
from rental_auth.application.services.sign_in_eligibility import (
    AllowAllSignInPolicy,
    RequireVerifiedEmailPolicy,
    SignInEligibilityPolicy,
)
from rental_auth.config.settings import Settings
from rental_auth.domain.auth.identity import Identity, Session, build_session
from rental_auth.infrastructure.db.session import create_session_factory
from rental_auth.infrastructure.db.user_repository import SqlAlchemyUserRepository
from rental_auth.infrastructure.logging import configure_logging
from rental_auth.infrastructure.security.password_hasher import BcryptPasswordHasher


@dataclass(frozen=True)
class AuthRuntime:
    """Wired authentication collaborators for one process."""

    session_factory: async_sessionmaker[AsyncSession]
    password_hasher: BcryptPasswordHasher
    auth_service: AuthService
    registration_service: RegistrationService
    session_max_age: timedelta

    def new_session(self, identity: Identity, *, now: datetime | None = None) -> Session:
        """Build a session for an authenticated identity with the configured lifetime."""

        return build_session(
            identity,
            now=now or datetime.now(tz=UTC),
            max_age=self.session_max_age,
        )


def build_eligibility_policy(settings: Settings) -> SignInEligibilityPolicy:
    """Select the sign-in eligibility policy from settings."""

    if settings.require_verified_email:
        return RequireVerifiedEmailPolicy()
    return AllowAllSignInPolicy()


def build_auth_runtime(settings: Settings) -> AuthRuntime:
    """Configure logging and wire repository, hasher and services from settings."""

    configure_logging(level=settings.log_level)

    session_factory = create_session_factory(settings.database_url)
    users = SqlAlchemyUserRepository(session_factory)
    password_hasher = BcryptPasswordHasher(
        work_factor=settings.password_work_factor,
        min_length=settings.password_min_length,
        max_length=settings.password_max_length,
    )
    rehash_advisor = RehashAdvisor(
        password_hasher=password_hasher,
        work_factor=settings.password_work_factor,
    )
    return AuthRuntime(
        session_factory=session_factory,
        password_hasher=password_hasher,
        auth_service=AuthService(
            users=users,
            password_hasher=password_hasher,
            rehash_advisor=rehash_advisor,
            eligibility_policy=build_eligibility_policy(settings),
            timing_password_length=settings.password_min_length,
        ),
        registration_service=RegistrationService(
            users=users,
            password_hasher=password_hasher,
            min_length=settings.password_min_length,
            max_length=settings.password_max_length,
        ),
        session_max_age=timedelta(seconds=settings.session_max_age_seconds),
    )
