"""Application authentication service for credential verification."""

from __future__ import annotations

import asyncio
import logging
import secrets
from dataclasses import dataclass
from enum import StrEnum

from rental_auth.application.ports.password_hasher_port import PasswordHasherPort
from rental_auth.application.ports.user_repository_port import UserRecord, UserRepositoryPort
from rental_auth.application.services.rehash_advisor import RehashAdvisor
from rental_auth.application.services.sign_in_eligibility import (
    AllowAllSignInPolicy,
    SignInEligibilityPolicy,
)
from rental_auth.domain.auth.credentials import normalize_user_email
from rental_auth.domain.auth.errors import VerificationError
from rental_auth.domain.auth.identity import Identity
from rental_auth.domain.auth.password_policy import DEFAULT_MIN_PASSWORD_LENGTH

logger = logging.getLogger(__name__)


class AuthOutcome(StrEnum):
    """Supported authentication outcomes."""

    SUCCESS = "success"
    AUTHENTICATION_FAILED = "authentication_failed"


@dataclass(frozen=True)
class AuthResult:
    """Authentication result model; never carries the stored digest."""

    outcome: AuthOutcome
    identity: Identity | None = None


_FAILED = AuthResult(outcome=AuthOutcome.AUTHENTICATION_FAILED, identity=None)


class AuthService:
    """Authenticate one email/password attempt and upgrade stale digests."""

    def __init__(
        self,
        *,
        users: UserRepositoryPort,
        password_hasher: PasswordHasherPort,
        rehash_advisor: RehashAdvisor,
        eligibility_policy: SignInEligibilityPolicy | None = None,
        timing_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._rehash_advisor = rehash_advisor
        self._eligibility_policy = eligibility_policy or AllowAllSignInPolicy()
        self._timing_password_length = timing_password_length
        self._timing_hash: str | None = None

    async def authenticate(self, *, email: str | None, password: str | None) -> AuthResult:
        """Authenticate credentials, returning one generic failure for every cause."""

        if not isinstance(email, str) or not isinstance(password, str) or not password:
            _log_failure(email=None, reason="missing_credentials")
            return _FAILED

        try:
            normalized_email = normalize_user_email(email=email)
        except ValueError:
            _log_failure(email=None, reason="missing_credentials")
            return _FAILED

        try:
            user = await self._users.get_by_email(email=normalized_email)
        except Exception:
            logger.exception("login failed email=%s reason=lookup_error", normalized_email)
            return _FAILED

        if user is None:
            await self._burn_verify_cost(password=password)
            _log_failure(email=normalized_email, reason="unknown_user")
            return _FAILED

        if not user.password_hash:
            await self._burn_verify_cost(password=password)
            _log_failure(email=normalized_email, reason="no_password_set")
            return _FAILED

        try:
            is_valid = await asyncio.to_thread(
                self._password_hasher.verify_password,
                password=password,
                password_hash=user.password_hash,
            )
        except VerificationError:
            _log_failure(email=normalized_email, reason="verification_error")
            return _FAILED

        if not is_valid:
            _log_failure(email=normalized_email, reason="invalid_password")
            return _FAILED

        identity = user.to_identity()
        if not self._eligibility_policy.is_eligible(identity):
            _log_failure(email=normalized_email, reason="ineligible")
            return _FAILED

        if self._rehash_advisor.should_rehash(user.password_hash):
            await self._rehash(user=user, password=password)

        logger.info("login succeeded user_id=%s role=%s", identity.user_id, identity.role.value)
        return AuthResult(outcome=AuthOutcome.SUCCESS, identity=identity)

    async def _burn_verify_cost(self, *, password: str) -> None:
        """Run one verify against a throwaway digest so misses cost as much as hits."""

        if self._timing_hash is None:
            plaintext = secrets.token_urlsafe(54)[: self._timing_password_length]
            self._timing_hash = await asyncio.to_thread(
                self._password_hasher.hash_password,
                plaintext,
            )
        try:
            await asyncio.to_thread(
                self._password_hasher.verify_password,
                password=password,
                password_hash=self._timing_hash,
            )
        except VerificationError:
            pass

    async def _rehash(self, *, user: UserRecord, password: str) -> None:
        """Persist a digest at the current work factor; failures never fail the login."""

        logger.info("rehashing stale password digest user_id=%s", user.user_id)
        try:
            new_hash = await asyncio.to_thread(self._password_hasher.hash_password, password)
            updated = await self._users.update_password_hash(
                user_id=user.user_id,
                password_hash=new_hash,
            )
        except Exception:
            logger.exception("password rehash failed user_id=%s", user.user_id)
            return

        if not updated:
            logger.warning("password rehash matched no user user_id=%s", user.user_id)


def _log_failure(*, email: str | None, reason: str) -> None:
    logger.warning("login failed email=%s reason=%s", email, reason)
