"""Application service for credential-based account registration."""

from __future__ import annotations

import asyncio
import logging

from rental_auth.application.ports.password_hasher_port import PasswordHasherPort
from rental_auth.application.ports.user_repository_port import (
    UserCreateInput,
    UserRepositoryPort,
)
from rental_auth.domain.auth.credentials import normalize_user_email
from rental_auth.domain.auth.errors import PasswordValidationError, WeakPasswordError
from rental_auth.domain.auth.identity import Identity
from rental_auth.domain.auth.password_policy import (
    DEFAULT_MAX_PASSWORD_LENGTH,
    DEFAULT_MIN_PASSWORD_LENGTH,
    validate_password_strength,
)
from rental_auth.domain.auth.roles import Role

logger = logging.getLogger(__name__)


class RegistrationService:
    """Create password-backed accounts after enforcing the strength policy."""

    def __init__(
        self,
        *,
        users: UserRepositoryPort,
        password_hasher: PasswordHasherPort,
        min_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
        max_length: int = DEFAULT_MAX_PASSWORD_LENGTH,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._min_length = min_length
        self._max_length = max_length

    async def register(
        self,
        *,
        email: str,
        password: str,
        name: str | None = None,
        role: Role = Role.TENANT,
        image: str | None = None,
    ) -> Identity:
        """Validate, hash and persist one new account; return its public identity."""

        normalized_email = normalize_user_email(email=email)

        if not isinstance(password, str) or not password:
            raise PasswordValidationError("password must be a non-empty string")

        strength = validate_password_strength(
            password,
            min_length=self._min_length,
            max_length=self._max_length,
        )
        if not strength.is_valid:
            raise WeakPasswordError(errors=strength.errors)

        password_hash = await asyncio.to_thread(self._password_hasher.hash_password, password)
        record = await self._users.create_user(
            UserCreateInput(
                email=normalized_email,
                password_hash=password_hash,
                role=role,
                name=name,
                image=image,
            )
        )
        logger.info("registered user user_id=%s role=%s", record.user_id, record.role.value)
        return record.to_identity()
