"""Bcrypt password hasher adapter."""

from __future__ import annotations

import re

import bcrypt

from rental_auth.application.ports.password_hasher_port import PasswordHasherPort
from rental_auth.domain.auth.errors import (
    HashingError,
    MalformedDigestError,
    PasswordValidationError,
    VerificationError,
)
from rental_auth.domain.auth.password_policy import (
    DEFAULT_MAX_PASSWORD_LENGTH,
    DEFAULT_MIN_PASSWORD_LENGTH,
)

DEFAULT_WORK_FACTOR = 12
BCRYPT_MAX_PASSWORD_BYTES = 72
MIN_WORK_FACTOR = 4
MAX_WORK_FACTOR = 31

# $2b$12$ + 22 chars of salt + 31 chars of hash, bcrypt's radix-64 alphabet.
_BCRYPT_DIGEST_PATTERN = re.compile(r"^\$2[abxy]?\$(?P<cost>\d{2})\$[./A-Za-z0-9]{53}$")


class BcryptPasswordHasher(PasswordHasherPort):
    """Password hashing adapter using bcrypt with a configured work factor."""

    def __init__(
        self,
        *,
        work_factor: int = DEFAULT_WORK_FACTOR,
        min_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
        max_length: int = DEFAULT_MAX_PASSWORD_LENGTH,
    ) -> None:
        if not MIN_WORK_FACTOR <= work_factor <= MAX_WORK_FACTOR:
            raise ValueError(
                f"work factor must be between {MIN_WORK_FACTOR} and {MAX_WORK_FACTOR}"
            )
        if not 1 <= min_length <= max_length <= BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(
                f"password length bounds must satisfy 1 <= min <= max <= "
                f"{BCRYPT_MAX_PASSWORD_BYTES}"
            )
        self._work_factor = work_factor
        self._min_length = min_length
        self._max_length = max_length

    @property
    def work_factor(self) -> int:
        return self._work_factor

    def hash_password(self, password: str) -> str:
        """Return a salted bcrypt digest, rejecting out-of-range plaintext."""

        encoded = self._validate_plaintext(password)
        try:
            digest = bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self._work_factor))
        except (ValueError, TypeError, MemoryError) as exc:
            raise HashingError(f"password hashing failed: {exc}") from exc
        return digest.decode("utf-8")

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        """Compare plaintext with a stored digest in constant time.

        Every failure mode raises the same `VerificationError`, so callers
        cannot tell bad input from a corrupted digest.
        """

        if not isinstance(password, str) or not password:
            raise VerificationError()
        if not isinstance(password_hash, str) or not password_hash:
            raise VerificationError()
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, TypeError) as exc:
            raise VerificationError() from exc

    def get_work_factor(self, password_hash: str) -> int:
        """Extract the cost parameter from a bcrypt digest string."""

        match = _BCRYPT_DIGEST_PATTERN.match(password_hash) if password_hash else None
        if match is None:
            raise MalformedDigestError("password hash is not a bcrypt digest")
        return int(match.group("cost"))

    def _validate_plaintext(self, password: str) -> bytes:
        if not isinstance(password, str) or not password:
            raise PasswordValidationError("password must be a non-empty string")
        if len(password) < self._min_length:
            raise PasswordValidationError(
                f"password must be at least {self._min_length} characters long"
            )
        if len(password) > self._max_length:
            raise PasswordValidationError(
                f"password must be {self._max_length} characters or less"
            )
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            raise PasswordValidationError(
                f"password must encode to at most {BCRYPT_MAX_PASSWORD_BYTES} bytes"
            )
        return encoded
