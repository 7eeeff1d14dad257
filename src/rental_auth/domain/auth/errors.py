"""Error taxonomy for password hashing, verification and registration."""

from __future__ import annotations

from collections.abc import Iterable


class PasswordValidationError(ValueError):
    """Raised when plaintext input to hashing is missing or out of range."""


class WeakPasswordError(PasswordValidationError):
    """Raised when a candidate password violates one or more strength rules."""

    def __init__(self, *, errors: Iterable[str]) -> None:
        self.errors = tuple(errors)
        super().__init__("; ".join(self.errors) or "password does not meet strength policy")


class HashingError(RuntimeError):
    """Raised when the underlying digest algorithm fails to produce a hash."""


class VerificationError(Exception):
    """Raised for every verify-time failure with one fixed message."""

    def __init__(self) -> None:
        super().__init__("password verification failed")


class MalformedDigestError(ValueError):
    """Raised when a stored digest does not follow the bcrypt layout."""


class EmailAlreadyRegisteredError(ValueError):
    """Raised when registration targets an email that already has an account."""

    def __init__(self, *, email: str) -> None:
        super().__init__(f"email already registered: {email}")
        self.email = email
