"""Password strength policy for registration and password changes."""

from __future__ import annotations

import re
from dataclasses import dataclass

DEFAULT_MIN_PASSWORD_LENGTH = 8
DEFAULT_MAX_PASSWORD_LENGTH = 72
SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

_UPPERCASE_PATTERN = re.compile(r"[A-Z]")
_LOWERCASE_PATTERN = re.compile(r"[a-z]")
_DIGIT_PATTERN = re.compile(r"\d")
_SPECIAL_PATTERN = re.compile(f"[{re.escape(SPECIAL_CHARACTERS)}]")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one strength check; `errors` keeps rule order."""

    is_valid: bool
    errors: tuple[str, ...]


def validate_password_strength(
    password: str,
    *,
    min_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
    max_length: int = DEFAULT_MAX_PASSWORD_LENGTH,
) -> ValidationResult:
    """Check every strength rule and report all violations together."""

    errors: list[str] = []

    if len(password) < min_length:
        errors.append(f"Password must be at least {min_length} characters long")

    if len(password) > max_length:
        errors.append(f"Password must be {max_length} characters or less")

    if not _UPPERCASE_PATTERN.search(password):
        errors.append("Password must contain at least one uppercase letter")

    if not _LOWERCASE_PATTERN.search(password):
        errors.append("Password must contain at least one lowercase letter")

    if not _DIGIT_PATTERN.search(password):
        errors.append("Password must contain at least one number")

    if not _SPECIAL_PATTERN.search(password):
        errors.append("Password must contain at least one special character")

    return ValidationResult(is_valid=not errors, errors=tuple(errors))
