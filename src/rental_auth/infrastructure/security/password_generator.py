"""Random password generation for temporary and bootstrap credentials."""

from __future__ import annotations

import secrets
import string

_SPECIALS = "!@#$%^&*"
_CHARACTER_CLASSES = (
    string.ascii_uppercase,
    string.ascii_lowercase,
    string.digits,
    _SPECIALS,
)
_ALPHABET = "".join(_CHARACTER_CLASSES)
DEFAULT_GENERATED_LENGTH = 16


def generate_secure_password(length: int = DEFAULT_GENERATED_LENGTH) -> str:
    """Return a random password containing at least one character of each class."""

    if length < len(_CHARACTER_CLASSES):
        raise ValueError(f"length must be at least {len(_CHARACTER_CLASSES)}")

    rng = secrets.SystemRandom()
    characters = [secrets.choice(group) for group in _CHARACTER_CLASSES]
    characters.extend(secrets.choice(_ALPHABET) for _ in range(length - len(characters)))
    rng.shuffle(characters)
    return "".join(characters)
