"""Shared normalization helpers for user credential inputs."""

from __future__ import annotations


def normalize_user_email(*, email: str) -> str:
    """Normalize one user email for exact-match lookup and reject blank values."""

    normalized = email.strip().lower()
    if not normalized:
        raise ValueError("email cannot be blank")
    return normalized
