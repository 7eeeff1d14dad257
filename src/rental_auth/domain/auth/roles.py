"""User role enum for authorization predicates."""

from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    """Privilege tiers recognized by the rental platform."""

    TENANT = "TENANT"
    LANDLORD = "LANDLORD"
    ADMIN = "ADMIN"
