"""Post-verification sign-in eligibility policies."""

from __future__ import annotations

from typing import Protocol

from rental_auth.domain.auth.identity import Identity


class SignInEligibilityPolicy(Protocol):
    """Decide whether a verified identity may receive a session."""

    def is_eligible(self, identity: Identity) -> bool:
        """Return False to block sign-in after a correct password."""


class AllowAllSignInPolicy:
    """Admit every identity that passed password verification."""

    def is_eligible(self, identity: Identity) -> bool:
        _ = identity
        return True


class RequireVerifiedEmailPolicy:
    """Admit only identities with a confirmed email address."""

    def is_eligible(self, identity: Identity) -> bool:
        return identity.email_verified_at is not None
