"""Decide whether a stored digest should be regenerated at the current cost."""

from __future__ import annotations

from rental_auth.application.ports.password_hasher_port import PasswordHasherPort


class RehashAdvisor:
    """Flag digests whose work factor is stale or unreadable."""

    def __init__(self, *, password_hasher: PasswordHasherPort, work_factor: int) -> None:
        self._password_hasher = password_hasher
        self._work_factor = work_factor

    def should_rehash(self, password_hash: str) -> bool:
        """Return True for legacy/malformed digests or a cost below the configured one."""

        try:
            current = self._password_hasher.get_work_factor(password_hash)
        except ValueError:
            return True
        return current < self._work_factor
