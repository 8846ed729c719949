"""Port for password hashing and verification."""

from __future__ import annotations

from typing import Protocol


class PasswordHasherPort(Protocol):
    """Salted one-way hashing and constant-time verification contract.

    Both calls are CPU-bound and blocking; async callers run them in a worker thread.
    """

    def hash_password(self, password: str) -> str:
        """Return a salted digest safe to persist under the user's credential key."""

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        """Return whether password matches a stored digest; malformed digests never match."""
