"""Port for the key-value store holding password hashes by username."""

from __future__ import annotations

from typing import Protocol


class CredentialStoreError(RuntimeError):
    """Raised when the credential store cannot complete an operation."""


class CredentialStorePort(Protocol):
    """Credential key-value store contract."""

    async def exists(self, key: str) -> bool:
        """Return whether a value is stored under key."""

    async def get(self, key: str) -> str | None:
        """Return stored value or None when key is absent."""

    async def set(self, key: str, value: str, *, only_if_absent: bool = False) -> bool:
        """Store value and return whether the store confirmed the write.

        With `only_if_absent`, the write is atomic and is not confirmed when the key
        already holds a value.
        """
