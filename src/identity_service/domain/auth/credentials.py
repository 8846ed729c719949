"""Credential storage keys and user-facing credential messages."""

from __future__ import annotations

from typing import Final

CREDENTIAL_KEY_PREFIX: Final = "user:"

REQUIRED_FIELDS_MESSAGE: Final = "Username and password are required"
USERNAME_EXISTS_MESSAGE: Final = "Username already exists"
CREATE_FAILED_MESSAGE: Final = "Unable to create user"
INVALID_CREDENTIALS_MESSAGE: Final = "Invalid username or password"


def credential_key(username: str) -> str:
    """Return the store key holding one user's password hash."""

    return f"{CREDENTIAL_KEY_PREFIX}{username}"
