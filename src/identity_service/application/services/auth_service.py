"""Application authentication service for credential verification."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum

from identity_service.application.ports.credential_store_port import CredentialStorePort
from identity_service.application.ports.password_hasher_port import PasswordHasherPort
from identity_service.domain.auth.credentials import (
    INVALID_CREDENTIALS_MESSAGE,
    REQUIRED_FIELDS_MESSAGE,
    credential_key,
)

logger = logging.getLogger(__name__)


class AuthOutcome(StrEnum):
    """Supported authentication outcomes."""

    SUCCESS = "success"
    MISSING_FIELDS = "missing_fields"
    INVALID_CREDENTIALS = "invalid_credentials"


@dataclass(frozen=True)
class AuthResult:
    """Authentication result model."""

    outcome: AuthOutcome
    error: str | None = None


_MISSING_FIELDS = AuthResult(outcome=AuthOutcome.MISSING_FIELDS, error=REQUIRED_FIELDS_MESSAGE)
_INVALID_CREDENTIALS = AuthResult(
    outcome=AuthOutcome.INVALID_CREDENTIALS,
    error=INVALID_CREDENTIALS_MESSAGE,
)


class AuthService:
    """Authenticate credentials against stored password hashes."""

    def __init__(
        self,
        *,
        store: CredentialStorePort,
        password_hasher: PasswordHasherPort,
    ) -> None:
        self._store = store
        self._password_hasher = password_hasher

    async def authenticate(self, *, username: str | None, password: str | None) -> AuthResult:
        """Authenticate user credentials.

        Unknown users and wrong passwords yield the same result object.
        """

        if not username or not password:
            return _MISSING_FIELDS

        password_hash = await self._store.get(credential_key(username))
        if password_hash is None:
            logger.info("login_failed username=%r", username)
            return _INVALID_CREDENTIALS

        is_valid = await asyncio.to_thread(
            self._password_hasher.verify_password,
            password=password,
            password_hash=password_hash,
        )
        if not is_valid:
            logger.info("login_failed username=%r", username)
            return _INVALID_CREDENTIALS

        logger.info("login_success username=%r", username)
        return AuthResult(outcome=AuthOutcome.SUCCESS)
