"""Application service for new user registration."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum

from identity_service.application.ports.credential_store_port import (
    CredentialStoreError,
    CredentialStorePort,
)
from identity_service.application.ports.password_hasher_port import PasswordHasherPort
from identity_service.domain.auth.credential_rules import (
    FieldError,
    validate_password,
    validate_username,
)
from identity_service.domain.auth.credentials import (
    CREATE_FAILED_MESSAGE,
    REQUIRED_FIELDS_MESSAGE,
    USERNAME_EXISTS_MESSAGE,
    credential_key,
)

logger = logging.getLogger(__name__)


class RegistrationOutcome(StrEnum):
    """Supported registration outcomes."""

    CREATED = "created"
    VALIDATION_FAILED = "validation_failed"
    CONFLICT = "conflict"
    STORAGE_FAILED = "storage_failed"


@dataclass(frozen=True)
class RegistrationResult:
    """Registration result model."""

    outcome: RegistrationOutcome
    errors: tuple[FieldError, ...] = ()


class RegistrationService:
    """Validate, hash and persist new user credentials."""

    def __init__(
        self,
        *,
        store: CredentialStorePort,
        password_hasher: PasswordHasherPort,
    ) -> None:
        self._store = store
        self._password_hasher = password_hasher

    async def register(self, *, username: str | None, password: str | None) -> RegistrationResult:
        """Register one user, reading and writing the store at most once each.

        The existence check only runs for syntactically valid usernames. A taken
        username is reported alone, without the password violations already found.
        Concurrent registrations of one unused username both pass the existence
        check; the conditional write lets only one of them create the credential.
        """

        if not username or not password:
            return RegistrationResult(
                outcome=RegistrationOutcome.VALIDATION_FAILED,
                errors=(FieldError("username", REQUIRED_FIELDS_MESSAGE),),
            )

        username_errors = validate_username(username)
        errors = [*username_errors, *validate_password(password)]

        key = credential_key(username)
        if not username_errors:
            try:
                taken = await self._store.exists(key)
            except CredentialStoreError as exc:
                logger.warning("registration_lookup_failed username=%r error=%s", username, exc)
                return _storage_failed()
            if taken:
                logger.info("registration_conflict username=%r", username)
                return RegistrationResult(
                    outcome=RegistrationOutcome.CONFLICT,
                    errors=(FieldError("username", USERNAME_EXISTS_MESSAGE),),
                )

        if errors:
            logger.info(
                "registration_rejected username=%r violations=%s",
                username,
                len(errors),
            )
            return RegistrationResult(
                outcome=RegistrationOutcome.VALIDATION_FAILED,
                errors=tuple(errors),
            )

        password_hash = await asyncio.to_thread(self._password_hasher.hash_password, password)
        try:
            stored = await self._store.set(key, password_hash, only_if_absent=True)
        except CredentialStoreError as exc:
            logger.warning("registration_store_failed username=%r error=%s", username, exc)
            stored = False

        if not stored:
            logger.warning("registration_not_confirmed username=%r", username)
            return _storage_failed()

        logger.info("registration_created username=%r", username)
        return RegistrationResult(outcome=RegistrationOutcome.CREATED)


def _storage_failed() -> RegistrationResult:
    return RegistrationResult(
        outcome=RegistrationOutcome.STORAGE_FAILED,
        errors=(FieldError("username", CREATE_FAILED_MESSAGE),),
    )
