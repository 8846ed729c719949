"""Bcrypt password hasher adapter."""

from __future__ import annotations

import bcrypt

from identity_service.application.ports.password_hasher_port import PasswordHasherPort

DEFAULT_BCRYPT_ROUNDS = 12
_BCRYPT_MAX_INPUT_BYTES = 72


class BcryptPasswordHasher(PasswordHasherPort):
    """Password hashing adapter using bcrypt."""

    def __init__(self, *, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self._rounds = rounds

    def hash_password(self, password: str) -> str:
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        # checkpw compares digests in constant time.
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except ValueError:
            return False


def _encode(password: str) -> bytes:
    """Encode password, keeping only the bytes bcrypt actually hashes."""

    return password.encode("utf-8")[:_BCRYPT_MAX_INPUT_BYTES]
