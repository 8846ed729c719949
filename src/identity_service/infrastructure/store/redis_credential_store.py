"""Redis adapter for the credential key-value store."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

import redis.asyncio as redis
from redis.exceptions import RedisError

from identity_service.application.ports.credential_store_port import (
    CredentialStoreError,
    CredentialStorePort,
)

logger = logging.getLogger(__name__)

_SOCKET_CONNECT_TIMEOUT_SECONDS = 5.0
_SOCKET_TIMEOUT_SECONDS = 10.0


def create_redis_client(redis_url: str) -> redis.Redis:
    """Create a lazily-connecting Redis client returning decoded strings."""

    client = redis.from_url(
        redis_url,
        decode_responses=True,
        socket_connect_timeout=_SOCKET_CONNECT_TIMEOUT_SECONDS,
        socket_timeout=_SOCKET_TIMEOUT_SECONDS,
    )
    logger.info("redis_client_created url=%s", mask_redis_url(redis_url))
    return client


def mask_redis_url(redis_url: str) -> str:
    """Hide the password component of a Redis URL for log output."""

    parsed = urlparse(redis_url)
    if parsed.password is None:
        return redis_url
    netloc = parsed.netloc.replace(f":{parsed.password}@", ":***@", 1)
    return parsed._replace(netloc=netloc).geturl()


class RedisCredentialStore(CredentialStorePort):
    """Credential store backed by plain Redis string keys."""

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    @classmethod
    def from_url(cls, redis_url: str) -> RedisCredentialStore:
        """Build store with a new client for the given Redis URL."""

        return cls(create_redis_client(redis_url))

    async def exists(self, key: str) -> bool:
        try:
            count = await self._client.exists(key)
        except RedisError as exc:
            raise self._store_error("exists", exc) from exc
        return count > 0

    async def get(self, key: str) -> str | None:
        try:
            return await self._client.get(key)
        except RedisError as exc:
            raise self._store_error("get", exc) from exc

    async def set(self, key: str, value: str, *, only_if_absent: bool = False) -> bool:
        try:
            reply = await self._client.set(key, value, nx=only_if_absent)
        except RedisError as exc:
            raise self._store_error("set", exc) from exc
        # SET answers OK on success and nil when NX finds an existing key.
        return reply is True

    async def close(self) -> None:
        """Release pooled connections held by the underlying client."""

        await self._client.aclose()

    @staticmethod
    def _store_error(operation: str, exc: RedisError) -> CredentialStoreError:
        logger.error("redis_client_error operation=%s error=%s", operation, exc)
        return CredentialStoreError(f"credential store {operation} failed")
