"""identity-api entrypoint and HTTP route wiring."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from identity_service.application.ports.credential_store_port import CredentialStorePort
from identity_service.application.ports.password_hasher_port import PasswordHasherPort
from identity_service.application.services.auth_service import AuthService
from identity_service.application.services.registration_service import RegistrationService
from identity_service.config.settings import load_settings
from identity_service.infrastructure.http.identity_router import build_identity_router
from identity_service.infrastructure.logging import configure_logging
from identity_service.infrastructure.security.password_hasher import BcryptPasswordHasher
from identity_service.infrastructure.store.redis_credential_store import RedisCredentialStore

IDENTITY_API_HOST = "0.0.0.0"
IDENTITY_API_PORT = 3000
logger = logging.getLogger(__name__)


def create_app(
    *,
    store: CredentialStorePort | None = None,
    password_hasher: PasswordHasherPort | None = None,
    registration_service: RegistrationService | None = None,
    auth_service: AuthService | None = None,
) -> FastAPI:
    """Create FastAPI app for user registration and authentication routes."""

    owned_store: RedisCredentialStore | None = None
    needs_services = registration_service is None or auth_service is None
    if needs_services and (store is None or password_hasher is None):
        settings = load_settings()
        configure_logging(level=settings.log_level)
        if store is None:
            owned_store = RedisCredentialStore.from_url(settings.redis_url)
            store = owned_store
        if password_hasher is None:
            password_hasher = BcryptPasswordHasher(rounds=settings.bcrypt_rounds)

    if registration_service is None:
        assert store is not None
        assert password_hasher is not None
        registration_service = RegistrationService(store=store, password_hasher=password_hasher)
    if auth_service is None:
        assert store is not None
        assert password_hasher is not None
        auth_service = AuthService(store=store, password_hasher=password_hasher)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.info("identity_api_started port=%s", IDENTITY_API_PORT)
        yield
        if owned_store is not None:
            await owned_store.close()

    app = FastAPI(lifespan=lifespan)
    app.include_router(
        build_identity_router(
            registration_service=registration_service,
            auth_service=auth_service,
        )
    )
    return app


def run_asgi_server(*, host: str = IDENTITY_API_HOST, port: int = IDENTITY_API_PORT) -> None:
    """Run identity-api as a long-lived ASGI process using application factory mode."""

    uvicorn.run(
        "apps.identity_api.main:create_app",
        host=host,
        port=port,
        factory=True,
    )


def main() -> None:
    """Run identity-api runtime process."""

    run_asgi_server()


if __name__ == "__main__":
    main()
