"""FastAPI router for user registration and credential verification endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from identity_service.application.dto.credential_models import (
    CredentialsRequest,
    ErrorResponse,
    FieldErrorModel,
    FieldErrorsResponse,
    MessageResponse,
)
from identity_service.application.ports.credential_store_port import CredentialStoreError
from identity_service.application.services.auth_service import AuthOutcome, AuthService
from identity_service.application.services.registration_service import (
    RegistrationOutcome,
    RegistrationService,
)
from identity_service.domain.auth.credential_rules import FieldError

logger = logging.getLogger(__name__)

USER_CREATED_MESSAGE = "User created"
USER_AUTHENTICATED_MESSAGE = "User authenticated"
AUTH_UNAVAILABLE_MESSAGE = "Unable to authenticate user"

_REGISTRATION_STATUS_CODES = {
    RegistrationOutcome.VALIDATION_FAILED: 400,
    RegistrationOutcome.CONFLICT: 409,
    RegistrationOutcome.STORAGE_FAILED: 500,
}
_AUTH_STATUS_CODES = {
    AuthOutcome.MISSING_FIELDS: 400,
    AuthOutcome.INVALID_CREDENTIALS: 401,
}


def build_identity_router(
    *,
    registration_service: RegistrationService,
    auth_service: AuthService,
) -> APIRouter:
    """Build router exposing `/user` registration and `/auth` login endpoints."""

    router = APIRouter(tags=["identity"])

    @router.post(
        "/user",
        response_model=MessageResponse,
        responses={
            400: {"model": FieldErrorsResponse},
            409: {"model": FieldErrorsResponse},
            500: {"model": FieldErrorsResponse},
        },
    )
    async def create_user(request: Request) -> JSONResponse:
        payload = await _read_credentials(request)
        result = await registration_service.register(
            username=payload.username,
            password=payload.password,
        )

        if result.outcome is RegistrationOutcome.CREATED:
            return _json_response(200, MessageResponse(message=USER_CREATED_MESSAGE))
        return _field_errors_response(_REGISTRATION_STATUS_CODES[result.outcome], result.errors)

    @router.post(
        "/auth",
        response_model=MessageResponse,
        responses={
            400: {"model": ErrorResponse},
            401: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
    )
    async def authenticate_user(request: Request) -> JSONResponse:
        payload = await _read_credentials(request)
        try:
            result = await auth_service.authenticate(
                username=payload.username,
                password=payload.password,
            )
        except CredentialStoreError:
            logger.exception("login_store_unavailable")
            return _json_response(500, ErrorResponse(error=AUTH_UNAVAILABLE_MESSAGE))

        if result.outcome is AuthOutcome.SUCCESS:
            return _json_response(200, MessageResponse(message=USER_AUTHENTICATED_MESSAGE))
        assert result.error is not None
        return _json_response(_AUTH_STATUS_CODES[result.outcome], ErrorResponse(error=result.error))

    return router


async def _read_credentials(request: Request) -> CredentialsRequest:
    """Parse JSON credentials; unreadable bodies count as missing fields."""

    raw_body = await request.body()
    if not raw_body.strip():
        return CredentialsRequest()
    try:
        return CredentialsRequest.model_validate_json(raw_body)
    except ValidationError:
        logger.info("credentials_body_rejected content_length=%s", len(raw_body))
        return CredentialsRequest()


def _field_errors_response(status_code: int, errors: tuple[FieldError, ...]) -> JSONResponse:
    body = FieldErrorsResponse(
        errors=[FieldErrorModel(param=error.param, message=error.message) for error in errors]
    )
    return _json_response(status_code, body)


def _json_response(
    status_code: int,
    body: MessageResponse | ErrorResponse | FieldErrorsResponse,
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump())
