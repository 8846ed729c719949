"""Pydantic models for registration and authentication HTTP contracts."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CredentialsRequest(BaseModel):
    """HTTP request body shared by `/user` and `/auth`.

    Fields are optional so absent values reach the workflows as missing input.
    """

    model_config = ConfigDict(extra="ignore")

    username: str | None = None
    password: str | None = None


class FieldErrorModel(BaseModel):
    """One field-level error entry."""

    param: str
    message: str


class FieldErrorsResponse(BaseModel):
    """Registration failure body."""

    errors: list[FieldErrorModel]


class ErrorResponse(BaseModel):
    """Authentication failure body."""

    error: str


class MessageResponse(BaseModel):
    """Success body for both endpoints."""

    message: str
