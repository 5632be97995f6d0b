"""Pydantic request/response schemas."""

from gatekeeper.schemas.auth import (
    FieldErrorItem,
    LoginRequest,
    LoginResponse,
    LoginUser,
    SignupRequest,
    SignupResponse,
)
from gatekeeper.schemas.health import HealthResponse
from gatekeeper.schemas.product import ProductItem

__all__ = [
    "FieldErrorItem",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "LoginUser",
    "ProductItem",
    "SignupRequest",
    "SignupResponse",
]
