"""Signup and login endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from gatekeeper.api.deps import get_auth_service
from gatekeeper.schemas.auth import (
    FieldErrorItem,
    LoginRequest,
    LoginResponse,
    LoginUser,
    SignupRequest,
    SignupResponse,
)
from gatekeeper.services.auth import (
    AuthService,
    InvalidCredentials,
    ValidationFailed,
)
from gatekeeper.services.user_store import DuplicateEmail, StorageError

logger = logging.getLogger(__name__)
router = APIRouter()


def _validation_error(e: ValidationFailed) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=[FieldErrorItem(field=err.field, message=err.message).model_dump() for err in e.errors],
    )


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
)
def signup(
    body: SignupRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> SignupResponse:
    """Register an account with role Admin or Regular; returns the new user id."""
    try:
        user_id = auth.signup(body.full_name, body.email, body.password, body.role)
    except ValidationFailed as e:
        raise _validation_error(e) from e
    except DuplicateEmail as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    except StorageError as e:
        logger.error("Signup failed: %s (%s)", e.message, type(e.cause).__name__)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error creating user",
        ) from e
    return SignupResponse(user_id=user_id)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT valid for one hour.
    Include the token in the Authorization header as: Bearer <token>
    """
    try:
        result = auth.login(body.email, body.password)
    except ValidationFailed as e:
        raise _validation_error(e) from e
    except InvalidCredentials as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
        ) from e
    except StorageError as e:
        logger.error("Login failed: %s (%s)", e.message, type(e.cause).__name__)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error accessing database",
        ) from e
    return LoginResponse(
        token=result.token,
        user=LoginUser(id=result.user_id, role=result.role),
    )
