"""FastAPI dependencies: shared services and role-gated access."""

from collections.abc import Callable
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from gatekeeper.core.config import get_settings
from gatekeeper.core.database import get_db
from gatekeeper.core.security import PasswordHasher, SessionClaims, TokenService
from gatekeeper.models.user import Role
from gatekeeper.services.access import (
    Authorized,
    Unauthorized,
    UnauthorizedReason,
    check_access,
    message_for,
    status_code_for,
)
from gatekeeper.services.auth import AuthService
from gatekeeper.services.user_store import UserStore

# Advertised in OpenAPI; a missing or non-Bearer header yields None rather than an error.
security = HTTPBearer(auto_error=False)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=get_settings().BCRYPT_ROUNDS)


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide TokenService built once from settings."""
    return TokenService.from_settings(get_settings())


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    return UserStore(db)


def get_auth_service(
    store: Annotated[UserStore, Depends(get_user_store)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthService:
    return AuthService(store, hasher, tokens, session_ttl=tokens.default_ttl)


def require_role(role: Role) -> Callable[..., SessionClaims]:
    """
    Build a dependency that admits only bearer tokens carrying role.

    Missing token -> 401, invalid token -> 403, wrong role -> 403.
    """

    def dependency(
        credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
        tokens: Annotated[TokenService, Depends(get_token_service)],
    ) -> SessionClaims:
        token = credentials.credentials if credentials is not None else None
        outcome = check_access(token, tokens, role)
        if isinstance(outcome, Authorized):
            return outcome.claims
        headers = None
        if isinstance(outcome, Unauthorized) and outcome.reason == UnauthorizedReason.MISSING_TOKEN:
            headers = {"WWW-Authenticate": "Bearer"}
        raise HTTPException(
            status_code=status_code_for(outcome),
            detail=message_for(outcome),
            headers=headers,
        )

    return dependency


require_admin = require_role(Role.ADMIN)
