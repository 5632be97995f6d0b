"""
Access control gates for protected routes.

authenticate() turns a bearer token (None when the request carried none)
into Authorized or Unauthorized; authorize() takes that outcome and a
required role and yields Authorized, Unauthorized (passed through) or
Forbidden. Routers compose the two and map the outcome to an HTTP status
with status_code_for()/message_for():

  missing or malformed header  -> 401
  token present but not valid  -> 403
  valid token, wrong role      -> 403 naming the required role
"""

import enum
from dataclasses import dataclass

from gatekeeper.core.security import SessionClaims, TokenInvalid, TokenService
from gatekeeper.models.user import Role


class UnauthorizedReason(str, enum.Enum):
    MISSING_TOKEN = "missing_token"
    INVALID_TOKEN = "invalid_token"


@dataclass(frozen=True)
class Authorized:
    claims: SessionClaims


@dataclass(frozen=True)
class Unauthorized:
    reason: UnauthorizedReason


@dataclass(frozen=True)
class Forbidden:
    claims: SessionClaims
    required_role: Role


AuthOutcome = Authorized | Unauthorized
AccessOutcome = Authorized | Unauthorized | Forbidden


def authenticate(token: str | None, tokens: TokenService) -> AuthOutcome:
    if not token:
        return Unauthorized(UnauthorizedReason.MISSING_TOKEN)
    try:
        claims = tokens.verify(token)
    except TokenInvalid:
        return Unauthorized(UnauthorizedReason.INVALID_TOKEN)
    return Authorized(claims)


def authorize(outcome: AuthOutcome, required_role: Role) -> AccessOutcome:
    if not isinstance(outcome, Authorized):
        return outcome
    if outcome.claims.role != required_role:
        return Forbidden(claims=outcome.claims, required_role=required_role)
    return outcome


def check_access(token: str | None, tokens: TokenService, required_role: Role) -> AccessOutcome:
    """Run both gates: authenticate the token, then require the role."""
    return authorize(authenticate(token, tokens), required_role)


def status_code_for(outcome: AccessOutcome) -> int:
    if isinstance(outcome, Authorized):
        return 200
    if isinstance(outcome, Unauthorized) and outcome.reason == UnauthorizedReason.MISSING_TOKEN:
        return 401
    return 403


def message_for(outcome: AccessOutcome) -> str:
    if isinstance(outcome, Forbidden):
        return f"Access denied: Requires {outcome.required_role.value} role"
    if isinstance(outcome, Unauthorized):
        if outcome.reason == UnauthorizedReason.MISSING_TOKEN:
            return "Unauthorized: Missing token"
        return "Forbidden: Invalid token"
    return "OK"
