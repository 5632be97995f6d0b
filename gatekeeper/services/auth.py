"""Signup and login: validation, password hashing, account persistence and token issuance."""

import logging
from dataclasses import dataclass
from datetime import timedelta

from email_validator import EmailNotValidError, validate_email

from gatekeeper.core.security import PasswordHasher, SessionClaims, TokenService
from gatekeeper.models.user import Role
from gatekeeper.services.user_store import UserStore

logger = logging.getLogger(__name__)

# Input limits (fullName and password are measured in characters).
FULLNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

# Lifetime of tokens issued at login.
SESSION_TTL = timedelta(hours=1)


@dataclass(frozen=True)
class FieldError:
    """One invalid input field and why."""

    field: str
    message: str


class ValidationFailed(Exception):
    """Raised with every invalid field of a request, not just the first."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))


class InvalidCredentials(Exception):
    """Raised for an unknown email or a wrong password; callers cannot tell which."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class LoginResult:
    token: str
    user_id: int
    role: Role


def normalize_email(email: str | None) -> str | None:
    """Return the lower-cased address, or None if it is not a well-formed email."""
    if not email or not isinstance(email, str):
        return None
    try:
        info = validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return None
    return info.normalized.lower()


def _check_password(password: str | None, errors: list[FieldError]) -> None:
    if not password or len(password) < PASSWORD_MIN_LEN:
        errors.append(
            FieldError("password", f"Password must be at least {PASSWORD_MIN_LEN} characters long")
        )
    elif len(password) > PASSWORD_MAX_LEN:
        errors.append(
            FieldError("password", f"Password must be at most {PASSWORD_MAX_LEN} characters long")
        )


def _check_role(role: str | None, errors: list[FieldError]) -> Role | None:
    if not role:
        errors.append(FieldError("role", "Role is required"))
        return None
    try:
        return Role(role)
    except ValueError:
        errors.append(FieldError("role", f"Role must be one of: {', '.join(Role.values())}"))
        return None


class AuthService:
    """Orchestrates signup and login over a UserStore, PasswordHasher and TokenService."""

    def __init__(
        self,
        store: UserStore,
        hasher: PasswordHasher,
        tokens: TokenService,
        session_ttl: timedelta = SESSION_TTL,
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        self.session_ttl = session_ttl

    def signup(
        self,
        fullname: str | None,
        email: str | None,
        password: str | None,
        role: str | Role | None,
    ) -> int:
        """
        Register an account and return its id.

        Raises ValidationFailed listing every bad field, DuplicateEmail if the
        address is taken, StorageError if the database write fails.
        """
        errors: list[FieldError] = []
        name = (fullname or "").strip()
        if not name:
            errors.append(FieldError("fullName", "Full name is required"))
        elif len(name) > FULLNAME_MAX_LEN:
            errors.append(
                FieldError("fullName", f"Full name must be at most {FULLNAME_MAX_LEN} characters")
            )
        normalized = normalize_email(email)
        if normalized is None:
            errors.append(FieldError("email", "Invalid email format"))
        _check_password(password, errors)
        checked_role = _check_role(role, errors)
        if errors:
            raise ValidationFailed(errors)

        password_hash = self.hasher.hash(password)
        user_id = self.store.create(name, normalized, password_hash, checked_role)
        logger.info("Account created: user_id=%s role=%s", user_id, checked_role.value)
        return user_id

    def login(self, email: str | None, password: str | None) -> LoginResult:
        """
        Check credentials and issue a session token.

        Unknown email and wrong password both raise the same InvalidCredentials.
        """
        errors: list[FieldError] = []
        normalized = normalize_email(email)
        if normalized is None:
            errors.append(FieldError("email", "Invalid email format"))
        if not password:
            errors.append(FieldError("password", "Password is required"))
        if errors:
            raise ValidationFailed(errors)

        user = self.store.find_by_email(normalized)
        if user is None:
            # Same bcrypt cost as a real check so response time does not reveal the account.
            self.hasher.verify(password, self.hasher.dummy_hash)
            logger.info("Login failed: unknown account")
            raise InvalidCredentials()
        if not self.hasher.verify(password, user.password_hash):
            logger.info("Login failed: bad password for user_id=%s", user.id)
            raise InvalidCredentials()

        role = Role(user.role)
        token = self.tokens.issue(
            SessionClaims(user_id=user.id, email=user.email, role=role),
            ttl=self.session_ttl,
        )
        logger.info("Login succeeded: user_id=%s", user.id)
        return LoginResult(token=token, user_id=user.id, role=role)
