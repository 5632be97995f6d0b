"""Password hashing and session token issuance/verification."""

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

from gatekeeper.models.user import Role

if TYPE_CHECKING:
    from gatekeeper.core.config import Settings

logger = logging.getLogger(__name__)

# Default bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72

# Claims every session token must carry.
REQUIRED_CLAIMS = ["sub", "email", "role", "iat", "exp"]


class TokenInvalid(Exception):
    """Raised for any unusable token: expired, tampered, malformed or with bad claims."""

    def __init__(self, message: str = "Invalid or expired token") -> None:
        self.message = message
        super().__init__(message)


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Salted one-way bcrypt hashing with a tunable work factor."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self.rounds = rounds
        self._dummy_hash: str | None = None

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Each call uses a fresh salt."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_password_bytes(plain_password), salt).decode("utf-8")

    def verify(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash; False on mismatch or a malformed hash."""
        if not plain_password or not hashed:
            return False
        try:
            return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    @property
    def dummy_hash(self) -> str:
        """Hash of a random value; verifying against it costs the same as a real check."""
        if self._dummy_hash is None:
            self._dummy_hash = self.hash(secrets.token_urlsafe(16))
        return self._dummy_hash


@dataclass(frozen=True)
class SessionClaims:
    """Identity carried by a session token."""

    user_id: int
    email: str
    role: Role
    issued_at: datetime | None = None
    expires_at: datetime | None = None


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """
    Signs and verifies time-bound JWT session tokens with a symmetric secret.

    The secret is fixed for the lifetime of the instance; rotating it means
    building a new service, which invalidates every outstanding token.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        default_ttl: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("TokenService requires a non-empty secret")
        self._secret = secret
        self.algorithm = algorithm
        self.default_ttl = default_ttl
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            default_ttl=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
        )

    def issue(self, claims: SessionClaims, ttl: timedelta | None = None) -> str:
        """Create a signed token for claims, expiring ttl (default_ttl if None) after now."""
        now = self._clock()
        expire = now + (ttl if ttl is not None else self.default_ttl)
        payload: dict[str, Any] = {
            "sub": str(claims.user_id),
            "email": claims.email,
            "role": Role(claims.role).value,
            "iat": now,
            "exp": expire,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> SessionClaims:
        """
        Decode and validate a token; return its claims.

        Signature is checked first, then expiry against this service's clock,
        then the shape of the claims. Every failure raises the same
        TokenInvalid; only the log says which.
        """
        if not token:
            logger.info("Token rejected: empty")
            raise TokenInvalid()
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_CLAIMS, "verify_exp": False, "verify_iat": False},
            )
        except jwt.InvalidSignatureError:
            logger.warning("Token rejected: signature mismatch")
            raise TokenInvalid()
        except jwt.PyJWTError as e:
            logger.info("Token rejected: %s", type(e).__name__)
            raise TokenInvalid()
        try:
            issued_at = datetime.fromtimestamp(payload["iat"], UTC)
            expires_at = datetime.fromtimestamp(payload["exp"], UTC)
        except (TypeError, ValueError, OverflowError, OSError):
            logger.info("Token rejected: malformed timestamps")
            raise TokenInvalid()
        if self._clock() > expires_at:
            logger.info("Token rejected: expired")
            raise TokenInvalid()
        return self._claims_from_payload(payload, issued_at, expires_at)

    @staticmethod
    def _claims_from_payload(
        payload: dict[str, Any], issued_at: datetime, expires_at: datetime
    ) -> SessionClaims:
        try:
            user_id = int(payload["sub"])
            role = Role(payload["role"])
        except (TypeError, ValueError):
            logger.info("Token rejected: malformed claims")
            raise TokenInvalid()
        email = payload["email"]
        if user_id < 1 or not isinstance(email, str) or not email:
            logger.info("Token rejected: malformed claims")
            raise TokenInvalid()
        return SessionClaims(
            user_id=user_id,
            email=email,
            role=role,
            issued_at=issued_at,
            expires_at=expires_at,
        )
