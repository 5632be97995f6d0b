"""Persistence for account records."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from gatekeeper.models.user import Role, User

logger = logging.getLogger(__name__)

# How each backend names the email uniqueness violation (SQLite column, PostgreSQL index).
EMAIL_CONSTRAINT_MARKERS = ("UNIQUE constraint failed: users.email", "ix_users_email", "uq_users_email")


class DuplicateEmail(Exception):
    """Raised when an account with the same email already exists."""

    def __init__(self, message: str = "Email already exists") -> None:
        self.message = message
        super().__init__(message)


class StorageError(Exception):
    """Raised when the database cannot complete a read or write."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


def _is_duplicate_email(e: IntegrityError) -> bool:
    detail = str(e.orig) if e.orig is not None else str(e)
    return any(marker in detail for marker in EMAIL_CONSTRAINT_MARKERS)


class UserStore:
    """
    Create and look up accounts through a SQLAlchemy session.

    Email uniqueness is left to the UNIQUE index on users.email: create() does
    not look first, so two racing inserts cannot both commit.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, fullname: str, email: str, password_hash: str, role: Role) -> int:
        """Insert a new account and return its id."""
        user = User(
            fullname=fullname,
            email=email,
            password_hash=password_hash,
            role=Role(role).value,
        )
        try:
            self.session.add(user)
            self.session.flush()
            user_id = user.id
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if not _is_duplicate_email(e):
                raise StorageError("Failed to create user", cause=e) from e
            logger.info("Signup conflict on users.email")
            raise DuplicateEmail() from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError("Failed to create user", cause=e) from e
        return user_id

    def find_by_email(self, email: str) -> User | None:
        try:
            return self.session.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            raise StorageError("Failed to look up user", cause=e) from e

    def find_by_id(self, user_id: int) -> User | None:
        try:
            return self.session.get(User, user_id)
        except SQLAlchemyError as e:
            raise StorageError("Failed to look up user", cause=e) from e
