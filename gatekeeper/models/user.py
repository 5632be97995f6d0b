"""ORM model for registered accounts (auth and RBAC)."""

import enum

from sqlalchemy import Column, Integer, String

from gatekeeper.models.base import Base


class Role(str, enum.Enum):
    """Account role, fixed at signup."""

    ADMIN = "Admin"
    REGULAR = "Regular"

    @classmethod
    def values(cls) -> list[str]:
        return [r.value for r in cls]


class User(Base):
    """
    Registered account for JWT authentication and role-based access control.

    email is stored lower-cased and is unique at the storage layer; the UNIQUE
    index is what arbitrates concurrent signups for the same address.
    role: 'Admin' or 'Regular'
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    fullname = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False)
