"""SQLAlchemy ORM models."""

from gatekeeper.models.base import Base
from gatekeeper.models.product import Product
from gatekeeper.models.user import Role, User

__all__ = ["Base", "Product", "Role", "User"]
