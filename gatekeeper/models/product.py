"""ORM model for the example protected resource."""

from sqlalchemy import Column, Integer, Numeric, String

from gatekeeper.models.base import Base


class Product(Base):
    """Store product row (code, name, quantity, unit price)."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_code = Column(String(64), nullable=False, unique=True, index=True)
    product = Column(String(255), nullable=False)
    qty = Column(Integer, nullable=False, default=0)
    per_price = Column(Numeric(12, 2), nullable=False, default=0)
