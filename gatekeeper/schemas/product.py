"""Response schemas for the products resource."""

from pydantic import BaseModel, ConfigDict


class ProductItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_code: str
    product: str
    qty: int
    per_price: float
