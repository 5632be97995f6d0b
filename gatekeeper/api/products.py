"""Example protected resource: product list, Admin role only."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gatekeeper.api.deps import require_admin
from gatekeeper.core.database import get_db
from gatekeeper.core.security import SessionClaims
from gatekeeper.models import Product
from gatekeeper.schemas.product import ProductItem

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=list[ProductItem])
def list_products(
    claims: Annotated[SessionClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[ProductItem]:
    """List all products (Admin only). Demonstrates RBAC."""
    try:
        products = db.query(Product).order_by(Product.id).all()
    except SQLAlchemyError as e:
        logger.error("Product query failed for user_id=%s (%s)", claims.user_id, type(e).__name__)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error retrieving products",
        ) from e
    return [ProductItem.model_validate(p) for p in products]
