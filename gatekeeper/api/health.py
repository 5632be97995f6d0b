"""Health check endpoint with database connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gatekeeper import __version__
from gatekeeper.core.config import get_settings
from gatekeeper.core.database import check_db_connected, get_db
from gatekeeper.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """Service status for load balancers; reports whether the database answers."""
    return HealthResponse(
        version=__version__,
        environment=get_settings().APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
    )
