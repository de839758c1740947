"""Health check endpoint with a deadline-bounded database connectivity check."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.core.errors import RequestTimeoutError
from app.core.timeout import with_timeout
from app.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
async def get_health(db: Annotated[AsyncSession, Depends(get_db)]) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring; always 200 so the body carries the detail.
    """
    try:
        await with_timeout(check_db_connected(db))
        database = "connected"
    except RequestTimeoutError:
        database = "timeout"
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database health check failed: %s", e)
        database = "disconnected"

    return HealthResponse(environment=settings.APP_ENV, database=database)
