"""
Business Manager Backend — Health Check Route
=============================================

What:  GET /health for load balancer probes and uptime monitors.
       Always answers 200; `status` is "degraded" when the ledger database
       cannot be reached, so probes can tell a dead database from a dead app.
"""

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from bizmanager import __version__
from bizmanager.database import engine
from bizmanager.models.base import utcnow
from bizmanager.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_started = time.monotonic()


async def database_reachable() -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Health check: database unreachable: %s", e)
        return False
    return True


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check() -> HealthResponse:
    reachable = await database_reachable()
    return HealthResponse(
        status="ok" if reachable else "degraded",
        version=__version__,
        database="connected" if reachable else "disconnected",
        timestamp=utcnow(),
        uptime_seconds=round(time.monotonic() - _started, 2),
    )
