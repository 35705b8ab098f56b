"""
Listing API — Health Check Route
================================

What:  GET /health for Docker health checks, load balancers and monitoring.
How:   Probes the database (SELECT 1) and the object store (bucket head /
       writable directory) and aggregates the result.

Status levels:
    - healthy:   database and storage reachable
    - degraded:  storage unreachable (reads still work, photo uploads fail)
    - unhealthy: database unreachable
"""

import logging
import time

from fastapi import APIRouter, Depends
from sqlalchemy import text

from listing_api import __version__
from listing_api.database import engine
from listing_api.schemas.listing import HealthResponse
from listing_api.services.storage import get_object_storage
from listing_api.services.storage_base import ObjectStorage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    storage: ObjectStorage = Depends(get_object_storage),
) -> HealthResponse:
    db_status = "connected"
    storage_status = "available"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    if not await storage.health_check():
        storage_status = "unavailable"
        if overall != "unhealthy":
            overall = "degraded"

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        storage=storage_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
