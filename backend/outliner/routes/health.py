"""
Outliner Backend — Health Check Route
=======================================

What:  Health check endpoint for monitoring and container probes.
How:   Runs SELECT 1 against the store and reports the result.
Who:   Called by Docker health checks, load balancers and uptime monitors.

Status levels:
    healthy:   store reachable (HTTP 200)
    unhealthy: store unreachable (HTTP 200 with status "unhealthy")
"""

import logging
import time

from fastapi import APIRouter, Request

from outliner import __version__
from outliner.schemas.outline import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Process start, for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports whether the relational store answers a trivial query.",
)
async def health_check(request: Request) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    database = getattr(request.app.state, "database", None)
    if database is None:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning(
            "Health check: no database client: %s",
            getattr(request.app.state, "database_error", "not configured"),
        )
    else:
        try:
            await database.ping()
        except Exception as e:
            db_status = "disconnected"
            overall = "unhealthy"
            logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
