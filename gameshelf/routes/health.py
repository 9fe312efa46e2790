"""
GameShelf Backend — Health Check Route
========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings the game store through the Database handle on app.state.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

Status levels:
    - healthy:   Store reachable (HTTP 200)
    - unhealthy: Store unreachable or not connected (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from gameshelf import __version__
from gameshelf.schemas.game import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request):
    """
    Check that the game store answers a trivial query.

    Returns:
        HealthResponse with HTTP 200 when healthy, 503 otherwise.
    """
    database = request.app.state.database
    db_status = "connected"

    try:
        if not await database.ping():
            db_status = "disconnected"
    except (SQLAlchemyError, OSError) as e:
        db_status = "disconnected"
        logger.warning("Health check: database unreachable: %s", str(e))

    health = HealthResponse(
        status="healthy" if db_status == "connected" else "unhealthy",
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if db_status != "connected":
        return JSONResponse(status_code=503, content=health.model_dump())
    return health
