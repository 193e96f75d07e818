"""
Contacts API - Health Check Route
==================================

What:  Reports whether the service can reach MongoDB.
How:   Sends a `ping` through the shared client; no collection is touched.
Who:   Docker health checks, load balancers, uptime monitors.

Status levels:
    healthy:    MongoDB answered the ping (HTTP 200)
    unhealthy:  not connected or ping failed (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from contacts_api import __version__
from contacts_api.database import Database, get_database
from contacts_api.schemas.contact import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "MongoDB unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(database: Database = Depends(get_database)):
    connected = await database.ping()
    body = HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if not connected:
        logger.warning("Health check: database unreachable")
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
