"""
Notes Service — Health Check Route
====================================

What:  Liveness probe for monitoring and load balancers.
How:   Returns a fixed status plus the current server time. It deliberately
       does not touch the database: it answers "is the process responsive",
       not "is storage reachable".
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter

from notes_service import __version__
from notes_service.schemas.note import HealthResponse

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service liveness probe",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
