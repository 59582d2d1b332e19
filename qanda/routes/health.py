"""
Q&A Backend: Health Check Routes
=================================

What:  GET /health for monitoring probes and GET /test as a liveness smoke test.
How:   /health runs SELECT 1 through the app's Database handle. A service
       that cannot reach its store is reported unhealthy with HTTP 503.
"""

import time

from fastapi import APIRouter, Depends, Response

from qanda import __version__
from qanda.database import Database, get_database
from qanda.schemas.common import HealthResponse

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    database: Database = Depends(get_database),
) -> HealthResponse:
    if await database.ping():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )


@router.get("/test", response_model=str, summary="API smoke test")
async def smoke_test() -> str:
    return "Server API is working"
