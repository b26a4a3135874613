"""Health & Readiness Checks — liveness and readiness endpoints.

Invariants:
    - GET /health_check always returns 200 with an empty body (liveness)
    - GET /health_check/ready returns 503 if the database is unreachable (readiness)

Design Decisions:
    - Liveness touches nothing: a slow database must not restart the process
"""

import logging
from fastapi import APIRouter, Response, status
from fastapi.responses import JSONResponse

from newsletter.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health_check", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check() -> Response:
    """Liveness check. Returns 200 with no body if the process is up."""
    return Response(status_code=status.HTTP_200_OK)


@router.get("/ready")
async def readiness_check():
    """Readiness check: includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
