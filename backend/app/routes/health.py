"""
User Registry Backend — Health Check Routes
=============================================

What:  Liveness and readiness endpoints for monitoring and load balancers.
How:   /health answers from process state only; /health/ready also runs
       SELECT 1 against the configured database.

Status semantics:
    GET /health        → always 200 {status: "ok", timestamp, uptime} while live
    GET /health/ready  → 200 when the database answers, 503 otherwise
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.schemas.user import HealthResponse, ReadinessResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])

# Initialized once when the module loads
_start_time = time.monotonic()


@router.get(
    "",
    response_model=HealthResponse,
    summary="Service liveness check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        uptime=round(time.monotonic() - _start_time, 3),
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unreachable", "model": ReadinessResponse}},
    summary="Service readiness check",
)
async def readiness_check():
    """Probe the database with a trivial query."""
    try:
        from app.database import engine
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Readiness check: database unreachable: %s", str(e))
        return JSONResponse(
            status_code=503,
            content=ReadinessResponse(status="not_ready", database="disconnected").model_dump(),
        )
    return ReadinessResponse(status="ready", database="connected")
