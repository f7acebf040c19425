"""
Health check endpoints for monitoring and orchestration (K8s, Docker, etc.)

Provides multiple health check endpoints:
- /health: Basic liveness check (always returns 200)
- /health/live: Alias of /health
- /health/db: Database connectivity check
- /health/ready: Readiness check (all dependencies healthy)

In in-memory mode there is no database; the store checks report "in_memory".
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.api.dependencies import get_session

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "booking-engine"


async def _ping(session: AsyncSession) -> None:
    result = await session.execute(text("SELECT 1"))
    result.scalar()


@router.get("/health")
async def health_check():
    """
    Basic liveness probe.

    Returns 200 OK if the application is running.
    """
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/live")
async def health_check_live():
    """Alias for /health for orchestrators that prefer the /health/live name."""
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/db")
async def health_check_db(session: AsyncSession | None = Depends(get_session)):
    """
    Database connectivity health check.

    Returns 503 Service Unavailable if the database is down.
    """
    if session is None:
        return {"status": "healthy", "component": "in_memory"}
    try:
        await _ping(session)
    except SQLAlchemyError as e:
        logger.error("Database health check failed", exc_info=e)
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "component": "database",
                "error": "Database connection failed",
            },
        )
    return {"status": "healthy", "component": "database"}


@router.get("/health/ready")
async def health_check_ready(session: AsyncSession | None = Depends(get_session)):
    """
    Readiness probe.

    Returns 503 if the store cannot serve requests.
    """
    health_status = {"status": "ready", "checks": {}}

    if session is None:
        health_status["checks"]["store"] = "in_memory"
        return health_status

    try:
        await _ping(session)
    except SQLAlchemyError as e:
        logger.error("Readiness check: Database unhealthy", exc_info=e)
        health_status["status"] = "not_ready"
        health_status["checks"]["database"] = "unhealthy"
        return JSONResponse(status_code=503, content=health_status)

    health_status["checks"]["database"] = "healthy"
    return health_status
