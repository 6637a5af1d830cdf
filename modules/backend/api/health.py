"""
Health Endpoints.

    GET /health        liveness, never touches dependencies
    GET /health/ready  readiness, runs SELECT 1 against the database
"""

import asyncio
import time
from typing import Any

from fastapi import APIRouter, HTTPException
from sqlalchemy import text

from modules.backend.core.logging import get_logger

router = APIRouter()
logger = get_logger(__name__)


async def check_database() -> dict[str, Any]:
    """Run SELECT 1 on a fresh session; failures are reported, not raised."""
    from modules.backend.core.database import get_db_session

    start = time.perf_counter()
    try:
        async for session in get_db_session():
            await session.execute(text("SELECT 1"))
            break
    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}

    return {"status": "healthy", "latency_ms": int((time.perf_counter() - start) * 1000)}


@router.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check() -> dict[str, Any]:
    """
    503 when the database is down or slower than
    observability.health_checks.ready_timeout_seconds.
    """
    from modules.backend.core.config import get_app_config

    timeout = get_app_config().observability.health_checks.ready_timeout_seconds
    try:
        database = await asyncio.wait_for(check_database(), timeout=timeout)
    except TimeoutError:
        database = {"status": "unhealthy", "error": f"timed out after {timeout}s"}

    checks = {"database": database}
    if database["status"] != "healthy":
        logger.warning("Not ready", extra={"checks": checks})
        raise HTTPException(status_code=503, detail={"status": "unhealthy", "checks": checks})

    return {"status": "healthy", "checks": checks}
