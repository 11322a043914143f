"""
Health Check Endpoints

- /health/live  - Basic liveness (app is running)
- /health/ready - Readiness check (store reachable)
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from typing import Dict, Any
import time

from eduverse.core.config import settings
from eduverse.core.database import ping_db, db_watchdog
from eduverse.core.logging_config import logger


router = APIRouter(prefix="/health", tags=["Health Checks"])


async def check_database() -> Dict[str, Any]:
    """Check database connectivity"""
    start = time.time()
    try:
        await ping_db()
        return {
            "status": "healthy",
            "latency_ms": round((time.time() - start) * 1000, 2),
            "backend": settings.database_backend,
        }
    except Exception as e:
        logger.error(f"[HealthCheck] Database check failed: {e}")
        return {
            "status": "unhealthy",
            "latency_ms": round((time.time() - start) * 1000, 2),
            "backend": settings.database_backend,
            "error": str(e),
        }


@router.get("/live")
async def liveness() -> Dict[str, Any]:
    return {"status": "alive"}


@router.get("/ready")
async def readiness() -> JSONResponse:
    database = await check_database()
    ready = database["status"] == "healthy"
    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "status": "ready" if ready else "not_ready",
            "checks": {"database": database},
            "watchdog": {
                "running": db_watchdog.running,
                "healthy": db_watchdog.healthy,
                "consecutive_failures": db_watchdog.consecutive_failures,
            },
        },
    )
