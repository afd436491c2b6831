"""Simple health and readiness endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, status
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from webhook_monitor.core.config import get_settings
from webhook_monitor.db.session import engine
from webhook_monitor.utils.redis_client import create_redis_client

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])

SERVICE_NAME = "webhook-monitor-api"


@router.get("/live", summary="Liveness probe")
async def live() -> dict[str, str]:
    """Indicates API process is running."""
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/ready", summary="Readiness probe")
async def ready() -> dict[str, Any]:
    """Check readiness of the database and the purge scheduler's broker.

    Only the database decides readiness; an unreachable broker is reported
    but does not take the API out of rotation.
    """
    checks: dict[str, Any] = {
        "status": "ok",
        "service": SERVICE_NAME,
        "checks": {},
    }
    all_healthy = True

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        checks["checks"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful",
        }
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}", exc_info=True)
        checks["checks"]["database"] = {
            "status": "unhealthy",
            "message": f"Database connection failed: {str(e)}",
        }
        all_healthy = False

    settings = get_settings()
    broker_url = settings.celery_broker_url or settings.redis_url
    try:
        broker = create_redis_client(broker_url, decode_responses=True, socket_connect_timeout=2)
        broker.ping()
        broker.close()
        checks["checks"]["celery_broker"] = {
            "status": "healthy",
            "message": "Celery broker connection successful",
        }
    except (RedisError, ValueError) as e:
        logger.warning(f"Celery broker health check failed: {e}")
        checks["checks"]["celery_broker"] = {
            "status": "unhealthy",
            "message": f"Celery broker connection failed: {str(e)}",
        }

    if not all_healthy:
        checks["status"] = "unhealthy"
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=checks,
        )

    return checks
