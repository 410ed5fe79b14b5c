"""Health check endpoints."""

import logging
from typing import Any, Dict

from databases import Database
from fastapi import APIRouter, Depends

from app.db.database import get_database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check() -> Dict[str, str]:
    """
    Liveness check.

    Returns:
        Health status
    """
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check(db: Database = Depends(get_database)) -> Dict[str, Any]:
    """Readiness check: the database answers a trivial query."""
    try:
        await db.fetch_val("SELECT 1")
        database_status = "ok"
    except Exception as e:
        logger.warning(f"Readiness check failed: {str(e)}")
        database_status = "unavailable"

    return {
        "status": "ready" if database_status == "ok" else "degraded",
        "dependencies": {"database": database_status},
    }
