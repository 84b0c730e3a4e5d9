"""Liveness endpoint; public, outside the versioned API."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from src.cycle.config_loader import get_cycle_config
from src.dependencies import AppSettings
from src.services.database import fetchval

router = APIRouter(tags=["system"])
logger = logging.getLogger("cycletrack.health")


@router.get("/health")
async def health_check(settings: AppSettings) -> dict:
    """Returns 200 while the process is up; ``status`` reflects the DB probe."""
    db_ok = False
    try:
        db_ok = await fetchval("SELECT 1") == 1
    except Exception as exc:
        logger.warning("Health check DB probe failed: %s", exc)

    return {
        "status": "healthy" if db_ok else "degraded",
        "version": settings.app_version,
        "environment": settings.environment,
        "database": "connected" if db_ok else "unreachable",
        "engine_config": get_cycle_config().version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
