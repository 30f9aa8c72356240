"""Health check endpoint — public, no auth required."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from src.dependencies import AppSettings
from src.health_age.config_loader import get_health_age_policy

router = APIRouter(tags=["system"])
logger = logging.getLogger("yanggaeng.health")


@router.get("/health")
async def health_check(settings: AppSettings) -> dict:
    """Liveness probe. Returns 200 if the API process is up.

    Also reports whether the health-age policy is loadable.
    """
    policy_version = None
    try:
        policy_version = get_health_age_policy().version
    except (FileNotFoundError, ValueError) as exc:
        logger.warning("Health check policy probe failed: %s", exc)

    return {
        "status": "healthy" if policy_version else "degraded",
        "version": settings.app_version,
        "environment": settings.environment,
        "policy_version": policy_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
