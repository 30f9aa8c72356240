"""Shared FastAPI dependencies injected into route handlers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from src.config import Settings, get_settings
from src.health_age.config_loader import get_health_age_policy
from src.health_age.engine import HealthAgeCalculator


def get_calculator() -> HealthAgeCalculator:
    """Bind a calculator to the currently loaded policy.

    Resolved per request so a policy hot-reload takes effect immediately.
    """
    return HealthAgeCalculator(get_health_age_policy())


# Annotated shortcuts for route signatures
Calculator = Annotated[HealthAgeCalculator, Depends(get_calculator)]
AppSettings = Annotated[Settings, Depends(get_settings)]
