"""Yanggaeng Health-Age engine.

Turns one body-composition snapshot (InBody-style scan) into an integer
"health age", an athletic classification and a diagnostic record that a
narrative generator can explain.

Core modules:
    numeric         — clamp, linear ramps, display rounding
    tables          — reference tables and the HealthAgePolicy
    scoring         — muscle fallback chain, continuous scores, athletic vote
    engine          — compute_health_age orchestrator
    config_loader   — Load/validate/hot-reload health_age_policy.yaml
    inbody          — InBody record → HealthAgeInput
    interpretation  — Status labels and narrative context
"""

from src.health_age.base import (
    Gender,
    HealthAgeDebug,
    HealthAgeInput,
    HealthAgeResult,
    HealthAgeValidationError,
)
from src.health_age.engine import HealthAgeCalculator, compute_health_age
from src.health_age.tables import DEFAULT_POLICY, HealthAgePolicy

__all__ = [
    "Gender",
    "HealthAgeInput",
    "HealthAgeResult",
    "HealthAgeDebug",
    "HealthAgeValidationError",
    "HealthAgePolicy",
    "DEFAULT_POLICY",
    "HealthAgeCalculator",
    "compute_health_age",
]
