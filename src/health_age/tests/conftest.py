"""Shared fixtures for health-age engine tests."""

from __future__ import annotations

import pytest
import yaml

from src.health_age.base import HealthAgeInput
from src.health_age.config_loader import _POLICY_PATH, load_health_age_policy
from src.health_age.tables import HealthAgePolicy


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def health_age_policy() -> HealthAgePolicy:
    """Load the real bundled policy for tests."""
    return load_health_age_policy()


@pytest.fixture
def raw_policy() -> dict:
    """A fresh, mutable parse of the bundled policy YAML."""
    return yaml.safe_load(_POLICY_PATH.read_text(encoding="utf-8"))


# ---------------------------------------------------------------------------
# Measurement fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def no_lean_mass_input() -> HealthAgeInput:
    """Required fields only; no weight or fat-free mass."""
    return HealthAgeInput(
        actual_age=40,
        gender="male",
        body_fat_percent=20.0,
        visceral_fat_level=8,
    )


@pytest.fixture
def typical_male_input() -> HealthAgeInput:
    """A realistic 40-year-old man, slightly over-fat, no muscle verdict."""
    return HealthAgeInput(
        actual_age=40,
        gender="male",
        height_cm=175.0,
        weight_kg=80.0,
        body_fat_percent=20.0,
        visceral_fat_level=8,
    )


@pytest.fixture
def athlete_input() -> HealthAgeInput:
    """A lean, muscular 30-year-old man."""
    return HealthAgeInput(
        actual_age=30,
        gender="male",
        height_cm=175.0,
        ffm_kg=80.0,
        body_fat_percent=8.0,
        visceral_fat_level=2,
        muscle_above_standard=True,
    )


@pytest.fixture
def high_risk_input() -> HealthAgeInput:
    """A 60-year-old man with very high body and visceral fat."""
    return HealthAgeInput(
        actual_age=60,
        gender="male",
        height_cm=175.0,
        weight_kg=70.0,
        body_fat_percent=40.0,
        visceral_fat_level=20,
    )


@pytest.fixture
def inbody_record() -> dict:
    """An InBody record as extracted from a scan report."""
    return {
        "weight": "68.5",
        "skeletal_muscle": 27.9,
        "body_fat_percent": 24.1,
        "body_fat": 16.5,
        "bmr": 1490,
        "visceral_fat": 6,
        "height": 163.0,
        "date": "2026-03-02",
    }
