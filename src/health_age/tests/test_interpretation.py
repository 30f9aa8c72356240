"""Tests for result labels and the narrative context."""

from __future__ import annotations

import pytest

from src.health_age.base import HealthAgeInput
from src.health_age.engine import compute_health_age
from src.health_age.interpretation import (
    age_status,
    build_narrative_context,
    fat_status,
    muscle_status,
    overall_band,
)


class TestAgeStatus:
    @pytest.mark.parametrize(
        ("health_age", "expected"),
        [(33, "very_good"), (35, "very_good"), (36, "good"), (39, "good"),
         (40, "normal"), (41, "needs_care"), (45, "needs_care"), (46, "intensive_care")],
    )
    def test_bands(self, health_age: int, expected: str) -> None:
        assert age_status(health_age, 40) == expected

    def test_overall_band(self) -> None:
        assert overall_band(37, 40) == "healthy"
        assert overall_band(38, 40) == "average"
        assert overall_band(43, 40) == "average"
        assert overall_band(44, 40) == "needs_attention"


class TestFatStatus:
    def test_male_bounds(self) -> None:
        assert fat_status("male", 14.9) == "low"
        assert fat_status("male", 15.0) == "adequate"
        assert fat_status("male", 25.0) == "adequate"
        assert fat_status("male", 25.1) == "high"

    def test_female_bounds(self) -> None:
        assert fat_status("female", 19.0) == "low"
        assert fat_status("female", 32.5) == "high"

    def test_missing_is_unassessed(self) -> None:
        assert fat_status("male", None) == "unassessed"


class TestMuscleStatus:
    def test_male_ratio(self) -> None:
        assert muscle_status("male", 36.0, 75.0) == "excellent"      # 48%
        assert muscle_status("male", 30.0, 75.0) == "adequate"       # 40%
        assert muscle_status("male", 27.0, 75.0) == "insufficient"   # 36%

    def test_female_ratio(self) -> None:
        assert muscle_status("female", 27.9, 68.5) == "excellent"    # ~40.7%
        assert muscle_status("female", 18.0, 60.0) == "adequate"     # 30%
        assert muscle_status("female", 17.0, 60.0) == "insufficient"

    def test_missing_is_unassessed(self) -> None:
        assert muscle_status("male", None, 75.0) == "unassessed"
        assert muscle_status("male", 30.0, 0.0) == "unassessed"


class TestNarrativeContext:
    def test_context_carries_result_and_labels(self) -> None:
        inp = HealthAgeInput(
            actual_age=40, gender="male", height_cm=175.0, weight_kg=80.0,
            body_fat_percent=20.0, visceral_fat_level=8, smm_kg=34.0,
        )
        result = compute_health_age(inp)
        ctx = build_narrative_context(inp, result)
        assert ctx.health_age == result.health_age
        assert ctx.gender == "male"
        assert ctx.age_status == age_status(result.health_age, 40)
        assert ctx.fat_status == "adequate"
        assert ctx.muscle_status == "adequate"
        assert ctx.debug == result.debug.to_dict()

    def test_to_dict_has_no_prose(self) -> None:
        inp = HealthAgeInput(
            actual_age=40, gender="female", body_fat_percent=30.0, visceral_fat_level=5,
        )
        data = build_narrative_context(inp, compute_health_age(inp)).to_dict()
        assert data["muscle_status"] == "unassessed"
        assert data["debug"]["expected_ffm_kg"] is None
        assert set(data) == {
            "actual_age", "health_age", "gender", "is_athletic", "age_status",
            "overall_band", "fat_status", "muscle_status", "debug",
        }
