"""Pydantic request/response models for the health-age endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, StrictFloat

from src.health_age.base import Gender, HealthAgeInput
from src.models.base import YanggaengBase, utc_now


class HealthAgeRequest(YanggaengBase):
    """One measurement snapshot.

    Required fields are declared optional so the engine, not the schema,
    reports which required measurement is missing.
    """

    actual_age: StrictFloat | None = None
    gender: str | None = None
    body_fat_percent: StrictFloat | None = None
    visceral_fat_level: StrictFloat | None = None
    height_cm: StrictFloat | None = Field(default=None, gt=0)
    weight_kg: StrictFloat | None = Field(default=None, gt=0)
    ffm_kg: StrictFloat | None = Field(default=None, gt=0)
    smm_kg: StrictFloat | None = Field(default=None, gt=0)
    smi: StrictFloat | None = Field(default=None, gt=0)
    muscle_above_standard: bool | None = None

    def to_input(self) -> HealthAgeInput:
        return HealthAgeInput(
            actual_age=self.actual_age,  # type: ignore[arg-type]
            gender=self.gender,  # type: ignore[arg-type]
            body_fat_percent=self.body_fat_percent,  # type: ignore[arg-type]
            visceral_fat_level=self.visceral_fat_level,  # type: ignore[arg-type]
            height_cm=self.height_cm,
            weight_kg=self.weight_kg,
            ffm_kg=self.ffm_kg,
            smm_kg=self.smm_kg,
            smi=self.smi,
            muscle_above_standard=self.muscle_above_standard,
        )


class InBodyHealthAgeRequest(YanggaengBase):
    """An extracted InBody record plus the profile fields the scan lacks."""

    actual_age: StrictFloat | None = None
    gender: str | None = None
    record: dict[str, Any] = Field(default_factory=dict)
    muscle_above_standard: bool | None = None


class ComponentScoresRead(YanggaengBase):
    bf_score: float
    vf_score: float
    muscle_score: float


class AdjustmentsRead(YanggaengBase):
    athletic_bonus: float
    fat_penalty: float
    visceral_penalty: float


class ClampRangeRead(YanggaengBase):
    min: float
    max: float


class HealthAgeDebugRead(YanggaengBase):
    athletic_score: float
    components: ComponentScoresRead
    metabolic_ratio: float
    expected_ffm_kg: float | None = None
    metabolic_age_raw: float
    health_age_raw: float
    adjustments: AdjustmentsRead
    clamped_range: ClampRangeRead


class HealthAgeResponse(YanggaengBase):
    health_age: int
    is_athletic: bool
    age_status: str
    policy_version: str
    debug: HealthAgeDebugRead
    computed_at: datetime = Field(default_factory=utc_now)


class InBodyHealthAgeResponse(HealthAgeResponse):
    gender: Gender
    narrative_context: dict[str, Any] = Field(default_factory=dict)
