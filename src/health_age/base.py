"""Canonical value objects for the health-age engine.

``HealthAgeInput`` is one body-composition snapshot for one person.
``HealthAgeResult`` is the immutable outcome of one computation.  Both are
created fresh per call and carry no identity beyond it.

Only ``HealthAgeResult.health_age`` is authoritative.  The ``debug`` record
exists so a downstream narrator can explain the number; it must never be
used to recompute it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Gender(str, Enum):
    male = "male"
    female = "female"


class HealthAgeValidationError(ValueError):
    """Raised when a required measurement is missing or out of range.

    Attributes:
        field: Name of the offending ``HealthAgeInput`` field.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


@dataclass(frozen=True)
class HealthAgeInput:
    """One measurement snapshot.

    Attributes:
        actual_age:            Chronological age in years (10–99).
        gender:                ``Gender`` or its string value.
        height_cm:             Standing height.
        weight_kg:             Body weight, used for fallback lean mass.
        body_fat_percent:      Percent body fat (required).
        visceral_fat_level:    Scanner-specific visceral fat level (required).
        ffm_kg:                Fat-free mass; preferred lean-mass signal.
        smm_kg:                Skeletal muscle mass.
        smi:                   Skeletal muscle index (kg/m²).
        muscle_above_standard: Scanner's own "at/above standard" verdict.
    """

    actual_age: float
    gender: Gender | str
    body_fat_percent: float
    visceral_fat_level: float
    height_cm: float | None = None
    weight_kg: float | None = None
    ffm_kg: float | None = None
    smm_kg: float | None = None
    smi: float | None = None
    muscle_above_standard: bool | None = None


@dataclass(frozen=True)
class ComponentScores:
    bf_score: float
    vf_score: float
    muscle_score: float

    def to_dict(self) -> dict:
        return {
            "bf_score": self.bf_score,
            "vf_score": self.vf_score,
            "muscle_score": self.muscle_score,
        }


@dataclass(frozen=True)
class Adjustments:
    """Year adjustments actually applied (bonus subtracted, penalties added)."""

    athletic_bonus: float
    fat_penalty: float
    visceral_penalty: float

    def to_dict(self) -> dict:
        return {
            "athletic_bonus": self.athletic_bonus,
            "fat_penalty": self.fat_penalty,
            "visceral_penalty": self.visceral_penalty,
        }


@dataclass(frozen=True)
class ClampRange:
    min: float
    max: float

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class HealthAgeDebug:
    """Diagnostic evidence behind a ``HealthAgeResult``.

    Attributes:
        athletic_score:    Continuous 0–1 counterpart of ``is_athletic``.
        components:        Per-factor 0–1 scores.
        metabolic_ratio:   Lean mass / expected lean mass, before clamping.
                           1.0 when lean mass was unavailable.
        expected_ffm_kg:   Height-adjusted expected lean mass, or None when
                           lean mass was unavailable.
        metabolic_age_raw: Age implied by the metabolic ratio alone.
        health_age_raw:    Age after adjustments, before the UX clamp.
        adjustments:       Bonus/penalty years applied.
        clamped_range:     The ±window around chronological age.
    """

    athletic_score: float
    components: ComponentScores
    metabolic_ratio: float
    expected_ffm_kg: float | None
    metabolic_age_raw: float
    health_age_raw: float
    adjustments: Adjustments
    clamped_range: ClampRange

    def to_dict(self) -> dict:
        return {
            "athletic_score": self.athletic_score,
            "components": self.components.to_dict(),
            "metabolic_ratio": self.metabolic_ratio,
            "expected_ffm_kg": self.expected_ffm_kg,
            "metabolic_age_raw": self.metabolic_age_raw,
            "health_age_raw": self.health_age_raw,
            "adjustments": self.adjustments.to_dict(),
            "clamped_range": self.clamped_range.to_dict(),
        }


@dataclass(frozen=True)
class HealthAgeResult:
    health_age: int
    is_athletic: bool
    debug: HealthAgeDebug

    def to_dict(self) -> dict:
        return {
            "health_age": self.health_age,
            "is_athletic": self.is_athletic,
            "debug": self.debug.to_dict(),
        }
