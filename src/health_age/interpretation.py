"""Label a health-age result for display and for the narrative generator.

The narrative generator is an external text model.  It receives a
``NarrativeContext``: the computed numbers, categorical labels and the
``debug`` evidence.  It may explain the result but never recompute or
contradict ``health_age``; no prose is produced here.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.health_age.base import Gender, HealthAgeInput, HealthAgeResult
from src.health_age.numeric import safe_number

# body fat % → (below = low, above = high)
_FAT_STATUS_BOUNDS = {
    Gender.male: (15.0, 25.0),
    Gender.female: (20.0, 32.0),
}

# skeletal muscle as % of weight → (below = insufficient, above = excellent)
_MUSCLE_STATUS_BOUNDS = {
    Gender.male: (38.0, 45.0),
    Gender.female: (30.0, 38.0),
}


def age_status(health_age: int, actual_age: float) -> str:
    """Five-step label for how health age compares to chronological age."""
    diff = health_age - actual_age
    if diff <= -5:
        return "very_good"
    if diff < 0:
        return "good"
    if diff == 0:
        return "normal"
    if diff <= 5:
        return "needs_care"
    return "intensive_care"


def overall_band(health_age: int, actual_age: float) -> str:
    """Coarse three-way band used for the fallback summary."""
    diff = health_age - actual_age
    if diff <= -3:
        return "healthy"
    if diff <= 3:
        return "average"
    return "needs_attention"


def fat_status(gender: Gender | str, body_fat_percent: float | None) -> str:
    bf = safe_number(body_fat_percent)
    if bf is None:
        return "unassessed"
    low, high = _FAT_STATUS_BOUNDS[Gender(gender)]
    if bf < low:
        return "low"
    if bf > high:
        return "high"
    return "adequate"


def muscle_status(
    gender: Gender | str,
    smm_kg: float | None,
    weight_kg: float | None,
) -> str:
    smm = safe_number(smm_kg)
    weight = safe_number(weight_kg)
    if smm is None or not weight:
        return "unassessed"
    ratio = smm / weight * 100
    low, high = _MUSCLE_STATUS_BOUNDS[Gender(gender)]
    if ratio > high:
        return "excellent"
    if ratio < low:
        return "insufficient"
    return "adequate"


@dataclass(frozen=True)
class NarrativeContext:
    """Read-only evidence handed to the narrative generator.

    Attributes:
        actual_age:    Chronological age.
        health_age:    The authoritative computed age.
        gender:        ``"male"`` or ``"female"``.
        is_athletic:   Athletic classification.
        age_status:    Label from ``age_status``.
        overall_band:  Label from ``overall_band``.
        fat_status:    Label from ``fat_status``.
        muscle_status: Label from ``muscle_status``.
        debug:         ``HealthAgeDebug.to_dict()`` of the result.
    """

    actual_age: float
    health_age: int
    gender: str
    is_athletic: bool
    age_status: str
    overall_band: str
    fat_status: str
    muscle_status: str
    debug: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "actual_age": self.actual_age,
            "health_age": self.health_age,
            "gender": self.gender,
            "is_athletic": self.is_athletic,
            "age_status": self.age_status,
            "overall_band": self.overall_band,
            "fat_status": self.fat_status,
            "muscle_status": self.muscle_status,
            "debug": self.debug,
        }


def build_narrative_context(inp: HealthAgeInput, result: HealthAgeResult) -> NarrativeContext:
    gender = Gender(inp.gender)
    return NarrativeContext(
        actual_age=inp.actual_age,
        health_age=result.health_age,
        gender=gender.value,
        is_athletic=result.is_athletic,
        age_status=age_status(result.health_age, inp.actual_age),
        overall_band=overall_band(result.health_age, inp.actual_age),
        fat_status=fat_status(gender, inp.body_fat_percent),
        muscle_status=muscle_status(gender, inp.smm_kg, inp.weight_kg),
        debug=result.debug.to_dict(),
    )
