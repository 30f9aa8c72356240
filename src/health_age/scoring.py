"""Derived metrics feeding the health-age orchestrator.

Every function here is pure: same input and policy, same output.

Lean-mass signals are consulted in a fixed priority order and never
blended within one sub-computation:

    1. explicit ``muscle_above_standard`` verdict
    2. skeletal muscle index (``smi``)
    3. height + skeletal muscle mass table
    4. nothing usable → not above standard
"""

from __future__ import annotations

from dataclasses import dataclass

from src.health_age.base import Gender, HealthAgeInput
from src.health_age.numeric import clamp, ramp_down, ramp_up, safe_number
from src.health_age.tables import DEFAULT_POLICY, HealthAgePolicy, lookup_bucket


@dataclass(frozen=True)
class ContinuousScores:
    """Per-factor 0–1 scores, higher is healthier."""

    bf_score: float
    vf_score: float
    muscle_score: float
    athletic_score: float


def compute_muscle_above_standard(
    inp: HealthAgeInput,
    policy: HealthAgePolicy = DEFAULT_POLICY,
) -> bool:
    """Decide whether muscle mass is at/above the standard for the gender.

    First applicable signal wins.  With no usable signal the answer is
    False, so protective status is never granted by default.
    """
    if isinstance(inp.muscle_above_standard, bool):
        return inp.muscle_above_standard

    smi = safe_number(inp.smi)
    if smi is not None:
        return smi >= policy.smi_standard_min.for_gender(inp.gender)

    height = safe_number(inp.height_cm)
    smm = safe_number(inp.smm_kg)
    if height is not None and smm is not None:
        rows = policy.smm_standard_min_by_height.for_gender(inp.gender)
        return smm >= lookup_bucket(rows, height)

    return False


def compute_continuous_scores(
    inp: HealthAgeInput,
    policy: HealthAgePolicy = DEFAULT_POLICY,
) -> ContinuousScores:
    """Score body fat, visceral fat and muscle on smooth 0–1 ramps.

    ``athletic_score`` is the unweighted mean of the three.
    """
    bf_ramp = policy.body_fat_ramp.for_gender(inp.gender)
    bf_score = ramp_down(inp.body_fat_percent, bf_ramp.good, bf_ramp.bad)

    vf_ramp = policy.visceral_fat_ramp
    vf_score = ramp_down(inp.visceral_fat_level, vf_ramp.good, vf_ramp.bad)

    smi = safe_number(inp.smi)
    if isinstance(inp.muscle_above_standard, bool):
        muscle_score = 1.0 if inp.muscle_above_standard else 0.0
    elif smi is not None:
        std = policy.smi_standard_min.for_gender(inp.gender)
        half = policy.smi_ramp_half_width
        muscle_score = ramp_up(smi, std - half, std + half)
    else:
        muscle_score = 1.0 if compute_muscle_above_standard(inp, policy) else 0.0

    athletic_score = clamp((bf_score + vf_score + muscle_score) / 3, 0.0, 1.0)
    return ContinuousScores(
        bf_score=bf_score,
        vf_score=vf_score,
        muscle_score=muscle_score,
        athletic_score=athletic_score,
    )


def compute_is_athletic(
    inp: HealthAgeInput,
    policy: HealthAgePolicy = DEFAULT_POLICY,
) -> bool:
    """Majority vote: low body fat, low visceral fat, muscle above standard.

    Deliberately a hard boolean.  It drives the all-or-nothing protective
    override in the orchestrator and is never interpolated.
    """
    criteria = [
        inp.body_fat_percent <= policy.body_fat_low.for_gender(inp.gender),
        inp.visceral_fat_level <= policy.visceral_fat_low,
        compute_muscle_above_standard(inp, policy),
    ]
    return sum(criteria) >= policy.athletic_min_criteria


def pick_expected_ffm_base(
    gender: Gender | str,
    age: float,
    policy: HealthAgePolicy = DEFAULT_POLICY,
) -> float:
    return lookup_bucket(policy.expected_ffm_by_age.for_gender(gender), age)


def expected_ffm_with_height(
    gender: Gender | str,
    age: float,
    height_cm: float | None = None,
    policy: HealthAgePolicy = DEFAULT_POLICY,
) -> float:
    """Expected fat-free mass for age and gender, corrected for stature.

    The height factor is ``height / reference height`` bounded to
    ``[height_factor_min, height_factor_max]``.  Without a usable height the
    table value is returned as-is.
    """
    base = pick_expected_ffm_base(gender, age, policy)
    height = safe_number(height_cm)
    if height is None:
        return base
    factor = clamp(
        height / policy.reference_height_cm.for_gender(gender),
        policy.height_factor_min,
        policy.height_factor_max,
    )
    return base * factor


def fat_penalty_years(
    gender: Gender | str,
    body_fat_percent: float,
    policy: HealthAgePolicy = DEFAULT_POLICY,
) -> float:
    """Years added for excess body fat, 0 up to the "low" threshold."""
    start = policy.body_fat_low.for_gender(gender)
    worst = policy.body_fat_worst.for_gender(gender)
    if body_fat_percent <= start:
        return 0.0
    cap = policy.max_penalty_years
    return clamp((body_fat_percent - start) / (worst - start) * cap, 0.0, cap)


def visceral_penalty_years(
    visceral_fat_level: float,
    policy: HealthAgePolicy = DEFAULT_POLICY,
) -> float:
    """Years added for visceral fat above the "low" level."""
    start = policy.visceral_fat_low
    worst = policy.visceral_fat_worst
    if visceral_fat_level <= start:
        return 0.0
    cap = policy.max_penalty_years
    return clamp((visceral_fat_level - start) / (worst - start) * cap, 0.0, cap)
