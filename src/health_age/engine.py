"""Health-age orchestrator.

Computes an integer "health age" from one body-composition snapshot:

    metabolic_age_raw = actual_age / clamp(ffm / expected_ffm, 0.7, 1.5) ** 0.8
    health_age_raw    = metabolic_age_raw
                        - 10 * athletic_score
                        + fat_penalty + visceral_penalty

then clamps to ``actual_age ± 7``, rounds once, and finally caps the result
at chronological age for athletic users.

The computation is deterministic: no clock, no randomness, no I/O.  Only
``HealthAgeResult.health_age`` may be displayed or stored as the number.
"""

from __future__ import annotations

import logging

from src.health_age.base import (
    Adjustments,
    ClampRange,
    ComponentScores,
    Gender,
    HealthAgeDebug,
    HealthAgeInput,
    HealthAgeResult,
    HealthAgeValidationError,
)
from src.health_age.numeric import clamp, round_for_display, safe_number
from src.health_age.scoring import (
    compute_continuous_scores,
    compute_is_athletic,
    expected_ffm_with_height,
    fat_penalty_years,
    visceral_penalty_years,
)
from src.health_age.tables import DEFAULT_POLICY, HealthAgePolicy

logger = logging.getLogger("yanggaeng.health_age.engine")


def _validate(inp: HealthAgeInput, policy: HealthAgePolicy) -> None:
    if safe_number(inp.actual_age) is None:
        raise HealthAgeValidationError("actual_age", "actual_age is required")
    if not (policy.age_min <= inp.actual_age <= policy.age_max):
        raise HealthAgeValidationError(
            "actual_age",
            f"actual_age must be between {policy.age_min:g} and {policy.age_max:g}",
        )
    if inp.gender not in (Gender.male, Gender.female):
        raise HealthAgeValidationError("gender", "gender is required")
    if safe_number(inp.body_fat_percent) is None:
        raise HealthAgeValidationError("body_fat_percent", "body_fat_percent is required")
    if safe_number(inp.visceral_fat_level) is None:
        raise HealthAgeValidationError("visceral_fat_level", "visceral_fat_level is required")


def _lean_mass(inp: HealthAgeInput) -> float | None:
    """Measured fat-free mass, else weight-derived approximation, else None."""
    ffm = safe_number(inp.ffm_kg)
    if ffm is not None:
        return ffm
    weight = safe_number(inp.weight_kg)
    if weight is not None:
        return weight * (1 - inp.body_fat_percent / 100)
    return None


def compute_health_age(
    inp: HealthAgeInput,
    policy: HealthAgePolicy = DEFAULT_POLICY,
) -> HealthAgeResult:
    """Compute the health age for one measurement snapshot.

    Args:
        inp:    The measurement snapshot.
        policy: Thresholds and tables.  Defaults to the built-in policy.

    Returns:
        HealthAgeResult with an integer ``health_age`` inside
        ``[actual_age - delta, actual_age + delta]``.

    Raises:
        HealthAgeValidationError: If ``actual_age``, ``gender``,
            ``body_fat_percent`` or ``visceral_fat_level`` is missing or
            invalid.  No partial result is produced.
    """
    _validate(inp, policy)

    actual_age = inp.actual_age
    gender = Gender(inp.gender)
    clamped_range = ClampRange(
        min=actual_age - policy.ux_clamp_delta,
        max=actual_age + policy.ux_clamp_delta,
    )

    is_athletic = compute_is_athletic(inp, policy)
    scores = compute_continuous_scores(inp, policy)
    components = ComponentScores(
        bf_score=scores.bf_score,
        vf_score=scores.vf_score,
        muscle_score=scores.muscle_score,
    )

    ffm = _lean_mass(inp)
    if ffm is None or ffm <= 0:
        # Not enough data: report chronological age, unadjusted
        return HealthAgeResult(
            health_age=round_for_display(
                clamp(actual_age, clamped_range.min, clamped_range.max)
            ),
            is_athletic=is_athletic,
            debug=HealthAgeDebug(
                athletic_score=scores.athletic_score,
                components=components,
                metabolic_ratio=1.0,
                expected_ffm_kg=None,
                metabolic_age_raw=actual_age,
                health_age_raw=actual_age,
                adjustments=Adjustments(
                    athletic_bonus=0.0, fat_penalty=0.0, visceral_penalty=0.0
                ),
                clamped_range=clamped_range,
            ),
        )

    expected_ffm_kg = expected_ffm_with_height(gender, actual_age, inp.height_cm, policy)
    metabolic_ratio = ffm / expected_ffm_kg
    ratio_clamped = clamp(metabolic_ratio, policy.ratio_min, policy.ratio_max)
    metabolic_age_raw = actual_age / ratio_clamped ** policy.ratio_exponent

    adjustments = Adjustments(
        athletic_bonus=policy.athletic_bonus_years * scores.athletic_score,
        fat_penalty=fat_penalty_years(gender, inp.body_fat_percent, policy),
        visceral_penalty=visceral_penalty_years(inp.visceral_fat_level, policy),
    )
    health_age_raw = (
        metabolic_age_raw
        - adjustments.athletic_bonus
        + adjustments.fat_penalty
        + adjustments.visceral_penalty
    )

    # Order matters: clamp, then round once, then the athletic cap
    clamped = clamp(health_age_raw, clamped_range.min, clamped_range.max)
    rounded = round_for_display(clamped)
    health_age = min(rounded, round_for_display(actual_age)) if is_athletic else rounded

    return HealthAgeResult(
        health_age=health_age,
        is_athletic=is_athletic,
        debug=HealthAgeDebug(
            athletic_score=scores.athletic_score,
            components=components,
            metabolic_ratio=metabolic_ratio,
            expected_ffm_kg=expected_ffm_kg,
            metabolic_age_raw=metabolic_age_raw,
            health_age_raw=health_age_raw,
            adjustments=adjustments,
            clamped_range=clamped_range,
        ),
    )


class HealthAgeCalculator:
    """Compute health ages against a configured policy.

    Usage::

        calc = HealthAgeCalculator()
        result = calc.compute(HealthAgeInput(
            actual_age=40, gender="male",
            body_fat_percent=18.0, visceral_fat_level=7,
            weight_kg=78.0, height_cm=176.0,
        ))
        print(result.health_age, result.is_athletic)
    """

    def __init__(self, policy: HealthAgePolicy | None = None) -> None:
        if policy is None:
            from src.health_age.config_loader import get_health_age_policy

            policy = get_health_age_policy()
        self._policy = policy

    @property
    def policy(self) -> HealthAgePolicy:
        return self._policy

    def compute(self, inp: HealthAgeInput) -> HealthAgeResult:
        result = compute_health_age(inp, self._policy)
        logger.debug(
            "Health age %d (actual %s, athletic=%s, policy v%s) — "
            "athletic_score=%.3f expected_ffm=%s raw=%.2f",
            result.health_age, inp.actual_age, result.is_athletic,
            self._policy.version, result.debug.athletic_score,
            result.debug.expected_ffm_kg, result.debug.health_age_raw,
        )
        return result
