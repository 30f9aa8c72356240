"""Reference tables and policy constants for the health-age engine.

All tables are immutable tuples of ``Bucket(upper_bound, value)`` rows in
ascending order.  A lookup returns the first row whose upper bound is at or
above the key; keys beyond the last bound fall into the last row.

``DEFAULT_POLICY`` is the built-in policy.  The bundled
``health_age_policy.yaml`` carries the same values and is what the service
loads at startup (see ``config_loader``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from src.health_age.base import Gender


class Bucket(NamedTuple):
    upper_bound: float
    value: float


@dataclass(frozen=True)
class ByGender:
    """A pair of values indexed by gender."""

    male: float
    female: float

    def for_gender(self, gender: Gender | str) -> float:
        return self.male if Gender(gender) is Gender.male else self.female


@dataclass(frozen=True)
class BucketsByGender:
    male: tuple[Bucket, ...]
    female: tuple[Bucket, ...]

    def for_gender(self, gender: Gender | str) -> tuple[Bucket, ...]:
        return self.male if Gender(gender) is Gender.male else self.female


@dataclass(frozen=True)
class Ramp:
    """Breakpoints of a linear score: ``good`` scores 1.0, ``bad`` scores 0.0."""

    good: float
    bad: float


@dataclass(frozen=True)
class RampByGender:
    male: Ramp
    female: Ramp

    def for_gender(self, gender: Gender | str) -> Ramp:
        return self.male if Gender(gender) is Gender.male else self.female


def lookup_bucket(rows: tuple[Bucket, ...], key: float) -> float:
    """Return the value of the first row whose upper bound is >= ``key``."""
    for row in rows:
        if key <= row.upper_bound:
            return row.value
    return rows[-1].value


# ---------------------------------------------------------------------------
# Built-in tables
# ---------------------------------------------------------------------------

# Expected fat-free mass (kg) by age bucket upper bound (years)
EXPECTED_FFM_BY_AGE = BucketsByGender(
    male=(
        Bucket(19, 54.0),
        Bucket(24, 56.0),
        Bucket(29, 57.0),
        Bucket(34, 56.0),
        Bucket(39, 55.0),
        Bucket(44, 54.0),
        Bucket(49, 52.0),
        Bucket(54, 51.0),
        Bucket(59, 50.0),
        Bucket(64, 48.0),
        Bucket(69, 47.0),
        Bucket(99, 45.0),
    ),
    female=(
        Bucket(19, 40.0),
        Bucket(24, 41.0),
        Bucket(29, 41.0),
        Bucket(34, 40.0),
        Bucket(39, 39.0),
        Bucket(44, 38.0),
        Bucket(49, 37.0),
        Bucket(54, 36.0),
        Bucket(59, 35.0),
        Bucket(64, 34.0),
        Bucket(69, 33.0),
        Bucket(99, 32.0),
    ),
)

# Minimum skeletal muscle mass (kg) counted as "standard" by height upper bound (cm)
SMM_STANDARD_MIN_BY_HEIGHT = BucketsByGender(
    male=(
        Bucket(165, 30.0),
        Bucket(175, 33.0),
        Bucket(185, 36.0),
        Bucket(999, 39.0),
    ),
    female=(
        Bucket(155, 19.0),
        Bucket(165, 21.0),
        Bucket(175, 23.0),
        Bucket(999, 25.0),
    ),
)

SMI_STANDARD_MIN = ByGender(male=8.5, female=6.0)
BODY_FAT_LOW = ByGender(male=15.0, female=25.0)
BODY_FAT_WORST = ByGender(male=35.0, female=40.0)
REFERENCE_HEIGHT_CM = ByGender(male=175.0, female=162.0)


# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HealthAgePolicy:
    """Every threshold and table the engine reads.

    Attributes:
        version:                 Policy version string.
        age_min / age_max:       Accepted chronological age range.
        ux_clamp_delta:          Half-width of the displayed-age window.
        body_fat_low:            Athletic body-fat threshold; fat penalty starts here.
        body_fat_worst:          Body fat at which the fat penalty saturates.
        body_fat_ramp:           Breakpoints of the continuous body-fat score.
        visceral_fat_low:        Athletic visceral threshold; penalty starts here.
        visceral_fat_worst:      Visceral level at which the penalty saturates.
        visceral_fat_ramp:       Breakpoints of the continuous visceral score.
        smi_standard_min:        SMI at/above which muscle is "standard".
        smi_ramp_half_width:     Window around the SMI standard for the muscle score.
        smm_standard_min_by_height: Height-bucketed SMM minimums.
        expected_ffm_by_age:     Age-bucketed expected fat-free mass.
        reference_height_cm:     Height the expected-FFM table is normalised to.
        height_factor_min/max:   Bounds of the height correction factor.
        ratio_min / ratio_max:   Bounds applied to the metabolic ratio.
        ratio_exponent:          Dampening exponent on the metabolic ratio.
        athletic_bonus_years:    Years subtracted at athletic_score == 1.
        max_penalty_years:       Saturation of each penalty.
        athletic_min_criteria:   Criteria needed for the athletic vote.
    """

    version: str = "1.0"
    age_min: float = 10
    age_max: float = 99
    ux_clamp_delta: float = 7
    body_fat_low: ByGender = BODY_FAT_LOW
    body_fat_worst: ByGender = BODY_FAT_WORST
    body_fat_ramp: RampByGender = RampByGender(
        male=Ramp(good=12.0, bad=20.0),
        female=Ramp(good=22.0, bad=30.0),
    )
    visceral_fat_low: float = 6.0
    visceral_fat_worst: float = 15.0
    visceral_fat_ramp: Ramp = Ramp(good=4.0, bad=10.0)
    smi_standard_min: ByGender = SMI_STANDARD_MIN
    smi_ramp_half_width: float = 0.5
    smm_standard_min_by_height: BucketsByGender = SMM_STANDARD_MIN_BY_HEIGHT
    expected_ffm_by_age: BucketsByGender = EXPECTED_FFM_BY_AGE
    reference_height_cm: ByGender = REFERENCE_HEIGHT_CM
    height_factor_min: float = 0.9
    height_factor_max: float = 1.1
    ratio_min: float = 0.7
    ratio_max: float = 1.5
    ratio_exponent: float = 0.8
    athletic_bonus_years: float = 10.0
    max_penalty_years: float = 6.0
    athletic_min_criteria: int = 2


DEFAULT_POLICY = HealthAgePolicy()
