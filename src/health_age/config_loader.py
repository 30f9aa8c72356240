"""Load, validate, and hot-reload the health-age policy.

The policy lives in ``health_age_policy.yaml`` alongside this module.  It is
loaded once on first use and cached.  Call ``reload_health_age_policy()`` to
re-read from disk after an admin update, no restart required.

Policies are frozen, so a reload swaps the singleton reference and never
changes a policy a caller already holds.

Usage::

    from src.health_age.config_loader import get_health_age_policy

    policy = get_health_age_policy()
    policy.body_fat_low.for_gender("male")   # 15.0
    policy.ux_clamp_delta                    # 7.0
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any

import yaml

from src.health_age.tables import (
    Bucket,
    BucketsByGender,
    ByGender,
    HealthAgePolicy,
    Ramp,
    RampByGender,
)

logger = logging.getLogger("yanggaeng.health_age.config")

# Path to the YAML file sitting next to this module
_POLICY_PATH = Path(__file__).parent / "health_age_policy.yaml"


class ConfigValidationError(ValueError):
    """Raised when health_age_policy.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Health-age policy not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigValidationError(f"{path} must contain a mapping at the top level")
    return raw


def _validate_and_build(raw: dict) -> HealthAgePolicy:
    """Validate the raw YAML dict and construct a HealthAgePolicy.

    All problems are collected and reported together.

    Raises:
        ConfigValidationError: If required fields are missing or invalid.
    """
    errors: list[str] = []

    def _section(d: Any, key: str, where: str) -> dict:
        value = d.get(key) if isinstance(d, dict) else None
        if not isinstance(value, dict):
            errors.append(f"'{where}{key}' section is missing or not a mapping")
            return {}
        return value

    def _number(d: dict, key: str, where: str, positive: bool = False) -> float:
        if key not in d:
            errors.append(f"Missing required key '{key}' in section '{where}'")
            return 0.0
        value = d[key]
        if isinstance(value, bool):
            errors.append(f"{where}.{key} must be a number, got {value!r}")
            return 0.0
        try:
            number = float(value)
        except (TypeError, ValueError):
            errors.append(f"{where}.{key} must be a number, got {value!r}")
            return 0.0
        if positive and number <= 0:
            errors.append(f"{where}.{key} = {number} must be positive")
        return number

    def _by_gender(d: dict, key: str, where: str) -> ByGender:
        section = _section(d, key, f"{where}.")
        path = f"{where}.{key}"
        return ByGender(
            male=_number(section, "male", path, positive=True),
            female=_number(section, "female", path, positive=True),
        )

    def _ramp(d: Any, where: str) -> Ramp:
        if not isinstance(d, dict):
            errors.append(f"{where} must be a mapping with 'good' and 'bad'")
            return Ramp(good=0.0, bad=1.0)
        ramp = Ramp(good=_number(d, "good", where), bad=_number(d, "bad", where))
        if ramp.good >= ramp.bad:
            errors.append(f"{where}: good ({ramp.good}) must be below bad ({ramp.bad})")
        return ramp

    def _buckets(rows: Any, where: str) -> tuple[Bucket, ...]:
        if not isinstance(rows, list) or not rows:
            errors.append(f"{where} must be a non-empty list of [upper_bound, value]")
            return (Bucket(0.0, 0.0),)
        out: list[Bucket] = []
        for i, row in enumerate(rows):
            if not isinstance(row, (list, tuple)) or len(row) != 2:
                errors.append(f"{where}[{i}] must be a [upper_bound, value] pair, got {row!r}")
                continue
            try:
                bucket = Bucket(float(row[0]), float(row[1]))
            except (TypeError, ValueError):
                errors.append(f"{where}[{i}] must be numeric, got {row!r}")
                continue
            if bucket.value <= 0:
                errors.append(f"{where}[{i}] value {bucket.value} must be positive")
            if out and bucket.upper_bound <= out[-1].upper_bound:
                errors.append(
                    f"{where}[{i}] upper bound {bucket.upper_bound} is not above "
                    f"{out[-1].upper_bound}; buckets must be strictly ascending"
                )
            out.append(bucket)
        return tuple(out) or (Bucket(0.0, 0.0),)

    def _buckets_by_gender(key: str) -> BucketsByGender:
        section = _section(raw, key, "")
        return BucketsByGender(
            male=_buckets(section.get("male"), f"{key}.male"),
            female=_buckets(section.get("female"), f"{key}.female"),
        )

    version = str(raw.get("version", "1.0"))

    # ── Age range / UX clamp ──
    age_raw = _section(raw, "age_range", "")
    age_min = _number(age_raw, "min", "age_range", positive=True)
    age_max = _number(age_raw, "max", "age_range", positive=True)
    if age_min >= age_max:
        errors.append(f"age_range.min ({age_min}) must be below age_range.max ({age_max})")

    ux_clamp_delta = _number(raw, "ux_clamp_delta_years", "root")
    if ux_clamp_delta < 0:
        errors.append(f"ux_clamp_delta_years = {ux_clamp_delta} must not be negative")

    # ── Body fat ──
    bf_raw = _section(raw, "body_fat", "")
    body_fat_low = _by_gender(bf_raw, "low", "body_fat")
    body_fat_worst = _by_gender(bf_raw, "worst", "body_fat")
    for g in ("male", "female"):
        if getattr(body_fat_low, g) >= getattr(body_fat_worst, g):
            errors.append(f"body_fat.low.{g} must be below body_fat.worst.{g}")
    bf_ramp_raw = _section(bf_raw, "ramp", "body_fat.")
    body_fat_ramp = RampByGender(
        male=_ramp(bf_ramp_raw.get("male"), "body_fat.ramp.male"),
        female=_ramp(bf_ramp_raw.get("female"), "body_fat.ramp.female"),
    )

    # ── Visceral fat ──
    vf_raw = _section(raw, "visceral_fat", "")
    visceral_fat_low = _number(vf_raw, "low", "visceral_fat", positive=True)
    visceral_fat_worst = _number(vf_raw, "worst", "visceral_fat", positive=True)
    if visceral_fat_low >= visceral_fat_worst:
        errors.append("visceral_fat.low must be below visceral_fat.worst")
    visceral_fat_ramp = _ramp(vf_raw.get("ramp"), "visceral_fat.ramp")

    # ── Muscle ──
    muscle_raw = _section(raw, "muscle", "")
    smi_standard_min = _by_gender(muscle_raw, "smi_standard_min", "muscle")
    smi_ramp_half_width = _number(muscle_raw, "smi_ramp_half_width", "muscle", positive=True)

    # ── Metabolic ratio ──
    met_raw = _section(raw, "metabolic", "")
    reference_height_cm = _by_gender(met_raw, "reference_height_cm", "metabolic")
    hf_raw = _section(met_raw, "height_factor", "metabolic.")
    height_factor_min = _number(hf_raw, "min", "metabolic.height_factor", positive=True)
    height_factor_max = _number(hf_raw, "max", "metabolic.height_factor", positive=True)
    if height_factor_min > height_factor_max:
        errors.append("metabolic.height_factor.min must not exceed max")
    ratio_raw = _section(met_raw, "ratio", "metabolic.")
    ratio_min = _number(ratio_raw, "min", "metabolic.ratio", positive=True)
    ratio_max = _number(ratio_raw, "max", "metabolic.ratio", positive=True)
    if ratio_min >= ratio_max:
        errors.append("metabolic.ratio.min must be below metabolic.ratio.max")
    ratio_exponent = _number(met_raw, "ratio_exponent", "metabolic", positive=True)

    # ── Adjustments ──
    adj_raw = _section(raw, "adjustments", "")
    athletic_bonus_years = _number(adj_raw, "athletic_bonus_years", "adjustments")
    max_penalty_years = _number(adj_raw, "max_penalty_years", "adjustments")
    if athletic_bonus_years < 0 or max_penalty_years < 0:
        errors.append("adjustments years must not be negative")
    athletic_min_criteria = int(_number(adj_raw, "athletic_min_criteria", "adjustments"))
    if not (1 <= athletic_min_criteria <= 3):
        errors.append(
            f"adjustments.athletic_min_criteria = {athletic_min_criteria} is out of range [1, 3]"
        )

    # ── Tables ──
    expected_ffm_by_age = _buckets_by_gender("expected_ffm_by_age")
    smm_standard_min_by_height = _buckets_by_gender("smm_standard_min_by_height")

    if errors:
        raise ConfigValidationError(
            f"health_age_policy.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return HealthAgePolicy(
        version=version,
        age_min=age_min,
        age_max=age_max,
        ux_clamp_delta=ux_clamp_delta,
        body_fat_low=body_fat_low,
        body_fat_worst=body_fat_worst,
        body_fat_ramp=body_fat_ramp,
        visceral_fat_low=visceral_fat_low,
        visceral_fat_worst=visceral_fat_worst,
        visceral_fat_ramp=visceral_fat_ramp,
        smi_standard_min=smi_standard_min,
        smi_ramp_half_width=smi_ramp_half_width,
        smm_standard_min_by_height=smm_standard_min_by_height,
        expected_ffm_by_age=expected_ffm_by_age,
        reference_height_cm=reference_height_cm,
        height_factor_min=height_factor_min,
        height_factor_max=height_factor_max,
        ratio_min=ratio_min,
        ratio_max=ratio_max,
        ratio_exponent=ratio_exponent,
        athletic_bonus_years=athletic_bonus_years,
        max_penalty_years=max_penalty_years,
        athletic_min_criteria=athletic_min_criteria,
    )


def load_health_age_policy(path: Path | None = None) -> HealthAgePolicy:
    """Load and validate the policy from disk.

    Args:
        path: Override path to YAML. Uses the bundled policy by default.
    """
    target = path or _POLICY_PATH
    raw = _load_yaml(target)
    policy = _validate_and_build(raw)
    logger.info("Loaded health-age policy v%s from %s", policy.version, target)
    return policy


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_policy: HealthAgePolicy | None = None
_policy_lock = threading.Lock()


def get_health_age_policy() -> HealthAgePolicy:
    """Return the global policy singleton, loading it on first call.

    Thread-safe.  Use ``reload_health_age_policy()`` to refresh after YAML
    changes.
    """
    global _policy
    if _policy is None:
        with _policy_lock:
            if _policy is None:  # double-checked locking
                _policy = load_health_age_policy()
    return _policy


def reload_health_age_policy(path: Path | None = None) -> HealthAgePolicy:
    """Reload the policy from disk and replace the global singleton.

    If validation fails, the old policy is retained and the error is
    re-raised.

    Raises:
        ConfigValidationError: If the new policy is invalid.
        FileNotFoundError:     If the policy file is missing.
    """
    global _policy
    new_policy = load_health_age_policy(path)  # validate before acquiring lock
    with _policy_lock:
        old_version = _policy.version if _policy else "none"
        _policy = new_policy
    logger.info("Reloaded health-age policy: %s → %s", old_version, new_policy.version)
    return new_policy
