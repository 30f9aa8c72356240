"""Map an extracted InBody scan record onto ``HealthAgeInput``.

The measurement-capture step hands over a loosely typed dict read off a scan
report, e.g.::

    {
        "weight": 72.4,
        "skeletal_muscle": 31.8,
        "body_fat_percent": 21.3,
        "body_fat": 15.4,
        "bmr": 1580,
        "visceral_fat": 7,
        "date": "2026-03-02",
    }

Values may be numbers, numeric strings or missing.  Unparseable values are
treated as missing.  Required values that are missing are passed through as
None so the engine reports the offending field itself.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from typing import Any

from src.health_age.base import Gender, HealthAgeInput

logger = logging.getLogger("yanggaeng.health_age.inbody")

# Record key aliases, first match wins
_HEIGHT_KEYS = ("height_cm", "height")
_FFM_KEYS = ("ffm", "fat_free_mass", "ffm_kg")

# Grouped thousands such as "1,072.5"
_THOUSANDS_RE = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d+)?$")


def _safe_float(value: object) -> float | None:
    """Safely coerce a value to a finite float, returning None on failure.

    Strings may use grouped thousands (``"1,072.5"``) or a decimal comma
    (``"24,1"``).  Anything else containing a comma is rejected.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if _THOUSANDS_RE.match(value):
            value = value.replace(",", "")
        elif value.count(",") == 1 and "." not in value:
            value = value.replace(",", ".")
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        logger.warning("Ignoring non-numeric InBody value: %r", value)
        return None
    return number if math.isfinite(number) else None


def _first(record: Mapping[str, Any], keys: tuple[str, ...]) -> float | None:
    for key in keys:
        value = _safe_float(record.get(key))
        if value is not None:
            return value
    return None


def body_fat_percent_from_record(record: Mapping[str, Any]) -> float | None:
    """Percent body fat, derived from fat mass and weight when not reported."""
    pct = _safe_float(record.get("body_fat_percent"))
    if pct is not None:
        return pct
    fat_kg = _safe_float(record.get("body_fat"))
    weight = _safe_float(record.get("weight"))
    if fat_kg is not None and weight:
        return fat_kg / weight * 100
    return None


def input_from_inbody_record(
    record: Mapping[str, Any],
    actual_age: float,
    gender: Gender | str,
    *,
    muscle_above_standard: bool | None = None,
) -> HealthAgeInput:
    """Build a ``HealthAgeInput`` from an InBody record.

    Args:
        record:                Extracted scan values (see module docstring).
        actual_age:            Chronological age from the user profile.
        gender:                Gender from the user profile.
        muscle_above_standard: The scanner's own verdict, if the report shows one.

    Returns:
        HealthAgeInput ready for ``compute_health_age``.
    """
    inp = HealthAgeInput(
        actual_age=actual_age,
        gender=gender,
        body_fat_percent=body_fat_percent_from_record(record),  # type: ignore[arg-type]
        visceral_fat_level=_safe_float(record.get("visceral_fat")),  # type: ignore[arg-type]
        height_cm=_first(record, _HEIGHT_KEYS),
        weight_kg=_safe_float(record.get("weight")),
        ffm_kg=_first(record, _FFM_KEYS),
        smm_kg=_safe_float(record.get("skeletal_muscle")),
        smi=_safe_float(record.get("smi")),
        muscle_above_standard=muscle_above_standard,
    )
    logger.debug(
        "InBody record mapped: weight=%s smm=%s bf%%=%s vf=%s height=%s",
        inp.weight_kg, inp.smm_kg, inp.body_fat_percent,
        inp.visceral_fat_level, inp.height_cm,
    )
    return inp
