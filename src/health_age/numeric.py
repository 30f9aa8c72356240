"""Deterministic numeric helpers used by the health-age engine.

Nothing here touches the clock, randomness or global state.  Every helper is
a total function of its arguments.
"""

from __future__ import annotations

import math


def clamp(value: float, lo: float, hi: float) -> float:
    """Restrict ``value`` to the closed interval ``[lo, hi]``."""
    return max(lo, min(hi, value))


def ramp_down(value: float, good: float, bad: float) -> float:
    """Linear score for metrics where lower is healthier.

    Returns 1.0 at or below ``good``, 0.0 at or above ``bad`` and
    interpolates linearly in between.

    Example:
        >>> ramp_down(16.0, 12.0, 20.0)
        0.5
    """
    if value <= good:
        return 1.0
    if value >= bad:
        return 0.0
    return 1.0 - (value - good) / (bad - good)


def ramp_up(value: float, bad: float, good: float) -> float:
    """Linear score for metrics where higher is healthier.

    Returns 0.0 at or below ``bad``, 1.0 at or above ``good``.
    """
    if value <= bad:
        return 0.0
    if value >= good:
        return 1.0
    return (value - bad) / (good - bad)


def round_for_display(value: float) -> int:
    """Round half away from zero to the nearest integer.

    The built-in ``round`` uses banker's rounding (``round(40.5) == 40``),
    which is not what the displayed age uses.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def safe_number(value: object) -> float | None:
    """Return ``value`` as a float if it is a finite real number, else None.

    ``bool`` is rejected even though it subclasses ``int``.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None
