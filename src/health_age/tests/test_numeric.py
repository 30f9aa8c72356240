"""Tests for the numeric primitives."""

from __future__ import annotations

import math

import pytest

from src.health_age.numeric import clamp, ramp_down, ramp_up, round_for_display, safe_number


class TestClamp:
    def test_inside_range_unchanged(self) -> None:
        assert clamp(5.0, 0.0, 10.0) == 5.0

    def test_below_and_above(self) -> None:
        assert clamp(-3.0, 0.0, 10.0) == 0.0
        assert clamp(13.0, 0.0, 10.0) == 10.0


class TestRamps:
    def test_ramp_down_saturates(self) -> None:
        assert ramp_down(10.0, 12.0, 20.0) == 1.0
        assert ramp_down(12.0, 12.0, 20.0) == 1.0
        assert ramp_down(20.0, 12.0, 20.0) == 0.0
        assert ramp_down(35.0, 12.0, 20.0) == 0.0

    def test_ramp_down_midpoint(self) -> None:
        assert ramp_down(16.0, 12.0, 20.0) == pytest.approx(0.5)

    def test_ramp_up_saturates(self) -> None:
        assert ramp_up(7.0, 8.0, 9.0) == 0.0
        assert ramp_up(9.5, 8.0, 9.0) == 1.0

    def test_ramp_up_midpoint(self) -> None:
        assert ramp_up(8.5, 8.0, 9.0) == pytest.approx(0.5)

    def test_no_step_at_cutoff(self) -> None:
        # 19.9% and 20.1% body fat must score almost the same
        below = ramp_down(19.9, 15.0, 25.0)
        above = ramp_down(20.1, 15.0, 25.0)
        assert abs(below - above) < 0.05


class TestRoundForDisplay:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0.5, 1), (1.5, 2), (2.5, 3), (46.5, 47), (2.4, 2), (2.6, 3), (-0.5, -1), (-2.5, -3)],
    )
    def test_half_away_from_zero(self, value: float, expected: int) -> None:
        assert round_for_display(value) == expected

    def test_returns_int(self) -> None:
        assert isinstance(round_for_display(40.0), int)


class TestSafeNumber:
    def test_accepts_int_and_float(self) -> None:
        assert safe_number(3) == 3.0
        assert safe_number(2.5) == 2.5

    def test_rejects_non_finite(self) -> None:
        assert safe_number(math.nan) is None
        assert safe_number(math.inf) is None

    def test_rejects_bool_and_str(self) -> None:
        assert safe_number(True) is None
        assert safe_number("40") is None
        assert safe_number(None) is None

    def test_rejects_int_too_large_for_float(self) -> None:
        assert safe_number(10**400) is None
        assert safe_number(-(10**400)) is None
