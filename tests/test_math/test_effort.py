"""Tests for Epley conversions and the half-up rounding helpers."""

from __future__ import annotations

import math

import pytest

from load_optimizer.math.effort import (
    epley_max_reps,
    format_number,
    intensity_for_rpe,
    reps_in_reserve,
    round_half_up,
    round_to_tenth,
    rpe_at_intensity,
)


class TestRounding:
    def test_halves_round_up(self) -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(12.5) == 13

    def test_below_half_rounds_down(self) -> None:
        assert round_half_up(2.4999) == 2
        assert round_half_up(0.0) == 0

    def test_round_to_tenth(self) -> None:
        assert round_to_tenth(5.75) == pytest.approx(5.8)
        assert round_to_tenth(7.7465) == pytest.approx(7.7)

    def test_format_number_drops_trailing_zero(self) -> None:
        assert format_number(8.0) == "8"
        assert format_number(8.5) == "8.5"
        assert format_number(71) == "71"


class TestEpley:
    def test_reps_in_reserve(self) -> None:
        assert reps_in_reserve(8) == 2
        assert reps_in_reserve(10.5) == 0

    def test_max_reps_at_75_percent(self) -> None:
        assert epley_max_reps(75) == pytest.approx(10.0)

    def test_max_reps_at_or_above_max(self) -> None:
        assert epley_max_reps(100) == 0.0
        assert epley_max_reps(110) == 0.0

    def test_max_reps_at_zero_is_unbounded(self) -> None:
        assert math.isinf(epley_max_reps(0))

    def test_intensity_for_rpe(self) -> None:
        # 10 reps @ RPE 8 → 12 effective max reps → 71 %
        assert intensity_for_rpe(10, 8) == 71
        assert intensity_for_rpe(1, 10) == 97

    def test_rpe_at_intensity_to_failure(self) -> None:
        assert rpe_at_intensity(10, 75) == pytest.approx(10.0)

    def test_rpe_at_intensity_clamps(self) -> None:
        assert rpe_at_intensity(5, 100) == 10.0
        assert rpe_at_intensity(5, 0) == 1.0
        assert rpe_at_intensity(1, 40) == 1.0

    def test_conversions_roughly_invert(self) -> None:
        for reps in (6, 8, 10, 12):
            for rpe in (7.0, 8.0, 9.0):
                pct = intensity_for_rpe(reps, rpe)
                assert abs(rpe_at_intensity(reps, pct) - rpe) <= 0.6
