"""Tests for the metabolic and fatigue zone tables."""

from __future__ import annotations

import math

import pytest

from load_optimizer.math.neuromuscular_fatigue import (
    calculate_set_fatigue_score,
    reverse_calculate_reps,
)
from load_optimizer.math.zones import (
    FATIGUE_ZONES,
    METABOLIC_ZONES,
    classify_fatigue_score,
    classify_metabolic_load,
    zone_band,
)
from load_optimizer.models.enums import StressZone


class TestZoneTables:
    @pytest.mark.parametrize("table", [METABOLIC_ZONES, FATIGUE_ZONES])
    def test_contiguous_without_gaps(self, table) -> None:
        assert table[0].lower == 0.0
        assert math.isinf(table[-1].upper)
        for lower_band, upper_band in zip(table, table[1:]):
            assert lower_band.upper == upper_band.lower

    @pytest.mark.parametrize("table", [METABOLIC_ZONES, FATIGUE_ZONES])
    def test_boundaries_belong_to_exactly_one_zone(self, table) -> None:
        for band in table:
            hits = [b for b in table if b.contains(band.lower)]
            assert hits == [band]

    @pytest.mark.parametrize("table", [METABOLIC_ZONES, FATIGUE_ZONES])
    def test_zones_are_ordered(self, table) -> None:
        assert [b.zone for b in table] == sorted(StressZone)

    def test_zone_band_lookup(self) -> None:
        assert zone_band(StressZone.HIGH, METABOLIC_ZONES).lower == 800.0
        assert zone_band(StressZone.MODERATE, FATIGUE_ZONES).upper == 500.0


class TestClassify:
    def test_metabolic_boundaries(self) -> None:
        assert classify_metabolic_load(499.99) == StressZone.LIGHT
        assert classify_metabolic_load(500.0) == StressZone.MODERATE
        assert classify_metabolic_load(650.0) == StressZone.MODERATE_HIGH
        assert classify_metabolic_load(1100.0) == StressZone.EXTREME

    def test_fatigue_boundaries(self) -> None:
        assert classify_fatigue_score(399.0) == StressZone.LIGHT
        assert classify_fatigue_score(400.0) == StressZone.MODERATE
        assert classify_fatigue_score(600.0) == StressZone.HIGH
        assert classify_fatigue_score(700.0) == StressZone.EXTREME

    def test_out_of_range_values(self) -> None:
        assert classify_fatigue_score(-10.0) == StressZone.LIGHT
        assert classify_fatigue_score(math.inf) == StressZone.EXTREME
        assert classify_metabolic_load(math.nan) == StressZone.EXTREME

    def test_zone_key(self) -> None:
        assert StressZone.MODERATE_HIGH.key == "moderate-high"

    def test_reverse_reps_land_on_boundary(self) -> None:
        for band in FATIGUE_ZONES[1:]:
            for intensity in (60, 70, 80):
                reps = reverse_calculate_reps(band.lower, intensity)
                score = calculate_set_fatigue_score(reps, intensity)
                assert score == pytest.approx(band.lower, rel=1e-9)
