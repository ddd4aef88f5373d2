"""Tests for the recommendation composer helpers."""

from __future__ import annotations

import pytest

from load_optimizer.composer import (
    apply_time_cap,
    classify_muscle_volume,
    concentrated_session_cap,
    exercise_count_band,
    intensity_band,
    project_fatigue_score,
    project_metabolic_load,
    rep_scheme_text,
    rest_band,
    scaled_sets_per_exercise,
    suggested_focus,
)
from load_optimizer.math.metabolic_stress import calculate_set_metabolic_load
from load_optimizer.models.enums import (
    DELOAD_REP_SCHEME,
    MuscleGroup,
    MusclePriority,
    RepRangePreference,
    TrainingGoal,
    VolumeStatus,
)
from load_optimizer.models.profiles import GOAL_PROFILES, Band
from load_optimizer.models.session import TrainingContext

HYPERTROPHY = GOAL_PROFILES[TrainingGoal.HYPERTROPHY]
STRENGTH = GOAL_PROFILES[TrainingGoal.STRENGTH]


class TestSessionShape:
    def test_sets_per_exercise_default(self) -> None:
        assert scaled_sets_per_exercise(HYPERTROPHY, 3) == Band(3, 4)

    def test_sets_per_exercise_scaled(self) -> None:
        assert scaled_sets_per_exercise(HYPERTROPHY, 1) == Band(2, 3)
        assert scaled_sets_per_exercise(HYPERTROPHY, 5) == Band(4, 5)

    def test_exercise_count_from_volume(self) -> None:
        assert exercise_count_band(29, Band(3, 4)) == Band(7, 10)

    def test_exercise_count_widened_when_inverted(self) -> None:
        band = exercise_count_band(6, Band(4, 6))
        assert band.low <= band.high
        assert band == Band(3, 3)

    def test_structure_preset_wins(self) -> None:
        assert exercise_count_band(29, Band(3, 4), "one-lift") == Band(1, 1)
        assert exercise_count_band(29, Band(3, 4), "High Variety") == Band(6, 10)

    def test_unknown_structure_ignored(self) -> None:
        assert exercise_count_band(29, Band(3, 4), "circus") == Band(7, 10)

    def test_rep_scheme_from_profile(self) -> None:
        text = rep_scheme_text(HYPERTROPHY, Band(3, 4), RepRangePreference.AUTO, False)
        assert text == "3-4 sets × 8-12 reps"

    def test_rep_scheme_from_preference(self) -> None:
        text = rep_scheme_text(HYPERTROPHY, Band(3, 4), RepRangePreference.LOW, False)
        assert text == "3-4 sets × 3-5 reps"

    def test_rep_scheme_under_deload(self) -> None:
        assert rep_scheme_text(HYPERTROPHY, Band(3, 4), RepRangePreference.LOW, True) == DELOAD_REP_SCHEME

    def test_rest_band(self) -> None:
        assert rest_band(STRENGTH, False) == Band(180, 300)
        assert rest_band(STRENGTH, True) == Band(60, 120)


class TestIntensityBand:
    def test_profile_band(self) -> None:
        band = intensity_band(HYPERTROPHY, RepRangePreference.AUTO, None, False, False)
        assert band == Band(60, 75)

    def test_preference_replaces_profile(self) -> None:
        band = intensity_band(HYPERTROPHY, RepRangePreference.HIGH, None, False, False)
        assert band == Band(40, 60)

    def test_phase_shift(self) -> None:
        context = TrainingContext(phase_name="Intensification")
        assert intensity_band(STRENGTH, RepRangePreference.AUTO, context, False, False) == Band(85, 97)

    def test_clamped_to_floor(self) -> None:
        context = TrainingContext(phase_name="Deload")
        band = intensity_band(HYPERTROPHY, RepRangePreference.HIGH, context, False, False)
        assert band == Band(30, 50)

    def test_low_readiness_caps_top(self) -> None:
        band = intensity_band(HYPERTROPHY, RepRangePreference.AUTO, None, True, False)
        assert band == Band(60, 75)
        band = intensity_band(STRENGTH, RepRangePreference.AUTO, None, True, False)
        assert band == Band(75, 75)

    def test_low_readiness_cap_applies_after_phase_shift(self) -> None:
        context = TrainingContext(phase_name="Intensification")
        band = intensity_band(STRENGTH, RepRangePreference.AUTO, context, True, False)
        assert band == Band(75, 75)

    def test_deload_caps(self) -> None:
        band = intensity_band(STRENGTH, RepRangePreference.AUTO, None, False, True)
        assert band == Band(50, 65)


class TestTimeCap:
    def test_under_budget_unchanged(self) -> None:
        assert apply_time_cap(12, Band(3, 4), 60, 3.5) == (12, Band(3, 4))

    def test_over_budget(self) -> None:
        volume, exercises = apply_time_cap(32, Band(8, 10), 60, 3.5)
        assert volume == 15
        assert exercises == Band(5, 5)

    def test_never_below_floor(self) -> None:
        volume, _ = apply_time_cap(20, Band(3, 5), 10, 3.5)
        assert volume == 6


class TestSuggestedFocus:
    def test_no_context(self) -> None:
        assert suggested_focus(None, False) is None

    def test_deload_suggests_general(self) -> None:
        assert suggested_focus(None, True) == TrainingGoal.GENERAL

    def test_phase_keywords(self) -> None:
        assert suggested_focus(TrainingContext("Max Strength"), False) == TrainingGoal.STRENGTH
        assert suggested_focus(TrainingContext("Accumulation"), False) == TrainingGoal.HYPERTROPHY
        assert suggested_focus(TrainingContext("Peak"), False) == TrainingGoal.POWER
        assert suggested_focus(TrainingContext("Transition"), False) is None


class TestMuscleVolume:
    def test_no_targets(self) -> None:
        assert classify_muscle_volume({MuscleGroup.CHEST: 12.0}, {}) == (None, None)

    def test_classification(self) -> None:
        weekly = {MuscleGroup.CHEST: 16.0, MuscleGroup.BACK: 8.0}
        targets = {MuscleGroup.CHEST: 10, MuscleGroup.BACK: 10, MuscleGroup.QUADS: 10}
        priorities, status = classify_muscle_volume(weekly, targets)
        assert priorities[MuscleGroup.CHEST] == MusclePriority.DECREASE
        assert priorities[MuscleGroup.BACK] == MusclePriority.MAINTAIN
        assert priorities[MuscleGroup.QUADS] == MusclePriority.INCREASE
        assert status[MuscleGroup.QUADS].status == VolumeStatus.UNDER
        assert status[MuscleGroup.CHEST].current == 16
        assert MuscleGroup.CALVES not in priorities

    def test_ratio_boundaries(self) -> None:
        targets = {MuscleGroup.CHEST: 10, MuscleGroup.BACK: 20}
        weekly = {MuscleGroup.CHEST: 7.0, MuscleGroup.BACK: 23.0}
        priorities, _ = classify_muscle_volume(weekly, targets)
        assert priorities[MuscleGroup.CHEST] == MusclePriority.MAINTAIN
        assert priorities[MuscleGroup.BACK] == MusclePriority.MAINTAIN


class TestProjections:
    def test_hypertrophy_metabolic_projection(self) -> None:
        projection = project_metabolic_load(TrainingGoal.HYPERTROPHY, Band(60, 75), HYPERTROPHY)
        assert projection.target == Band(618, 989)
        assert projection.per_set == pytest.approx(calculate_set_metabolic_load(67.5, 10, 8), abs=0.01)
        assert projection.sets_per_exercise == Band(4, 4)

    def test_general_metabolic_target(self) -> None:
        profile = GOAL_PROFILES[TrainingGoal.GENERAL]
        projection = project_metabolic_load(TrainingGoal.GENERAL, Band(65, 80), profile)
        assert projection.target == Band(495, 865)
        assert projection.sets_per_exercise.low <= projection.sets_per_exercise.high

    def test_strength_metabolic_projection_has_no_target(self) -> None:
        projection = project_metabolic_load(TrainingGoal.STRENGTH, Band(80, 92), STRENGTH)
        assert projection.target is None
        assert projection.sets_per_exercise is None
        assert projection.per_set > 0

    def test_no_metabolic_projection_for_power(self) -> None:
        profile = GOAL_PROFILES[TrainingGoal.POWER]
        assert project_metabolic_load(TrainingGoal.POWER, Band(70, 85), profile) is None

    def test_zero_load_falls_back(self) -> None:
        projection = project_metabolic_load(TrainingGoal.HYPERTROPHY, Band(0, 0), HYPERTROPHY)
        assert projection.sets_per_exercise == Band(3, 4)

    def test_fatigue_target_reps(self) -> None:
        projection = project_fatigue_score(TrainingGoal.HYPERTROPHY, Band(60, 75), 3, False)
        assert projection.target == Band(400, 600)
        assert projection.target_reps == 53

    def test_fatigue_low_readiness(self) -> None:
        projection = project_fatigue_score(TrainingGoal.HYPERTROPHY, Band(60, 75), 3, True)
        # 53 × 0.80 = 42.4 → 42
        assert projection.target_reps == 42

    def test_fatigue_tolerance_scales_reps(self) -> None:
        projection = project_fatigue_score(TrainingGoal.HYPERTROPHY, Band(60, 75), 5, False)
        # 52.81 × 1.30 = 68.7 → 69
        assert projection.target_reps == 69


class TestConcentratedCap:
    def test_single_exercise_capped(self) -> None:
        cap = concentrated_session_cap(22, 53, Band(3, 4), 67.5, 1)
        assert cap is not None
        assert cap.reps_per_set == 9
        assert cap.sets_per_exercise == 6
        assert cap.volume == 6
        assert cap.rep_scheme == "6 sets × 9 reps (fatigue-capped)"

    def test_two_exercises(self) -> None:
        cap = concentrated_session_cap(22, 53, Band(3, 4), 67.5, 2)
        assert cap.volume == 12

    def test_not_concentrated(self) -> None:
        assert concentrated_session_cap(22, 53, Band(3, 4), 67.5, 3) is None

    def test_volume_already_fits(self) -> None:
        assert concentrated_session_cap(6, 53, Band(3, 4), 67.5, 1) is None

    def test_minimum_sets_per_exercise(self) -> None:
        cap = concentrated_session_cap(20, 4, Band(4, 6), 91, 1)
        assert cap.sets_per_exercise == 4
