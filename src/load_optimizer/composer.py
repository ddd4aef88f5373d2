"""Recommendation composer — turns the pipeline volume into concrete bands.

Each helper derives one part of the prescription from the goal profile and
the session snapshot. ``compose_recommendation`` runs them in a fixed order
and assembles the frozen OptimizerRecommendation.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from load_optimizer.math.effort import epley_max_reps, round_half_up, round_to_hundredth
from load_optimizer.math.metabolic_stress import calculate_set_metabolic_load
from load_optimizer.math.neuromuscular_fatigue import (
    calculate_set_fatigue_score,
    reverse_calculate_reps,
)
from load_optimizer.math.peak_force import (
    estimate_peak_force_drop_rep,
    prescribe_strength_sets,
)
from load_optimizer.math.zones import classify_fatigue_score, classify_metabolic_load
from load_optimizer.models.decision_trace import DecisionTrace
from load_optimizer.models.enums import (
    CLUSTER_BIAS_THRESHOLD,
    CONCENTRATED_FALLBACK_REPS_PER_SET,
    CONCENTRATED_MAX_REP_FRACTION,
    CONCENTRATED_MIN_SETS_PER_EXERCISE,
    CONCENTRATED_SESSION_MAX_EXERCISES,
    DELOAD_INTENSITY_MAX_CAP,
    DELOAD_INTENSITY_MIN_CAP,
    DELOAD_REP_SCHEME,
    DELOAD_REST_RANGE_S,
    EXERCISE_COUNT_CEILING,
    EXERCISE_COUNT_FLOOR,
    INTENSITY_CEILING_PCT,
    INTENSITY_FLOOR_PCT,
    LOW_READINESS_INTENSITY_CAP,
    LOW_READINESS_REP_SCALAR,
    METABOLIC_FALLBACK_SETS,
    METABOLIC_REFERENCE_REPS_GENERAL,
    METABOLIC_REFERENCE_REPS_HYPERTROPHY,
    METABOLIC_REFERENCE_RPE,
    METABOLIC_STRENGTH_REFERENCE_REPS,
    METABOLIC_STRENGTH_REFERENCE_RPE,
    METABOLIC_TARGET_GENERAL,
    METABOLIC_TARGET_HYPERTROPHY,
    MIN_SETS_PER_EXERCISE,
    MINUTES_PER_WORKING_SET,
    MYO_REP_INTENSITY_RANGE,
    MYO_REP_REST_RANGE_S,
    SESSION_VOLUME_FLOOR,
    SETS_PER_EXERCISE_SCALARS,
    VOLUME_OVER_RATIO,
    VOLUME_UNDER_RATIO,
    MuscleGroup,
    MusclePriority,
    RepRangePreference,
    StressZone,
    TrainingGoal,
    VolumeStatus,
)
from load_optimizer.models.profiles import (
    FATIGUE_TARGETS,
    PHASE_FOCUS,
    PHASE_INTENSITY_SHIFTS,
    REP_RANGE_OVERRIDES,
    Band,
    GoalProfile,
    match_phase,
    resolve_structure,
)
from load_optimizer.models.recommendation import (
    ClusterTaperScheme,
    MyoRepScheme,
    OptimizerRecommendation,
    StrengthSetDivision,
    TaperedScheme,
    WeeklyVolumeEntry,
)
from load_optimizer.models.session import TrainingContext
from load_optimizer.models.snapshot import SessionSnapshot
from load_optimizer.rationale import build_rationale
from load_optimizer.solvers import (
    build_myo_rep_scheme,
    is_myo_rep_session,
    prescribe_cluster_taper_sets,
    prescribe_tapered_sets,
)
from load_optimizer.solvers.myo_rep import MYO_REP_REP_SCHEME
from load_optimizer.stages.baseline.volume_tolerance import clamp_tolerance

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Session shape: sets per exercise, exercise count, rep scheme, bands
# ---------------------------------------------------------------------------

def scaled_sets_per_exercise(profile: GoalProfile, volume_tolerance: float) -> Band:
    """Profile sets-per-exercise band scaled by the athlete's volume tolerance."""
    scalar = SETS_PER_EXERCISE_SCALARS[clamp_tolerance(volume_tolerance)]
    low = max(MIN_SETS_PER_EXERCISE, round_half_up(profile.sets_per_exercise.low * scalar))
    high = max(low, round_half_up(profile.sets_per_exercise.high * scalar))
    return Band(low, high)


def exercise_count_band(volume: int, sets_band: Band, structure: object = None) -> Band:
    """How many exercises spread ``volume`` sets; a session preset wins outright."""
    preset = resolve_structure(structure)
    if preset is not None:
        return preset.exercise_count
    low = max(EXERCISE_COUNT_FLOOR, math.floor(volume / sets_band.high))
    high = min(EXERCISE_COUNT_CEILING, math.ceil(volume / sets_band.low))
    return Band.of(low, high)


def rep_scheme_text(
    profile: GoalProfile,
    sets_band: Band,
    preference: RepRangePreference,
    forced_deload: bool,
) -> str:
    if forced_deload:
        return DELOAD_REP_SCHEME
    override = REP_RANGE_OVERRIDES.get(preference)
    reps = override.rep_text if override is not None else profile.rep_text
    return f"{sets_band.low}-{sets_band.high} sets × {reps}"


def phase_intensity_shift(context: TrainingContext | None) -> int:
    if context is None:
        return 0
    return match_phase(context.phase_name, PHASE_INTENSITY_SHIFTS, 0)


def intensity_band(
    profile: GoalProfile,
    preference: RepRangePreference,
    context: TrainingContext | None,
    low_readiness: bool,
    forced_deload: bool,
) -> Band:
    """%1RM band: profile or rep preference, phase-shifted, then capped."""
    override = REP_RANGE_OVERRIDES.get(preference)
    base = override.intensity_pct if override is not None else profile.intensity_pct
    shift = phase_intensity_shift(context)

    low = max(INTENSITY_FLOOR_PCT, min(base.low + shift, INTENSITY_CEILING_PCT))
    high = max(low, min(base.high + shift, INTENSITY_CEILING_PCT))
    if low_readiness:
        low = min(low, LOW_READINESS_INTENSITY_CAP)
        high = min(high, LOW_READINESS_INTENSITY_CAP)
    if forced_deload:
        low = min(low, DELOAD_INTENSITY_MIN_CAP)
        high = min(high, DELOAD_INTENSITY_MAX_CAP)
    return Band.of(low, high)


def rest_band(profile: GoalProfile, forced_deload: bool) -> Band:
    if forced_deload:
        return Band(*DELOAD_REST_RANGE_S)
    return profile.rest_s


def apply_time_cap(
    volume: int,
    exercise_count: Band,
    duration_min: float,
    avg_sets_per_exercise: float,
) -> tuple[int, Band]:
    """Cap volume at one working set per 4 minutes, never below the floor.

    The exercise-count band shrinks with it; its minimum follows the capped
    maximum down.
    """
    time_cap = max(SESSION_VOLUME_FLOOR, math.floor(duration_min / MINUTES_PER_WORKING_SET))
    if volume <= time_cap:
        return volume, exercise_count
    high = min(exercise_count.high, math.ceil(time_cap / avg_sets_per_exercise))
    return time_cap, Band(min(exercise_count.low, high), high)


def suggested_focus(context: TrainingContext | None, forced_deload: bool) -> TrainingGoal | None:
    focus = TrainingGoal.GENERAL if forced_deload else None
    if context is not None:
        focus = match_phase(context.phase_name, PHASE_FOCUS, focus)
    return focus


# ---------------------------------------------------------------------------
# Weekly muscle-group volume
# ---------------------------------------------------------------------------

def classify_muscle_volume(
    weekly_sets: Mapping[MuscleGroup, float],
    targets: Mapping[MuscleGroup, float],
) -> tuple[Mapping[MuscleGroup, MusclePriority] | None, Mapping[MuscleGroup, WeeklyVolumeEntry] | None]:
    """Compare trailing-week sets with each configured weekly target."""
    priorities: dict[MuscleGroup, MusclePriority] = {}
    status: dict[MuscleGroup, WeeklyVolumeEntry] = {}

    for group in MuscleGroup:
        target = targets.get(group, 0) or 0
        if target <= 0:
            continue
        current = round_half_up(weekly_sets.get(group, 0.0))
        ratio = current / target

        if ratio < VOLUME_UNDER_RATIO:
            volume_status, priority = VolumeStatus.UNDER, MusclePriority.INCREASE
        elif ratio <= VOLUME_OVER_RATIO:
            volume_status, priority = VolumeStatus.ON_TRACK, MusclePriority.MAINTAIN
        else:
            volume_status, priority = VolumeStatus.OVER, MusclePriority.DECREASE

        priorities[group] = priority
        status[group] = WeeklyVolumeEntry(current=current, target=target, status=volume_status)

    if not priorities:
        return None, None
    return MappingProxyType(priorities), MappingProxyType(status)


# ---------------------------------------------------------------------------
# Stress projections
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MetabolicProjection:
    per_set: float
    zone: StressZone
    target: Band | None = None
    sets_per_exercise: Band | None = None

    def projected_load(self, fallback_avg_sets: float) -> float:
        """Per-set load times the mean of the per-exercise set band."""
        sets = self.sets_per_exercise
        avg_sets = sets.midpoint if sets is not None else fallback_avg_sets
        return self.per_set * avg_sets


def project_metabolic_load(
    goal: TrainingGoal,
    intensity: Band,
    profile: GoalProfile,
) -> MetabolicProjection | None:
    """Per-exercise metabolic target and zone at the band midpoint.

    Hypertrophy-like goals get a prescriptive target and a sets-per-exercise
    band; strength gets only a per-set figure and a zone for context.
    """
    if goal.is_hypertrophy_like:
        hypertrophy = goal == TrainingGoal.HYPERTROPHY
        target = Band(*(METABOLIC_TARGET_HYPERTROPHY if hypertrophy else METABOLIC_TARGET_GENERAL))
        reps = METABOLIC_REFERENCE_REPS_HYPERTROPHY if hypertrophy else METABOLIC_REFERENCE_REPS_GENERAL
        per_set = calculate_set_metabolic_load(intensity.midpoint, reps, METABOLIC_REFERENCE_RPE)

        if per_set > 0:
            min_sets = max(1, math.ceil(target.low / per_set))
            sets_band = Band(min_sets, max(min_sets, math.floor(target.high / per_set)))
        else:
            sets_band = Band(*METABOLIC_FALLBACK_SETS)

        per_set = round_to_hundredth(per_set)
        zone = classify_metabolic_load(per_set * sets_band.midpoint)
        return MetabolicProjection(per_set, zone, target, sets_band)

    if goal == TrainingGoal.STRENGTH:
        per_set = round_to_hundredth(calculate_set_metabolic_load(
            intensity.midpoint, METABOLIC_STRENGTH_REFERENCE_REPS, METABOLIC_STRENGTH_REFERENCE_RPE,
        ))
        zone = classify_metabolic_load(per_set * profile.sets_per_exercise.midpoint)
        return MetabolicProjection(per_set=per_set, zone=zone)

    return None


@dataclass(frozen=True)
class FatigueProjection:
    target: Band
    zone: StressZone
    target_reps: int


def project_fatigue_score(
    goal: TrainingGoal,
    intensity: Band,
    volume_tolerance: float,
    low_readiness: bool,
) -> FatigueProjection:
    """Total reps per exercise that land the fatigue score mid-target."""
    target = FATIGUE_TARGETS.get(goal, FATIGUE_TARGETS[TrainingGoal.GENERAL])
    scalar = SETS_PER_EXERCISE_SCALARS[clamp_tolerance(volume_tolerance)]
    reps = reverse_calculate_reps(target.midpoint, intensity.midpoint)
    target_reps = max(1, round_half_up(reps * scalar))
    if low_readiness:
        target_reps = max(1, round_half_up(target_reps * LOW_READINESS_REP_SCALAR))
    zone = classify_fatigue_score(calculate_set_fatigue_score(target_reps, intensity.midpoint))
    return FatigueProjection(target=target, zone=zone, target_reps=target_reps)


@dataclass(frozen=True)
class ConcentratedCap:
    volume: int
    sets_per_exercise: int
    reps_per_set: int

    @property
    def rep_scheme(self) -> str:
        return f"{self.sets_per_exercise} sets × {self.reps_per_set} reps (fatigue-capped)"


def concentrated_session_cap(
    volume: int,
    target_reps: int,
    sets_band: Band,
    mid_intensity: float,
    max_exercises: int,
) -> ConcentratedCap | None:
    """Cap a one- or two-exercise session at its per-exercise fatigue ceiling.

    Returns None when the session is not concentrated or already fits.
    """
    if max_exercises > CONCENTRATED_SESSION_MAX_EXERCISES or not target_reps:
        return None

    epley_max = max(1, round_half_up(epley_max_reps(mid_intensity)))
    by_sets = (
        round_half_up(target_reps / sets_band.midpoint)
        if sets_band.midpoint > 0
        else CONCENTRATED_FALLBACK_REPS_PER_SET
    )
    reps_per_set = max(1, min(by_sets, round_half_up(epley_max * CONCENTRATED_MAX_REP_FRACTION)))
    sets_per_exercise = max(
        CONCENTRATED_MIN_SETS_PER_EXERCISE, math.ceil(target_reps / reps_per_set)
    )
    capped = sets_per_exercise * max_exercises
    if volume <= capped:
        return None
    return ConcentratedCap(
        volume=max(SESSION_VOLUME_FLOOR, capped),
        sets_per_exercise=sets_per_exercise,
        reps_per_set=reps_per_set,
    )


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------

def compose_recommendation(
    snapshot: SessionSnapshot,
    trace: DecisionTrace,
) -> OptimizerRecommendation:
    """Run the composer stages in order on top of the pipeline volume."""
    config = snapshot.config
    session = snapshot.session
    profile = snapshot.profile
    context = snapshot.training_context
    signals = snapshot.signals
    deload = trace.forced_deload
    low_readiness = session.is_low_readiness
    preference = RepRangePreference.parse(config.rep_range_preference)

    volume = trace.pipeline_volume

    # Session shape
    sets_band = scaled_sets_per_exercise(profile, snapshot.volume_tolerance)
    avg_sets = sets_band.midpoint
    exercises = exercise_count_band(volume, sets_band, session.session_structure)
    max_exercises = int(max(exercises.low, exercises.high))
    rep_scheme = rep_scheme_text(profile, sets_band, preference, deload)
    intensity = intensity_band(profile, preference, context, low_readiness, deload)
    rest = rest_band(profile, deload)
    volume, exercises = apply_time_cap(volume, exercises, session.duration_min, avg_sets)

    priorities, weekly_status = classify_muscle_volume(
        signals.weekly_sets_by_muscle, config.target_sets_per_muscle_group
    )

    focus = suggested_focus(context, deload)
    goal = focus or profile.goal

    metabolic = None if (goal.is_hypertrophy_like and deload) else project_metabolic_load(
        goal, intensity, profile
    )

    fatigue: FatigueProjection | None = None
    cap: ConcentratedCap | None = None
    if not deload:
        fatigue = project_fatigue_score(goal, intensity, snapshot.volume_tolerance, low_readiness)
        cap = concentrated_session_cap(
            volume, fatigue.target_reps, sets_band, intensity.midpoint, max_exercises
        )
        if cap is not None:
            volume = cap.volume
            rep_scheme = cap.rep_scheme

    myo_rep: MyoRepScheme | None = None
    if is_myo_rep_session(goal, signals.history_length, snapshot.goal_bias, deload, low_readiness):
        myo_rep = build_myo_rep_scheme()
        rep_scheme = MYO_REP_REP_SCHEME
        intensity = Band.of(
            min(intensity.low, MYO_REP_INTENSITY_RANGE[0]),
            min(intensity.high, MYO_REP_INTENSITY_RANGE[1]),
        )
        rest = Band(*MYO_REP_REST_RANGE_S)
        # Fatigue targets do not apply to activation + mini-set work
        fatigue = None

    cluster: ClusterTaperScheme | None = None
    tapered: TaperedScheme | None = None
    if (
        goal.is_hypertrophy_like
        and not deload
        and myo_rep is None
        and fatigue is not None
        and metabolic is not None
        and metabolic.target is not None
    ):
        if snapshot.goal_bias >= CLUSTER_BIAS_THRESHOLD:
            cluster = prescribe_cluster_taper_sets(fatigue.target_reps, intensity)
            if cluster is not None:
                rep_scheme = (
                    f"Cluster-Taper: {cluster.description} (~{cluster.total_reps} reps, "
                    f"metabolic load ~{round_half_up(cluster.total_metabolic_load)})"
                )
                intensity = _narrow_to(intensity, cluster.intensity_pct)

        if cluster is None:
            tapered = prescribe_tapered_sets(fatigue.target_reps)
            if tapered is not None:
                rep_scheme = (
                    f"Tapered: {tapered.description} (~{tapered.total_reps} reps, "
                    f"metabolic load ~{round_half_up(tapered.total_metabolic_load)})"
                )
                intensity = _narrow_to(intensity, tapered.lead_intensity_pct)

    drop_rep: int | None = None
    division: StrengthSetDivision | None = None
    if goal.is_strength_power and not deload and fatigue is not None:
        drop_rep = estimate_peak_force_drop_rep(intensity.midpoint)
        division = prescribe_strength_sets(fatigue.target_reps, intensity.midpoint)
        rep_scheme = (
            f"{division.sets} sets × {division.reps_per_set} reps "
            f"(peak force, {round_half_up(division.rest_s / 60)}+ min rest)"
        )

    last_rpe = signals.last_session_rpe

    rationale = build_rationale(
        snapshot,
        trace,
        session_volume=volume,
        intensity=intensity,
        avg_sets_per_exercise=avg_sets,
        concentrated_exercises=max_exercises if cap is not None else None,
        priorities=priorities,
        metabolic=metabolic,
        fatigue=fatigue,
        peak_force_drop_rep=drop_rep,
        strength_division=division,
        cluster=cluster,
        tapered=tapered,
        myo_rep=myo_rep,
    )

    has_metabolic_target = metabolic is not None and metabolic.target is not None
    return OptimizerRecommendation(
        session_volume=volume,
        rep_scheme=rep_scheme,
        intensity_pct=intensity,
        rest_s=rest,
        exercise_count=exercises,
        rationale=rationale,
        muscle_group_priorities=priorities,
        weekly_volume_status=weekly_status,
        suggested_focus=focus,
        metabolic_load_target=metabolic.target if metabolic is not None else None,
        metabolic_load_zone=metabolic.zone if metabolic is not None else None,
        metabolic_load_per_set=metabolic.per_set if metabolic is not None else None,
        metabolic_sets_per_exercise=metabolic.sets_per_exercise if has_metabolic_target else None,
        fatigue_score_target=fatigue.target if fatigue is not None else None,
        fatigue_score_zone=fatigue.zone if fatigue is not None else None,
        target_reps_per_exercise=fatigue.target_reps if fatigue is not None else None,
        peak_force_drop_rep=drop_rep,
        strength_set_division=division,
        tapered_scheme=tapered,
        cluster_taper_scheme=cluster,
        myo_rep_scheme=myo_rep,
        last_session_rpe_summary=last_rpe.summary if last_rpe is not None else None,
    )


def _narrow_to(band: Band, chosen_pct: float) -> Band:
    """Solvers pin the weight; the band becomes the three points below it."""
    return Band.of(max(band.low, chosen_pct - 3), chosen_pct)
