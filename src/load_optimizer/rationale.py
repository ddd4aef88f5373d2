"""Rationale builder — the human-readable account of a recommendation.

Sentences are appended in a fixed order and only for the parts of the
prescription that were actually produced.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from load_optimizer.math.effort import format_number, round_half_up
from load_optimizer.models.decision_trace import DecisionTrace
from load_optimizer.models.enums import MuscleGroup, MusclePriority, RPE_TREND_MIN_SESSIONS
from load_optimizer.models.profiles import Band
from load_optimizer.models.recommendation import (
    ClusterTaperScheme,
    MyoRepScheme,
    StrengthSetDivision,
    TaperedScheme,
)
from load_optimizer.models.snapshot import SessionSnapshot

if TYPE_CHECKING:
    from load_optimizer.composer import FatigueProjection, MetabolicProjection


def _minutes(seconds: float) -> str:
    return format_number(round(seconds / 60, 1))


def _band(band: Band) -> str:
    return f"{format_number(band.low)}-{format_number(band.high)}"


def build_rationale(
    snapshot: SessionSnapshot,
    trace: DecisionTrace,
    *,
    session_volume: int,
    intensity: Band,
    avg_sets_per_exercise: float,
    concentrated_exercises: int | None = None,
    priorities: Mapping[MuscleGroup, MusclePriority] | None = None,
    metabolic: MetabolicProjection | None = None,
    fatigue: FatigueProjection | None = None,
    peak_force_drop_rep: int | None = None,
    strength_division: StrengthSetDivision | None = None,
    cluster: ClusterTaperScheme | None = None,
    tapered: TaperedScheme | None = None,
    myo_rep: MyoRepScheme | None = None,
) -> str:
    """Join one sentence per produced stage, in prescription order."""
    parts: list[str] = []
    fatigue_signals = snapshot.fatigue
    mid_intensity = round_half_up(intensity.midpoint)

    parts.append(f"Goal profile: {snapshot.profile.goal.name.lower()}.")
    parts.append(
        f"Base max sets: {trace.configured_max_sets}, adjusted to {session_volume} working sets."
    )

    if concentrated_exercises is not None:
        plural = "s" if concentrated_exercises > 1 else ""
        parts.append(
            f"Fatigue cap applied: concentrated session ({concentrated_exercises} "
            f"exercise{plural}), volume capped to stay within the per-exercise fatigue ceiling."
        )

    if fatigue_signals.hard_sessions > 0:
        parts.append(
            f"Fatigue: {fatigue_signals.hard_sessions} hard session(s) and "
            f"{fatigue_signals.sessions_last_7d} total in last 7 days."
        )

    if (
        fatigue_signals.rpe_trend_avg is not None
        and fatigue_signals.rpe_trend_session_count >= RPE_TREND_MIN_SESSIONS
    ):
        direction = fatigue_signals.rpe_trend_direction
        suffix = f", {direction.name.lower()}" if direction is not None else ""
        parts.append(
            f"RPE trend (last {fatigue_signals.rpe_trend_session_count} sessions): "
            f"avg {fatigue_signals.rpe_trend_avg:.1f}{suffix}."
        )

    last_rpe = snapshot.last_session_rpe
    if last_rpe is not None:
        note = " Moderating volume today." if last_rpe.had_high_rpe else ""
        parts.append(f"Last session set-level RPE: {last_rpe.summary}.{note}")

    if trace.forced_deload:
        parts.append(
            f"AUTO-DELOAD triggered after {snapshot.config.deload_frequency_weeks} consecutive "
            f"training weeks: volume halved, intensity capped."
        )

    context = snapshot.training_context
    if context is not None:
        parts.append(
            f'Active block "{context.block_name}", phase: {context.phase_name} '
            f"(wk {context.week_in_phase}/{context.total_weeks_in_phase})."
        )

    if priorities:
        under = [g.label for g, p in priorities.items() if p == MusclePriority.INCREASE]
        if under:
            parts.append(f"Under-volume muscles to prioritize: {', '.join(under)}.")

    if metabolic is not None and metabolic.target is not None and metabolic.per_set:
        projected = round_half_up(metabolic.projected_load(avg_sets_per_exercise))
        sets = metabolic.sets_per_exercise
        sets_text = f", {_band(sets)} sets/exercise" if sets is not None else ""
        parts.append(
            f"Metabolic load per exercise: ~{projected} (target: {_band(metabolic.target)}, "
            f"zone: {metabolic.zone.key}{sets_text})."
        )

    if fatigue is not None:
        parts.append(
            f"Neuromuscular fatigue: {fatigue.target_reps} total reps/exercise at "
            f"~{mid_intensity}% (target zone: {_band(fatigue.target)}, {fatigue.zone.key})."
        )

    if peak_force_drop_rep is not None and strength_division is not None:
        parts.append(
            f"Peak force drops after rep {peak_force_drop_rep} at ~{mid_intensity}%. "
            f"Strength prescription: {strength_division.sets}×{strength_division.reps_per_set} "
            f"with {round_half_up(strength_division.rest_s / 60)}+ min rest."
        )

    if cluster is not None:
        force, metabolic_block = cluster.force_block, cluster.metabolic_block
        effective = cluster.total_metabolic_load_with_drift
        parts.append(
            f"Cluster-Taper hybrid: Force {force.sets}×{force.reps} @ RPE "
            f"{format_number(force.rpe)} (peak-force capped, {_minutes(cluster.force_rest_s)} min rest), "
            f"then Metabolic {metabolic_block.sets}×{metabolic_block.reps} @ RPE "
            f"{format_number(metabolic_block.rpe)} ({_minutes(cluster.metabolic_rest_s)} min rest). "
            f"All @ {format_number(cluster.intensity_pct)}% 1RM (same weight). "
            f"~{cluster.total_reps} reps, metabolic load ~{round_half_up(cluster.total_metabolic_load)}"
            + (f", effective ~{round_half_up(effective)} (w/ RPE drift)." if effective is not None else ".")
        )

    if tapered is not None:
        effective = tapered.total_metabolic_load_with_drift
        parts.append(
            f"Tapered sets: {tapered.description}; ~{tapered.total_reps} reps, prescribed "
            f"metabolic load ~{round_half_up(tapered.total_metabolic_load)} (capped)"
            + (f", effective ~{round_half_up(effective)} (w/ RPE drift)." if effective is not None else ".")
        )

    if myo_rep is not None:
        parts.append(
            f"MYO-REP SESSION: {myo_rep.description} Fatigue-score targets suspended for "
            f"myo-rep exercises (fewer total reps, equivalent stimulus). Metabolic load still applies."
        )

    return " ".join(parts)
