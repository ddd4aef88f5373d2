"""Optimizer recommendation — the sole output of the load optimizer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from load_optimizer.models.enums import (
    MuscleGroup,
    MusclePriority,
    StressZone,
    TrainingGoal,
    VolumeStatus,
)
from load_optimizer.models.profiles import Band


@dataclass(frozen=True)
class SetBlock:
    sets: int
    reps: int
    rpe: float


@dataclass(frozen=True)
class TaperedScheme:
    """Lead sets near the target RPE, then taper sets at the same weight."""

    lead_sets: int
    lead_reps: int
    lead_rpe: float
    lead_intensity_pct: float
    taper_sets: int
    taper_reps: int
    taper_rpe: float
    total_reps: int
    total_metabolic_load: float
    description: str
    # Drift-aware total, informational only
    total_metabolic_load_with_drift: float | None = None


@dataclass(frozen=True)
class ClusterTaperScheme:
    """Peak-force capped block followed by a metabolic block at one weight."""

    force_block: SetBlock
    metabolic_block: SetBlock
    intensity_pct: float
    force_rest_s: int
    metabolic_rest_s: int
    total_reps: int
    total_metabolic_load: float
    description: str
    total_metabolic_load_with_drift: float | None = None


@dataclass(frozen=True)
class MyoRepScheme:
    activation_reps: Band
    mini_set_reps: Band
    max_mini_sets: int
    mini_set_rest_s: int
    intensity_pct: float
    description: str


@dataclass(frozen=True)
class StrengthSetDivision:
    sets: int
    reps_per_set: int
    rest_s: int


@dataclass(frozen=True)
class WeeklyVolumeEntry:
    current: int
    target: float
    status: VolumeStatus


@dataclass(frozen=True)
class OptimizerRecommendation:
    """Concrete session parameters a downstream generator must honor.

    Optional fields are None when their stage did not apply.
    """

    session_volume: int
    rep_scheme: str
    intensity_pct: Band
    rest_s: Band
    exercise_count: Band
    rationale: str

    muscle_group_priorities: Mapping[MuscleGroup, MusclePriority] | None = None
    weekly_volume_status: Mapping[MuscleGroup, WeeklyVolumeEntry] | None = None
    suggested_focus: TrainingGoal | None = None

    # Metabolic stress, per exercise
    metabolic_load_target: Band | None = None
    metabolic_load_zone: StressZone | None = None
    metabolic_load_per_set: float | None = None
    metabolic_sets_per_exercise: Band | None = None

    # Neuromuscular fatigue, per exercise
    fatigue_score_target: Band | None = None
    fatigue_score_zone: StressZone | None = None
    target_reps_per_exercise: int | None = None

    # Strength / power
    peak_force_drop_rep: int | None = None
    strength_set_division: StrengthSetDivision | None = None

    tapered_scheme: TaperedScheme | None = None
    cluster_taper_scheme: ClusterTaperScheme | None = None
    myo_rep_scheme: MyoRepScheme | None = None

    last_session_rpe_summary: str | None = None
