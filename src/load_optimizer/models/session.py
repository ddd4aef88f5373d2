"""Per-call inputs: user-level optimizer settings, session facts, block context."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from load_optimizer.models.enums import (
    DEFAULT_MAX_SETS_PER_SESSION,
    MuscleGroup,
    ReadinessLevel,
    RepRangePreference,
    SessionStructure,
    TrainingGoal,
)


@dataclass(frozen=True)
class OptimizerConfig:
    """User-level optimizer settings, loaded from durable storage by the caller."""

    max_sets_per_session: int = DEFAULT_MAX_SETS_PER_SESSION
    rep_range_preference: RepRangePreference = RepRangePreference.AUTO
    # Weekly working-set targets; groups without a target are not tracked
    target_sets_per_muscle_group: Mapping[MuscleGroup, float] = field(
        default_factory=lambda: MappingProxyType({})
    )
    auto_deload: bool = True
    deload_frequency_weeks: int | None = 4


DEFAULT_OPTIMIZER_CONFIG = OptimizerConfig()


@dataclass(frozen=True)
class PreSessionCheckIn:
    """Optional recovery check-in taken right before the session."""

    sleep_hours: float | None = None
    hrv_baseline_ms: float | None = None
    hrv_today_ms: float | None = None

    @property
    def hrv_ratio(self) -> float | None:
        if self.hrv_today_ms is None or not self.hrv_baseline_ms or self.hrv_baseline_ms <= 0:
            return None
        return self.hrv_today_ms / self.hrv_baseline_ms


@dataclass(frozen=True)
class SessionInput:
    """The athlete's facts for the session being prescribed."""

    goal: TrainingGoal = TrainingGoal.GENERAL
    readiness: ReadinessLevel = ReadinessLevel.MEDIUM
    duration_min: float = 60.0
    check_in: PreSessionCheckIn | None = None
    session_structure: SessionStructure | None = None

    @property
    def is_low_readiness(self) -> bool:
        return self.readiness == ReadinessLevel.LOW


@dataclass(frozen=True)
class TrainingContext:
    """Active periodization block, if the athlete is inside one.

    Only the phase name shifts the scalars; the rest is carried into the
    rationale.
    """

    phase_name: str
    week_in_phase: int = 1
    total_weeks_in_phase: int = 1
    block_name: str = ""

    @property
    def phase_key(self) -> str:
        return self.phase_name.lower()
