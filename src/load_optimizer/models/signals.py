"""History-derived signals, computed once per call against a single clock."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from load_optimizer.models.enums import MuscleGroup, TrendDirection


@dataclass(frozen=True)
class FatigueSignals:
    """Recent load (trailing 7 days) and session-RPE trend (last 5 rated)."""

    sessions_last_7d: int = 0
    hard_sessions: int = 0
    total_sets: int = 0
    total_tonnage: float = 0.0
    rpe_trend_avg: float | None = None
    rpe_trend_direction: TrendDirection | None = None
    rpe_trend_session_count: int = 0


@dataclass(frozen=True)
class SetRPESummary:
    """Per-exercise RPE summary of the most recent session."""

    summary: str
    had_high_rpe: bool


@dataclass(frozen=True)
class HistorySignals:
    fatigue: FatigueSignals = field(default_factory=FatigueSignals)
    last_session_rpe: SetRPESummary | None = None
    consecutive_training_weeks: int = 0
    weekly_sets_by_muscle: Mapping[MuscleGroup, float] = field(
        default_factory=lambda: MappingProxyType({})
    )
    history_length: int = 0
