"""Shared test fixtures: fixed clock, configs, sessions, history factories."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest

from load_optimizer.models.enums import (
    MuscleGroup,
    ReadinessLevel,
    SessionStructure,
    TrainingGoal,
)
from load_optimizer.models.history import CompletedSet, ExerciseBlock, HistoryEntry
from load_optimizer.models.profiles import resolve_profile
from load_optimizer.models.session import (
    OptimizerConfig,
    PreSessionCheckIn,
    SessionInput,
    TrainingContext,
)
from load_optimizer.models.signals import HistorySignals
from load_optimizer.models.snapshot import SessionSnapshot

FIXED_NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def make_entry(
    days_ago: float,
    sets: int = 4,
    exercises: int = 4,
    percent_1rm: float | None = 70.0,
    rpe_target: float | None = 7.5,
    session_rpe: float | None = None,
    completed_sets: tuple[CompletedSet, ...] = (),
    muscle_groups: tuple[MuscleGroup, ...] = (),
    now: datetime = FIXED_NOW,
) -> HistoryEntry:
    """One logged session ``days_ago`` days before ``now``."""
    blocks = tuple(
        ExerciseBlock(
            exercise_id=f"ex-{i}",
            sets=sets,
            reps="8-10",
            percent_1rm=percent_1rm,
            rpe_target=rpe_target,
        )
        for i in range(exercises)
    )
    return HistoryEntry(
        timestamp=now - timedelta(days=days_ago),
        exercises=blocks,
        session_rpe=session_rpe,
        completed_sets=completed_sets,
        muscle_groups_covered=muscle_groups,
    )


def make_history(days_ago: list[float], **kwargs) -> tuple[HistoryEntry, ...]:
    """Sessions at the given offsets, ordered newest first."""
    return tuple(make_entry(d, **kwargs) for d in sorted(days_ago))


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def default_config() -> OptimizerConfig:
    return OptimizerConfig()


@pytest.fixture
def hypertrophy_session() -> SessionInput:
    return SessionInput(goal=TrainingGoal.HYPERTROPHY, readiness=ReadinessLevel.MEDIUM, duration_min=90)


@pytest.fixture
def strength_session() -> SessionInput:
    return SessionInput(goal=TrainingGoal.STRENGTH, readiness=ReadinessLevel.MEDIUM, duration_min=90)


@pytest.fixture
def entry_factory() -> Callable[..., HistoryEntry]:
    return make_entry


@pytest.fixture
def four_week_streak() -> tuple[HistoryEntry, ...]:
    """Two sessions in each of the last four 7-day windows, nothing before."""
    return make_history([1, 3, 8, 10, 15, 17, 22, 24])


def make_snapshot(
    goal: TrainingGoal = TrainingGoal.HYPERTROPHY,
    readiness: ReadinessLevel = ReadinessLevel.MEDIUM,
    duration_min: float = 90,
    check_in: PreSessionCheckIn | None = None,
    session_structure: SessionStructure | None = None,
    config: OptimizerConfig | None = None,
    signals: HistorySignals | None = None,
    training_context: TrainingContext | None = None,
    volume_tolerance: int = 3,
    goal_bias: float = 50.0,
) -> SessionSnapshot:
    """A snapshot built directly, bypassing history signal computation."""
    return SessionSnapshot(
        config=config or OptimizerConfig(),
        session=SessionInput(
            goal=goal,
            readiness=readiness,
            duration_min=duration_min,
            check_in=check_in,
            session_structure=session_structure,
        ),
        profile=resolve_profile(goal),
        now=FIXED_NOW,
        signals=signals or HistorySignals(),
        training_context=training_context,
        volume_tolerance=volume_tolerance,
        goal_bias=goal_bias,
    )
