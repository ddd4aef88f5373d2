"""Frozen session snapshot — immutable view of all inputs for a single engine call."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from load_optimizer.models.profiles import GoalProfile
from load_optimizer.models.session import (
    OptimizerConfig,
    PreSessionCheckIn,
    SessionInput,
    TrainingContext,
)
from load_optimizer.models.signals import (
    FatigueSignals,
    HistorySignals,
    SetRPESummary,
)


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything an adjustment stage may look at.

    Built once by the engine from the raw inputs and the history signals,
    then handed to every stage. Freezing prevents stages from leaking state
    into each other.
    """

    config: OptimizerConfig
    session: SessionInput
    profile: GoalProfile
    now: datetime
    signals: HistorySignals = field(default_factory=HistorySignals)
    training_context: TrainingContext | None = None
    volume_tolerance: int = 3
    goal_bias: float = 50.0

    # Convenience accessors so stages can declare required_data by name
    @property
    def check_in(self) -> PreSessionCheckIn | None:
        return self.session.check_in

    @property
    def fatigue(self) -> FatigueSignals:
        return self.signals.fatigue

    @property
    def last_session_rpe(self) -> SetRPESummary | None:
        return self.signals.last_session_rpe

    @property
    def rpe_trend_avg(self) -> float | None:
        return self.signals.fatigue.rpe_trend_avg

    @property
    def deload_frequency_weeks(self) -> int | None:
        if not self.config.auto_deload:
            return None
        return self.config.deload_frequency_weeks or None
