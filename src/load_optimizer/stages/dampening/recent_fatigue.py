"""DAMPENING stage: hard sessions in the trailing seven days.

A session counts as hard when its mean %1RM is at least 85, its mean RPE
target at least 8.5, or its session RPE at least 8.
"""

from __future__ import annotations

from load_optimizer.models.adjustment import StageAdjustment
from load_optimizer.models.enums import (
    HARD_SESSIONS_MODERATE,
    HARD_SESSIONS_MODERATE_SCALAR,
    HARD_SESSIONS_SEVERE,
    HARD_SESSIONS_SEVERE_SCALAR,
    SESSIONS_FOR_MODERATE_DAMPENING,
    StageTier,
)
from load_optimizer.models.snapshot import SessionSnapshot
from load_optimizer.stages.base import AdjustmentStage


class RecentFatigueStage(AdjustmentStage):
    stage_id = "recent_fatigue"
    version = "1.0.0"
    tier = StageTier.DAMPENING
    order = 10
    required_data = ["fatigue"]

    def evaluate(self, snapshot: SessionSnapshot) -> StageAdjustment | None:
        fatigue = snapshot.fatigue

        if fatigue.hard_sessions >= HARD_SESSIONS_SEVERE:
            return self._adjust(
                HARD_SESSIONS_SEVERE_SCALAR,
                f"{fatigue.hard_sessions} hard sessions in 7 days: backing off 20%.",
            )

        if (
            fatigue.hard_sessions >= HARD_SESSIONS_MODERATE
            and fatigue.sessions_last_7d >= SESSIONS_FOR_MODERATE_DAMPENING
        ):
            return self._adjust(
                HARD_SESSIONS_MODERATE_SCALAR,
                f"{fatigue.hard_sessions} hard of {fatigue.sessions_last_7d} sessions "
                f"in 7 days: backing off 10%.",
            )
        return None
