"""BASELINE stage: self-reported readiness.

Reference:
    Helms et al. (2018). Application of the repetitions in reserve-based
    rating of perceived exertion scale for resistance training.
"""

from __future__ import annotations

from load_optimizer.models.adjustment import StageAdjustment
from load_optimizer.models.enums import (
    READINESS_HIGH_SCALAR,
    READINESS_LOW_SCALAR,
    ReadinessLevel,
    StageTier,
)
from load_optimizer.models.snapshot import SessionSnapshot
from load_optimizer.stages.base import AdjustmentStage


class ReadinessStage(AdjustmentStage):
    """Low readiness cuts volume hard; high readiness adds a little."""

    stage_id = "readiness"
    version = "1.0.0"
    tier = StageTier.BASELINE
    order = 30
    required_data: list[str] = []

    def evaluate(self, snapshot: SessionSnapshot) -> StageAdjustment | None:
        readiness = snapshot.session.readiness
        if readiness == ReadinessLevel.LOW:
            return self._adjust(READINESS_LOW_SCALAR, f"Low readiness: ×{READINESS_LOW_SCALAR:.2f}.")
        if readiness == ReadinessLevel.HIGH:
            return self._adjust(READINESS_HIGH_SCALAR, f"High readiness: ×{READINESS_HIGH_SCALAR:.2f}.")
        return None
