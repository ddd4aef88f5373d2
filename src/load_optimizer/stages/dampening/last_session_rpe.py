"""DAMPENING stage: per-set RPE of the most recent session."""

from __future__ import annotations

from load_optimizer.models.adjustment import StageAdjustment
from load_optimizer.models.enums import LAST_SESSION_HIGH_RPE_SCALAR, StageTier
from load_optimizer.models.snapshot import SessionSnapshot
from load_optimizer.stages.base import AdjustmentStage


class LastSessionRPEStage(AdjustmentStage):
    """Trims 8% when the last session was very hard at set level."""

    stage_id = "last_session_rpe"
    version = "1.0.0"
    tier = StageTier.DAMPENING
    order = 30
    required_data = ["last_session_rpe"]

    def evaluate(self, snapshot: SessionSnapshot) -> StageAdjustment | None:
        summary = snapshot.last_session_rpe
        if summary is None or not summary.had_high_rpe:
            return None
        return self._adjust(
            LAST_SESSION_HIGH_RPE_SCALAR,
            f"Last session had many sets at RPE 8.5+ ({summary.summary}).",
        )
