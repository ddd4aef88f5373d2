"""OVERRIDE stage: scheduled auto-deload.

Counts consecutive 7-day windows, walking back from now, that hold at least
two sessions. Once the streak reaches the configured deload frequency the
session volume is replaced with half the configured maximum.

Reference:
    Israetel, Hoffmann & Smith (2019). Scientific Principles of
    Hypertrophy Training: deload cadence after 3-6 accumulation weeks.
"""

from __future__ import annotations

from load_optimizer.models.adjustment import StageAdjustment
from load_optimizer.models.enums import DELOAD_VOLUME_FRACTION, StageTier
from load_optimizer.models.snapshot import SessionSnapshot
from load_optimizer.stages.base import AdjustmentStage


class AutoDeloadStage(AdjustmentStage):
    stage_id = "auto_deload"
    version = "1.0.0"
    tier = StageTier.OVERRIDE
    order = 10
    required_data = ["deload_frequency_weeks"]

    def evaluate(self, snapshot: SessionSnapshot) -> StageAdjustment | None:
        frequency = snapshot.deload_frequency_weeks
        weeks = snapshot.signals.consecutive_training_weeks
        if frequency is None or weeks < frequency:
            return None
        return self._adjust(
            DELOAD_VOLUME_FRACTION,
            f"{weeks} consecutive training weeks (deload every {frequency}): "
            f"volume halved, intensity capped.",
            forces_deload=True,
        )
