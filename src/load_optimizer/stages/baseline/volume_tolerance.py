"""BASELINE stage: athlete-declared volume tolerance (1-5)."""

from __future__ import annotations

from load_optimizer.models.adjustment import StageAdjustment
from load_optimizer.models.enums import VOLUME_TOLERANCE_SCALARS, StageTier
from load_optimizer.models.snapshot import SessionSnapshot
from load_optimizer.stages.base import AdjustmentStage


def clamp_tolerance(volume_tolerance: float) -> int:
    """First level in 1..5 at or above the declared tolerance; 5 beyond it."""
    for level in range(1, 5):
        if volume_tolerance <= level:
            return level
    return 5


class VolumeToleranceStage(AdjustmentStage):
    stage_id = "volume_tolerance"
    version = "1.0.0"
    tier = StageTier.BASELINE
    order = 20
    required_data: list[str] = []

    def evaluate(self, snapshot: SessionSnapshot) -> StageAdjustment | None:
        level = clamp_tolerance(snapshot.volume_tolerance)
        scalar = VOLUME_TOLERANCE_SCALARS[level]
        if scalar == 1.0:
            return None
        return self._adjust(scalar, f"Volume tolerance {level}/5: ×{scalar:.2f}.")
