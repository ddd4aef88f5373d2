"""BASELINE stage: periodization-phase volume scalar."""

from __future__ import annotations

from load_optimizer.models.adjustment import StageAdjustment
from load_optimizer.models.enums import StageTier
from load_optimizer.models.profiles import PHASE_VOLUME_SCALARS, match_phase
from load_optimizer.models.snapshot import SessionSnapshot
from load_optimizer.stages.base import AdjustmentStage


class PhaseVolumeStage(AdjustmentStage):
    """Deload/taper halves volume; accumulation and hypertrophy blocks add to it."""

    stage_id = "phase_volume"
    version = "1.0.0"
    tier = StageTier.BASELINE
    order = 40
    required_data = ["training_context"]

    def evaluate(self, snapshot: SessionSnapshot) -> StageAdjustment | None:
        phase_name = snapshot.training_context.phase_name  # type: ignore[union-attr]
        scalar = match_phase(phase_name, PHASE_VOLUME_SCALARS, 1.0)
        if scalar == 1.0:
            return None
        return self._adjust(scalar, f"Phase '{phase_name}': ×{scalar:.2f}.")
