"""AdjustmentStage: one named multiplier in the session-volume fold."""

from __future__ import annotations

from abc import ABC, abstractmethod

from load_optimizer.models.adjustment import StageAdjustment
from load_optimizer.models.enums import StageTier
from load_optimizer.models.snapshot import SessionSnapshot


class AdjustmentStage(ABC):
    """A single scalar applied to the session volume.

    Class attributes identify the stage and place it in the fold:
    ``stage_id`` and ``version`` go into the trace, ``tier`` and ``order``
    fix its position, and ``required_data`` names SessionSnapshot
    attributes that must be present (not None, not empty) for the stage to
    run at all.

    ``evaluate`` returns a StageAdjustment, or None to leave the volume
    alone.
    """

    stage_id: str
    version: str
    tier: StageTier
    order: int
    required_data: list[str]

    def has_required_data(self, snapshot: SessionSnapshot) -> bool:
        for name in self.required_data:
            value = getattr(snapshot, name, None)
            # Empty sequences count as missing
            if value is None or (isinstance(value, (list, tuple)) and not value):
                return False
        return True

    @abstractmethod
    def evaluate(self, snapshot: SessionSnapshot) -> StageAdjustment | None:
        ...

    def _adjust(
        self,
        volume_modifier: float,
        explanation: str,
        forces_deload: bool = False,
    ) -> StageAdjustment:
        return StageAdjustment(
            stage_id=self.stage_id,
            stage_version=self.version,
            tier=self.tier,
            volume_modifier=volume_modifier,
            forces_deload=forces_deload,
            explanation=explanation,
        )
