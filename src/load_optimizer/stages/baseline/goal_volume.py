"""BASELINE stage: goal-profile volume multiplier.

Strength and power trade total sets for intensity; hypertrophy carries the
most volume (Schoenfeld et al., 2017).
"""

from __future__ import annotations

from load_optimizer.models.adjustment import StageAdjustment
from load_optimizer.models.enums import StageTier
from load_optimizer.models.snapshot import SessionSnapshot
from load_optimizer.stages.base import AdjustmentStage


class GoalVolumeStage(AdjustmentStage):
    """Scales the configured maximum by the goal profile's volume multiplier."""

    stage_id = "goal_volume"
    version = "1.0.0"
    tier = StageTier.BASELINE
    order = 10
    required_data: list[str] = []

    def evaluate(self, snapshot: SessionSnapshot) -> StageAdjustment | None:
        profile = snapshot.profile
        if profile.volume_multiplier == 1.0:
            return None
        return self._adjust(
            profile.volume_multiplier,
            f"{profile.goal.name.lower()} profile volume ×{profile.volume_multiplier:.2f}.",
        )
