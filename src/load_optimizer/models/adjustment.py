"""Stage adjustment output — what a single adjustment stage contributes."""

from __future__ import annotations

from dataclasses import dataclass

from load_optimizer.models.enums import StageTier


@dataclass(frozen=True)
class StageAdjustment:
    """A single stage's contribution to session volume.

    Stages produce these; the AdjustmentPipeline folds them, in tier order,
    into the session working-set count.
    """

    stage_id: str
    stage_version: str
    tier: StageTier

    volume_modifier: float = 1.0
    # OVERRIDE control signal: replace volume with the deload fraction
    forces_deload: bool = False
    explanation: str = ""
