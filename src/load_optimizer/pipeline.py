"""Adjustment pipeline — folds stage adjustments into a session working-set count."""

from __future__ import annotations

import logging

from load_optimizer.math.effort import round_half_up
from load_optimizer.models.decision_trace import DecisionTrace, StageResult, StageStatus
from load_optimizer.models.enums import (
    DEFAULT_MAX_SETS_PER_SESSION,
    DELOAD_VOLUME_FRACTION,
    SESSION_VOLUME_CEILING,
    SESSION_VOLUME_FLOOR,
    StageTier,
)
from load_optimizer.models.snapshot import SessionSnapshot
from load_optimizer.registry import StageRegistry
from load_optimizer.stages.base import AdjustmentStage

logger = logging.getLogger(__name__)


def clamp_session_volume(volume: int) -> int:
    return max(SESSION_VOLUME_FLOOR, min(volume, SESSION_VOLUME_CEILING))


class AdjustmentPipeline:
    """Runs every registered stage in ``(tier, order)`` order.

    Composition per tier:
        BASELINE   multipliers are combined with the configured maximum and
                   rounded once.
        DAMPENING  each stage multiplies the running volume and rounds.
        OVERRIDE   a deload replaces the volume with half the maximum.

    The result is clamped to the global session band.
    """

    def __init__(self, registry: StageRegistry | None = None) -> None:
        self.registry = registry or StageRegistry()
        if registry is None:
            self.registry.discover_stages()

    def run(self, snapshot: SessionSnapshot) -> DecisionTrace:
        max_sets = snapshot.config.max_sets_per_session or DEFAULT_MAX_SETS_PER_SESSION
        stages = self.registry.get_all_stages()

        results: list[StageResult] = []
        baseline_product = float(max_sets)
        baseline_volume: int | None = None
        volume = round_half_up(baseline_product)
        forced_deload = False

        for stage in stages:
            if stage.tier > StageTier.BASELINE and baseline_volume is None:
                baseline_volume = volume = round_half_up(baseline_product)

            if not stage.has_required_data(snapshot):
                results.append(StageResult(
                    stage_id=stage.stage_id,
                    status=StageStatus.NOT_APPLICABLE,
                    explanation=f"Missing required data: {stage.required_data}",
                ))
                continue

            adjustment = stage.evaluate(snapshot)
            if adjustment is None:
                results.append(StageResult(
                    stage_id=stage.stage_id,
                    status=StageStatus.SKIPPED,
                    explanation="Stage made no adjustment.",
                ))
                continue

            if stage.tier == StageTier.BASELINE:
                baseline_product *= adjustment.volume_modifier
                volume = round_half_up(baseline_product)
            elif adjustment.forces_deload:
                forced_deload = True
                volume = round_half_up(max_sets * DELOAD_VOLUME_FRACTION)
            else:
                volume = round_half_up(volume * adjustment.volume_modifier)

            logger.debug(
                "Stage %s fired (x%.2f) -> %d sets", stage.stage_id,
                adjustment.volume_modifier, volume,
            )
            results.append(StageResult(
                stage_id=stage.stage_id,
                status=StageStatus.FIRED,
                adjustment=adjustment,
                volume_after=volume,
                explanation=adjustment.explanation,
            ))

        if baseline_volume is None:
            baseline_volume = volume = round_half_up(baseline_product)

        return DecisionTrace(
            stage_results=tuple(results),
            configured_max_sets=max_sets,
            baseline_volume=baseline_volume,
            pipeline_volume=clamp_session_volume(volume),
            forced_deload=forced_deload,
        )

    @property
    def stages(self) -> list[AdjustmentStage]:
        return self.registry.get_all_stages()
