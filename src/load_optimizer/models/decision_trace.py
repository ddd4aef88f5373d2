"""Decision trace — audit trail of how the pipeline reached its session volume."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import auto, IntEnum

from load_optimizer.models.adjustment import StageAdjustment


class StageStatus(IntEnum):
    """Whether a stage fired, was skipped, or was not applicable."""

    FIRED = auto()
    SKIPPED = auto()
    NOT_APPLICABLE = auto()


@dataclass(frozen=True)
class StageResult:
    """Record of a single stage's evaluation during an engine call."""

    stage_id: str
    status: StageStatus
    adjustment: StageAdjustment | None = None
    volume_after: int | None = None
    explanation: str = ""


@dataclass(frozen=True)
class DecisionTrace:
    """Complete audit trail for a single engine call."""

    stage_results: tuple[StageResult, ...] = field(default_factory=tuple)
    configured_max_sets: int = 0
    baseline_volume: int = 0
    pipeline_volume: int = 0
    forced_deload: bool = False

    def fired(self) -> tuple[StageResult, ...]:
        return tuple(r for r in self.stage_results if r.status == StageStatus.FIRED)

    def get(self, stage_id: str) -> StageResult | None:
        for result in self.stage_results:
            if result.stage_id == stage_id:
                return result
        return None
