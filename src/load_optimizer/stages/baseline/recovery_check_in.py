"""BASELINE stage: pre-session recovery check-in (sleep, HRV).

Reference:
    Plews et al. (2013). Training adaptation and heart rate variability in
    elite endurance athletes. Int J Sports Physiol Perform 8(6):688-694.
"""

from __future__ import annotations

from load_optimizer.models.adjustment import StageAdjustment
from load_optimizer.models.enums import (
    CHECK_IN_HRV_SUPPRESS_RATIO,
    CHECK_IN_HRV_SUPPRESS_SCALAR,
    CHECK_IN_SHORT_SLEEP_HOURS,
    CHECK_IN_SHORT_SLEEP_SCALAR,
    StageTier,
)
from load_optimizer.models.snapshot import SessionSnapshot
from load_optimizer.stages.base import AdjustmentStage


class RecoveryCheckInStage(AdjustmentStage):
    """Short sleep takes precedence over suppressed HRV; they never stack."""

    stage_id = "recovery_check_in"
    version = "1.0.0"
    tier = StageTier.BASELINE
    order = 50
    required_data = ["check_in"]

    def evaluate(self, snapshot: SessionSnapshot) -> StageAdjustment | None:
        check_in = snapshot.check_in
        if check_in is None:
            return None

        if check_in.sleep_hours is not None and check_in.sleep_hours < CHECK_IN_SHORT_SLEEP_HOURS:
            return self._adjust(
                CHECK_IN_SHORT_SLEEP_SCALAR,
                f"Slept {check_in.sleep_hours:.1f}h (<{CHECK_IN_SHORT_SLEEP_HOURS:.0f}h): "
                f"×{CHECK_IN_SHORT_SLEEP_SCALAR:.2f}.",
            )

        ratio = check_in.hrv_ratio
        if ratio is not None and ratio < CHECK_IN_HRV_SUPPRESS_RATIO:
            return self._adjust(
                CHECK_IN_HRV_SUPPRESS_SCALAR,
                f"HRV at {ratio:.0%} of baseline: ×{CHECK_IN_HRV_SUPPRESS_SCALAR:.2f}. "
                f"Ref: Plews et al. (2013).",
            )
        return None
