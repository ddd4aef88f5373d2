"""DAMPENING stage: rolling session-RPE trend.

Reference:
    Foster (1998). Monitoring training in athletes with reference to
    overtraining syndrome. Med Sci Sports Exerc 30(7):1164-1168.

Thresholds (mean of the last five rated sessions, at least two needed):
    ≥ 9.0            → overreaching, ×0.80
    ≥ 8.5            → high chronic load, ×0.88
    ≥ 8.0 and rising → trending toward overreach, ×0.92
    ≤ 6.0, not rising → coasting, ×1.05
"""

from __future__ import annotations

from load_optimizer.models.adjustment import StageAdjustment
from load_optimizer.models.enums import (
    RPE_TREND_COASTING,
    RPE_TREND_COASTING_SCALAR,
    RPE_TREND_HIGH,
    RPE_TREND_HIGH_SCALAR,
    RPE_TREND_MIN_SESSIONS,
    RPE_TREND_OVERREACHING,
    RPE_TREND_OVERREACHING_SCALAR,
    RPE_TREND_RISING,
    RPE_TREND_RISING_SCALAR,
    StageTier,
    TrendDirection,
)
from load_optimizer.models.snapshot import SessionSnapshot
from load_optimizer.stages.base import AdjustmentStage


class RPETrendStage(AdjustmentStage):
    stage_id = "rpe_trend"
    version = "1.0.0"
    tier = StageTier.DAMPENING
    order = 20
    required_data = ["rpe_trend_avg"]

    def evaluate(self, snapshot: SessionSnapshot) -> StageAdjustment | None:
        fatigue = snapshot.fatigue
        if fatigue.rpe_trend_session_count < RPE_TREND_MIN_SESSIONS:
            return None

        avg = snapshot.rpe_trend_avg
        if avg is None:
            return None
        rising = fatigue.rpe_trend_direction == TrendDirection.RISING

        if avg >= RPE_TREND_OVERREACHING:
            return self._adjust(
                RPE_TREND_OVERREACHING_SCALAR,
                f"Session RPE averaging {avg:.1f}: overreaching, cutting 20%.",
            )
        if avg >= RPE_TREND_HIGH:
            return self._adjust(
                RPE_TREND_HIGH_SCALAR,
                f"Session RPE averaging {avg:.1f}: high chronic load, cutting 12%.",
            )
        if avg >= RPE_TREND_RISING and rising:
            return self._adjust(
                RPE_TREND_RISING_SCALAR,
                f"Session RPE {avg:.1f} and rising: cutting 8%.",
            )
        if avg <= RPE_TREND_COASTING and not rising:
            return self._adjust(
                RPE_TREND_COASTING_SCALAR,
                f"Session RPE averaging {avg:.1f}: room for 5% more volume.",
            )
        return None
