"""Tests for RPETrendStage — DAMPENING on the rolling session-RPE trend."""

from __future__ import annotations

import pytest

from conftest import make_snapshot
from load_optimizer.models.enums import TrendDirection
from load_optimizer.models.signals import FatigueSignals, HistorySignals
from load_optimizer.stages.dampening.rpe_trend import RPETrendStage


class TestRPETrendStage:
    def setup_method(self) -> None:
        self.stage = RPETrendStage()

    def _snapshot(
        self,
        avg: float | None,
        count: int = 5,
        direction: TrendDirection | None = TrendDirection.STABLE,
    ):
        fatigue = FatigueSignals(
            rpe_trend_avg=avg,
            rpe_trend_direction=direction,
            rpe_trend_session_count=count,
        )
        return make_snapshot(signals=HistorySignals(fatigue=fatigue))

    def test_not_applicable_without_trend(self) -> None:
        assert self.stage.has_required_data(self._snapshot(None, count=1)) is False

    def test_missing_average_makes_no_adjustment(self) -> None:
        assert self.stage.evaluate(self._snapshot(None, count=3)) is None

    def test_overreaching(self) -> None:
        assert self.stage.evaluate(self._snapshot(9.2)).volume_modifier == pytest.approx(0.80)

    def test_high_chronic_load(self) -> None:
        assert self.stage.evaluate(self._snapshot(8.6)).volume_modifier == pytest.approx(0.88)

    def test_rising_toward_overreach(self) -> None:
        adjustment = self.stage.evaluate(self._snapshot(8.2, direction=TrendDirection.RISING))
        assert adjustment.volume_modifier == pytest.approx(0.92)

    def test_stable_at_eight_skips(self) -> None:
        assert self.stage.evaluate(self._snapshot(8.2)) is None

    def test_coasting_bonus(self) -> None:
        adjustment = self.stage.evaluate(self._snapshot(5.5, direction=None, count=3))
        assert adjustment.volume_modifier == pytest.approx(1.05)

    def test_no_bonus_when_rising(self) -> None:
        assert self.stage.evaluate(self._snapshot(5.5, direction=TrendDirection.RISING)) is None

    def test_moderate_trend_skips(self) -> None:
        assert self.stage.evaluate(self._snapshot(7.0)) is None
