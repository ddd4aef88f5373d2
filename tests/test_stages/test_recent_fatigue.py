"""Tests for RecentFatigueStage — DAMPENING on hard sessions in 7 days."""

from __future__ import annotations

import pytest

from conftest import make_snapshot
from load_optimizer.models.enums import StageTier
from load_optimizer.models.signals import FatigueSignals, HistorySignals
from load_optimizer.stages.dampening.recent_fatigue import RecentFatigueStage


class TestRecentFatigueStage:
    def setup_method(self) -> None:
        self.stage = RecentFatigueStage()

    def _snapshot(self, hard: int, total: int):
        return make_snapshot(
            signals=HistorySignals(fatigue=FatigueSignals(sessions_last_7d=total, hard_sessions=hard))
        )

    def test_is_dampening_tier(self) -> None:
        assert self.stage.tier == StageTier.DAMPENING

    def test_three_hard_sessions(self) -> None:
        adjustment = self.stage.evaluate(self._snapshot(hard=3, total=3))
        assert adjustment is not None
        assert adjustment.volume_modifier == pytest.approx(0.80)

    def test_two_hard_of_four(self) -> None:
        adjustment = self.stage.evaluate(self._snapshot(hard=2, total=4))
        assert adjustment is not None
        assert adjustment.volume_modifier == pytest.approx(0.90)

    def test_two_hard_of_three_skips(self) -> None:
        assert self.stage.evaluate(self._snapshot(hard=2, total=3)) is None

    def test_fresh_athlete_skips(self) -> None:
        assert self.stage.evaluate(self._snapshot(hard=0, total=5)) is None
