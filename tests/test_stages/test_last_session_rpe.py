"""Tests for LastSessionRPEStage — DAMPENING on last session's set RPEs."""

from __future__ import annotations

import pytest

from conftest import make_snapshot
from load_optimizer.models.signals import HistorySignals, SetRPESummary
from load_optimizer.stages.dampening.last_session_rpe import LastSessionRPEStage


class TestLastSessionRPEStage:
    def setup_method(self) -> None:
        self.stage = LastSessionRPEStage()

    def _snapshot(self, had_high: bool):
        summary = SetRPESummary(summary="Squat: 4 sets, avg RPE 8.9 (all hard)", had_high_rpe=had_high)
        return make_snapshot(signals=HistorySignals(last_session_rpe=summary))

    def test_not_applicable_without_rated_sets(self) -> None:
        assert self.stage.has_required_data(make_snapshot()) is False

    def test_hard_last_session(self) -> None:
        adjustment = self.stage.evaluate(self._snapshot(had_high=True))
        assert adjustment is not None
        assert adjustment.volume_modifier == pytest.approx(0.92)
        assert "Squat" in adjustment.explanation

    def test_moderate_last_session_skips(self) -> None:
        assert self.stage.evaluate(self._snapshot(had_high=False)) is None
