"""Tests for ReadinessStage — BASELINE self-reported readiness."""

from __future__ import annotations

import pytest

from conftest import make_snapshot
from load_optimizer.models.enums import ReadinessLevel
from load_optimizer.stages.baseline.readiness import ReadinessStage


class TestReadinessStage:
    def setup_method(self) -> None:
        self.stage = ReadinessStage()

    def test_low_readiness_cuts_volume(self) -> None:
        adjustment = self.stage.evaluate(make_snapshot(readiness=ReadinessLevel.LOW))
        assert adjustment is not None
        assert adjustment.volume_modifier == pytest.approx(0.55)

    def test_high_readiness_adds_volume(self) -> None:
        adjustment = self.stage.evaluate(make_snapshot(readiness=ReadinessLevel.HIGH))
        assert adjustment is not None
        assert adjustment.volume_modifier == pytest.approx(1.10)

    def test_medium_readiness_skips(self) -> None:
        assert self.stage.evaluate(make_snapshot(readiness=ReadinessLevel.MEDIUM)) is None

    def test_free_text_parsing(self) -> None:
        assert ReadinessLevel.parse("Low (Recovery Focus)") == ReadinessLevel.LOW
        assert ReadinessLevel.parse("High - ready to push") == ReadinessLevel.HIGH
        assert ReadinessLevel.parse("ok") == ReadinessLevel.MEDIUM
