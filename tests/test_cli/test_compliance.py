"""Tests for the advisory plan compliance audit."""

from __future__ import annotations

import logging

from load_optimizer.models.history import ExerciseBlock
from load_optimizer.models.profiles import Band
from load_optimizer.models.recommendation import OptimizerRecommendation
from optimizer_cli.compliance import audit_plan


def _recommendation(**overrides) -> OptimizerRecommendation:
    defaults = {
        "session_volume": 20,
        "rep_scheme": "3-4 sets × 8-12 reps",
        "intensity_pct": Band(60, 75),
        "rest_s": Band(60, 120),
        "exercise_count": Band(4, 6),
        "rationale": "",
    }
    defaults.update(overrides)
    return OptimizerRecommendation(**defaults)


def _plan(count: int, sets: int, reps: str = "8-12", percent: float | None = 70.0) -> list[ExerciseBlock]:
    return [
        ExerciseBlock(exercise_id=f"ex-{i}", sets=sets, reps=reps, percent_1rm=percent)
        for i in range(count)
    ]


class TestAuditPlan:
    def test_compliant_plan(self) -> None:
        plan = [ExerciseBlock("warmup", sets=3, reps="10", percent_1rm=40, is_warmup=True)]
        plan += _plan(5, 4)
        report = audit_plan(plan, _recommendation())
        assert report.total_sets == 20
        assert report.exercise_count == 5
        assert report.mean_intensity_pct == 70.0
        assert report.compliant

    def test_set_tolerance(self) -> None:
        assert audit_plan(_plan(5, 3), _recommendation()).sets_ok is False
        report = audit_plan(_plan(4, 4) + [ExerciseBlock("extra", sets=1, reps="8")], _recommendation())
        assert report.total_sets == 17
        assert report.sets_ok

    def test_drifted_plan(self) -> None:
        report = audit_plan(_plan(2, 6, percent=85.0), _recommendation())
        assert not report.sets_ok
        assert not report.exercise_count_ok
        assert not report.intensity_ok
        assert not report.compliant

    def test_intensity_slack(self) -> None:
        assert audit_plan(_plan(5, 4, percent=79.0), _recommendation()).intensity_ok
        assert not audit_plan(_plan(5, 4, percent=81.0), _recommendation()).intensity_ok

    def test_missing_percentages_pass(self) -> None:
        report = audit_plan(_plan(5, 4, percent=None), _recommendation())
        assert report.mean_intensity_pct == 0.0
        assert report.intensity_ok

    def test_repeated_exercise_counted_once(self) -> None:
        plan = _plan(4, 4) + [ExerciseBlock("ex-0", sets=4, reps="8-12", percent_1rm=70)]
        assert audit_plan(plan, _recommendation()).exercise_count == 4

    def test_rep_scheme_checked_on_lead_exercises(self) -> None:
        recommendation = _recommendation(rep_scheme="Tapered: 4×10 @ RPE 8 (71%), then 2×8")
        assert audit_plan(_plan(5, 4, reps="10"), recommendation).rep_scheme_ok
        assert audit_plan(_plan(5, 5, reps="10-12"), recommendation).rep_scheme_ok
        assert not audit_plan(_plan(5, 4, reps="5"), recommendation).rep_scheme_ok
        assert not audit_plan(_plan(5, 7, reps="10"), recommendation).rep_scheme_ok

    def test_logs_summary(self, caplog) -> None:
        caplog.set_level(logging.INFO, logger="optimizer_cli.compliance")
        audit_plan(_plan(5, 4), _recommendation(), source="generator-v2")
        assert "Compliance check: generator-v2" in caplog.text
        assert "Overall: COMPLIANT" in caplog.text
        assert not any(r.levelno >= logging.WARNING for r in caplog.records)

    def test_warns_on_drift(self, caplog) -> None:
        caplog.set_level(logging.INFO, logger="optimizer_cli.compliance")
        audit_plan(_plan(2, 6), _recommendation(), source="plan.json")
        assert "Overall: NON-COMPLIANT" in caplog.text
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "plan.json" in warnings[0].getMessage()
