"""Advisory compliance audit of a generated plan against a recommendation.

A downstream generator turns the recommendation into concrete exercises;
this checks that the plan it produced stayed inside the prescription. The
audit only logs. Non-compliance never blocks the plan.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Sequence

from load_optimizer.models.history import ExerciseBlock
from load_optimizer.models.recommendation import OptimizerRecommendation

logger = logging.getLogger(__name__)

SET_TOLERANCE = 3
INTENSITY_TOLERANCE_PCT = 5
SETS_PER_EXERCISE_TOLERANCE = 1
REP_SCHEME_CHECKED_EXERCISES = 3

# "5×5", "4×8-10"
_REP_SCHEME_PATTERN = re.compile(r"(\d+)×(\d+(?:-\d+)?)")


@dataclass(frozen=True)
class ComplianceReport:
    total_sets: int
    target_sets: int
    exercise_count: int
    mean_intensity_pct: float
    sets_ok: bool
    exercise_count_ok: bool
    intensity_ok: bool
    rep_scheme_ok: bool

    @property
    def compliant(self) -> bool:
        return self.sets_ok and self.exercise_count_ok and self.intensity_ok and self.rep_scheme_ok


def _rep_scheme_ok(rep_scheme: str, working: Sequence[ExerciseBlock]) -> bool:
    match = _REP_SCHEME_PATTERN.search(rep_scheme)
    if match is None:
        return True
    target_sets = int(match.group(1))
    target_low_reps = match.group(2).split("-")[0]
    for block in working[:REP_SCHEME_CHECKED_EXERCISES]:
        if target_low_reps not in block.reps:
            return False
        if abs(block.sets - target_sets) > SETS_PER_EXERCISE_TOLERANCE:
            return False
    return True


def _mark(ok: bool) -> str:
    return "ok" if ok else "DRIFT"


def audit_plan(
    plan_exercises: Sequence[ExerciseBlock],
    recommendation: OptimizerRecommendation,
    source: str = "plan",
) -> ComplianceReport:
    """Check a plan's sets, exercise count, intensity and rep scheme.

    Args:
        plan_exercises: The generated plan's exercise blocks, warm-ups included.
        recommendation: The prescription the plan was generated from.
        source: Label for the log lines (model or file name).
    """
    working = [block for block in plan_exercises if not block.is_warmup]
    total_sets = sum(block.sets for block in working)
    exercise_count = len({block.exercise_id for block in working})

    intensities = [block.percent_1rm for block in working if block.percent_1rm]
    mean_intensity = sum(intensities) / len(intensities) if intensities else 0.0
    band = recommendation.intensity_pct

    report = ComplianceReport(
        total_sets=total_sets,
        target_sets=recommendation.session_volume,
        exercise_count=exercise_count,
        mean_intensity_pct=mean_intensity,
        sets_ok=abs(total_sets - recommendation.session_volume) <= SET_TOLERANCE,
        exercise_count_ok=recommendation.exercise_count.contains(exercise_count),
        intensity_ok=not intensities or band.contains(mean_intensity, slack=INTENSITY_TOLERANCE_PCT),
        rep_scheme_ok=_rep_scheme_ok(recommendation.rep_scheme, working),
    )

    logger.info("Compliance check: %s", source)
    logger.info("  Sets: %d/%d (%s)", total_sets, report.target_sets, _mark(report.sets_ok))
    logger.info(
        "  Exercises: %d (target %s-%s) (%s)",
        exercise_count, recommendation.exercise_count.low, recommendation.exercise_count.high,
        _mark(report.exercise_count_ok),
    )
    logger.info(
        "  Intensity: %.0f%% (target %s-%s%%) (%s)",
        mean_intensity, band.low, band.high, _mark(report.intensity_ok),
    )
    logger.info("  Rep scheme: %s (%s)", recommendation.rep_scheme, _mark(report.rep_scheme_ok))
    logger.info("  Overall: %s", "COMPLIANT" if report.compliant else "NON-COMPLIANT")

    if not report.compliant:
        logger.warning("%s did not fully match the optimizer prescription", source)
    return report
