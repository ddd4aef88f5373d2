"""Neuromuscular fatigue (Hanley) — quadratic penalty approaching 1RM.

    Score = Reps × (100 / (100 − Intensity))²

At 90 % 1RM each rep costs 100 points; at 70 % only ~11. Used in reverse to
prescribe total reps per exercise for a target score:

    Reps = TargetScore / (100 / (100 − Intensity))²

At or above 100 % there are no quality reps left, so the forward score is
unbounded (``math.inf``) and the reverse yields 0 reps.
"""

from __future__ import annotations

import math
from typing import Iterable

from load_optimizer.math.metabolic_stress import SetSpec


def fatigue_multiplier(intensity_pct: float) -> float:
    """Per-rep cost at ``intensity_pct``; ``inf`` at or above 100 %."""
    if intensity_pct >= 100:
        return math.inf
    return (100 / (100 - intensity_pct)) ** 2


def calculate_set_fatigue_score(reps: float, intensity_pct: float) -> float:
    """Fatigue score for one set. Returns exactly ``reps`` at 0 % intensity."""
    if intensity_pct >= 100:
        return math.inf
    return reps * fatigue_multiplier(intensity_pct)


def calculate_session_fatigue_score(sets: Iterable[SetSpec]) -> float:
    """Sum of per-set fatigue scores for one exercise."""
    return math.fsum(calculate_set_fatigue_score(s.reps, s.intensity_pct) for s in sets)


def reverse_calculate_reps(target_score: float, intensity_pct: float) -> float:
    """Total reps that reach ``target_score`` at ``intensity_pct`` (unrounded)."""
    if intensity_pct >= 100:
        return 0.0
    return target_score / fatigue_multiplier(intensity_pct)
