"""Epley-based intensity ↔ effort (RPE) conversions.

Epley: 1RM = weight × (1 + reps / 30), so the estimated max reps at a given
%1RM is 30 × (100 / pct − 1). RPE = 10 − RIR, where RIR is max reps minus the
reps actually performed.

Reference:
    Epley (1985). Poundage Chart. Boyd Epley Workout.
    Helms et al. (2016). Application of the repetitions in reserve-based
    RPE scale for resistance training. Strength Cond J 38(4):42-49.
"""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Built-in round() uses banker's rounding (round(2.5) == 2), which would
    make set counts depend on parity.
    """
    return math.floor(value + 0.5)


def round_to_tenth(value: float) -> float:
    return round_half_up(value * 10) / 10


def round_to_hundredth(value: float) -> float:
    return round_half_up(value * 100) / 100


def format_number(value: float) -> str:
    """Render 8.0 as "8" and 8.5 as "8.5" in prescription text."""
    return f"{value:g}"


def reps_in_reserve(rpe: float) -> float:
    """RIR = 10 − RPE, floored at 0."""
    return max(0.0, 10 - rpe)


def epley_max_reps(intensity_pct: float) -> float:
    """Theoretical max reps at ``intensity_pct`` %1RM (0 at or above 100 %)."""
    if intensity_pct >= 100:
        return 0.0
    if intensity_pct <= 0:
        return math.inf
    return 30 * (100 / intensity_pct - 1)


def intensity_for_rpe(reps: int, target_rpe: float) -> int:
    """%1RM that makes ``reps`` land at ``target_rpe`` (Epley inverse).

    Example: 10 reps @ RPE 8 → 12 effective max reps → 71 %.
    """
    effective_max_reps = reps + reps_in_reserve(target_rpe)
    return round_half_up(100 / (1 + effective_max_reps / 30))


def rpe_at_intensity(reps: int, intensity_pct: float) -> float:
    """Epley-consistent RPE for ``reps`` at ``intensity_pct``, in [1, 10]."""
    if intensity_pct >= 100:
        return 10.0
    if intensity_pct <= 0:
        return 1.0
    rir = max(0.0, epley_max_reps(intensity_pct) - reps)
    return min(10.0, max(1.0, round_to_tenth(10 - rir)))
