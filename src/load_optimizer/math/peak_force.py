"""Peak-force drop-off heuristic and strength set division.

Approximates the rep at which peak force starts to decline within a set,
standing in for linear-position-transducer data. Peak velocity/force
degrades once ~40-60 % of max reps are done, and the ratio is
intensity-dependent: at higher loads motor units saturate sooner.

Model:
    maxReps      = 30 × (100 / intensity − 1)                   [Epley]
    qualityRatio = 0.30 + 0.30 × ((90 − intensity) / 30) ^ 0.7  [concave]
    dropRep      = round(maxReps × qualityRatio), at least 1

Above 90 % the drop rep is always 1. Calibrated so that at 75 % (~10 max
reps) force drops around rep 5.

Reference:
    Sanchez-Medina & González-Badillo (2011). Velocity loss as an indicator
    of neuromuscular fatigue during resistance training. Med Sci Sports
    Exerc 43(9):1725-1734.
    Izquierdo et al. (2006). Effect of loading on unintentional lifting
    velocity declines during single sets of repetitions to failure.
    Int J Sports Med 27(9):718-724.
"""

from __future__ import annotations

from dataclasses import dataclass

from load_optimizer.math.effort import epley_max_reps, round_half_up
from load_optimizer.math.neuromuscular_fatigue import fatigue_multiplier
from load_optimizer.models.enums import (
    INTENSITY_CEILING_PCT,
    INTENSITY_FLOOR_PCT,
    PEAK_FORCE_BASE_RATIO,
    PEAK_FORCE_EXPONENT,
    PEAK_FORCE_NORMALISING_SPAN,
    PEAK_FORCE_RATIO_SPAN,
    PEAK_FORCE_SINGLE_REP_ABOVE_PCT,
    PEAK_FORCE_TABLE_INTENSITIES,
    STRENGTH_REST_DEFAULT_S,
    STRENGTH_REST_STEPS_S,
)
from load_optimizer.models.recommendation import StrengthSetDivision


def estimate_peak_force_drop_rep(intensity_pct: float) -> int:
    """Last rep whose peak force is still ≥95 % of the first rep's.

    Args:
        intensity_pct: Load as %1RM, clamped to 30-100.

    Returns:
        Number of quality reps before force drops (≥ 1).
    """
    intensity = max(INTENSITY_FLOOR_PCT, min(intensity_pct, INTENSITY_CEILING_PCT))
    if intensity > PEAK_FORCE_SINGLE_REP_ABOVE_PCT:
        return 1

    max_reps = epley_max_reps(intensity)
    normalised = (PEAK_FORCE_SINGLE_REP_ABOVE_PCT - intensity) / PEAK_FORCE_NORMALISING_SPAN
    quality_ratio = PEAK_FORCE_BASE_RATIO + PEAK_FORCE_RATIO_SPAN * normalised ** PEAK_FORCE_EXPONENT
    return max(1, round_half_up(max_reps * quality_ratio))


def strength_rest_seconds(intensity_pct: float) -> int:
    """Full neural recovery between sets: heavier → longer rest."""
    for threshold, rest_s in STRENGTH_REST_STEPS_S:
        if intensity_pct >= threshold:
            return rest_s
    return STRENGTH_REST_DEFAULT_S


def prescribe_strength_sets(total_reps: int, intensity_pct: float) -> StrengthSetDivision:
    """Divide prescribed total reps into sets capped at the drop-off rep.

    Every rep of every set is a quality rep at maximal force output.
    """
    reps_per_set = estimate_peak_force_drop_rep(intensity_pct)
    sets = max(1, -(-total_reps // reps_per_set))
    return StrengthSetDivision(
        sets=sets,
        reps_per_set=reps_per_set,
        rest_s=strength_rest_seconds(intensity_pct),
    )


@dataclass(frozen=True)
class PeakForceRow:
    intensity_pct: int
    max_reps: int
    drop_rep: int
    quality_ratio_pct: int
    fatigue_multiplier: float


def _peak_force_row(pct: int) -> PeakForceRow:
    max_reps = epley_max_reps(pct)
    drop_rep = estimate_peak_force_drop_rep(pct)
    return PeakForceRow(
        intensity_pct=pct,
        max_reps=round_half_up(max_reps),
        drop_rep=drop_rep,
        quality_ratio_pct=round_half_up(drop_rep / max_reps * 100),
        fatigue_multiplier=round_half_up(fatigue_multiplier(pct) * 10) / 10,
    )


# Display table for consumers; computed once at import
PEAK_FORCE_TABLE: tuple[PeakForceRow, ...] = tuple(
    _peak_force_row(pct) for pct in PEAK_FORCE_TABLE_INTENSITIES
)
