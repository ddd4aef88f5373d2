"""Tapered two-phase set solver for hypertrophy.

Lead sets are prescribed at a target RPE and Epley derives the weight;
taper sets keep that weight with fewer reps, so their RPE falls out of
Epley too rather than being hand-picked. The first combination that hits
the target total reps (±10) without exceeding the metabolic gate wins.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from load_optimizer.math.accrued_fatigue import tapered_drift_total
from load_optimizer.math.effort import (
    format_number,
    intensity_for_rpe,
    round_half_up,
    round_to_hundredth,
    rpe_at_intensity,
)
from load_optimizer.math.metabolic_stress import calculate_set_metabolic_load
from load_optimizer.models.enums import (
    SOLVER_METABOLIC_GATE,
    SOLVER_MIN_REMAINING_REPS,
    SOLVER_REP_TOLERANCE,
    TAPERED_LEAD_INTENSITY_MAX_PCT,
    TAPERED_LEAD_INTENSITY_MIN_PCT,
)
from load_optimizer.models.recommendation import TaperedScheme

logger = logging.getLogger(__name__)

# Search order is preference order: RPE 8 first, then the longer lead sets
LEAD_RPE_OPTIONS = (8.0, 8.5, 7.5)
LEAD_REP_OPTIONS = (10, 9, 8)
LEAD_SET_OPTIONS = (2, 3)
TAPER_REP_OPTIONS = (8, 7, 6, 5)


def prescribe_tapered_sets(
    target_reps: int,
    gate: float = SOLVER_METABOLIC_GATE,
) -> TaperedScheme | None:
    """Search lead/taper combinations for ``target_reps`` total reps.

    Returns:
        The first feasible TaperedScheme, or None when nothing fits. None is
        a normal outcome: the caller keeps its uniform-set prescription.
    """
    for lead_rpe in LEAD_RPE_OPTIONS:
        for lead_reps in LEAD_REP_OPTIONS:
            intensity = intensity_for_rpe(lead_reps, lead_rpe)
            if not TAPERED_LEAD_INTENSITY_MIN_PCT <= intensity <= TAPERED_LEAD_INTENSITY_MAX_PCT:
                continue
            load_per_lead_set = calculate_set_metabolic_load(intensity, lead_reps, lead_rpe)

            for lead_sets in LEAD_SET_OPTIONS:
                lead_total = lead_sets * lead_reps
                remaining = target_reps - lead_total
                if remaining < SOLVER_MIN_REMAINING_REPS:
                    continue

                for taper_reps in TAPER_REP_OPTIONS:
                    if taper_reps >= lead_reps:
                        continue
                    taper_sets = max(1, round_half_up(remaining / taper_reps))
                    total_reps = lead_total + taper_sets * taper_reps
                    if abs(total_reps - target_reps) > SOLVER_REP_TOLERANCE:
                        continue

                    taper_rpe = rpe_at_intensity(taper_reps, intensity)
                    total_load = (
                        lead_sets * load_per_lead_set
                        + taper_sets * calculate_set_metabolic_load(intensity, taper_reps, taper_rpe)
                    )
                    if total_load > gate:
                        continue

                    scheme = TaperedScheme(
                        lead_sets=lead_sets,
                        lead_reps=lead_reps,
                        lead_rpe=lead_rpe,
                        lead_intensity_pct=intensity,
                        taper_sets=taper_sets,
                        taper_reps=taper_reps,
                        taper_rpe=taper_rpe,
                        total_reps=total_reps,
                        total_metabolic_load=round_to_hundredth(total_load),
                        description=(
                            f"{lead_sets}×{lead_reps} @ RPE {format_number(lead_rpe)} ({intensity}%), "
                            f"then {taper_sets}×{taper_reps} @ RPE {format_number(taper_rpe)} (same weight)"
                        ),
                    )
                    logger.debug("Tapered scheme for %d reps: %s", target_reps, scheme.description)
                    return _with_drift(scheme)

    logger.debug("No tapered scheme fits %d reps under gate %.0f", target_reps, gate)
    return None


def _with_drift(scheme: TaperedScheme) -> TaperedScheme:
    return replace(
        scheme,
        total_metabolic_load_with_drift=round_to_hundredth(tapered_drift_total(scheme)),
    )
