"""Cluster-taper hybrid solver for the upper half of the goal-bias slider.

A force block keeps every rep at or before the peak-force drop-off, then a
metabolic block at the same weight runs past it for the metabolic stimulus.
The viable intensity window is 68-78 % 1RM: below it force-capped sets are
too submaximal to reach the metabolic target, above it the session is pure
strength work.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace

from load_optimizer.math.accrued_fatigue import cluster_taper_drift_total
from load_optimizer.math.effort import (
    format_number,
    round_half_up,
    round_to_hundredth,
    round_to_tenth,
    rpe_at_intensity,
)
from load_optimizer.math.metabolic_stress import calculate_set_metabolic_load
from load_optimizer.math.peak_force import estimate_peak_force_drop_rep
from load_optimizer.models.enums import (
    CLUSTER_FORCE_REST_HIGH_S,
    CLUSTER_FORCE_REST_LOW_S,
    CLUSTER_FORCE_REST_THRESHOLD_PCT,
    CLUSTER_INTENSITY_MAX_PCT,
    CLUSTER_INTENSITY_MIN_PCT,
    CLUSTER_METABOLIC_REST_S,
    CLUSTER_MIN_METABOLIC_RPE,
    SOLVER_METABOLIC_GATE,
    SOLVER_MIN_REMAINING_REPS,
    SOLVER_REP_TOLERANCE,
)
from load_optimizer.models.profiles import Band
from load_optimizer.models.recommendation import ClusterTaperScheme, SetBlock

logger = logging.getLogger(__name__)

FORCE_SET_OPTIONS = (3, 2)
METABOLIC_REP_OPTIONS = (10, 9, 8)


def candidate_intensities(band: Band) -> list[float]:
    """Whole-percent steps of the band inside the hybrid window, centre first.

    Ties keep ascending order.
    """
    lo = max(CLUSTER_INTENSITY_MIN_PCT, band.low)
    hi = min(CLUSTER_INTENSITY_MAX_PCT, band.high)
    if lo > hi:
        return []
    steps = [lo + k for k in range(int(math.floor(hi - lo)) + 1)]
    mid = (lo + hi) / 2
    return sorted(steps, key=lambda pct: abs(pct - mid))


def prescribe_cluster_taper_sets(
    target_reps: int,
    intensity_band: Band,
    gate: float = SOLVER_METABOLIC_GATE,
) -> ClusterTaperScheme | None:
    """Find a force block plus metabolic block totalling ``target_reps`` (±10).

    Returns None when the band misses the hybrid window or no combination
    stays under the metabolic gate.
    """
    for intensity in candidate_intensities(intensity_band):
        force_reps = estimate_peak_force_drop_rep(intensity)

        for force_sets in FORCE_SET_OPTIONS:
            force_total = force_sets * force_reps
            remaining = target_reps - force_total
            if remaining < SOLVER_MIN_REMAINING_REPS:
                continue

            for metabolic_reps in METABOLIC_REP_OPTIONS:
                # The metabolic block has to go past the force drop-off
                if metabolic_reps <= force_reps:
                    continue

                metabolic_sets = max(1, round_half_up(remaining / metabolic_reps))
                total_reps = force_total + metabolic_sets * metabolic_reps
                if abs(total_reps - target_reps) > SOLVER_REP_TOLERANCE:
                    continue

                force_rpe = rpe_at_intensity(force_reps, intensity)
                metabolic_rpe = rpe_at_intensity(metabolic_reps, intensity)
                if metabolic_rpe < CLUSTER_MIN_METABOLIC_RPE:
                    continue

                total_load = (
                    force_sets * calculate_set_metabolic_load(intensity, force_reps, force_rpe)
                    + metabolic_sets * calculate_set_metabolic_load(intensity, metabolic_reps, metabolic_rpe)
                )
                if total_load > gate:
                    continue

                scheme = _build_scheme(
                    intensity,
                    SetBlock(force_sets, force_reps, round_to_tenth(force_rpe)),
                    SetBlock(metabolic_sets, metabolic_reps, round_to_tenth(metabolic_rpe)),
                    total_reps,
                    total_load,
                )
                logger.debug("Cluster-taper scheme for %d reps: %s", target_reps, scheme.description)
                return scheme

    logger.debug(
        "No cluster-taper scheme fits %d reps in %s-%s%%",
        target_reps, intensity_band.low, intensity_band.high,
    )
    return None


def _build_scheme(
    intensity: float,
    force: SetBlock,
    metabolic: SetBlock,
    total_reps: int,
    total_load: float,
) -> ClusterTaperScheme:
    force_rest = (
        CLUSTER_FORCE_REST_HIGH_S
        if intensity >= CLUSTER_FORCE_REST_THRESHOLD_PCT
        else CLUSTER_FORCE_REST_LOW_S
    )
    scheme = ClusterTaperScheme(
        force_block=force,
        metabolic_block=metabolic,
        intensity_pct=intensity,
        force_rest_s=force_rest,
        metabolic_rest_s=CLUSTER_METABOLIC_REST_S,
        total_reps=total_reps,
        total_metabolic_load=round_to_hundredth(total_load),
        description=(
            f"Force: {force.sets}×{force.reps} @ RPE {format_number(force.rpe)}, "
            f"Metabolic: {metabolic.sets}×{metabolic.reps} @ RPE {format_number(metabolic.rpe)} "
            f"(all @ {format_number(intensity)}% 1RM, same weight)"
        ),
    )
    return replace(
        scheme,
        total_metabolic_load_with_drift=round_to_hundredth(cluster_taper_drift_total(scheme)),
    )
