"""Accrued fatigue — intra-session RPE drift on top of the metabolic model.

The metabolic formula treats each set in isolation, but later sets at the
same load and reps feel harder. The heuristic:

    effective RPE(i) = prescribed RPE + 0.15 × i      (i 0-based, clamped 1-10)

0.15 per set assumes 2-3 min rest; the literature reports ~0.3-0.5 at
60-90 s and ~0.12-0.18 at 120-180 s. The drift-aware total is reported next
to the no-drift total for display only; solvers never gate on it.

Reference:
    Helms et al. (2018). RPE and velocity relationships for the back squat,
    bench press, and deadlift in powerlifters. J Strength Cond Res 32(2).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from load_optimizer.math.metabolic_stress import (
    SetSpec,
    calculate_set_metabolic_load,
    repeated_sets,
)
from load_optimizer.models.enums import RPE_DRIFT_PER_SET
from load_optimizer.models.recommendation import ClusterTaperScheme, TaperedScheme


@dataclass(frozen=True)
class DriftedLoad:
    total_load: float
    per_set_loads: tuple[float, ...]
    effective_rpes: tuple[float, ...]


def effective_rpe(
    set_index: int,
    prescribed_rpe: float,
    drift_per_set: float = RPE_DRIFT_PER_SET,
) -> float:
    """RPE actually felt on the ``set_index``-th set (0-based)."""
    return min(10.0, max(1.0, prescribed_rpe + drift_per_set * set_index))


def session_metabolic_load_with_drift(
    sets: Sequence[SetSpec],
    drift_per_set: float = RPE_DRIFT_PER_SET,
) -> DriftedLoad:
    """Metabolic total with each set's RPE drifted by its position."""
    rpes = np.array([s.rpe for s in sets], dtype=np.float64)
    drift = drift_per_set * np.arange(len(sets), dtype=np.float64)
    effective = np.clip(rpes + drift, 1.0, 10.0)
    loads = [
        calculate_set_metabolic_load(s.intensity_pct, s.reps, float(rpe))
        for s, rpe in zip(sets, effective)
    ]
    return DriftedLoad(
        total_load=float(np.sum(loads)) if loads else 0.0,
        per_set_loads=tuple(loads),
        effective_rpes=tuple(float(r) for r in effective),
    )


def tapered_drift_total(scheme: TaperedScheme) -> float:
    """Drift-aware total for a tapered scheme: lead sets first, then taper."""
    intensity = scheme.lead_intensity_pct
    sets = repeated_sets(
        SetSpec(intensity, scheme.lead_reps, scheme.lead_rpe), scheme.lead_sets
    ) + repeated_sets(
        SetSpec(intensity, scheme.taper_reps, scheme.taper_rpe), scheme.taper_sets
    )
    return session_metabolic_load_with_drift(sets).total_load


def cluster_taper_drift_total(scheme: ClusterTaperScheme) -> float:
    """Drift-aware total for a cluster-taper scheme.

    Drift runs across the whole sequence: force block, then metabolic block.
    """
    force = scheme.force_block
    metabolic = scheme.metabolic_block
    sets = repeated_sets(
        SetSpec(scheme.intensity_pct, force.reps, force.rpe), force.sets
    ) + repeated_sets(
        SetSpec(scheme.intensity_pct, metabolic.reps, metabolic.rpe), metabolic.sets
    )
    return session_metabolic_load_with_drift(sets).total_load
