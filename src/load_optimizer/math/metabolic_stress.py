"""Metabolic stress (Frederick) — per-set hypertrophy stimulus proxy.

    Load_set = Intensity × Σ(i=1→reps) e^(−0.215 × (RIR + reps − i))

where Intensity is %1RM and RIR = 10 − RPE. Each successive rep costs more
as the set approaches failure; reps close to failure dominate the total.
Session and exercise totals are plain sums over sets.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from load_optimizer.math.effort import reps_in_reserve
from load_optimizer.models.enums import METABOLIC_DECAY_RATE


@dataclass(frozen=True)
class SetSpec:
    """One working set: %1RM, reps and the RPE it is prescribed at."""

    intensity_pct: float
    reps: int
    rpe: float


def calculate_set_metabolic_load(intensity_pct: float, reps: int, rpe: float) -> float:
    """Metabolic load for a single set.

    Args:
        intensity_pct: Load as %1RM (0-100).
        reps: Reps performed in the set.
        rpe: Prescribed RPE (1-10).

    Returns:
        Load in arbitrary units; 0 for a set with no reps.
    """
    n = int(reps)
    if n <= 0:
        return 0.0
    rir = reps_in_reserve(rpe)
    rep_index = np.arange(1, n + 1, dtype=np.float64)
    return float(intensity_pct * np.exp(-METABOLIC_DECAY_RATE * (rir + n - rep_index)).sum())


def calculate_session_metabolic_load(sets: Iterable[SetSpec]) -> float:
    """Sum of per-set metabolic load."""
    return math.fsum(
        calculate_set_metabolic_load(s.intensity_pct, s.reps, s.rpe) for s in sets
    )


def repeated_sets(spec: SetSpec, count: int) -> list[SetSpec]:
    return [spec] * max(0, count)
