"""Stress zone tables for the metabolic-stress and neuromuscular-fatigue totals.

Bands are half-open ``[lower, upper)`` and contiguous, so every total maps
to exactly one zone. The last band is unbounded above.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from load_optimizer.models.enums import StressZone


@dataclass(frozen=True)
class ZoneBand:
    """A single named stress band."""

    zone: StressZone
    label: str
    lower: float
    upper: float

    def contains(self, value: float) -> bool:
        return self.lower <= value < self.upper


# Per-exercise metabolic load. Hypertrophy's productive range is
# moderate → moderate-high.
METABOLIC_ZONES: tuple[ZoneBand, ...] = (
    ZoneBand(StressZone.LIGHT, "Light", 0.0, 500.0),
    ZoneBand(StressZone.MODERATE, "Moderate", 500.0, 650.0),
    ZoneBand(StressZone.MODERATE_HIGH, "Mod. High", 650.0, 800.0),
    ZoneBand(StressZone.HIGH, "High", 800.0, 1100.0),
    ZoneBand(StressZone.EXTREME, "Tread Carefully", 1100.0, math.inf),
)

# Per-exercise neuromuscular fatigue score
FATIGUE_ZONES: tuple[ZoneBand, ...] = (
    ZoneBand(StressZone.LIGHT, "Light", 0.0, 400.0),
    ZoneBand(StressZone.MODERATE, "Moderate", 400.0, 500.0),
    ZoneBand(StressZone.MODERATE_HIGH, "Mod. High", 500.0, 600.0),
    ZoneBand(StressZone.HIGH, "High", 600.0, 700.0),
    ZoneBand(StressZone.EXTREME, "Tread Carefully", 700.0, math.inf),
)


def classify(value: float, table: tuple[ZoneBand, ...]) -> StressZone:
    """Classify a total into its band.

    Anything below the first band counts as the first band; NaN and +inf
    fall into the last.
    """
    if value < table[0].lower:
        return table[0].zone
    for band in table:
        if band.contains(value):
            return band.zone
    return table[-1].zone


def classify_metabolic_load(load: float) -> StressZone:
    return classify(load, METABOLIC_ZONES)


def classify_fatigue_score(score: float) -> StressZone:
    return classify(score, FATIGUE_ZONES)


def zone_band(zone: StressZone, table: tuple[ZoneBand, ...]) -> ZoneBand:
    for band in table:
        if band.zone == zone:
            return band
    raise KeyError(zone)
