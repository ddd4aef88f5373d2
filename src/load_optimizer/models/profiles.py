"""Static lookup tables: goal profiles, fatigue targets, presets, rep preferences.

Reference:
    NSCA CSCS guidelines for rest, intensity and rep ranges.
    Schoenfeld et al. (2017). Dose-response relationship between weekly
    resistance training volume and increases in muscle mass.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from load_optimizer.models.enums import (
    RepRangePreference,
    SessionStructure,
    TrainingGoal,
)


@dataclass(frozen=True)
class Band:
    """Inclusive numeric band with ``low <= high``."""

    low: float
    high: float

    @classmethod
    def of(cls, low: float, high: float) -> Band:
        """Build a band, widening ``high`` up to ``low`` if they are inverted."""
        return cls(low=low, high=max(low, high))

    @property
    def midpoint(self) -> float:
        return (self.low + self.high) / 2

    def contains(self, value: float, slack: float = 0.0) -> bool:
        return self.low - slack <= value <= self.high + slack


@dataclass(frozen=True)
class GoalProfile:
    """Baseline prescription parameters for one training goal."""

    goal: TrainingGoal
    intensity_pct: Band
    rep_scheme: str
    sets_per_exercise: Band
    rest_s: Band
    volume_multiplier: float

    @property
    def rep_text(self) -> str:
        """The reps part of the canonical scheme, e.g. "8-12 reps"."""
        return _rep_text(self.rep_scheme)


@dataclass(frozen=True)
class SessionStructurePreset:
    structure: SessionStructure
    label: str
    exercise_count: Band


@dataclass(frozen=True)
class RepRangeOverride:
    """User rep-range preference: replaces the reps text and intensity band."""

    rep_scheme: str
    intensity_pct: Band

    @property
    def rep_text(self) -> str:
        return _rep_text(self.rep_scheme)


def _rep_text(scheme: str) -> str:
    _, sep, reps = scheme.partition("×")
    return reps.strip() if sep and reps.strip() else scheme


GOAL_PROFILES: Mapping[TrainingGoal, GoalProfile] = MappingProxyType({
    TrainingGoal.STRENGTH: GoalProfile(
        goal=TrainingGoal.STRENGTH,
        intensity_pct=Band(80, 92),
        rep_scheme="4-6 sets × 3-5 reps",
        sets_per_exercise=Band(4, 6),
        rest_s=Band(180, 300),
        volume_multiplier=0.85,  # fewer total sets, higher intensity
    ),
    TrainingGoal.HYPERTROPHY: GoalProfile(
        goal=TrainingGoal.HYPERTROPHY,
        intensity_pct=Band(60, 75),
        rep_scheme="3-4 sets × 8-12 reps",
        sets_per_exercise=Band(3, 4),
        rest_s=Band(60, 120),
        volume_multiplier=1.15,
    ),
    TrainingGoal.POWER: GoalProfile(
        goal=TrainingGoal.POWER,
        intensity_pct=Band(70, 85),
        rep_scheme="5-6 sets × 2-3 reps (max intent)",
        sets_per_exercise=Band(4, 6),
        rest_s=Band(120, 240),
        volume_multiplier=0.75,  # low volume, high quality
    ),
    TrainingGoal.ENDURANCE: GoalProfile(
        goal=TrainingGoal.ENDURANCE,
        intensity_pct=Band(40, 60),
        rep_scheme="2-3 sets × 15-20 reps",
        sets_per_exercise=Band(2, 3),
        rest_s=Band(30, 75),
        volume_multiplier=1.0,
    ),
    TrainingGoal.GENERAL: GoalProfile(
        goal=TrainingGoal.GENERAL,
        intensity_pct=Band(65, 80),
        rep_scheme="3-4 sets × 6-10 reps",
        sets_per_exercise=Band(3, 4),
        rest_s=Band(90, 150),
        volume_multiplier=1.0,
    ),
})

# Per-exercise neuromuscular-fatigue score targets, seed for reverse reps.
# At the hypertrophy midpoint (67.5 %) a 500 score is ~53 reps.
FATIGUE_TARGETS: Mapping[TrainingGoal, Band] = MappingProxyType({
    TrainingGoal.HYPERTROPHY: Band(400, 600),
    TrainingGoal.STRENGTH: Band(400, 600),
    TrainingGoal.POWER: Band(250, 400),
    TrainingGoal.ENDURANCE: Band(350, 550),
    TrainingGoal.GENERAL: Band(400, 550),
})

SESSION_STRUCTURE_PRESETS: Mapping[SessionStructure, SessionStructurePreset] = MappingProxyType({
    SessionStructure.ONE_LIFT: SessionStructurePreset(
        SessionStructure.ONE_LIFT, "One Lift a Day", Band(1, 1),
    ),
    SessionStructure.MAIN_PLUS_ACCESSORY: SessionStructurePreset(
        SessionStructure.MAIN_PLUS_ACCESSORY, "Main + Accessory", Band(2, 2),
    ),
    SessionStructure.STANDARD: SessionStructurePreset(
        SessionStructure.STANDARD, "Standard Session", Band(4, 7),
    ),
    SessionStructure.HIGH_VARIETY: SessionStructurePreset(
        SessionStructure.HIGH_VARIETY, "High Variety", Band(6, 10),
    ),
})

REP_RANGE_OVERRIDES: Mapping[RepRangePreference, RepRangeOverride] = MappingProxyType({
    RepRangePreference.LOW: RepRangeOverride("4-6 sets × 3-5 reps", Band(78, 92)),
    RepRangePreference.MODERATE: RepRangeOverride("3-4 sets × 8-12 reps", Band(60, 75)),
    RepRangePreference.HIGH: RepRangeOverride("2-3 sets × 15-20+ reps", Band(40, 60)),
})


def resolve_profile(goal: object) -> GoalProfile:
    """Look up the goal profile; anything unrecognised gets GENERAL."""
    return GOAL_PROFILES[TrainingGoal.parse(goal)]


def resolve_structure(structure: object) -> SessionStructurePreset | None:
    parsed = SessionStructure.parse(structure)
    if parsed is None:
        return None
    return SESSION_STRUCTURE_PRESETS[parsed]


# Periodization phase keywords, matched as substrings of the lowercased phase
# name; the first matching row wins.
PHASE_VOLUME_SCALARS: tuple[tuple[tuple[str, ...], float], ...] = (
    (("deload", "taper"), 0.50),
    (("peak",), 0.65),
    (("intensif",), 0.85),
    (("accumulation", "volume"), 1.15),
    (("hypertrophy",), 1.20),
)

PHASE_INTENSITY_SHIFTS: tuple[tuple[tuple[str, ...], int], ...] = (
    (("deload", "taper"), -10),
    (("peak",), 5),
    (("intensif",), 5),
    (("accumulation",), -5),
    (("hypertrophy",), -3),
)

PHASE_FOCUS: tuple[tuple[tuple[str, ...], TrainingGoal], ...] = (
    (("strength", "intensif"), TrainingGoal.STRENGTH),
    (("hypertrophy", "accumulation"), TrainingGoal.HYPERTROPHY),
    (("power", "peak"), TrainingGoal.POWER),
)


def match_phase(phase_name: str | None, table, default=None):
    """First table value whose keywords appear in ``phase_name``."""
    if not phase_name:
        return default
    phase = phase_name.lower()
    for keywords, value in table:
        if any(keyword in phase for keyword in keywords):
            return value
    return default
