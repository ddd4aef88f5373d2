"""Enumerations and physiological constants for the load optimizer.

Thresholds cite their published source where one exists; the remainder are
calibration constants tuned against logged sessions.
"""

from __future__ import annotations

from enum import IntEnum, auto


def _normalise(text: object) -> str:
    return str(text).strip().lower().replace("_", "-").replace(" ", "-")


class TrainingGoal(IntEnum):
    """Session training goal. Unknown goals resolve to GENERAL."""

    STRENGTH = auto()
    HYPERTROPHY = auto()
    POWER = auto()
    ENDURANCE = auto()
    GENERAL = auto()

    @classmethod
    def parse(cls, value: object) -> TrainingGoal:
        if isinstance(value, cls):
            return value
        key = _normalise(value)
        for member in cls:
            if member.name.lower() == key:
                return member
        return cls.GENERAL

    @property
    def is_hypertrophy_like(self) -> bool:
        return self in (TrainingGoal.HYPERTROPHY, TrainingGoal.GENERAL)

    @property
    def is_strength_power(self) -> bool:
        return self in (TrainingGoal.STRENGTH, TrainingGoal.POWER)


class ReadinessLevel(IntEnum):
    """Self-reported readiness. Free text containing "low"/"high" is accepted."""

    LOW = auto()
    MEDIUM = auto()
    HIGH = auto()

    @classmethod
    def parse(cls, value: object) -> ReadinessLevel:
        if isinstance(value, cls):
            return value
        text = str(value).lower()
        if "low" in text:
            return cls.LOW
        if "high" in text:
            return cls.HIGH
        return cls.MEDIUM


class StressZone(IntEnum):
    """Ordered five-band classification shared by both stress models."""

    LIGHT = 1
    MODERATE = 2
    MODERATE_HIGH = 3
    HIGH = 4
    EXTREME = 5

    @property
    def key(self) -> str:
        return self.name.lower().replace("_", "-")


class MuscleGroup(IntEnum):
    CHEST = auto()
    BACK = auto()
    SHOULDERS = auto()
    BICEPS = auto()
    TRICEPS = auto()
    QUADS = auto()
    HAMSTRINGS = auto()
    GLUTES = auto()
    CALVES = auto()
    CORE = auto()
    FOREARMS = auto()
    TRAPS = auto()

    @classmethod
    def parse(cls, value: object) -> MuscleGroup | None:
        if isinstance(value, cls):
            return value
        key = _normalise(value)
        for member in cls:
            if member.name.lower() == key:
                return member
        return None

    @property
    def label(self) -> str:
        return self.name.capitalize()


class RepRangePreference(IntEnum):
    AUTO = auto()
    LOW = auto()
    MODERATE = auto()
    HIGH = auto()

    @classmethod
    def parse(cls, value: object) -> RepRangePreference:
        if isinstance(value, cls):
            return value
        key = _normalise(value)
        for member in cls:
            if member.name.lower() == key:
                return member
        return cls.AUTO


class SessionStructure(IntEnum):
    """Session-structure presets that pin the exercise-count band."""

    ONE_LIFT = auto()
    MAIN_PLUS_ACCESSORY = auto()
    STANDARD = auto()
    HIGH_VARIETY = auto()

    @classmethod
    def parse(cls, value: object) -> SessionStructure | None:
        """Map "one-lift", "main-plus-accessory", ... to a member; None if unknown."""
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        key = _normalise(value)
        for member in cls:
            if member.name.lower().replace("_", "-") == key:
                return member
        return None


class VolumeStatus(IntEnum):
    UNDER = auto()
    ON_TRACK = auto()
    OVER = auto()


class MusclePriority(IntEnum):
    INCREASE = auto()
    MAINTAIN = auto()
    DECREASE = auto()


class TrendDirection(IntEnum):
    RISING = auto()
    FALLING = auto()
    STABLE = auto()


class StageTier(IntEnum):
    """Adjustment stage tiers — lower value = evaluated first.

    BASELINE multipliers are combined and rounded once; each DAMPENING stage
    rounds on its own; an OVERRIDE may replace the volume outright.
    """

    BASELINE = 0
    DAMPENING = 1
    OVERRIDE = 2


# ---------------------------------------------------------------------------
# Global session-volume guardrails
# ---------------------------------------------------------------------------
SESSION_VOLUME_FLOOR = 6
SESSION_VOLUME_CEILING = 40
DEFAULT_MAX_SETS_PER_SESSION = 25
MINUTES_PER_WORKING_SET = 4  # rough time budget incl. rest

EXERCISE_COUNT_FLOOR = 3
EXERCISE_COUNT_CEILING = 10
MIN_SETS_PER_EXERCISE = 2

INTENSITY_FLOOR_PCT = 30
INTENSITY_CEILING_PCT = 100

# ---------------------------------------------------------------------------
# Readiness / recovery check-in — Helms et al. (2018), RPE autoregulation
# ---------------------------------------------------------------------------
READINESS_LOW_SCALAR = 0.55
READINESS_HIGH_SCALAR = 1.10
LOW_READINESS_INTENSITY_CAP = 75
LOW_READINESS_REP_SCALAR = 0.80

CHECK_IN_SHORT_SLEEP_HOURS = 6.0
CHECK_IN_SHORT_SLEEP_SCALAR = 0.85
CHECK_IN_HRV_SUPPRESS_RATIO = 0.85  # Plews et al. (2013)
CHECK_IN_HRV_SUPPRESS_SCALAR = 0.88

# Volume tolerance (1..5) → session volume and sets-per-exercise scalars
VOLUME_TOLERANCE_SCALARS = {1: 0.70, 2: 0.85, 3: 1.0, 4: 1.20, 5: 1.40}
SETS_PER_EXERCISE_SCALARS = {1: 0.75, 2: 0.85, 3: 1.0, 4: 1.15, 5: 1.30}

# ---------------------------------------------------------------------------
# Recent-fatigue dampening
# ---------------------------------------------------------------------------
RECENT_WINDOW_DAYS = 7
WEEKLY_VOLUME_WINDOW_DAYS = 7
HARD_SESSION_INTENSITY_PCT = 85.0
HARD_SESSION_MEAN_RPE = 8.5
HARD_SESSION_SESSION_RPE = 8.0
HARD_SESSIONS_SEVERE = 3
HARD_SESSIONS_MODERATE = 2
SESSIONS_FOR_MODERATE_DAMPENING = 4
HARD_SESSIONS_SEVERE_SCALAR = 0.80
HARD_SESSIONS_MODERATE_SCALAR = 0.90

# Session-RPE trend — Foster (1998) session-RPE
RPE_TREND_WINDOW = 5
RPE_TREND_MIN_SESSIONS = 2
RPE_TREND_DIRECTION_MIN_SESSIONS = 4
RPE_TREND_DIRECTION_DELTA = 0.5
RPE_TREND_OVERREACHING = 9.0
RPE_TREND_HIGH = 8.5
RPE_TREND_RISING = 8.0
RPE_TREND_COASTING = 6.0
RPE_TREND_OVERREACHING_SCALAR = 0.80
RPE_TREND_HIGH_SCALAR = 0.88
RPE_TREND_RISING_SCALAR = 0.92
RPE_TREND_COASTING_SCALAR = 1.05

# Last-session per-set RPE
HIGH_SET_RPE = 8.5
HIGH_SET_RPE_MIN_COUNT = 2
HIGH_SET_RPE_MIN_FRACTION = 0.5
LAST_SESSION_HIGH_RPE_SCALAR = 0.92

# ---------------------------------------------------------------------------
# Auto-deload — Israetel MRV / deload cadence
# ---------------------------------------------------------------------------
DELOAD_VOLUME_FRACTION = 0.50
DELOAD_MIN_SESSIONS_PER_WEEK = 2
DELOAD_LOOKBACK_WEEKS = 12
DELOAD_INTENSITY_MIN_CAP = 50
DELOAD_INTENSITY_MAX_CAP = 65
DELOAD_REST_RANGE_S = (60, 120)
DELOAD_REP_SCHEME = "2-3 sets × 8-12 reps (deload: technique focus)"

# ---------------------------------------------------------------------------
# Muscle-group weekly volume classification
# ---------------------------------------------------------------------------
VOLUME_UNDER_RATIO = 0.7
VOLUME_OVER_RATIO = 1.15

# ---------------------------------------------------------------------------
# Metabolic stress (Frederick) — exponential decay toward failure
# ---------------------------------------------------------------------------
METABOLIC_DECAY_RATE = 0.215
METABOLIC_TARGET_HYPERTROPHY = (618, 989)
METABOLIC_TARGET_GENERAL = (495, 865)
METABOLIC_REFERENCE_RPE = 8.0
METABOLIC_REFERENCE_REPS_HYPERTROPHY = 10
METABOLIC_REFERENCE_REPS_GENERAL = 8
METABOLIC_STRENGTH_REFERENCE_REPS = 4
METABOLIC_STRENGTH_REFERENCE_RPE = 8.5
METABOLIC_FALLBACK_SETS = (3, 4)

# Set-structure solvers share a single stress ceiling on the no-drift total
SOLVER_METABOLIC_GATE = 1600.0
SOLVER_REP_TOLERANCE = 10
SOLVER_MIN_REMAINING_REPS = 4

# Accrued fatigue — Helms et al.; RPE drift per set at 2-3 min rest
RPE_DRIFT_PER_SET = 0.15

# ---------------------------------------------------------------------------
# Neuromuscular fatigue (Hanley) — quadratic penalty toward 1RM
# ---------------------------------------------------------------------------
CONCENTRATED_SESSION_MAX_EXERCISES = 2
CONCENTRATED_MAX_REP_FRACTION = 0.65
CONCENTRATED_MIN_SETS_PER_EXERCISE = 4
CONCENTRATED_FALLBACK_REPS_PER_SET = 5

# ---------------------------------------------------------------------------
# Peak force drop-off — Sanchez-Medina & González-Badillo (2011),
# Izquierdo et al. (2006)
# ---------------------------------------------------------------------------
PEAK_FORCE_SINGLE_REP_ABOVE_PCT = 90
PEAK_FORCE_BASE_RATIO = 0.30
PEAK_FORCE_RATIO_SPAN = 0.30
PEAK_FORCE_NORMALISING_SPAN = 30
PEAK_FORCE_EXPONENT = 0.7
PEAK_FORCE_TABLE_INTENSITIES = (60, 65, 70, 75, 80, 85, 90)

# Strength set rest by intensity (full neural recovery) — NSCA CSCS
STRENGTH_REST_STEPS_S = ((85, 300), (80, 240), (75, 180))
STRENGTH_REST_DEFAULT_S = 150

# ---------------------------------------------------------------------------
# Cluster-taper hybrid
# ---------------------------------------------------------------------------
CLUSTER_INTENSITY_MIN_PCT = 68
CLUSTER_INTENSITY_MAX_PCT = 78
CLUSTER_MIN_METABOLIC_RPE = 6.0
CLUSTER_FORCE_REST_HIGH_S = 180
CLUSTER_FORCE_REST_LOW_S = 150
CLUSTER_FORCE_REST_THRESHOLD_PCT = 74
CLUSTER_METABOLIC_REST_S = 90
CLUSTER_BIAS_THRESHOLD = 50

# Tapered two-phase sanity band for the Epley-derived lead intensity
TAPERED_LEAD_INTENSITY_MIN_PCT = 55
TAPERED_LEAD_INTENSITY_MAX_PCT = 85

# ---------------------------------------------------------------------------
# Myo-reps — Fagerli; every 4th qualifying session
# ---------------------------------------------------------------------------
MYO_REP_ROTATION = 4
MYO_REP_BIAS_THRESHOLD = 50
MYO_REP_INTENSITY_RANGE = (55, 65)
MYO_REP_REST_RANGE_S = (15, 20)
MYO_REP_ACTIVATION_REPS = (12, 15)
MYO_REP_MINI_SET_REPS = (3, 5)
MYO_REP_MAX_MINI_SETS = 5
MYO_REP_MINI_SET_REST_S = 15
MYO_REP_ACTIVATION_RPE = 8.0
