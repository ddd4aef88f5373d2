"""Data models for the load optimizer."""

from load_optimizer.models.adjustment import StageAdjustment
from load_optimizer.models.decision_trace import DecisionTrace, StageResult, StageStatus
from load_optimizer.models.enums import (
    MuscleGroup,
    MusclePriority,
    ReadinessLevel,
    RepRangePreference,
    SessionStructure,
    StageTier,
    StressZone,
    TrainingGoal,
    TrendDirection,
    VolumeStatus,
)
from load_optimizer.models.history import CompletedSet, ExerciseBlock, HistoryEntry
from load_optimizer.models.profiles import Band, GoalProfile
from load_optimizer.models.recommendation import (
    ClusterTaperScheme,
    MyoRepScheme,
    OptimizerRecommendation,
    SetBlock,
    StrengthSetDivision,
    TaperedScheme,
    WeeklyVolumeEntry,
)
from load_optimizer.models.session import (
    DEFAULT_OPTIMIZER_CONFIG,
    OptimizerConfig,
    PreSessionCheckIn,
    SessionInput,
    TrainingContext,
)
from load_optimizer.models.snapshot import SessionSnapshot

__all__ = [
    "Band",
    "ClusterTaperScheme",
    "CompletedSet",
    "DEFAULT_OPTIMIZER_CONFIG",
    "DecisionTrace",
    "ExerciseBlock",
    "GoalProfile",
    "HistoryEntry",
    "MuscleGroup",
    "MusclePriority",
    "MyoRepScheme",
    "OptimizerConfig",
    "OptimizerRecommendation",
    "PreSessionCheckIn",
    "ReadinessLevel",
    "RepRangePreference",
    "SessionInput",
    "SessionSnapshot",
    "SessionStructure",
    "SetBlock",
    "StageAdjustment",
    "StageResult",
    "StageStatus",
    "StageTier",
    "StrengthSetDivision",
    "StressZone",
    "TaperedScheme",
    "TrainingContext",
    "TrainingGoal",
    "TrendDirection",
    "VolumeStatus",
    "WeeklyVolumeEntry",
]
