"""Training history records — read-only, newest first."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from load_optimizer.models.enums import MuscleGroup


@dataclass(frozen=True)
class ExerciseBlock:
    """One prescribed exercise within a logged session."""

    exercise_id: str
    sets: int
    reps: str = ""  # "8", "8-12", ...
    percent_1rm: float | None = None
    rpe_target: float | None = None
    is_warmup: bool = False
    weight: float | None = None

    @property
    def mean_reps(self) -> float:
        """Midpoint of the rep descriptor; 8 when it cannot be read."""
        low, sep, high = self.reps.partition("-")
        try:
            if sep:
                return (float(low) + float(high.rstrip("+"))) / 2
            return float(self.reps.rstrip("+"))
        except ValueError:
            return 8.0


@dataclass(frozen=True)
class CompletedSet:
    """A set the athlete actually performed, with optional RPE."""

    exercise_id: str
    exercise_name: str = ""
    set_number: int = 1
    reps: int = 0
    weight: float = 0.0
    rpe: float | None = None


@dataclass(frozen=True)
class HistoryEntry:
    """One logged session."""

    timestamp: datetime
    exercises: tuple[ExerciseBlock, ...] = field(default_factory=tuple)
    session_rpe: float | None = None
    completed_sets: tuple[CompletedSet, ...] = field(default_factory=tuple)
    muscle_groups_covered: tuple[MuscleGroup, ...] = field(default_factory=tuple)
    actual_tonnage: float | None = None

    @property
    def working_blocks(self) -> tuple[ExerciseBlock, ...]:
        return tuple(e for e in self.exercises if not e.is_warmup)

    @property
    def working_sets(self) -> int:
        return sum(e.sets or 0 for e in self.working_blocks)
