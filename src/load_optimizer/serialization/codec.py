"""JSON-compatible dict conversion for optimizer inputs and output.

Input keys are snake_case; the camelCase spelling used by the mobile app's
stored records is accepted as well. Output uses snake_case keys, bands as
``{"min": .., "max": ..}`` and enums as lowercase hyphenated names. Optional
fields that were not produced are omitted.

All functions are pure (no I/O).
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Sequence

from load_optimizer.exceptions import InvalidInputError
from load_optimizer.models.enums import (
    MuscleGroup,
    ReadinessLevel,
    RepRangePreference,
    SessionStructure,
    TrainingGoal,
)
from load_optimizer.models.history import CompletedSet, ExerciseBlock, HistoryEntry
from load_optimizer.models.profiles import Band
from load_optimizer.models.recommendation import OptimizerRecommendation
from load_optimizer.models.session import (
    OptimizerConfig,
    PreSessionCheckIn,
    SessionInput,
    TrainingContext,
)

_MISSING = object()


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _get(data: Mapping[str, Any], key: str, default: Any = _MISSING) -> Any:
    """Look up ``key`` in snake_case, then camelCase."""
    if key in data:
        return data[key]
    camel = _camel(key)
    if camel in data:
        return data[camel]
    if default is _MISSING:
        raise InvalidInputError(f"Missing required field '{key}'", field=key)
    return default


def _number(value: Any, key: str, allow_none: bool = True) -> float | None:
    if value is None and allow_none:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"Field '{key}' must be a number, got {value!r}", field=key)
    return float(value)


def _mapping(value: Any, key: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise InvalidInputError(f"Field '{key}' must be an object", field=key)
    return value


def _timestamp(value: Any) -> datetime:
    """ISO-8601 string or epoch milliseconds → aware UTC datetime."""
    if isinstance(value, bool):
        raise InvalidInputError(f"Unparseable timestamp {value!r}", field="timestamp")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as exc:
            raise InvalidInputError(f"Unparseable timestamp {value!r}", field="timestamp") from exc
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    raise InvalidInputError(f"Unparseable timestamp {value!r}", field="timestamp")


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


def config_from_dict(
    data: Mapping[str, Any],
    defaults: OptimizerConfig | None = None,
) -> OptimizerConfig:
    """Build an OptimizerConfig; absent keys take ``defaults``."""
    base = defaults or OptimizerConfig()
    data = _mapping(data, "config")

    targets: dict[MuscleGroup, float] = {}
    raw_targets = _get(data, "target_sets_per_muscle_group", None) or {}
    for name, value in _mapping(raw_targets, "target_sets_per_muscle_group").items():
        group = MuscleGroup.parse(name)
        if group is None:
            continue
        targets[group] = _number(value, "target_sets_per_muscle_group") or 0.0

    max_sets = _get(data, "max_sets_per_session", base.max_sets_per_session)
    frequency = _get(data, "deload_frequency_weeks", base.deload_frequency_weeks)
    return OptimizerConfig(
        max_sets_per_session=int(_number(max_sets, "max_sets_per_session", allow_none=False)),
        rep_range_preference=RepRangePreference.parse(
            _get(data, "rep_range_preference", base.rep_range_preference)
        ),
        target_sets_per_muscle_group=(
            MappingProxyType(targets) if targets else base.target_sets_per_muscle_group
        ),
        auto_deload=bool(_get(data, "auto_deload", base.auto_deload)),
        deload_frequency_weeks=(
            int(frequency) if _number(frequency, "deload_frequency_weeks") else None
        ),
    )


def _check_in_from_dict(data: Mapping[str, Any]) -> PreSessionCheckIn:
    data = _mapping(data, "check_in")
    sleep = _get(data, "sleep_hours", None)
    if sleep is None:
        sleep = data.get("sleepHoursLastNight")
    return PreSessionCheckIn(
        sleep_hours=_number(sleep, "sleep_hours"),
        hrv_baseline_ms=_number(_get(data, "hrv_baseline_ms", None), "hrv_baseline_ms"),
        hrv_today_ms=_number(_get(data, "hrv_today_ms", None), "hrv_today_ms"),
    )


def session_from_dict(data: Mapping[str, Any]) -> SessionInput:
    """Build a SessionInput. ``goal`` is required; the rest is optional."""
    data = _mapping(data, "session")
    goal = _get(data, "goal", None)
    if goal is None:
        goal = _get(data, "training_goal_focus", None)
    if goal is None:
        raise InvalidInputError("Missing required field 'goal'", field="goal")
    check_in = _get(data, "check_in", None)
    if check_in is None:
        check_in = data.get("preWorkoutCheckIn")
    duration = _get(data, "duration_min", None)
    if duration is None:
        duration = data.get("duration", 60)
    return SessionInput(
        goal=TrainingGoal.parse(goal),
        readiness=ReadinessLevel.parse(_get(data, "readiness", "medium")),
        duration_min=_number(duration, "duration_min", allow_none=False),
        check_in=_check_in_from_dict(check_in) if check_in else None,
        session_structure=SessionStructure.parse(_get(data, "session_structure", None)),
    )


def training_context_from_dict(data: Mapping[str, Any] | None) -> TrainingContext | None:
    if not data:
        return None
    data = _mapping(data, "training_context")
    phase = _get(data, "phase_name")
    if not isinstance(phase, str):
        raise InvalidInputError("Field 'phase_name' must be a string", field="phase_name")
    return TrainingContext(
        phase_name=phase,
        week_in_phase=int(_number(_get(data, "week_in_phase", 1), "week_in_phase") or 1),
        total_weeks_in_phase=int(
            _number(_get(data, "total_weeks_in_phase", 1), "total_weeks_in_phase") or 1
        ),
        block_name=str(_get(data, "block_name", "") or ""),
    )


def _exercise_from_dict(data: Mapping[str, Any]) -> ExerciseBlock:
    data = _mapping(data, "exercises")
    percent = _get(data, "percent_1rm", None)
    if percent is None:
        percent = data.get("percentOf1RM")
    is_warmup = _get(data, "is_warmup", None)
    if is_warmup is None:
        is_warmup = data.get("isWarmupSet", False)
    weight = _get(data, "weight", None)
    if weight is None:
        weight = data.get("weightLbs")
    return ExerciseBlock(
        exercise_id=str(_get(data, "exercise_id", "") or data.get("name", "")),
        sets=int(_number(_get(data, "sets", 0), "sets") or 0),
        reps=str(_get(data, "reps", "") or ""),
        percent_1rm=_number(percent, "percent_1rm"),
        rpe_target=_number(_get(data, "rpe_target", None), "rpe_target"),
        is_warmup=bool(is_warmup),
        weight=_number(weight, "weight"),
    )


def exercise_blocks_from_dicts(data: Any) -> tuple[ExerciseBlock, ...]:
    """Parse a generated plan: a list of exercise blocks or ``{"exercises": [...]}``."""
    if isinstance(data, Mapping):
        data = _get(data, "exercises")
    if not isinstance(data, Sequence) or isinstance(data, (str, bytes)):
        raise InvalidInputError("Plan exercises must be a list", field="exercises")
    return tuple(_exercise_from_dict(block) for block in data)


def _completed_set_from_dict(data: Mapping[str, Any]) -> CompletedSet:
    data = _mapping(data, "completed_sets")
    return CompletedSet(
        exercise_id=str(_get(data, "exercise_id", "") or ""),
        exercise_name=str(_get(data, "exercise_name", "") or ""),
        set_number=int(_number(_get(data, "set_number", 1), "set_number") or 1),
        reps=int(_number(_get(data, "reps", 0), "reps") or 0),
        weight=_number(_get(data, "weight", 0.0), "weight") or 0.0,
        rpe=_number(_get(data, "rpe", None), "rpe"),
    )


def _history_entry_from_dict(data: Mapping[str, Any]) -> HistoryEntry:
    data = _mapping(data, "history")
    groups = tuple(
        group
        for group in (MuscleGroup.parse(name) for name in _get(data, "muscle_groups_covered", None) or ())
        if group is not None
    )
    return HistoryEntry(
        timestamp=_timestamp(_get(data, "timestamp")),
        exercises=tuple(_exercise_from_dict(e) for e in _get(data, "exercises", None) or ()),
        session_rpe=_number(_get(data, "session_rpe", None) or data.get("sessionRPE"), "session_rpe"),
        completed_sets=tuple(
            _completed_set_from_dict(s) for s in _get(data, "completed_sets", None) or ()
        ),
        muscle_groups_covered=groups,
        actual_tonnage=_number(_get(data, "actual_tonnage", None), "actual_tonnage"),
    )


def history_from_dicts(entries: Sequence[Mapping[str, Any]]) -> tuple[HistoryEntry, ...]:
    """Parse logged sessions and order them newest first."""
    if not isinstance(entries, Sequence) or isinstance(entries, (str, bytes)):
        raise InvalidInputError("History must be a list of sessions", field="history")
    parsed = [_history_entry_from_dict(entry) for entry in entries]
    return tuple(sorted(parsed, key=lambda entry: entry.timestamp, reverse=True))


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def _enum_key(value: Enum) -> str:
    return value.name.lower().replace("_", "-")


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, Band):
        return {"min": value.low, "max": value.high}
    if isinstance(value, Enum):
        return _enum_key(value)
    if isinstance(value, Mapping):
        return {
            (_enum_key(k) if isinstance(k, Enum) else str(k)): _to_jsonable(v)
            for k, v in value.items()
        }
    if hasattr(value, "__dataclass_fields__"):
        return {
            name: _to_jsonable(getattr(value, name))
            for name in value.__dataclass_fields__
            if getattr(value, name) is not None
        }
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


def recommendation_to_dict(recommendation: OptimizerRecommendation) -> dict:
    """Convert a recommendation to a JSON-compatible dict, omitting absent fields."""
    return _to_jsonable(recommendation)


def recommendation_to_json_string(recommendation: OptimizerRecommendation, indent: int = 2) -> str:
    return json.dumps(recommendation_to_dict(recommendation), indent=indent, ensure_ascii=False)
