"""History-derived load signals: recent hard sessions, session-RPE trend,
weekly sets per muscle group, consecutive training weeks, last-session RPE.

All windows are measured against a single ``now`` supplied by the caller so
that the 7-day and week-by-week windows of one computation agree.

References:
    - Foster (1998): session-RPE as a training load measure
    - Israetel et al. (2019): MEV/MAV/MRV weekly volume landmarks
    - Helms et al. (2018): RPE-based autoregulation
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Mapping, Sequence

import numpy as np
import pandas as pd

from load_optimizer.models.enums import (
    DELOAD_LOOKBACK_WEEKS,
    DELOAD_MIN_SESSIONS_PER_WEEK,
    HARD_SESSION_INTENSITY_PCT,
    HARD_SESSION_MEAN_RPE,
    HARD_SESSION_SESSION_RPE,
    HIGH_SET_RPE,
    HIGH_SET_RPE_MIN_COUNT,
    HIGH_SET_RPE_MIN_FRACTION,
    RECENT_WINDOW_DAYS,
    RPE_TREND_DIRECTION_DELTA,
    RPE_TREND_DIRECTION_MIN_SESSIONS,
    RPE_TREND_MIN_SESSIONS,
    RPE_TREND_WINDOW,
    WEEKLY_VOLUME_WINDOW_DAYS,
    MuscleGroup,
    TrendDirection,
)
from load_optimizer.models.history import HistoryEntry
from load_optimizer.models.signals import FatigueSignals, HistorySignals, SetRPESummary

_FRAME_COLUMNS = [
    "timestamp",
    "working_sets",
    "mean_pct",
    "mean_rpe",
    "session_rpe",
    "tonnage",
    "muscle_groups",
]


def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC so naive and aware inputs compare."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _session_tonnage(entry: HistoryEntry) -> float:
    if entry.actual_tonnage:
        return float(entry.actual_tonnage)
    return float(sum(
        block.sets * block.mean_reps * (block.weight or 0.0)
        for block in entry.working_blocks
    ))


def history_frame(history: Sequence[HistoryEntry]) -> pd.DataFrame:
    """Flatten history into one row per session.

    Missing %1RM / RPE targets count as 0 in the per-session means.
    """
    rows = []
    for entry in history:
        blocks = entry.working_blocks
        n = len(blocks) or 1
        rows.append({
            "timestamp": pd.Timestamp(as_utc(entry.timestamp)),
            "working_sets": entry.working_sets,
            "mean_pct": sum(b.percent_1rm or 0.0 for b in blocks) / n,
            "mean_rpe": sum(b.rpe_target or 0.0 for b in blocks) / n,
            "session_rpe": entry.session_rpe if entry.session_rpe else np.nan,
            "tonnage": _session_tonnage(entry),
            "muscle_groups": tuple(entry.muscle_groups_covered),
        })
    frame = pd.DataFrame(rows, columns=_FRAME_COLUMNS)
    frame["timestamp"] = pd.to_datetime(frame["timestamp"], utc=True)
    return frame


def _since(frame: pd.DataFrame, now: datetime, days: int) -> pd.DataFrame:
    cutoff = pd.Timestamp(as_utc(now) - timedelta(days=days))
    return frame[frame["timestamp"] >= cutoff]


def compute_fatigue_signals(frame: pd.DataFrame, now: datetime) -> FatigueSignals:
    """Hard sessions in the last 7 days and the rolling session-RPE trend.

    A session is hard when its mean %1RM ≥ 85, its mean RPE target ≥ 8.5,
    or its session RPE ≥ 8.
    """
    recent = _since(frame, now, RECENT_WINDOW_DAYS)
    hard = (
        (recent["mean_pct"] >= HARD_SESSION_INTENSITY_PCT)
        | (recent["mean_rpe"] >= HARD_SESSION_MEAN_RPE)
        | (recent["session_rpe"].fillna(0.0) >= HARD_SESSION_SESSION_RPE)
    )

    rated = (
        frame[frame["session_rpe"] > 0]
        .sort_values("timestamp", ascending=False, kind="stable")
        .head(RPE_TREND_WINDOW)["session_rpe"]
        .to_numpy(dtype=np.float64)
    )
    trend_avg = float(rated.mean()) if len(rated) >= RPE_TREND_MIN_SESSIONS else None

    direction: TrendDirection | None = None
    if len(rated) >= RPE_TREND_DIRECTION_MIN_SESSIONS:
        diff = rated[:2].mean() - rated[-2:].mean()
        if diff >= RPE_TREND_DIRECTION_DELTA:
            direction = TrendDirection.RISING
        elif diff <= -RPE_TREND_DIRECTION_DELTA:
            direction = TrendDirection.FALLING
        else:
            direction = TrendDirection.STABLE

    return FatigueSignals(
        sessions_last_7d=len(recent),
        hard_sessions=int(hard.sum()),
        total_sets=int(recent["working_sets"].sum()),
        total_tonnage=float(recent["tonnage"].sum()),
        rpe_trend_avg=trend_avg,
        rpe_trend_direction=direction,
        rpe_trend_session_count=len(rated),
    )


def weekly_sets_by_muscle(frame: pd.DataFrame, now: datetime) -> Mapping[MuscleGroup, float]:
    """Working sets per muscle group over the trailing 7 days.

    A session's sets are split evenly across the groups it covered; sessions
    without group tags are ignored.
    """
    recent = _since(frame, now, WEEKLY_VOLUME_WINDOW_DAYS)
    tagged = recent[recent["muscle_groups"].map(len) > 0]
    if tagged.empty:
        return MappingProxyType({})
    per_group = tagged.assign(
        sets_per_group=tagged["working_sets"] / tagged["muscle_groups"].map(len)
    ).explode("muscle_groups")
    totals = per_group.groupby("muscle_groups", sort=False)["sets_per_group"].sum()
    return MappingProxyType({MuscleGroup(int(mg)): float(v) for mg, v in totals.items()})


def consecutive_training_weeks(
    frame: pd.DataFrame,
    now: datetime,
    max_weeks: int = DELOAD_LOOKBACK_WEEKS,
) -> int:
    """Count 7-day windows, walking back from ``now``, with ≥2 sessions each.

    Stops at the first window that fails the test.
    """
    end = pd.Timestamp(as_utc(now))
    week = pd.Timedelta(days=7)
    timestamps = frame["timestamp"]
    weeks = 0
    for w in range(max_weeks):
        window_end = end - w * week
        window_start = end - (w + 1) * week
        count = int(((timestamps >= window_start) & (timestamps < window_end)).sum())
        if count < DELOAD_MIN_SESSIONS_PER_WEEK:
            break
        weeks += 1
    return weeks


def summarize_last_session_rpe(history: Sequence[HistoryEntry]) -> SetRPESummary | None:
    """Per-exercise RPE summary of the newest session's completed sets.

    The session counts as hard when any exercise had ≥2 sets at RPE 8.5+
    or at least half of its sets there.
    """
    if not history:
        return None
    rated = [s for s in history[0].completed_sets if s.rpe is not None and s.rpe > 0]
    if not rated:
        return None

    by_exercise: dict[str, tuple[str, list[float]]] = {}
    for s in rated:
        key = s.exercise_id or s.exercise_name
        name = s.exercise_name or s.exercise_id or "Exercise"
        by_exercise.setdefault(key, (name, []))[1].append(float(s.rpe))  # type: ignore[arg-type]

    parts: list[str] = []
    had_high = False
    for name, rpes in by_exercise.values():
        high_count = sum(1 for r in rpes if r >= HIGH_SET_RPE)
        if high_count >= HIGH_SET_RPE_MIN_COUNT or high_count / len(rpes) >= HIGH_SET_RPE_MIN_FRACTION:
            had_high = True
        if high_count >= len(rpes):
            note = " (all hard)"
        elif high_count > 0:
            note = f" ({high_count} set(s) RPE {HIGH_SET_RPE}+)"
        else:
            note = ""
        parts.append(f"{name}: {len(rpes)} sets, avg RPE {float(np.mean(rpes)):.1f}{note}")

    return SetRPESummary(summary="; ".join(parts), had_high_rpe=had_high)


def compute_history_signals(history: Sequence[HistoryEntry], now: datetime) -> HistorySignals:
    """All history signals for one engine call, against one clock reading."""
    frame = history_frame(history)
    return HistorySignals(
        fatigue=compute_fatigue_signals(frame, now),
        last_session_rpe=summarize_last_session_rpe(history),
        consecutive_training_weeks=consecutive_training_weeks(frame, now),
        weekly_sets_by_muscle=weekly_sets_by_muscle(frame, now),
        history_length=len(history),
    )
