"""OptimizerEngine — the main orchestrator that prescribes a strength session."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence

from load_optimizer.composer import compose_recommendation
from load_optimizer.math.training_load import as_utc, compute_history_signals
from load_optimizer.models.decision_trace import DecisionTrace
from load_optimizer.models.history import HistoryEntry
from load_optimizer.models.profiles import resolve_profile
from load_optimizer.models.recommendation import OptimizerRecommendation
from load_optimizer.models.session import OptimizerConfig, SessionInput, TrainingContext
from load_optimizer.models.snapshot import SessionSnapshot
from load_optimizer.pipeline import AdjustmentPipeline

logger = logging.getLogger(__name__)


class OptimizerEngine:
    """Runs the adjustment pipeline and composes the recommendation.

    Usage:
        engine = OptimizerEngine()
        recommendation, trace = engine.recommend(config, session, history)

    The engine holds no per-call state, so one instance can serve
    concurrent callers.
    """

    def __init__(self, pipeline: AdjustmentPipeline | None = None) -> None:
        self.pipeline = pipeline or AdjustmentPipeline()

    def build_snapshot(
        self,
        config: OptimizerConfig,
        session: SessionInput,
        history: Sequence[HistoryEntry],
        training_context: TrainingContext | None = None,
        volume_tolerance: float = 3,
        goal_bias: float = 50.0,
        now: datetime | None = None,
    ) -> SessionSnapshot:
        """Freeze all inputs and history signals against a single clock reading."""
        now = as_utc(now) if now is not None else datetime.now(timezone.utc)
        return SessionSnapshot(
            config=config,
            session=session,
            profile=resolve_profile(session.goal),
            now=now,
            signals=compute_history_signals(history, now),
            training_context=training_context,
            volume_tolerance=volume_tolerance,
            goal_bias=goal_bias,
        )

    def recommend(
        self,
        config: OptimizerConfig,
        session: SessionInput,
        history: Sequence[HistoryEntry],
        training_context: TrainingContext | None = None,
        volume_tolerance: float = 3,
        goal_bias: float = 50.0,
        now: datetime | None = None,
    ) -> tuple[OptimizerRecommendation, DecisionTrace]:
        """Prescribe the session.

        Args:
            config: User-level optimizer settings.
            session: Goal, readiness, duration and check-in for today.
            history: Logged sessions, newest first.
            training_context: Active periodization phase, if any.
            volume_tolerance: 1 (low) to 5 (high).
            goal_bias: 0 (hypertrophy) to 100 (strength).
            now: Clock reading for the recency windows; defaults to the
                current UTC time, read once.

        Returns:
            A tuple of (OptimizerRecommendation, DecisionTrace).
        """
        snapshot = self.build_snapshot(
            config, session, history, training_context, volume_tolerance, goal_bias, now
        )
        trace = self.pipeline.run(snapshot)
        recommendation = compose_recommendation(snapshot, trace)

        logger.info(
            "Prescribed %d sets, %s-%s%% 1RM, %s (%d history sessions, deload=%s)",
            recommendation.session_volume,
            recommendation.intensity_pct.low,
            recommendation.intensity_pct.high,
            recommendation.rep_scheme,
            snapshot.signals.history_length,
            trace.forced_deload,
        )
        return recommendation, trace


_default_engine: OptimizerEngine | None = None


def compute_recommendation(
    config: OptimizerConfig,
    session: SessionInput,
    history: Sequence[HistoryEntry],
    training_context: TrainingContext | None = None,
    volume_tolerance: float = 3,
    goal_bias: float = 50.0,
    now: datetime | None = None,
) -> OptimizerRecommendation:
    """Functional entry point; returns only the recommendation."""
    global _default_engine
    if _default_engine is None:
        _default_engine = OptimizerEngine()
    recommendation, _trace = _default_engine.recommend(
        config, session, history, training_context, volume_tolerance, goal_bias, now
    )
    return recommendation
