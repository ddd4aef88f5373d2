"""Myo-rep session selector (Fagerli).

An activation set of 12-15 reps at RPE 8, then up to five mini-sets of 3-5
reps on 15 s rest. Roughly the stimulus of three straight sets in a third of
the time. Accessory and machine movements only; the main barbell lifts stay
on straight sets.

Every fourth qualifying session is a myo-rep session, keyed on the number of
logged sessions rather than the calendar.
"""

from __future__ import annotations

from load_optimizer.math.effort import format_number, round_half_up
from load_optimizer.models.enums import (
    MYO_REP_ACTIVATION_REPS,
    MYO_REP_ACTIVATION_RPE,
    MYO_REP_BIAS_THRESHOLD,
    MYO_REP_INTENSITY_RANGE,
    MYO_REP_MAX_MINI_SETS,
    MYO_REP_MINI_SET_REPS,
    MYO_REP_MINI_SET_REST_S,
    MYO_REP_ROTATION,
    TrainingGoal,
)
from load_optimizer.models.profiles import Band
from load_optimizer.models.recommendation import MyoRepScheme

MYO_REP_REP_SCHEME = (
    "Myo-Rep: 12-15 + up to 5×3-5 (15s rest) for accessories; straight sets for compounds"
)


def is_myo_rep_session(
    goal: TrainingGoal,
    history_length: int,
    goal_bias: float,
    forced_deload: bool,
    low_readiness: bool,
) -> bool:
    """Hypertrophy-leaning, recovered, not deloading, and on the rotation."""
    eligible = (
        goal.is_hypertrophy_like
        and not forced_deload
        and goal_bias < MYO_REP_BIAS_THRESHOLD
        and not low_readiness
    )
    return eligible and history_length % MYO_REP_ROTATION == 0


def build_myo_rep_scheme() -> MyoRepScheme:
    intensity = round_half_up(sum(MYO_REP_INTENSITY_RANGE) / 2)
    activation = Band(*MYO_REP_ACTIVATION_REPS)
    mini = Band(*MYO_REP_MINI_SET_REPS)
    return MyoRepScheme(
        activation_reps=activation,
        mini_set_reps=mini,
        max_mini_sets=MYO_REP_MAX_MINI_SETS,
        mini_set_rest_s=MYO_REP_MINI_SET_REST_S,
        intensity_pct=intensity,
        description=(
            f"Myo-Rep: {activation.low}-{activation.high} activation @ RPE "
            f"{format_number(MYO_REP_ACTIVATION_RPE)}, then up to {MYO_REP_MAX_MINI_SETS}×"
            f"{mini.low}-{mini.high} with {MYO_REP_MINI_SET_REST_S}s rest. "
            f"~{intensity}% 1RM. Accessories/machines only; compounds use straight sets."
        ),
    )
