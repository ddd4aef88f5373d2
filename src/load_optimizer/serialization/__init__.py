"""Serialization of optimizer inputs and recommendations (pure, no I/O)."""

from load_optimizer.serialization.codec import (
    config_from_dict,
    exercise_blocks_from_dicts,
    history_from_dicts,
    recommendation_to_dict,
    recommendation_to_json_string,
    session_from_dict,
    training_context_from_dict,
)

__all__ = [
    "config_from_dict",
    "exercise_blocks_from_dicts",
    "history_from_dicts",
    "recommendation_to_dict",
    "recommendation_to_json_string",
    "session_from_dict",
    "training_context_from_dict",
]
