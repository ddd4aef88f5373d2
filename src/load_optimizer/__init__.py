"""Prescriptive training-load optimizer for strength sessions."""

from load_optimizer.engine import OptimizerEngine, compute_recommendation
from load_optimizer.exceptions import InvalidInputError, LoadOptimizerError

__all__ = [
    "InvalidInputError",
    "LoadOptimizerError",
    "OptimizerEngine",
    "compute_recommendation",
]
