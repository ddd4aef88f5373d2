"""Exception hierarchy for the load optimizer.

The engine clamps out-of-range numbers instead of raising; these are raised
only when serialized input cannot be turned into models.
"""

from __future__ import annotations


class LoadOptimizerError(Exception):
    """Base exception for all load_optimizer errors."""


class InvalidInputError(LoadOptimizerError):
    """Serialized input is malformed (missing key, wrong type, bad timestamp)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
