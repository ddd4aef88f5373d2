"""Environment-variable-based configuration for the load-optimizer CLI."""

from __future__ import annotations

import os

MAX_SETS_PER_SESSION: int = int(os.environ.get("LOAD_OPTIMIZER_MAX_SETS", "25"))
AUTO_DELOAD: bool = os.environ.get("LOAD_OPTIMIZER_AUTO_DELOAD", "1").lower() not in ("0", "false", "no")
DELOAD_FREQUENCY_WEEKS: int = int(os.environ.get("LOAD_OPTIMIZER_DELOAD_WEEKS", "4"))
LOG_LEVEL: str = os.environ.get("LOAD_OPTIMIZER_LOG_LEVEL", "INFO").upper()
VOLUME_TOLERANCE: int = int(os.environ.get("LOAD_OPTIMIZER_VOLUME_TOLERANCE", "3"))
GOAL_BIAS: float = float(os.environ.get("LOAD_OPTIMIZER_GOAL_BIAS", "50"))
