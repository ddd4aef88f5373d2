"""load-optimizer — prescribe a session from JSON inputs.

Usage:
    load-optimizer --session session.json --history history.json
    load-optimizer --session session.json --audit plan.json --log-level DEBUG
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Sequence

from load_optimizer.engine import OptimizerEngine
from load_optimizer.exceptions import LoadOptimizerError
from load_optimizer.models.session import OptimizerConfig
from load_optimizer.serialization import (
    config_from_dict,
    exercise_blocks_from_dicts,
    history_from_dicts,
    recommendation_to_json_string,
    session_from_dict,
    training_context_from_dict,
)

from optimizer_cli import config as env_config
from optimizer_cli.compliance import audit_plan

logger = logging.getLogger(__name__)

EXIT_INVALID_INPUT = 2
EXIT_IO_ERROR = 1


def _load_json(path: Path) -> Any:
    with open(path) as f:
        return json.load(f)


def _env_defaults() -> OptimizerConfig:
    return OptimizerConfig(
        max_sets_per_session=env_config.MAX_SETS_PER_SESSION,
        auto_deload=env_config.AUTO_DELOAD,
        deload_frequency_weeks=env_config.DELOAD_FREQUENCY_WEEKS or None,
    )


def _parse_now(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid ISO timestamp: {value!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="load-optimizer",
        description="Prescribe strength-session parameters from goal, readiness and history",
    )
    parser.add_argument("--session", type=Path, required=True, help="Session input JSON")
    parser.add_argument("--history", type=Path, help="Logged sessions JSON (list)")
    parser.add_argument("--config", type=Path, help="Optimizer config JSON")
    parser.add_argument("--context", type=Path, help="Training block context JSON")
    parser.add_argument(
        "--volume-tolerance", type=int, choices=range(1, 6),
        default=env_config.VOLUME_TOLERANCE, help="1 (low) to 5 (high)",
    )
    parser.add_argument(
        "--goal-bias", type=float, default=env_config.GOAL_BIAS,
        help="0 (hypertrophy) to 100 (strength)",
    )
    parser.add_argument("--now", type=_parse_now, help="Clock override, ISO-8601")
    parser.add_argument("--audit", type=Path, help="Generated plan JSON to audit")
    parser.add_argument("--log-level", default=env_config.LOG_LEVEL, help="Logging level")
    return parser


def run(args: argparse.Namespace) -> int:
    """Load inputs, prescribe, print the recommendation; returns an exit code."""
    try:
        defaults = _env_defaults()
        config = config_from_dict(_load_json(args.config), defaults) if args.config else defaults
        session = session_from_dict(_load_json(args.session))
        history = history_from_dicts(_load_json(args.history)) if args.history else ()
        context = training_context_from_dict(_load_json(args.context)) if args.context else None
        plan = exercise_blocks_from_dicts(_load_json(args.audit)) if args.audit else None
    except LoadOptimizerError as exc:
        logger.error("Invalid input: %s", exc)
        return EXIT_INVALID_INPUT
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Could not read input: %s", exc)
        return EXIT_IO_ERROR

    engine = OptimizerEngine()
    recommendation, trace = engine.recommend(
        config,
        session,
        history,
        training_context=context,
        volume_tolerance=args.volume_tolerance,
        goal_bias=args.goal_bias,
        now=args.now,
    )
    for result in trace.fired():
        logger.debug("%s: %s", result.stage_id, result.explanation)

    print(recommendation_to_json_string(recommendation))

    if plan is not None:
        audit_plan(plan, recommendation, source=str(args.audit))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
