from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import RunConfig, RunPresets
from .explorer import RandomExplorer
from .logging_config import LOG_LEVELS, configure_logging
from .state import StateError
from .world import WorldError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Learn taxi transition and reward rules from random exploration"
    )
    ap.add_argument("config", nargs="?", default=None,
                    help="Run configuration (.yaml/.yml/.json); standard world if omitted")
    ap.add_argument("--preset", choices=["standard", "small"], default=None,
                    help="Use a built-in configuration instead of a file")
    ap.add_argument("--seed", type=int, default=None, help="Explorer PRNG seed")
    ap.add_argument("--trials", type=int, default=None, help="Override max_trials")
    ap.add_argument("--steps", type=int, default=None, help="Override max_trial_steps")
    ap.add_argument("--report", action="store_true", help="Print the learned rules")
    ap.add_argument("--log-level", default=None, type=str.upper, choices=LOG_LEVELS,
                    help="Logging level name")
    ap.add_argument("--log-dir", default=None, help="Directory for rotating log files")
    return ap


def load_config(args: argparse.Namespace) -> Optional[RunConfig]:
    if args.config:
        config = RunConfig.load(args.config)
        if config is None:
            return None
    elif args.preset == "small":
        config = RunPresets.small()
    else:
        config = RunPresets.standard()

    if args.seed is not None:
        config.seed = args.seed
    if args.trials is not None:
        config.max_trials = max(1, args.trials)
    if args.steps is not None:
        config.max_trial_steps = max(1, args.steps)
    if args.report:
        config.report = True
    if args.log_level:
        config.log_level = args.log_level
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = load_config(args)
    configure_logging(
        level=(config.log_level if config else args.log_level) or "INFO",
        log_dir=args.log_dir,
    )
    if config is None:
        logger.error(f"Could not load configuration from {args.config}")
        return 1

    try:
        world = config.build_world()
        explorer = RandomExplorer(world, seed=config.seed)
        report = explorer.run(config.max_trials, config.max_trial_steps)
    except (WorldError, StateError) as e:
        logger.error(f"Failed to build run: {e}")
        return 1

    print(report.summary())
    if config.report:
        print()
        print(explorer.transitions)
        print(explorer.rewards)
    return 0


if __name__ == "__main__":
    sys.exit(main())
