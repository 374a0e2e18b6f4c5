"""Command-line entry point: ``crossover-mc``."""

from typing import List, Optional
import argparse
import logging

from crossover_mc.backtest.report import format_summary
from crossover_mc.backtest.runner import run_backtest_simulation
from crossover_mc.config import BacktestConfig, load_config
from crossover_mc.errors import ConfigError, ResourceUnavailable

logger = logging.getLogger(__name__)

# argparse destination -> BacktestConfig field
_OVERRIDES = {
    "trials": "num_trials",
    "path_length": "path_length",
    "short_window": "short_window",
    "long_window": "long_window",
    "step": "step",
    "drift": "drift",
    "volatility": "volatility",
    "initial_price": "initial_price",
    "output": "output_path",
    "seed": "seed",
    "workers": "n_workers",
    "progress_interval": "progress_interval",
}


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the crossover-mc command."""
    parser = argparse.ArgumentParser(
        prog="crossover-mc",
        description="Monte Carlo backtest of a moving-average crossover strategy on GBM paths.",
    )
    parser.add_argument("--config", help="YAML file with BacktestConfig fields")
    parser.add_argument("--trials", type=int)
    parser.add_argument("--path-length", type=int)
    parser.add_argument("--short-window", type=int)
    parser.add_argument("--long-window", type=int)
    parser.add_argument("--step", type=int)
    parser.add_argument("--drift", type=float)
    parser.add_argument("--volatility", type=float)
    parser.add_argument("--initial-price", type=float)
    parser.add_argument("--output", help="CSV file for per-trial PnL")
    parser.add_argument("--no-output", action="store_true", help="Do not write per-trial results")
    parser.add_argument("--seed", type=int)
    parser.add_argument("--workers", type=int)
    parser.add_argument("--progress-interval", type=int)
    parser.add_argument("--log-level", default="INFO")
    return parser


def resolve_config(args: argparse.Namespace) -> BacktestConfig:
    """
    Build the run config from an optional YAML file and command-line overrides.

    Raises
    ------
    ConfigError
        If the file or any override is invalid.
    """
    config = load_config(args.config) if args.config else BacktestConfig()

    overrides = {
        field: getattr(args, dest)
        for dest, field in _OVERRIDES.items()
        if getattr(args, dest) is not None
    }
    if args.no_output:
        overrides["output_path"] = None
    return config.replace(**overrides) if overrides else config


def main(argv: Optional[List[str]] = None) -> int:
    """Run a backtest from the command line; returns the process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = resolve_config(args)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    try:
        stats = run_backtest_simulation(config)
    except ResourceUnavailable as exc:
        logger.error("Run aborted: %s", exc)
        return 1

    print(format_summary(stats))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
