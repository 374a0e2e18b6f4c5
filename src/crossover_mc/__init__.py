"""
Monte Carlo backtester for a moving-average crossover strategy.

Subpackages:
- simulation: Geometric Brownian Motion price paths
- strategy: Crossover signals and realized PnL per path
- backtest: Monte Carlo run loop, statistics and reporting
"""

from crossover_mc.config import BacktestConfig, load_config
from crossover_mc.errors import (
    BacktestError,
    ConfigError,
    PreconditionViolation,
    ResourceUnavailable,
)
from crossover_mc.backtest import AggregateStats, MonteCarloRunner, run_backtest_simulation

__version__ = "0.1.0"

__all__ = [
    "AggregateStats",
    "BacktestConfig",
    "BacktestError",
    "ConfigError",
    "MonteCarloRunner",
    "PreconditionViolation",
    "ResourceUnavailable",
    "load_config",
    "run_backtest_simulation",
]
