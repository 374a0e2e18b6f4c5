"""
Monte Carlo backtesting of the crossover strategy.

This module provides the run loop and its outputs:
- MonteCarloRunner: Independent simulate-then-evaluate trials
- run_backtest_simulation: Single entry operation for a configured run
- Statistics: mean, min, max, win rate, confidence interval of the mean
- TrialResultWriter / format_summary: Per-trial CSV rows and run summary

**Usage:**
```python
from crossover_mc.config import BacktestConfig
from crossover_mc.backtest import MonteCarloRunner

config = BacktestConfig(num_trials=500, path_length=2000, seed=7, output_path=None)
result = MonteCarloRunner(config).run()

print(result.stats.mean, result.stats.win_rate)
```
"""

from crossover_mc.backtest.statistics import (
    AggregateStats,
    compute_aggregate_stats,
    count_if,
    maximum,
    mean,
    mean_confidence_interval,
    minimum,
    standard_deviation,
    win_rate,
)
from crossover_mc.backtest.report import TrialResultWriter, format_summary
from crossover_mc.backtest.runner import (
    MonteCarloResult,
    MonteCarloRunner,
    run_backtest_simulation,
    run_trial,
)

__all__ = [
    # Statistics
    "AggregateStats",
    "compute_aggregate_stats",
    "count_if",
    "maximum",
    "mean",
    "mean_confidence_interval",
    "minimum",
    "standard_deviation",
    "win_rate",
    # Output
    "TrialResultWriter",
    "format_summary",
    # Runner
    "MonteCarloResult",
    "MonteCarloRunner",
    "run_backtest_simulation",
    "run_trial",
]
