"""
Moving-average crossover strategy: signals and PnL accounting.

**Signals (signals.py):**
- Signal: LONG / SHORT / FLAT
- moving_average: Trailing mean ending at an index
- crossover_signal: Short vs. long moving-average comparison

**PnL (pnl.py):**
- TradeLeg: Entry price and direction of a recorded position
- extract_trade_legs: Signal-change detection over a sampled path
- realized_pnl / evaluate_pnl: PnL realized on each reversal
"""

from crossover_mc.strategy.signals import Signal, moving_average, crossover_signal
from crossover_mc.strategy.pnl import (
    TradeLeg,
    extract_trade_legs,
    realized_pnl,
    evaluate_pnl,
)

__all__ = [
    # Signals
    "Signal",
    "moving_average",
    "crossover_signal",
    # PnL
    "TradeLeg",
    "extract_trade_legs",
    "realized_pnl",
    "evaluate_pnl",
]
