"""
Realized PnL of the crossover strategy over one price path.

The path is sampled every ``step`` bars starting at ``long_window``. A trade
leg is recorded each time the signal flips to a new non-flat direction; a FLAT
signal never replaces the position currently held. PnL is realized when the
next leg closes the previous one:

    PnL = Σ_i  d_{i-1} (p_i - p_{i-1}),    d ∈ {+1 (LONG), -1 (SHORT)}

The position still open at the end of the path is not marked to market.
"""

from dataclasses import dataclass
from typing import List
import logging

from crossover_mc.errors import PreconditionViolation
from crossover_mc.strategy.signals import PriceSeries, Signal, crossover_signal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TradeLeg:
    """Entry price and direction of one recorded position."""

    entry_price: float
    signal: Signal


def _validate_scan(short_window: int, long_window: int, step: int) -> None:
    if short_window < 1 or long_window < 1:
        raise PreconditionViolation(
            f"Windows must be positive. Got short_window={short_window}, "
            f"long_window={long_window}"
        )
    if step < 1:
        raise PreconditionViolation(f"step must be >= 1. Got {step}")


def extract_trade_legs(
    path: PriceSeries,
    short_window: int,
    long_window: int,
    step: int = 1,
) -> List[TradeLeg]:
    """
    Scan a path and record every change of held position.

    Parameters
    ----------
    path : array-like
        Price path.
    short_window : int
        Fast moving-average window.
    long_window : int
        Slow moving-average window.
    step : int
        Sampling interval; only every step-th index from long_window on is
        evaluated. Default 1.

    Returns
    -------
    List[TradeLeg]
        Legs in scan order. Empty if the path is shorter than long_window.
    """
    _validate_scan(short_window, long_window, step)

    legs: List[TradeLeg] = []
    if len(path) < long_window:
        return legs

    current = Signal.FLAT
    for index in range(long_window, len(path), step):
        new_signal = crossover_signal(path, short_window, long_window, index)
        if new_signal != current and new_signal != Signal.FLAT:
            legs.append(TradeLeg(float(path[index]), new_signal))
            current = new_signal

    return legs


def realized_pnl(legs: List[TradeLeg]) -> float:
    """
    PnL of closing each leg at the entry price of the next one.

    Parameters
    ----------
    legs : List[TradeLeg]
        Recorded legs in order.

    Returns
    -------
    float
        Total realized PnL; 0.0 for fewer than two legs.
    """
    pnl = 0.0
    for previous, leg in zip(legs, legs[1:]):
        diff = leg.entry_price - previous.entry_price
        if previous.signal == Signal.LONG:
            pnl += diff
        elif previous.signal == Signal.SHORT:
            pnl -= diff
    return pnl


def evaluate_pnl(
    path: PriceSeries,
    short_window: int,
    long_window: int,
    step: int = 1,
) -> float:
    """
    Realized crossover PnL of one price path.

    Parameters
    ----------
    path : array-like
        Price path.
    short_window : int
        Fast moving-average window.
    long_window : int
        Slow moving-average window.
    step : int
        Sampling interval. Default 1.

    Returns
    -------
    float
        Realized PnL. 0.0 when the path is shorter than long_window or fewer
        than two legs are recorded.
    """
    legs = extract_trade_legs(path, short_window, long_window, step)
    pnl = realized_pnl(legs)
    logger.debug("Path of %d prices: %d legs, pnl=%.4f", len(path), len(legs), pnl)
    return pnl
