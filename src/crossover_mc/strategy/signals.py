"""
Dual moving-average crossover signals.

The short-window average is compared with the long-window average at a given
position of a price path:

    MA_w(t) = (1/w) Σ_{i=t-w+1}^{t} S_i
    signal(t) = LONG   if MA_short(t) > MA_long(t)
                SHORT  if MA_short(t) < MA_long(t)
                FLAT   otherwise, or before the long window is filled
"""

from enum import IntEnum
from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from crossover_mc.errors import PreconditionViolation

PriceSeries = Union[NDArray[np.float64], Sequence[float]]


class Signal(IntEnum):
    """Directional position implied by a crossover."""

    SHORT = -1
    FLAT = 0
    LONG = 1


def moving_average(path: PriceSeries, end_index: int, window_size: int) -> float:
    """
    Average of the window_size values ending at and including end_index.

    Parameters
    ----------
    path : array-like
        Price path.
    end_index : int
        Last index of the window (inclusive).
    window_size : int
        Number of values averaged.

    Returns
    -------
    float
        Mean of path[end_index - window_size + 1 : end_index + 1].

    Raises
    ------
    PreconditionViolation
        If window_size < 1, end_index < window_size - 1 or
        end_index >= len(path).
    """
    if window_size < 1:
        raise PreconditionViolation(f"window_size must be positive. Got {window_size}")
    if end_index < window_size - 1 or end_index >= len(path):
        raise PreconditionViolation(
            f"end_index must be in [{window_size - 1}, {len(path) - 1}] "
            f"for window_size={window_size}. Got {end_index}"
        )

    start = end_index - window_size + 1
    window = np.asarray(path[start:end_index + 1], dtype=np.float64)
    return float(window.sum() / window_size)


def crossover_signal(
    path: PriceSeries,
    short_window: int,
    long_window: int,
    index: int,
) -> Signal:
    """
    Crossover signal at a path position.

    Returns FLAT without computing any average while the larger window is not
    yet filled. With short_window < long_window this is index < long_window - 1.

    Parameters
    ----------
    path : array-like
        Price path.
    short_window : int
        Window of the fast average.
    long_window : int
        Window of the slow average.
    index : int
        Position at which the signal is evaluated.

    Returns
    -------
    Signal
    """
    if index < max(short_window, long_window) - 1:
        return Signal.FLAT

    short_ma = moving_average(path, index, short_window)
    long_ma = moving_average(path, index, long_window)

    if short_ma > long_ma:
        return Signal.LONG
    if short_ma < long_ma:
        return Signal.SHORT
    return Signal.FLAT
