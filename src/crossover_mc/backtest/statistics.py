"""
Summary statistics over per-trial PnL.

Empty-input policy: ``mean`` and ``win_rate`` return 0.0, while ``minimum``
and ``maximum`` raise, since no extreme value exists.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Sequence, Tuple

import numpy as np
from scipy import stats as sps

from crossover_mc.errors import PreconditionViolation


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def minimum(values: Sequence[float]) -> float:
    """Smallest value. Raises PreconditionViolation on empty input."""
    if len(values) == 0:
        raise PreconditionViolation("minimum of an empty sequence is undefined")
    return float(np.min(values))


def maximum(values: Sequence[float]) -> float:
    """Largest value. Raises PreconditionViolation on empty input."""
    if len(values) == 0:
        raise PreconditionViolation("maximum of an empty sequence is undefined")
    return float(np.max(values))


def count_if(values: Sequence[float], predicate: Callable[[float], bool]) -> int:
    """Number of values satisfying predicate."""
    return sum(1 for value in values if predicate(value))


def win_rate(values: Sequence[float]) -> float:
    """Fraction of strictly positive values; 0.0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return count_if(values, lambda v: v > 0) / len(values)


def standard_deviation(values: Sequence[float]) -> float:
    """Sample standard deviation (ddof=1); 0.0 for fewer than two values."""
    if len(values) < 2:
        return 0.0
    return float(np.std(values, ddof=1))


def mean_confidence_interval(
    values: Sequence[float],
    confidence: float = 0.95,
) -> Tuple[float, float]:
    """
    Student-t confidence interval for the mean.

    Parameters
    ----------
    values : Sequence[float]
        Observations.
    confidence : float
        Confidence level in (0, 1). Default 0.95.

    Returns
    -------
    Tuple[float, float]
        (lower, upper). Collapses to (mean, mean) for fewer than two values
        or zero dispersion.
    """
    if not 0.0 < confidence < 1.0:
        raise PreconditionViolation(f"confidence must be in (0, 1). Got {confidence}")

    center = mean(values)
    if len(values) < 2:
        return center, center

    sem = float(sps.sem(values))
    if sem == 0.0:
        return center, center

    lower, upper = sps.t.interval(confidence, len(values) - 1, loc=center, scale=sem)
    return float(lower), float(upper)


@dataclass(frozen=True)
class AggregateStats:
    """
    Distribution of PnL over the trials of one run.

    Attributes
    ----------
    n_trials : int
        Number of trials aggregated
    mean : float
        Average PnL
    min : float
        Worst trial PnL
    max : float
        Best trial PnL
    n_profitable : int
        Trials with PnL > 0
    win_rate : float
        n_profitable / n_trials
    std : float
        Sample standard deviation of PnL
    ci_low, ci_high : float
        95% confidence interval of the mean
    """

    n_trials: int
    mean: float
    min: float
    max: float
    n_profitable: int
    win_rate: float
    std: float
    ci_low: float
    ci_high: float

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary for serialization."""
        return {
            "n_trials": self.n_trials,
            "mean": self.mean,
            "min": self.min,
            "max": self.max,
            "n_profitable": self.n_profitable,
            "win_rate": self.win_rate,
            "std": self.std,
            "ci_low": self.ci_low,
            "ci_high": self.ci_high,
        }


def compute_aggregate_stats(values: Sequence[float]) -> AggregateStats:
    """
    Aggregate per-trial PnL.

    Raises
    ------
    PreconditionViolation
        If values is empty.
    """
    if len(values) == 0:
        raise PreconditionViolation("Cannot aggregate an empty set of trial results")

    ci_low, ci_high = mean_confidence_interval(values)

    return AggregateStats(
        n_trials=len(values),
        mean=mean(values),
        min=minimum(values),
        max=maximum(values),
        n_profitable=count_if(values, lambda v: v > 0),
        win_rate=win_rate(values),
        std=standard_deviation(values),
        ci_low=ci_low,
        ci_high=ci_high,
    )
