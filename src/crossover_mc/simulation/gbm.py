"""
Geometric Brownian Motion price paths.

Each step scales the running price by one plus a normally distributed return:

    r_t ~ N(μ, σ²)
    S_t = S_{t-1} (1 + r_t),    S_0 = initial price

The noise is multiplicative: the distribution is drawn over the return, not
the price level. Prices are not clamped, so an extreme draw with a large σ can
push a path to or below zero; downstream code tolerates this.

Randomness always comes from an explicitly passed ``numpy.random.Generator``.
"""

from typing import Optional
import math

import numpy as np
from numpy.typing import NDArray

from crossover_mc.errors import PreconditionViolation


def generate_gbm_path(
    drift: float,
    volatility: float,
    initial_price: float,
    n_steps: int,
    rng: np.random.Generator,
) -> NDArray[np.float64]:
    """
    Generate one synthetic price path.

    Parameters
    ----------
    drift : float
        Mean of the per-step return (μ).
    volatility : float
        Standard deviation of the per-step return (σ). Must be >= 0.
    initial_price : float
        Starting price S_0. Not included in the output.
    n_steps : int
        Number of steps, i.e. the length of the returned path.
    rng : np.random.Generator
        Source of the normal draws.

    Returns
    -------
    NDArray[np.float64]
        Read-only price path of shape (n_steps,).
    """
    if n_steps < 0:
        raise PreconditionViolation(f"n_steps must be non-negative. Got {n_steps}")
    if volatility < 0:
        raise PreconditionViolation(f"volatility must be non-negative. Got {volatility}")

    returns = rng.normal(drift, volatility, n_steps)

    # cumprod multiplies left to right, so this is exactly S <- S * (1 + r)
    growth = np.concatenate(([initial_price], 1.0 + returns))
    path = np.cumprod(growth)[1:]

    path.flags.writeable = False
    return path


class PriceSimulator:
    """
    GBM price simulator with fixed parameters.

    Attributes
    ----------
    drift : float
        Mean per-step return
    volatility : float
        Standard deviation of the per-step return
    initial_price : float
        Starting price of every path
    """

    def __init__(
        self,
        drift: float = 0.0,
        volatility: float = 0.01,
        initial_price: float = 100.0,
    ) -> None:
        """
        Initialize the simulator.

        Parameters
        ----------
        drift : float
            Mean per-step return. Default 0.0.
        volatility : float
            Per-step return standard deviation, >= 0. Default 0.01.
        initial_price : float
            Starting price, > 0. Default 100.0.

        Raises
        ------
        PreconditionViolation
            If any parameter is non-finite or out of range.
        """
        if not all(math.isfinite(x) for x in (drift, volatility, initial_price)):
            raise PreconditionViolation(
                f"Parameters must be finite. Got drift={drift}, "
                f"volatility={volatility}, initial_price={initial_price}"
            )
        if volatility < 0:
            raise PreconditionViolation(f"volatility must be non-negative. Got {volatility}")
        if initial_price <= 0:
            raise PreconditionViolation(f"initial_price must be positive. Got {initial_price}")

        self.drift = float(drift)
        self.volatility = float(volatility)
        self.initial_price = float(initial_price)

    def generate(
        self,
        n_steps: int,
        rng: Optional[np.random.Generator] = None,
        random_seed: Optional[int] = None,
    ) -> NDArray[np.float64]:
        """
        Generate a price path of length n_steps.

        Parameters
        ----------
        n_steps : int
            Path length.
        rng : np.random.Generator, optional
            Generator to draw from. Takes precedence over random_seed.
        random_seed : int, optional
            Seed for a private generator when rng is not given.

        Returns
        -------
        NDArray[np.float64]
            Read-only price path of shape (n_steps,).
        """
        if rng is None:
            rng = np.random.default_rng(random_seed)

        return generate_gbm_path(
            self.drift, self.volatility, self.initial_price, n_steps, rng
        )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"PriceSimulator(drift={self.drift}, volatility={self.volatility}, "
            f"initial_price={self.initial_price})"
        )
