"""
Synthetic price path generation.

This module provides Geometric Brownian Motion price paths:
- generate_gbm_path: One path from explicit parameters and a generator
- PriceSimulator: Fixed GBM parameters, one path per call

**Usage:**
```python
import numpy as np
from crossover_mc.simulation import PriceSimulator

sim = PriceSimulator(drift=0.0, volatility=0.01, initial_price=100.0)
path = sim.generate(n_steps=1000, rng=np.random.default_rng(42))
```
"""

from crossover_mc.simulation.gbm import PriceSimulator, generate_gbm_path

__all__ = [
    "PriceSimulator",
    "generate_gbm_path",
]
