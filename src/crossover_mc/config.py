"""Run configuration: validated on construction, loadable from YAML."""

from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union
import math

import yaml

from crossover_mc.errors import ConfigError


@dataclass(frozen=True)
class BacktestConfig:
    """
    Parameters of one Monte Carlo backtest run.

    Attributes
    ----------
    num_trials : int
        Number of simulated paths (> 0)
    path_length : int
        Prices per path (> 0)
    short_window, long_window : int
        Moving-average windows, 0 < short_window < long_window
    step : int
        Sampling interval of the signal scan (>= 1)
    drift, volatility : float
        Mean and standard deviation of the per-step return (volatility >= 0)
    initial_price : float
        Starting price of every path (> 0)
    output_path : str, optional
        CSV destination for per-trial results; None disables the file
    seed : int, optional
        Root seed of the run; None draws fresh entropy
    n_workers : int
        Worker processes for trials (1 = sequential)
    progress_interval : int
        Log progress every this many trials (0 disables)
    """

    num_trials: int = 10000
    path_length: int = 100000
    short_window: int = 50
    long_window: int = 150
    step: int = 5
    drift: float = 0.0
    volatility: float = 0.01
    initial_price: float = 100.0
    output_path: Optional[str] = "output.csv"
    seed: Optional[int] = None
    n_workers: int = 1
    progress_interval: int = 1000

    def __post_init__(self) -> None:
        for name in ("num_trials", "path_length", "short_window", "long_window", "step",
                     "n_workers", "progress_interval"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer. Got {value!r}")
        for name in ("drift", "volatility", "initial_price"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{name} must be a number. Got {value!r}")
        if self.seed is not None:
            if isinstance(self.seed, bool) or not isinstance(self.seed, int):
                raise ConfigError(f"seed must be an integer or None. Got {self.seed!r}")
            if self.seed < 0:
                raise ConfigError(f"seed must be non-negative. Got {self.seed}")

        if self.num_trials <= 0:
            raise ConfigError(f"num_trials must be positive. Got {self.num_trials}")
        if self.path_length <= 0:
            raise ConfigError(f"path_length must be positive. Got {self.path_length}")
        if self.short_window <= 0 or self.long_window <= 0:
            raise ConfigError(
                f"Windows must be positive. Got short_window={self.short_window}, "
                f"long_window={self.long_window}"
            )
        if self.short_window >= self.long_window:
            raise ConfigError(
                f"short_window must be smaller than long_window. Got "
                f"short_window={self.short_window}, long_window={self.long_window}"
            )
        if self.step < 1:
            raise ConfigError(f"step must be >= 1. Got {self.step}")
        if not all(math.isfinite(x) for x in (self.drift, self.volatility, self.initial_price)):
            raise ConfigError(
                f"Price parameters must be finite. Got drift={self.drift}, "
                f"volatility={self.volatility}, initial_price={self.initial_price}"
            )
        if self.volatility < 0:
            raise ConfigError(f"volatility must be non-negative. Got {self.volatility}")
        if self.initial_price <= 0:
            raise ConfigError(f"initial_price must be positive. Got {self.initial_price}")
        if self.n_workers < 1:
            raise ConfigError(f"n_workers must be >= 1. Got {self.n_workers}")
        if self.progress_interval < 0:
            raise ConfigError(f"progress_interval must be >= 0. Got {self.progress_interval}")

    def replace(self, **overrides: Any) -> "BacktestConfig":
        """Copy with some fields changed; the copy is validated again."""
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        """Field values as a plain dictionary."""
        return asdict(self)


def config_from_mapping(data: Dict[str, Any]) -> BacktestConfig:
    """Build a config from a mapping of field names to values."""
    known = {f.name for f in fields(BacktestConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

    values = dict(data)
    for key in ("drift", "volatility", "initial_price"):
        if key in values:
            values[key] = _as_float(values[key], key)
    if values.get("output_path") is not None:
        values["output_path"] = str(values["output_path"])

    return BacktestConfig(**values)


def load_config(path: Union[str, Path]) -> BacktestConfig:
    """Load a config from a YAML mapping."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Config must be a mapping")
    return config_from_mapping(data)


def _as_float(value: Any, key: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {key}: {value!r}") from exc
