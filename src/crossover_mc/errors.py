"""
Error taxonomy for the crossover backtester.

- PreconditionViolation: a public operation was called with an invalid range
  (moving-average window/index, sampling step, empty min/max input).
- ConfigError: a run configuration is malformed. Raised when the
  configuration is built or loaded, never in the middle of a scan.
- ResourceUnavailable: the per-trial output sink cannot be opened or written.

Insufficient history (a path shorter than the long window, or an index before
the long window is filled) is not an error: it yields a FLAT signal or zero PnL.
"""


class BacktestError(Exception):
    """Base class for all backtester errors."""


class PreconditionViolation(BacktestError, ValueError):
    """An argument lies outside the range an operation is defined on."""


class ConfigError(BacktestError, ValueError):
    """A run configuration is malformed."""


class ResourceUnavailable(BacktestError, OSError):
    """The output destination could not be opened or written."""
