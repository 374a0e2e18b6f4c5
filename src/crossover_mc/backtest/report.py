"""Per-trial CSV output and the end-of-run summary."""

from pathlib import Path
from typing import Optional, TextIO, Union
import csv
import logging

from crossover_mc.backtest.statistics import AggregateStats
from crossover_mc.errors import ResourceUnavailable

logger = logging.getLogger(__name__)

Destination = Union[str, Path, TextIO]


class TrialResultWriter:
    """
    CSV sink with one ``trial,pnl`` row per trial.

    Accepts a filesystem path, which the writer opens and closes, or an open
    text handle, which stays open after the writer is closed. PnL is written
    with 4 decimal places.
    """

    HEADER = ("trial", "pnl")

    def __init__(self, destination: Destination) -> None:
        self.destination = destination
        self._handle: Optional[TextIO] = None
        self._owns_handle = False
        self._writer = None
        self.rows_written = 0

    def open(self) -> "TrialResultWriter":
        """Open the destination and write the header row."""
        if hasattr(self.destination, "write"):
            self._handle = self.destination
        else:
            path = Path(self.destination)
            try:
                self._handle = path.open("w", newline="", encoding="utf-8")
            except OSError as exc:
                raise ResourceUnavailable(f"Cannot open output {path}: {exc}") from exc
            self._owns_handle = True
            logger.info("Writing trial results to %s", path)

        self._writer = csv.writer(self._handle)
        self._write(self.HEADER)
        return self

    def write_trial(self, trial_index: int, pnl: float) -> None:
        """Append one row; trial_index is 1-based."""
        if self._writer is None:
            raise ResourceUnavailable("Writer is not open")
        self._write((trial_index, f"{pnl:.4f}"))
        self.rows_written += 1

    def close(self) -> None:
        """Close an owned file, or flush a borrowed handle."""
        if self._handle is None:
            return
        try:
            if self._owns_handle:
                self._handle.close()
            else:
                self._handle.flush()
        except (OSError, ValueError) as exc:
            raise ResourceUnavailable(f"Cannot close output: {exc}") from exc
        finally:
            self._handle = None
            self._writer = None

    def _write(self, row) -> None:
        try:
            self._writer.writerow(row)
        except (OSError, ValueError) as exc:
            raise ResourceUnavailable(f"Cannot write trial result: {exc}") from exc

    def __enter__(self) -> "TrialResultWriter":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"TrialResultWriter(destination={self.destination!r}, rows_written={self.rows_written})"


def format_summary(stats: AggregateStats) -> str:
    """Human-readable run summary."""
    pct = 100.0 * stats.win_rate
    return "\n".join(
        [
            f"Trials:            {stats.n_trials}",
            f"Average PnL:       {stats.mean:.4f}",
            f"95% CI (mean):     [{stats.ci_low:.4f}, {stats.ci_high:.4f}]",
            f"Std dev:           {stats.std:.4f}",
            f"Min PnL:           {stats.min:.4f}",
            f"Max PnL:           {stats.max:.4f}",
            f"Profitable trials: {stats.n_profitable} ({pct:.2f}%)",
        ]
    )
