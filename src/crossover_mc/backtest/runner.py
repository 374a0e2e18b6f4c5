"""
Monte Carlo driver for the crossover backtest.

Each trial simulates one GBM path and evaluates the strategy on it:

    trial i:  S^(i) ~ GBM(μ, σ, S_0),   PnL_i = evaluate_pnl(S^(i))

Random streams come from one ``SeedSequence`` per run, spawned into one child
per trial. Trial i always draws from child i, so a fixed seed gives the same
PnL sequence whether trials run sequentially or across worker processes.
"""

from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import logging
import time

import numpy as np
from numpy.typing import NDArray

from crossover_mc.backtest.report import TrialResultWriter, format_summary
from crossover_mc.backtest.statistics import AggregateStats, compute_aggregate_stats
from crossover_mc.config import BacktestConfig
from crossover_mc.simulation.gbm import PriceSimulator
from crossover_mc.strategy.pnl import evaluate_pnl

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonteCarloResult:
    """Per-trial PnL in trial order, and its aggregate statistics."""

    pnls: NDArray[np.float64]
    stats: AggregateStats


def run_trial(
    config: BacktestConfig,
    seed_sequence: np.random.SeedSequence,
) -> float:
    """Simulate one path and return its realized PnL."""
    rng = np.random.default_rng(seed_sequence)
    simulator = PriceSimulator(config.drift, config.volatility, config.initial_price)
    path = simulator.generate(config.path_length, rng=rng)
    return evaluate_pnl(path, config.short_window, config.long_window, config.step)


def _run_chunk(
    config: BacktestConfig,
    start: int,
    seed_sequences: Sequence[np.random.SeedSequence],
) -> Tuple[int, List[float]]:
    return start, [run_trial(config, ss) for ss in seed_sequences]


class MonteCarloRunner:
    """
    Runs num_trials independent simulate-then-evaluate trials.

    Attributes
    ----------
    config : BacktestConfig
        Validated run parameters
    """

    def __init__(self, config: BacktestConfig) -> None:
        self.config = config

    def spawn_seeds(self) -> List[np.random.SeedSequence]:
        """One independent seed sequence per trial."""
        root = np.random.SeedSequence(self.config.seed)
        return root.spawn(self.config.num_trials)

    def run(self, writer: Optional[TrialResultWriter] = None) -> MonteCarloResult:
        """
        Execute all trials and aggregate.

        Parameters
        ----------
        writer : TrialResultWriter, optional
            Open sink receiving one row per trial, in trial order.

        Returns
        -------
        MonteCarloResult

        Raises
        ------
        ResourceUnavailable
            If the writer fails; the run is aborted.
        """
        config = self.config
        logger.info(
            "Starting Monte Carlo backtest: %d trials, path_length=%d, windows=%d/%d, "
            "step=%d, workers=%d",
            config.num_trials, config.path_length, config.short_window,
            config.long_window, config.step, config.n_workers,
        )
        start_time = time.time()

        seeds = self.spawn_seeds()
        if config.n_workers > 1:
            pnls = self._run_parallel(seeds, writer)
        else:
            pnls = self._run_sequential(seeds, writer)

        pnl_array = np.asarray(pnls, dtype=np.float64)
        pnl_array.flags.writeable = False
        stats = compute_aggregate_stats(pnl_array)

        logger.info(
            "Monte Carlo complete in %.2fs: mean=%.4f, win_rate=%.2f%%",
            time.time() - start_time, stats.mean, 100.0 * stats.win_rate,
        )
        return MonteCarloResult(pnls=pnl_array, stats=stats)

    def _run_sequential(
        self,
        seeds: Sequence[np.random.SeedSequence],
        writer: Optional[TrialResultWriter],
    ) -> List[float]:
        pnls: List[float] = []
        for i, seed_sequence in enumerate(seeds, start=1):
            pnl = run_trial(self.config, seed_sequence)
            pnls.append(pnl)
            if writer is not None:
                writer.write_trial(i, pnl)
            self._log_progress(i)
        return pnls

    def _run_parallel(
        self,
        seeds: Sequence[np.random.SeedSequence],
        writer: Optional[TrialResultWriter],
    ) -> List[float]:
        n_workers = min(self.config.n_workers, len(seeds))
        chunk_size = -(-len(seeds) // n_workers)

        partials: List[Tuple[int, List[float]]] = []
        with ProcessPoolExecutor(max_workers=n_workers) as executor:
            futures = [
                executor.submit(_run_chunk, self.config, start, seeds[start:start + chunk_size])
                for start in range(0, len(seeds), chunk_size)
            ]
            for future in futures:
                partials.append(future.result())
                logger.info(
                    "Completed %d/%d trials",
                    sum(len(chunk) for _, chunk in partials), len(seeds),
                )

        pnls: List[float] = []
        for _, chunk in sorted(partials, key=lambda item: item[0]):
            pnls.extend(chunk)

        if writer is not None:
            for i, pnl in enumerate(pnls, start=1):
                writer.write_trial(i, pnl)
        return pnls

    def _log_progress(self, completed: int) -> None:
        interval = self.config.progress_interval
        if interval and completed % interval == 0:
            logger.info("Completed %d/%d trials", completed, self.config.num_trials)

    def __repr__(self) -> str:
        """String representation."""
        return f"MonteCarloRunner(config={self.config!r})"


def run_backtest_simulation(config: BacktestConfig) -> AggregateStats:
    """
    Run a full backtest and return its aggregate statistics.

    Per-trial results go to ``config.output_path`` when set. The sink is
    opened before the first trial, so an unwritable destination fails the
    run before any work is done.

    Raises
    ------
    ResourceUnavailable
        If the output cannot be opened or written.
    """
    runner = MonteCarloRunner(config)

    if config.output_path is None:
        result = runner.run()
    else:
        with TrialResultWriter(config.output_path) as writer:
            result = runner.run(writer)

    logger.info("Summary\n%s", format_summary(result.stats))
    return result.stats
