"""
Monte Carlo wealth projection.

Each simulated path draws an independent normal return every year using the
Box-Muller transform, grows the path's wealth by that return and then adds a
fixed annual contribution. Once every path is complete the cross-path
distribution of each year is reduced to nearest-rank percentile bands.

Paths are simulated together as numpy vectors; the draws for different
paths and years are still independent of each other.
"""

import logging
import math
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, List, Optional

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

PERCENTILES: Dict[str, float] = {
    "p10": 0.10,
    "p25": 0.25,
    "p50": 0.50,
    "p75": 0.75,
    "p90": 0.90,
}

# A path succeeds when its final wealth exceeds this multiple of the start
SUCCESS_MULTIPLE = 2.0

PROBABILITY_TARGETS = [500_000, 1_000_000, 2_000_000, 5_000_000]


class MonteCarloParams(BaseModel):
    """Parameters for a Monte Carlo wealth simulation."""

    initial_wealth: float = Field(default=0.0, description="Starting wealth")
    annual_contribution: float = Field(
        default=0.0, description="Amount added after each year's return"
    )
    expected_return: float = Field(
        default=7.0, description="Mean annual return (%)"
    )
    volatility: float = Field(
        default=15.0, ge=0, description="Standard deviation of annual return (%)"
    )
    years: int = Field(default=30, ge=1, le=100, description="Years to simulate")
    simulations: int = Field(
        default=1000, ge=1, description="Number of simulated paths"
    )
    seed: Optional[int] = Field(
        default=None, ge=0, description="Random seed for reproducibility"
    )


class PercentileBands(BaseModel):
    """Per-year wealth at fixed percentiles, index 0 being year 1."""

    p10: List[float] = Field(default_factory=list)
    p25: List[float] = Field(default_factory=list)
    p50: List[float] = Field(default_factory=list)
    p75: List[float] = Field(default_factory=list)
    p90: List[float] = Field(default_factory=list)


class TargetProbability(BaseModel):
    """Share of paths finishing at or above a wealth target."""

    target: float = Field(..., description="Final wealth target")
    probability: float = Field(..., ge=0, le=100, description="Share of paths (%)")


class MonteCarloResult(BaseModel):
    """Summary of a completed Monte Carlo run."""

    years: int = Field(..., description="Years simulated")
    simulations: int = Field(..., description="Paths simulated")
    percentiles: PercentileBands = Field(..., description="Per-year percentile bands")
    success_rate: float = Field(
        ..., ge=0, le=1, description="Share of paths ending above 2x initial wealth"
    )
    final_values: List[float] = Field(
        default_factory=list, description="Final wealth of every path"
    )
    probability_table: List[TargetProbability] = Field(default_factory=list)


class MonteCarloProjector:
    """Runs Monte Carlo wealth simulations."""

    def __init__(self, max_workers: int = 2):
        self.max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()

    def simulate_paths(self, params: MonteCarloParams) -> NDArray[np.float64]:
        """
        Simulate every path.

        Returns:
            Array of shape (years, simulations) holding each path's wealth at
            the end of each year
        """
        rng = np.random.default_rng(params.seed)
        wealth = np.full(params.simulations, params.initial_wealth, dtype=np.float64)
        paths = np.zeros((params.years, params.simulations))

        for year in range(params.years):
            # 1 - U[0, 1) lies in (0, 1], keeping the log finite
            u1 = 1.0 - rng.random(params.simulations)
            u2 = rng.random(params.simulations)
            z0 = np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * math.pi * u2)

            annual_return = params.expected_return + params.volatility * z0
            wealth = wealth * (1 + annual_return / 100) + params.annual_contribution
            paths[year] = wealth

        return paths

    @staticmethod
    def percentile_bands(paths: NDArray[np.float64]) -> PercentileBands:
        """Nearest-rank percentiles of each year's values across paths."""
        simulations = paths.shape[1]
        ordered = np.sort(paths, axis=1)
        bands = {
            name: ordered[:, int(math.floor(simulations * p))].tolist()
            for name, p in PERCENTILES.items()
        }
        return PercentileBands(**bands)

    def simulate(self, params: MonteCarloParams) -> MonteCarloResult:
        """Run a full simulation and summarise it."""
        logger.debug(
            "Simulating %d paths over %d years", params.simulations, params.years
        )
        paths = self.simulate_paths(params)
        final_values = paths[-1]

        successes = int(
            np.count_nonzero(final_values > params.initial_wealth * SUCCESS_MULTIPLE)
        )
        probability_table = [
            TargetProbability(
                target=target,
                probability=float(np.count_nonzero(final_values >= target))
                / params.simulations
                * 100,
            )
            for target in PROBABILITY_TARGETS
        ]

        return MonteCarloResult(
            years=params.years,
            simulations=params.simulations,
            percentiles=self.percentile_bands(paths),
            success_rate=successes / params.simulations,
            final_values=final_values.tolist(),
            probability_table=probability_table,
        )

    def simulate_async(self, params: MonteCarloParams) -> "Future[MonteCarloResult]":
        """
        Run ``simulate`` on a worker thread.

        The returned future resolves with the complete result; there are no
        partial results and a started run cannot be cancelled.
        """
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers, thread_name_prefix="monte-carlo"
                )
            return self._executor.submit(self.simulate, params)

    def shutdown(self) -> None:
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
