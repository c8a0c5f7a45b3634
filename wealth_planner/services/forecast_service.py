"""
Forecast service coordinating the calculation engines.

This service is the entry point the HTTP layer uses to run the projection,
debt and Monte Carlo engines on already-validated models. Each run is logged
and unexpected failures are re-raised as ``ForecastError``.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from wealth_planner.models.debt_optimizer import (
    DebtOptimizer,
    DebtPayoffPlan,
    StrategyComparison,
)
from wealth_planner.models.entities import Debt, ScenarioData, WealthProjection
from wealth_planner.models.monte_carlo import (
    MonteCarloParams,
    MonteCarloProjector,
    MonteCarloResult,
)
from wealth_planner.models.projection_engine import ProjectionEngine
from wealth_planner.models.tax_engine import effective_rate, total_tax

logger = logging.getLogger(__name__)


class ForecastError(Exception):
    """Raised when a forecast run fails for reasons other than bad input."""


class ForecastService:
    """Service for running wealth forecasts and what-if tools."""

    def __init__(
        self,
        monte_carlo: Optional[MonteCarloProjector] = None,
        debt_optimizer: Optional[DebtOptimizer] = None,
        max_simulations: int = 100000,
    ) -> None:
        """Initialize the forecast service.

        Args:
            monte_carlo: Projector used for stochastic runs
            debt_optimizer: Optimizer used for payoff plans
            max_simulations: Upper bound on Monte Carlo paths per run
        """
        self.logger = logging.getLogger(__name__)
        self.monte_carlo = monte_carlo or MonteCarloProjector()
        self.debt_optimizer = debt_optimizer or DebtOptimizer()
        self.max_simulations = max_simulations

    def run_projection(self, inputs: ScenarioData) -> List[WealthProjection]:
        """Run the deterministic projection for a scenario's inputs.

        Raises:
            ForecastError: If the projection fails
        """
        try:
            self.logger.info(
                f"Starting projection over {inputs.projection_years} years"
            )
            projections = ProjectionEngine(inputs).project()
            self.logger.info(f"Completed projection of {len(projections)} years")
            return projections
        except Exception as e:
            self.logger.error(f"Projection failed: {str(e)}")
            raise ForecastError(str(e)) from e

    def run_tax(
        self, income: float, income_type: str, state: str, filing_status: str
    ) -> Dict[str, Any]:
        """Tax summary for a single income amount."""
        split = total_tax(income, income_type, state, filing_status, split=True)
        return {
            "income": income,
            "income_type": income_type,
            "state": state,
            "filing_status": filing_status,
            "federal": split.federal,
            "state_tax": split.state,
            "total": split.total,
            "effective_rate": effective_rate(income, income_type, state, filing_status),
        }

    def run_payoff_plan(
        self, debts: List[Debt], extra_payment: float, strategy: str
    ) -> DebtPayoffPlan:
        self.logger.info(f"Planning {strategy} payoff for {len(debts)} debts")
        return self.debt_optimizer.calculate_payoff_plan(debts, extra_payment, strategy)

    def run_strategy_comparison(
        self, debts: List[Debt], extra_payment: float
    ) -> StrategyComparison:
        self.logger.info(f"Comparing payoff strategies for {len(debts)} debts")
        return self.debt_optimizer.compare_strategies(debts, extra_payment)

    def run_monte_carlo(self, params: MonteCarloParams) -> MonteCarloResult:
        """Run a Monte Carlo simulation to completion off the calling thread.

        Raises:
            ValueError: If more paths are requested than the service allows
            ForecastError: If the simulation fails
        """
        if params.simulations > self.max_simulations:
            raise ValueError(
                f"simulations must not exceed {self.max_simulations}"
            )

        try:
            self.logger.info(
                f"Starting Monte Carlo run with {params.simulations} paths "
                f"over {params.years} years"
            )
            result = self.monte_carlo.simulate_async(params).result()
            self.logger.info(
                f"Completed Monte Carlo run, success rate {result.success_rate:.2%}"
            )
            return result
        except ValidationError:
            raise
        except Exception as e:
            self.logger.error(f"Monte Carlo run failed: {str(e)}")
            raise ForecastError(str(e)) from e
