"""Data models and calculation engines for wealth forecasting."""

from .entities import (
    Debt,
    EquityPayout,
    ExpenseCategory,
    IncomeSource,
    IncomeType,
    RealEstateProperty,
    RetirementSettings,
    ScenarioData,
    WealthProjection,
)
from .mortgage_amortization import (
    AmortizationSchedule,
    MortgageCalculator,
    PaymentBreakdown,
    monthly_payment,
    remaining_balance,
)
from .tax_engine import (
    TaxBreakdown,
    TaxSplit,
    effective_rate,
    federal_tax,
    state_tax,
    tax_breakdown_by_type,
    total_tax,
)
from .debt_optimizer import (
    DebtOptimizer,
    DebtPayoffPlan,
    StrategyComparison,
)
from .monte_carlo import (
    MonteCarloParams,
    MonteCarloProjector,
    MonteCarloResult,
)
from .projection_engine import ProjectionEngine, project
from .scenario import Scenario, ScenarioService
from .goal_checker import Goal, GoalAlert, GoalChecker

__all__ = [
    "Debt",
    "EquityPayout",
    "ExpenseCategory",
    "IncomeSource",
    "IncomeType",
    "RealEstateProperty",
    "RetirementSettings",
    "ScenarioData",
    "WealthProjection",
    "AmortizationSchedule",
    "MortgageCalculator",
    "PaymentBreakdown",
    "monthly_payment",
    "remaining_balance",
    "TaxBreakdown",
    "TaxSplit",
    "effective_rate",
    "federal_tax",
    "state_tax",
    "tax_breakdown_by_type",
    "total_tax",
    "DebtOptimizer",
    "DebtPayoffPlan",
    "StrategyComparison",
    "MonteCarloParams",
    "MonteCarloProjector",
    "MonteCarloResult",
    "ProjectionEngine",
    "project",
    "Scenario",
    "ScenarioService",
    "Goal",
    "GoalAlert",
    "GoalChecker",
]
