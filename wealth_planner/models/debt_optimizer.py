"""
Debt payoff optimizer.

Simulates month-by-month repayment of a debt portfolio under the snowball
(smallest balance first) or avalanche (highest APR first) strategy. Each month
every open debt pays its minimum, then the whole extra payment goes to the
first open debt in strategy order. Simulation stops when every balance is
cleared or after ``MAX_PAYOFF_MONTHS`` months, whichever comes first.
"""

import logging
from typing import List, Literal, Sequence

from pydantic import BaseModel, Field

from .entities import Debt

logger = logging.getLogger(__name__)

MAX_PAYOFF_MONTHS = 600

PayoffStrategy = Literal["snowball", "avalanche"]


class DebtPayment(BaseModel):
    """Amount paid toward one debt in a month."""

    debt_id: str = Field(..., description="Debt identifier")
    amount: float = Field(..., description="Minimum plus any extra payment")


class DebtBalance(BaseModel):
    """Balance of one debt at the end of a month."""

    debt_id: str = Field(..., description="Debt identifier")
    balance: float = Field(..., ge=0, description="Remaining balance")


class MonthlyPayoff(BaseModel):
    """Payments and end-of-month balances for one simulated month."""

    month: int = Field(..., ge=1, description="Month number (1-based)")
    payments: List[DebtPayment] = Field(default_factory=list)
    remaining_balances: List[DebtBalance] = Field(default_factory=list)


class DebtPayoffPlan(BaseModel):
    """Result of simulating one payoff strategy."""

    strategy: PayoffStrategy = Field(..., description="Strategy simulated")
    total_interest: float = Field(default=0.0, description="Interest paid overall")
    payoff_months: int = Field(default=0, ge=0, description="Months simulated")
    converged: bool = Field(
        default=True,
        description="False when the month cap was hit with debt still outstanding",
    )
    monthly_schedule: List[MonthlyPayoff] = Field(default_factory=list)


class StrategyComparison(BaseModel):
    """Snowball and avalanche plans side by side."""

    snowball: DebtPayoffPlan
    avalanche: DebtPayoffPlan
    interest_saved: float = Field(
        ..., description="Snowball interest minus avalanche interest"
    )
    time_saved: int = Field(..., description="Snowball months minus avalanche months")


class _OpenDebt:
    """Mutable working copy of a debt during simulation."""

    def __init__(self, debt: Debt):
        self.id = debt.id
        self.balance = debt.balance
        self.apr = debt.apr
        self.minimum_payment = debt.minimum_payment


def order_debts(debts: Sequence[Debt], strategy: str) -> List[Debt]:
    """Return ``debts`` in the order a strategy targets them."""
    if strategy == "snowball":
        return sorted(debts, key=lambda d: d.balance)
    if strategy == "avalanche":
        return sorted(debts, key=lambda d: d.apr, reverse=True)
    raise ValueError(f"Unsupported payoff strategy: {strategy}")


class DebtOptimizer:
    """Simulates and compares debt payoff strategies."""

    def __init__(self, max_months: int = MAX_PAYOFF_MONTHS):
        self.max_months = max_months

    def calculate_payoff_plan(
        self, debts: Sequence[Debt], extra_payment: float, strategy: str
    ) -> DebtPayoffPlan:
        """
        Simulate paying off ``debts`` with ``extra_payment`` per month.

        Args:
            debts: Debts to repay
            extra_payment: Monthly amount on top of the minimum payments
            strategy: ``snowball`` or ``avalanche``

        Returns:
            The payoff plan, flagged as not converged if the month cap was hit
        """
        working = [_OpenDebt(debt) for debt in order_debts(debts, strategy)]
        schedule: List[MonthlyPayoff] = []
        total_interest = 0.0
        month = 0

        while any(d.balance > 0 for d in working) and month < self.max_months:
            month += 1
            payments = {}

            for debt in working:
                if debt.balance <= 0:
                    continue
                payment = min(debt.minimum_payment, debt.balance)
                interest = debt.balance * debt.apr / 100 / 12
                debt.balance = max(0.0, debt.balance - (payment - interest))
                total_interest += interest
                payments[debt.id] = payment

            # The whole extra payment goes to the first open debt in order
            target = next((d for d in working if d.balance > 0), None)
            if target is not None and extra_payment > 0:
                extra = min(extra_payment, target.balance)
                target.balance -= extra
                if target.id in payments:
                    payments[target.id] += extra

            schedule.append(
                MonthlyPayoff(
                    month=month,
                    payments=[
                        DebtPayment(debt_id=debt_id, amount=amount)
                        for debt_id, amount in payments.items()
                    ],
                    remaining_balances=[
                        DebtBalance(debt_id=d.id, balance=d.balance) for d in working
                    ],
                )
            )

        converged = not any(d.balance > 0 for d in working)
        if not converged:
            logger.warning(
                "%s payoff did not converge within %d months",
                strategy,
                self.max_months,
            )

        return DebtPayoffPlan(
            strategy=strategy,
            total_interest=total_interest,
            payoff_months=month,
            converged=converged,
            monthly_schedule=schedule,
        )

    def compare_strategies(
        self, debts: Sequence[Debt], extra_payment: float
    ) -> StrategyComparison:
        """Simulate both strategies and report what avalanche saves."""
        snowball = self.calculate_payoff_plan(debts, extra_payment, "snowball")
        avalanche = self.calculate_payoff_plan(debts, extra_payment, "avalanche")

        return StrategyComparison(
            snowball=snowball,
            avalanche=avalanche,
            interest_saved=snowball.total_interest - avalanche.total_interest,
            time_saved=snowball.payoff_months - avalanche.payoff_months,
        )
