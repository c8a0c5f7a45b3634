"""
Deterministic year-by-year wealth projection.

The projection is a sequential fold over years 1..N: each year's cumulative
wealth grows the previous year's figure by the investment return and adds
that year's savings and real-estate equity, so years are always computed in
ascending order.

Known behaviours reproduced deliberately:

- Real-estate equity for each property is measured against the running total
  loan balance of all properties processed so far, not the property's own
  loan, so the result depends on property order.
- The full real-estate equity is added to cumulative wealth every year rather
  than its change since the previous year.
- Taxes are computed with the combined (non-split) form of ``total_tax`` per
  income-type bucket.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .entities import (
    ExpenseCategory,
    IncomeType,
    RealEstateProperty,
    ScenarioData,
    WealthProjection,
)
from .real_estate import (
    generate_property_expenses,
    property_loan_balance,
    property_value,
)
from .tax_engine import total_tax

logger = logging.getLogger(__name__)

# Household age in projection year 1 is BASELINE_AGE + 1
BASELINE_AGE = 30


class RealEstateTotals(BaseModel):
    """Aggregated real-estate figures for one year."""

    value: float = Field(default=0.0)
    loan_balance: float = Field(default=0.0)
    equity: float = Field(default=0.0)


class ProjectionEngine:
    """Builds the ``WealthProjection`` series for a scenario's inputs."""

    def __init__(self, inputs: ScenarioData):
        self.inputs = inputs
        self.combined_expenses: List[ExpenseCategory] = list(
            inputs.expenses
        ) + generate_property_expenses(inputs.properties)
        self._properties_by_id: Dict[str, RealEstateProperty] = {
            prop.id: prop for prop in inputs.properties
        }

    def is_retired(self, year: int) -> bool:
        retirement = self.inputs.retirement
        current_age = BASELINE_AGE + year
        return retirement.enabled and current_age >= retirement.retirement_age

    def income_by_type(self, year: int) -> Dict[IncomeType, float]:
        """Gross income for ``year`` bucketed by income type, payouts included."""
        buckets: Dict[IncomeType, float] = defaultdict(float)
        for income in self.inputs.incomes:
            buckets[income.type] += income.amount_for_year(year)
        for payout in self.inputs.equity_payouts:
            if payout.year == year:
                buckets[IncomeType.EQUITY] += payout.amount
        return buckets

    def taxes_for(self, buckets: Dict[IncomeType, float]) -> float:
        return sum(
            total_tax(
                amount,
                income_type,
                self.inputs.state,
                self.inputs.filing_status,
            )
            for income_type, amount in buckets.items()
            if amount > 0
        )

    def expenses_for(self, year: int) -> float:
        total = 0.0
        for expense in self.combined_expenses:
            owner = self._properties_by_id.get(expense.property_id)
            if owner is not None and owner.purchase_year > year:
                continue
            total += expense.amount_for_year(year)
        return total

    def real_estate_for(self, year: int) -> RealEstateTotals:
        totals = RealEstateTotals()
        for prop in self.inputs.properties:
            if year < prop.purchase_year:
                continue
            current_value = property_value(prop, year)
            totals.value += current_value
            totals.loan_balance += property_loan_balance(prop, year)
            totals.equity += current_value - max(0.0, totals.loan_balance)
        return totals

    def project_year(self, year: int, prior_wealth: float) -> WealthProjection:
        """Compute one projection year from the previous year's wealth."""
        retired = self.is_retired(year)

        gross_income = 0.0
        taxes = 0.0
        if not retired:
            buckets = self.income_by_type(year)
            gross_income = sum(buckets.values())
            taxes = self.taxes_for(buckets)

        net_income = gross_income - taxes
        total_expenses = self.expenses_for(year)
        real_estate = self.real_estate_for(year)

        if retired:
            withdrawal_rate = self.inputs.retirement.withdrawal_rate
            savings = -(prior_wealth + real_estate.equity) * withdrawal_rate / 100
        else:
            savings = net_income - total_expenses

        growth = 1 + self.inputs.investment_return / 100
        cumulative_wealth = prior_wealth * growth + savings + real_estate.equity

        return WealthProjection(
            year=year,
            gross_income=gross_income,
            net_income=net_income,
            total_expenses=total_expenses,
            savings=savings,
            cumulative_wealth=cumulative_wealth,
            taxes=taxes,
            real_estate_value=real_estate.value,
            real_estate_equity=real_estate.equity,
            loan_balance=real_estate.loan_balance,
        )

    def project(self) -> List[WealthProjection]:
        """Project every year of the horizon in ascending order."""
        projections = []
        cumulative_wealth = self.inputs.initial_wealth

        for year in range(1, self.inputs.projection_years + 1):
            projection = self.project_year(year, cumulative_wealth)
            cumulative_wealth = projection.cumulative_wealth
            projections.append(projection)

        logger.debug(
            "Projected %d years for %d incomes, %d expenses, %d properties",
            len(projections),
            len(self.inputs.incomes),
            len(self.combined_expenses),
            len(self.inputs.properties),
        )
        return projections


def project(inputs: ScenarioData) -> List[WealthProjection]:
    """Project ``inputs`` over its horizon."""
    return ProjectionEngine(inputs).project()


def final_projection(projections: List[WealthProjection]) -> Optional[WealthProjection]:
    return projections[-1] if projections else None
