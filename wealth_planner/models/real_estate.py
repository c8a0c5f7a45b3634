"""
Real-estate valuation helpers.

Values appreciate from the purchase price starting in the purchase year; loan
balances follow the standard amortization curve with twelve payments per year
owned. Carrying costs (property tax, maintenance) are based on the original
purchase price.
"""

from typing import Iterable, List

from pydantic import BaseModel, Field

from .entities import ExpenseCategory, RealEstateProperty
from .mortgage_amortization import MortgageCalculator

PROPERTY_TAX_GROWTH_RATE = 2.0
MAINTENANCE_GROWTH_RATE = 3.0


class PropertyYear(BaseModel):
    """Valuation of a single property in one projection year."""

    year: int = Field(..., ge=1, description="Projection year (1-based)")
    owned: bool = Field(..., description="Whether the property is held this year")
    value: float = Field(default=0.0, description="Appreciated market value")
    loan_balance: float = Field(default=0.0, description="Outstanding loan balance")
    equity: float = Field(default=0.0, description="Value less loan balance")


def is_owned(prop: RealEstateProperty, year: int) -> bool:
    return year >= prop.purchase_year


def property_value(prop: RealEstateProperty, year: int) -> float:
    """Appreciated value of ``prop`` in ``year`` (0 before purchase)."""
    if not is_owned(prop, year):
        return 0.0
    years_owned = year - prop.purchase_year + 1
    return prop.purchase_price * (1 + prop.appreciation_rate / 100) ** (years_owned - 1)


def property_loan_balance(prop: RealEstateProperty, year: int) -> float:
    """Loan balance of ``prop`` in ``year`` (0 before purchase)."""
    if not is_owned(prop, year):
        return 0.0
    months_elapsed = (year - prop.purchase_year) * 12
    return MortgageCalculator.calculate_remaining_balance(
        prop.loan_amount, prop.interest_rate, prop.loan_term_years, months_elapsed
    )


def property_schedule(prop: RealEstateProperty, years: int) -> List[PropertyYear]:
    """Year-by-year value, loan balance and equity for one property."""
    schedule = []
    for year in range(1, years + 1):
        value = property_value(prop, year)
        balance = property_loan_balance(prop, year)
        schedule.append(
            PropertyYear(
                year=year,
                owned=is_owned(prop, year),
                value=value,
                loan_balance=balance,
                equity=MortgageCalculator.calculate_equity(value, balance),
            )
        )
    return schedule


def generate_property_expenses(
    properties: Iterable[RealEstateProperty],
) -> List[ExpenseCategory]:
    """
    Carrying-cost expense lines for each property.

    Every property yields a mortgage line (the fixed amortized payment), a
    property-tax line and a maintenance line. Tax and maintenance use the
    purchase price as their base and grow at fixed rates instead of tracking
    the appreciated value.
    """
    expenses = []
    for prop in properties:
        payment = MortgageCalculator.calculate_monthly_payment(
            prop.loan_amount, prop.interest_rate, prop.loan_term_years
        )
        expenses.extend(
            [
                ExpenseCategory(
                    id=f"{prop.id}-mortgage",
                    name=f"{prop.name} Mortgage",
                    amount=payment * 12,
                    frequency="annually",
                    growth_rate=0.0,
                    is_fixed=True,
                    property_id=prop.id,
                ),
                ExpenseCategory(
                    id=f"{prop.id}-property-tax",
                    name=f"{prop.name} Property Tax",
                    amount=prop.purchase_price * prop.property_tax_rate / 100,
                    frequency="annually",
                    growth_rate=PROPERTY_TAX_GROWTH_RATE,
                    property_id=prop.id,
                ),
                ExpenseCategory(
                    id=f"{prop.id}-maintenance",
                    name=f"{prop.name} Maintenance",
                    amount=prop.purchase_price * prop.maintenance_rate / 100,
                    frequency="annually",
                    growth_rate=MAINTENANCE_GROWTH_RATE,
                    property_id=prop.id,
                ),
            ]
        )
    return expenses
