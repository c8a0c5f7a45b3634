"""
Tax engine for wealth forecasting.

Pure functions computing simplified federal and state income tax:

- Federal: investment income is taxed at a flat long-term capital gains rate;
  every other income type walks the progressive bracket table for the filing
  status.
- State: California and New York walk their own progressive tables, every
  other state applies a flat percentage to the full amount. Unknown states are
  untaxed.

Income at or below zero is never taxed. Unknown filing statuses fall back to
the single-filer table.
"""

import logging
from typing import Dict, Iterable, List, Union

from pydantic import BaseModel, Field

from .entities import IncomeSource, IncomeType
from .tax_tables import (
    CAPITAL_GAINS_RATE,
    DEFAULT_FILING_STATUS,
    FEDERAL_TAX_BRACKETS,
    FILING_STATUS_ALIASES,
    STATE_TAX_BRACKETS,
    STATE_TAX_RATES,
    TaxBracket,
)

logger = logging.getLogger(__name__)

ORDINARY = "ordinary"
CAPITAL_GAINS = "capital_gains"

# Federal treatment for every income type; extend this map with the enum.
FEDERAL_TREATMENT: Dict[IncomeType, str] = {
    IncomeType.SALARY: ORDINARY,
    IncomeType.FREELANCE: ORDINARY,
    IncomeType.INVESTMENT: CAPITAL_GAINS,
    IncomeType.EQUITY: ORDINARY,
    IncomeType.OTHER: ORDINARY,
    IncomeType.BONUS: ORDINARY,
    IncomeType.RSU: ORDINARY,
}

_untreated = set(IncomeType) - set(FEDERAL_TREATMENT)
if _untreated:
    raise RuntimeError(f"Income types without federal treatment: {_untreated}")


class TaxSplit(BaseModel):
    """Federal and state components of a tax bill."""

    federal: float = Field(default=0.0, description="Federal income tax")
    state: float = Field(default=0.0, description="State income tax")

    @property
    def total(self) -> float:
        return self.federal + self.state


class TaxBreakdown(BaseModel):
    """Tax owed on all income of one type for a single year."""

    income_type: IncomeType = Field(..., description="Income category")
    gross_income: float = Field(default=0.0, description="Gross income of this type")
    federal: float = Field(default=0.0, description="Federal tax")
    state: float = Field(default=0.0, description="State tax")
    total: float = Field(default=0.0, description="Federal plus state tax")
    effective_rate: float = Field(default=0.0, description="Total tax / gross (%)")


def resolve_income_type(income_type: Union[IncomeType, str]) -> IncomeType:
    """Map a raw income type onto the closed enum, rejecting unknown values."""
    return IncomeType(income_type)


def normalize_filing_status(filing_status: str) -> str:
    """Return the bracket-table key for ``filing_status`` (``single`` if unknown)."""
    key = FILING_STATUS_ALIASES.get(filing_status, filing_status)
    if key not in FEDERAL_TAX_BRACKETS:
        return DEFAULT_FILING_STATUS
    return key


def normalize_state(state: str) -> str:
    """Strip all whitespace from a state name to form a lookup key."""
    return "".join(str(state or "").split())


def calculate_bracket_tax(income: float, brackets: List[TaxBracket]) -> float:
    """Walk an ascending bracket table, taxing each slice at its own rate."""
    tax = 0.0
    remaining = income

    for bracket in brackets:
        if remaining <= 0:
            break
        taxable = min(remaining, bracket.max - bracket.min)
        tax += taxable * bracket.rate / 100
        remaining -= taxable

    return tax


def federal_tax(
    income: float,
    income_type: Union[IncomeType, str],
    filing_status: str = DEFAULT_FILING_STATUS,
) -> float:
    """Federal income tax on ``income`` of the given type."""
    treatment = FEDERAL_TREATMENT[resolve_income_type(income_type)]
    if income <= 0:
        return 0.0

    if treatment == CAPITAL_GAINS:
        return income * CAPITAL_GAINS_RATE / 100

    brackets = FEDERAL_TAX_BRACKETS[normalize_filing_status(filing_status)]
    return calculate_bracket_tax(income, brackets)


def state_tax(
    income: float, income_type: Union[IncomeType, str], state: str
) -> float:
    """State income tax on ``income``; unknown states are untaxed."""
    resolve_income_type(income_type)
    if income <= 0:
        return 0.0

    key = normalize_state(state)
    if key in STATE_TAX_BRACKETS:
        return calculate_bracket_tax(income, STATE_TAX_BRACKETS[key])

    rate = STATE_TAX_RATES.get(key)
    if rate is None:
        logger.debug("No tax data for state %r, treating as untaxed", state)
        return 0.0
    return income * rate / 100


def total_tax(
    income: float,
    income_type: Union[IncomeType, str],
    state: str,
    filing_status: str = DEFAULT_FILING_STATUS,
    split: bool = False,
) -> Union[float, TaxSplit]:
    """
    Combined federal and state tax.

    Args:
        income: Taxable amount
        income_type: Income category
        state: State of residence
        filing_status: Federal filing status
        split: Return the federal and state parts separately

    Returns:
        The summed tax, or a ``TaxSplit`` when ``split`` is true
    """
    parts = TaxSplit(
        federal=federal_tax(income, income_type, filing_status),
        state=state_tax(income, income_type, state),
    )
    if split:
        return parts
    return parts.total


def effective_rate(
    income: float,
    income_type: Union[IncomeType, str],
    state: str,
    filing_status: str = DEFAULT_FILING_STATUS,
) -> float:
    """Total tax as a percentage of ``income`` (0 for non-positive income)."""
    if income <= 0:
        return 0.0
    return total_tax(income, income_type, state, filing_status) / income * 100


def tax_breakdown_by_type(
    incomes: Iterable[IncomeSource],
    year: int,
    state: str,
    filing_status: str = DEFAULT_FILING_STATUS,
) -> Dict[IncomeType, TaxBreakdown]:
    """
    Per-income-type tax for one projection year.

    Each source is taxed on its own with the split form of ``total_tax`` and
    the results are accumulated per type, so the federal and state columns
    can be reported separately.
    """
    breakdown: Dict[IncomeType, TaxBreakdown] = {}

    for income in incomes:
        amount = income.amount_for_year(year)
        if amount <= 0:
            continue

        parts = total_tax(amount, income.type, state, filing_status, split=True)
        entry = breakdown.setdefault(income.type, TaxBreakdown(income_type=income.type))
        entry.gross_income += amount
        entry.federal += parts.federal
        entry.state += parts.state
        entry.total += parts.total
        entry.effective_rate = entry.total / entry.gross_income * 100

    return breakdown
