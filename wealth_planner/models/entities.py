"""
Pydantic models for the household entities a wealth forecast is built from.

Every entity accepts both snake_case field names and the camelCase names used
by the front end (``growthRate``, ``purchaseYear`` ...). Numeric fields are
coerced at this boundary: values that cannot be read as a number become 0, so
the engines downstream never have to validate their inputs again.
"""

import uuid
from enum import Enum
from typing import Annotated, Any, List, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from .mortgage_amortization import monthly_payment


def coerce_number(value: Any) -> float:
    """Interpret ``value`` as a float, falling back to 0 for non-numeric input."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return 0.0
    return 0.0


def coerce_whole_number(value: Any) -> int:
    """Interpret ``value`` as an int, falling back to 0 for non-numeric input."""
    number = coerce_number(value)
    if number != number or number in (float("inf"), float("-inf")):
        return 0
    return int(number)


Amount = Annotated[float, BeforeValidator(coerce_number)]
WholeNumber = Annotated[int, BeforeValidator(coerce_whole_number)]
OptionalWholeNumber = Annotated[
    Optional[int],
    BeforeValidator(lambda v: None if v in (None, "") else coerce_whole_number(v)),
]


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


class IncomeType(str, Enum):
    """Closed set of income categories recognised by the tax engine."""

    SALARY = "salary"
    FREELANCE = "freelance"
    INVESTMENT = "investment"
    EQUITY = "equity"
    OTHER = "other"
    BONUS = "bonus"
    RSU = "rsu"


Frequency = Literal["monthly", "annually"]


class EntityModel(BaseModel):
    """Base model accepting camelCase aliases alongside field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def annualize(amount: float, frequency: str) -> float:
    """Convert an amount paid at ``frequency`` into a yearly figure."""
    return amount * 12 if frequency == "monthly" else amount


class IncomeSource(EntityModel):
    """A recurring income stream (or, for RSUs, a vesting grant)."""

    id: str = Field(default_factory=_new_id, description="Identifier")
    name: str = Field(default="", description="Income source name")
    type: IncomeType = Field(default=IncomeType.SALARY, description="Income category")
    amount: Amount = Field(
        default=0.0, description="Amount per period (total grant for RSUs)"
    )
    frequency: Frequency = Field(default="annually", description="Payment frequency")
    growth_rate: Amount = Field(default=0.0, description="Annual growth rate (%)")
    tax_rate: Amount = Field(
        default=0.0, description="Advisory tax rate (%), not used by the engine"
    )
    vesting_length: OptionalWholeNumber = Field(
        default=None, description="RSU vesting length in years"
    )
    vesting_start_year: OptionalWholeNumber = Field(
        default=None, description="First projection year an RSU tranche vests"
    )

    @property
    def has_vesting_schedule(self) -> bool:
        return (
            self.type == IncomeType.RSU
            and bool(self.vesting_start_year)
            and bool(self.vesting_length)
        )

    def amount_for_year(self, year: int) -> float:
        """
        Income realised in projection ``year`` (1-based).

        RSU grants with a vesting schedule pay equal tranches of the total
        grant inside the vesting window and nothing outside it; every other
        source compounds its annualised amount at ``growth_rate``.
        """
        if self.has_vesting_schedule:
            start = self.vesting_start_year
            if start <= year < start + self.vesting_length:
                return self.amount / self.vesting_length
            return 0.0

        annual_amount = annualize(self.amount, self.frequency)
        return annual_amount * (1 + self.growth_rate / 100) ** (year - 1)


class ExpenseCategory(EntityModel):
    """A recurring household expense."""

    id: str = Field(default_factory=_new_id, description="Identifier")
    name: str = Field(default="", description="Expense name")
    amount: Amount = Field(default=0.0, description="Amount per period")
    frequency: Frequency = Field(default="monthly", description="Payment frequency")
    growth_rate: Amount = Field(default=0.0, description="Annual growth rate (%)")
    is_fixed: bool = Field(
        default=False,
        description="Display hint; callers zero growth_rate for truly fixed items",
    )
    property_id: Optional[str] = Field(
        default=None, description="Owning property for generated real-estate costs"
    )

    def amount_for_year(self, year: int) -> float:
        """Annualised expense compounded at ``growth_rate`` for ``year``."""
        annual_amount = annualize(self.amount, self.frequency)
        return annual_amount * (1 + self.growth_rate / 100) ** (year - 1)


class EquityPayout(EntityModel):
    """A one-time equity liquidity event."""

    id: str = Field(default_factory=_new_id, description="Identifier")
    description: str = Field(default="", description="Payout description")
    amount: Amount = Field(default=0.0, description="Lump sum amount")
    year: WholeNumber = Field(default=1, description="Projection year (1-based)")
    tax_rate: Amount = Field(
        default=0.0, description="Informational tax rate (%), not used by the engine"
    )


class RealEstateProperty(EntityModel):
    """A real-estate holding financed with an amortizing loan."""

    id: str = Field(default_factory=_new_id, description="Identifier")
    name: str = Field(default="", description="Property name")
    purchase_price: Amount = Field(default=0.0, description="Purchase price")
    down_payment: Amount = Field(default=0.0, description="Down payment")
    loan_amount: Amount = Field(default=0.0, description="Original loan amount")
    interest_rate: Amount = Field(default=0.0, description="Loan APR (%)")
    loan_term_years: WholeNumber = Field(default=30, description="Loan term in years")
    purchase_year: WholeNumber = Field(
        default=1, description="Projection year of purchase (1-based)"
    )
    appreciation_rate: Amount = Field(
        default=0.0, description="Annual appreciation (%)"
    )
    maintenance_rate: Amount = Field(
        default=0.0, description="Annual maintenance (% of purchase price)"
    )
    property_tax_rate: Amount = Field(
        default=0.0, description="Annual property tax (% of purchase price)"
    )


class Debt(EntityModel):
    """An amortizing consumer debt."""

    id: str = Field(default_factory=_new_id, description="Identifier")
    name: str = Field(default="", description="Debt name")
    balance: Amount = Field(default=0.0, description="Outstanding balance")
    apr: Amount = Field(default=0.0, description="Annual percentage rate (%)")
    loan_term_years: Amount = Field(default=0.0, description="Remaining term in years")

    @computed_field
    @property
    def minimum_payment(self) -> float:
        """Amortized payment for the current balance, APR and term."""
        if self.loan_term_years <= 0:
            return 0.0
        return monthly_payment(self.balance, self.apr, self.loan_term_years)


class RetirementSettings(EntityModel):
    """Retirement drawdown settings."""

    enabled: bool = Field(default=False, description="Enable retirement mode")
    retirement_age: WholeNumber = Field(default=65, description="Retirement age")
    withdrawal_rate: Amount = Field(
        default=4.0, description="Annual withdrawal rate once retired (%)"
    )


class WealthProjection(EntityModel):
    """One projected year."""

    year: int = Field(..., ge=1, description="Projection year (1-based)")
    gross_income: float = Field(default=0.0, description="Gross income")
    net_income: float = Field(default=0.0, description="Income after tax")
    total_expenses: float = Field(default=0.0, description="Total expenses")
    savings: float = Field(default=0.0, description="Net savings (negative if drawing)")
    cumulative_wealth: float = Field(default=0.0, description="Net worth at year end")
    taxes: float = Field(default=0.0, description="Federal plus state tax")
    real_estate_value: float = Field(default=0.0, description="Property value")
    real_estate_equity: float = Field(default=0.0, description="Property equity")
    loan_balance: float = Field(default=0.0, description="Outstanding property loans")


class ScenarioData(EntityModel):
    """The full input set a projection is computed from."""

    incomes: List[IncomeSource] = Field(default_factory=list)
    expenses: List[ExpenseCategory] = Field(default_factory=list)
    equity_payouts: List[EquityPayout] = Field(default_factory=list)
    properties: List[RealEstateProperty] = Field(default_factory=list)
    debts: List[Debt] = Field(default_factory=list)
    initial_wealth: Amount = Field(default=0.0, description="Starting net worth")
    investment_return: Amount = Field(
        default=7.0, description="Annual return on accumulated wealth (%)"
    )
    projection_years: WholeNumber = Field(default=10, description="Horizon in years")
    state: str = Field(default="California", description="State of residence")
    filing_status: str = Field(default="single", description="Federal filing status")
    retirement: RetirementSettings = Field(default_factory=RetirementSettings)
