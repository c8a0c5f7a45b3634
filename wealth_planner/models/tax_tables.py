"""
Reference tax tables used by the tax engine.

Federal tables are the 2024 ordinary-income brackets for each filing status.
State figures are simplified approximations: California and New York use
their single-filer progressive schedules, every other state a single flat
percentage. None of this is authoritative tax data.

State keys carry no whitespace; lookups strip whitespace from the caller's
state name before matching (``"New York"`` -> ``"NewYork"``).
"""

from typing import Dict, List

from pydantic import BaseModel, Field

INFINITY = float("inf")


class TaxBracket(BaseModel):
    """A single marginal tax bracket."""

    min: float = Field(..., ge=0, description="Lower bound of the bracket")
    max: float = Field(..., gt=0, description="Upper bound (inf for the top bracket)")
    rate: float = Field(..., ge=0, le=100, description="Marginal rate (%)")


def _brackets(thresholds: List[float], rates: List[float]) -> List[TaxBracket]:
    """Build an ascending bracket table from upper thresholds and rates."""
    bounds = [0.0] + list(thresholds) + [INFINITY]
    return [
        TaxBracket(min=bounds[i], max=bounds[i + 1], rate=rate)
        for i, rate in enumerate(rates)
    ]


FEDERAL_RATES = [10, 12, 22, 24, 32, 35, 37]

FEDERAL_TAX_BRACKETS: Dict[str, List[TaxBracket]] = {
    "single": _brackets(
        [11600, 47150, 100525, 191950, 243725, 609350], FEDERAL_RATES
    ),
    "married_filing_jointly": _brackets(
        [23200, 94300, 201050, 383900, 487450, 731200], FEDERAL_RATES
    ),
    "married_filing_separately": _brackets(
        [11600, 47150, 100525, 191950, 243725, 365600], FEDERAL_RATES
    ),
    "head_of_household": _brackets(
        [16550, 63100, 100500, 191950, 243700, 609350], FEDERAL_RATES
    ),
}

FILING_STATUSES: Dict[str, str] = {
    "single": "Single",
    "married_filing_jointly": "Married Filing Jointly",
    "married_filing_separately": "Married Filing Separately",
    "head_of_household": "Head of Household",
}

# Front-end spellings of the filing statuses
FILING_STATUS_ALIASES: Dict[str, str] = {
    "marriedFilingJointly": "married_filing_jointly",
    "marriedFilingSeparately": "married_filing_separately",
    "headOfHousehold": "head_of_household",
}

DEFAULT_FILING_STATUS = "single"

# Long-term capital gains approximation applied to investment income
CAPITAL_GAINS_RATE = 15.0

STATE_TAX_BRACKETS: Dict[str, List[TaxBracket]] = {
    "California": _brackets(
        [10756, 25499, 40245, 55866, 70606, 360659, 432787, 721314],
        [1, 2, 4, 6, 8, 9.3, 10.3, 11.3, 12.3],
    ),
    "NewYork": _brackets(
        [8500, 11700, 13900, 80650, 215400, 1077550, 5000000, 25000000],
        [4, 4.5, 5.25, 5.5, 6, 6.85, 9.65, 10.3, 10.9],
    ),
}

STATE_TAX_RATES: Dict[str, float] = {
    "Alabama": 5.0,
    "Alaska": 0.0,
    "Arizona": 2.5,
    "Arkansas": 4.4,
    "California": 9.3,
    "Colorado": 4.4,
    "Connecticut": 5.5,
    "Delaware": 6.6,
    "DistrictofColumbia": 8.5,
    "Florida": 0.0,
    "Georgia": 5.39,
    "Hawaii": 7.9,
    "Idaho": 5.8,
    "Illinois": 4.95,
    "Indiana": 3.05,
    "Iowa": 5.7,
    "Kansas": 5.7,
    "Kentucky": 4.0,
    "Louisiana": 4.25,
    "Maine": 7.15,
    "Maryland": 4.75,
    "Massachusetts": 5.0,
    "Michigan": 4.25,
    "Minnesota": 6.8,
    "Mississippi": 4.7,
    "Missouri": 4.8,
    "Montana": 5.9,
    "Nebraska": 5.84,
    "Nevada": 0.0,
    "NewHampshire": 0.0,
    "NewJersey": 5.525,
    "NewMexico": 4.9,
    "NewYork": 6.0,
    "NorthCarolina": 4.5,
    "NorthDakota": 1.95,
    "Ohio": 3.5,
    "Oklahoma": 4.75,
    "Oregon": 8.75,
    "Pennsylvania": 3.07,
    "RhodeIsland": 4.75,
    "SouthCarolina": 6.4,
    "SouthDakota": 0.0,
    "Tennessee": 0.0,
    "Texas": 0.0,
    "Utah": 4.55,
    "Vermont": 6.6,
    "Virginia": 5.75,
    "Washington": 0.0,
    "WestVirginia": 5.12,
    "Wisconsin": 5.3,
    "Wyoming": 0.0,
}
