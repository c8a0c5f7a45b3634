"""
Tests for the household entity models.
"""

import pytest
from pydantic import ValidationError

from wealth_planner.models.entities import (
    ExpenseCategory,
    IncomeSource,
    IncomeType,
    RealEstateProperty,
    ScenarioData,
    annualize,
    coerce_number,
    coerce_whole_number,
)


class TestCoercion:
    """Test numeric coercion at the model boundary."""

    @pytest.mark.parametrize(
        "value,expected",
        [(5, 5.0), (2.5, 2.5), ("3.25", 3.25), (" 7 ", 7.0), ("abc", 0.0), (None, 0.0), ([], 0.0)],
    )
    def test_coerce_number(self, value, expected):
        assert coerce_number(value) == expected

    @pytest.mark.parametrize(
        "value,expected", [("12", 12), (3.9, 3), ("nan", 0), ("inf", 0), ("x", 0)]
    )
    def test_coerce_whole_number(self, value, expected):
        assert coerce_whole_number(value) == expected

    def test_garbage_amount_becomes_zero(self):
        income = IncomeSource(name="Broken", amount="not a number", growth_rate=None)

        assert income.amount == 0
        assert income.growth_rate == 0
        assert income.amount_for_year(5) == 0

    def test_string_years(self):
        prop = RealEstateProperty(purchaseYear="4", loanTermYears="15")

        assert prop.purchase_year == 4
        assert prop.loan_term_years == 15


class TestAliases:
    """Test camelCase aliases used by the front end."""

    def test_camel_case_input(self):
        expense = ExpenseCategory(name="Rent", amount=1500, growthRate=2, isFixed=True)

        assert expense.growth_rate == 2
        assert expense.is_fixed is True

    def test_dump_by_alias(self):
        income = IncomeSource(name="Job", amount=1, vesting_start_year=2)
        dumped = income.model_dump(by_alias=True)

        assert dumped["vestingStartYear"] == 2
        assert "growthRate" in dumped

    def test_scenario_data_from_camel_case(self):
        data = ScenarioData.model_validate(
            {
                "initialWealth": "25000",
                "investmentReturn": 6,
                "projectionYears": 20,
                "filingStatus": "marriedFilingJointly",
                "equityPayouts": [{"amount": 1000, "year": 2}],
                "retirement": {"enabled": True, "retirementAge": 60},
            }
        )

        assert data.initial_wealth == 25000
        assert data.projection_years == 20
        assert data.equity_payouts[0].year == 2
        assert data.retirement.retirement_age == 60
        assert data.retirement.withdrawal_rate == 4


class TestIncomeSource:
    """Test income amounts per year."""

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            IncomeSource(name="Lottery", type="lottery", amount=1)

    def test_type_is_enum(self):
        assert IncomeSource(type="bonus").type is IncomeType.BONUS

    def test_growth_compounds_from_year_one(self):
        income = IncomeSource(amount=1000, frequency="monthly", growth_rate=10)

        assert income.amount_for_year(1) == pytest.approx(12000)
        assert income.amount_for_year(3) == pytest.approx(14520)

    def test_rsu_without_schedule_uses_growth_rule(self):
        grant = IncomeSource(type="rsu", amount=20000, growth_rate=5)

        assert grant.has_vesting_schedule is False
        assert grant.amount_for_year(2) == pytest.approx(21000)

    def test_rsu_vesting_ignores_growth_and_frequency(self):
        grant = IncomeSource(
            type="rsu",
            amount=30000,
            frequency="monthly",
            growth_rate=50,
            vesting_length=3,
            vesting_start_year=1,
        )

        assert [grant.amount_for_year(y) for y in range(1, 5)] == pytest.approx(
            [10000, 10000, 10000, 0]
        )

    def test_vesting_fields_only_apply_to_rsus(self):
        salary = IncomeSource(amount=50000, vesting_length=4, vesting_start_year=3)

        assert salary.has_vesting_schedule is False
        assert salary.amount_for_year(1) == 50000


class TestHelpers:
    def test_annualize(self):
        assert annualize(100, "monthly") == 1200
        assert annualize(100, "annually") == 100

    def test_ids_are_generated(self):
        assert IncomeSource().id != IncomeSource().id

    def test_scenario_defaults(self):
        data = ScenarioData()

        assert data.investment_return == 7
        assert data.projection_years == 10
        assert data.state == "California"
        assert data.filing_status == "single"
        assert data.retirement.enabled is False
