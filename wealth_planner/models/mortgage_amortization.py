"""
Loan amortization calculations for wealth forecasting.

This module provides the standard amortized-payment and remaining-balance
formulas shared by the real-estate projection and the debt models, plus a
month-by-month amortization schedule generator.

Rates are annual percentages (e.g. 6.5 for 6.5% APR) throughout.
"""

from typing import List

from pydantic import BaseModel, Field


class PaymentBreakdown(BaseModel):
    """Breakdown of a single loan payment."""

    payment_number: int = Field(..., ge=1, description="Payment number (1-based)")
    beginning_balance: float = Field(
        ..., ge=0, description="Balance at beginning of period"
    )
    payment_amount: float = Field(..., ge=0, description="Total payment amount")
    principal_payment: float = Field(
        ..., ge=0, description="Principal portion of payment"
    )
    interest_payment: float = Field(
        ..., ge=0, description="Interest portion of payment"
    )
    ending_balance: float = Field(..., ge=0, description="Balance at end of period")
    cumulative_interest: float = Field(
        ..., ge=0, description="Cumulative interest paid"
    )
    cumulative_principal: float = Field(
        ..., ge=0, description="Cumulative principal paid"
    )


class AmortizationSchedule(BaseModel):
    """Complete amortization schedule for a loan."""

    principal: float = Field(..., ge=0, description="Original loan principal")
    annual_rate: float = Field(..., ge=0, description="Annual interest rate (%)")
    term_years: int = Field(..., ge=0, description="Loan term in years")
    monthly_payment: float = Field(..., ge=0, description="Scheduled monthly payment")
    payments: List[PaymentBreakdown] = Field(
        default_factory=list, description="List of payment breakdowns"
    )
    total_payments: int = Field(..., ge=0, description="Total number of payments")
    total_interest: float = Field(
        ..., ge=0, description="Total interest paid over life of loan"
    )
    total_principal: float = Field(
        ..., ge=0, description="Total principal paid over life of loan"
    )


class MortgageCalculator:
    """Calculator for loan amortization and related calculations."""

    @staticmethod
    def calculate_monthly_payment(
        principal: float, annual_rate: float, term_years: float
    ) -> float:
        """
        Calculate the monthly payment using the standard amortization formula.

        Args:
            principal: Loan principal amount
            annual_rate: Annual interest rate as a percentage (e.g., 5.5 for 5.5%)
            term_years: Loan term in years

        Returns:
            Monthly payment amount (0 when the term is not positive)
        """
        num_payments = term_years * 12
        if num_payments <= 0:
            return 0.0

        monthly_rate = annual_rate / 100 / 12
        if monthly_rate == 0:
            return principal / num_payments

        growth = (1 + monthly_rate) ** num_payments
        return principal * monthly_rate * growth / (growth - 1)

    @staticmethod
    def calculate_remaining_balance(
        principal: float, annual_rate: float, term_years: float, months_elapsed: int
    ) -> float:
        """
        Calculate the outstanding balance after a number of scheduled payments.

        Args:
            principal: Original loan principal
            annual_rate: Annual interest rate as a percentage
            term_years: Loan term in years
            months_elapsed: Number of monthly payments already made

        Returns:
            Remaining balance, never negative
        """
        num_payments = term_years * 12
        if num_payments <= 0 or months_elapsed >= num_payments:
            return 0.0

        monthly_rate = annual_rate / 100 / 12
        if monthly_rate == 0:
            return max(0.0, principal * (1 - months_elapsed / num_payments))

        growth_total = (1 + monthly_rate) ** num_payments
        growth_elapsed = (1 + monthly_rate) ** months_elapsed
        balance = principal * (growth_total - growth_elapsed) / (growth_total - 1)
        return max(0.0, balance)

    @staticmethod
    def calculate_interest_payment(balance: float, annual_rate: float) -> float:
        """Interest accrued on a balance over one month."""
        return balance * annual_rate / 100 / 12

    @staticmethod
    def calculate_equity(property_value: float, loan_balance: float) -> float:
        """Home equity: value less the non-negative loan balance."""
        return property_value - max(0.0, loan_balance)

    @staticmethod
    def generate_amortization_schedule(
        principal: float, annual_rate: float, term_years: int
    ) -> AmortizationSchedule:
        """
        Generate a complete month-by-month amortization schedule.

        Args:
            principal: Loan principal amount
            annual_rate: Annual interest rate as a percentage
            term_years: Loan term in years

        Returns:
            Complete amortization schedule
        """
        monthly_payment = MortgageCalculator.calculate_monthly_payment(
            principal, annual_rate, term_years
        )

        payments = []
        balance = principal
        cumulative_interest = 0.0
        cumulative_principal = 0.0
        payment_number = 1

        while balance > 0.005 and payment_number <= term_years * 12:
            interest_payment = MortgageCalculator.calculate_interest_payment(
                balance, annual_rate
            )
            principal_payment = max(0.0, monthly_payment - interest_payment)

            # Final payment absorbs any rounding residue
            if principal_payment > balance or payment_number == term_years * 12:
                principal_payment = balance
            payment_amount = interest_payment + principal_payment

            ending_balance = max(0.0, balance - principal_payment)
            cumulative_interest += interest_payment
            cumulative_principal += principal_payment

            payments.append(
                PaymentBreakdown(
                    payment_number=payment_number,
                    beginning_balance=balance,
                    payment_amount=payment_amount,
                    principal_payment=principal_payment,
                    interest_payment=interest_payment,
                    ending_balance=ending_balance,
                    cumulative_interest=cumulative_interest,
                    cumulative_principal=cumulative_principal,
                )
            )

            balance = ending_balance
            payment_number += 1

        return AmortizationSchedule(
            principal=principal,
            annual_rate=annual_rate,
            term_years=max(0, term_years),
            monthly_payment=monthly_payment,
            payments=payments,
            total_payments=len(payments),
            total_interest=cumulative_interest,
            total_principal=cumulative_principal,
        )


def monthly_payment(principal: float, annual_rate_pct: float, years: float) -> float:
    """Standard amortized monthly payment."""
    return MortgageCalculator.calculate_monthly_payment(
        principal, annual_rate_pct, years
    )


def remaining_balance(
    principal: float, annual_rate_pct: float, years: float, months_elapsed: int
) -> float:
    """Outstanding balance after ``months_elapsed`` scheduled payments."""
    return MortgageCalculator.calculate_remaining_balance(
        principal, annual_rate_pct, years, months_elapsed
    )
