"""
Loan Amortization Calculations

Implements level-payment loan math for a single fixed-rate loan:
monthly payment, remaining balance and a monthly amortization schedule.
"""

import math
from typing import List, Dict, Optional
from datetime import date
from dateutil.relativedelta import relativedelta


def calculate_monthly_payment(
    principal: float, annual_rate: float, amortization_years: int
) -> float:
    """
    Calculate monthly loan payment.

    A zero principal or zero rate means there is no debt service.
    Inputs are not validated: negative values propagate, and a degenerate
    denominator produces NaN rather than an exception.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate as decimal (e.g., 0.05 for 5%)
        amortization_years: Amortization period in years

    Returns:
        Monthly payment amount
    """
    if principal == 0 or annual_rate == 0:
        return 0.0

    monthly_rate = annual_rate / 12
    num_payments = amortization_years * 12

    try:
        growth = (1 + monthly_rate) ** num_payments
        return principal * monthly_rate * growth / (growth - 1)
    except (ZeroDivisionError, OverflowError):
        return math.nan


def calculate_remaining_balance(
    principal: float,
    annual_rate: float,
    amortization_years: int,
    years_paid: int,
) -> float:
    """
    Calculate the loan payoff balance after a number of whole years.

    Returns the present value of the payments still owed. A loan that never
    existed, carries no interest, or is past its amortization period has a
    zero balance.
    """
    if principal == 0 or annual_rate == 0:
        return 0.0
    if years_paid >= amortization_years:
        return 0.0

    monthly_rate = annual_rate / 12
    payments_remaining = amortization_years * 12 - years_paid * 12
    payment = calculate_monthly_payment(principal, annual_rate, amortization_years)

    try:
        growth = (1 + monthly_rate) ** payments_remaining
        return payment * (growth - 1) / (monthly_rate * growth)
    except (ZeroDivisionError, OverflowError):
        return math.nan


def generate_amortization_schedule(
    principal: float,
    annual_rate: float,
    amortization_years: int,
    total_months: Optional[int] = None,
    start_date: Optional[date] = None,
) -> List[Dict]:
    """
    Generate a monthly amortization schedule.

    Args:
        principal: Loan principal amount
        annual_rate: Annual interest rate as decimal
        amortization_years: Amortization period in years
        total_months: Number of months to generate (defaults to full amortization)
        start_date: Date of first payment

    Returns:
        List of amortization rows
    """
    amortization_months = amortization_years * 12
    if total_months is None:
        total_months = amortization_months
    if start_date is None:
        start_date = date.today()

    payment = calculate_monthly_payment(principal, annual_rate, amortization_years)
    if payment == 0 or not math.isfinite(payment):
        return []

    monthly_rate = annual_rate / 12
    schedule = []
    balance = principal

    for period in range(1, min(total_months, amortization_months) + 1):
        period_date = start_date + relativedelta(months=period - 1)

        interest = balance * monthly_rate
        if period == amortization_months:
            # Final payment clears any floating point residue
            principal_pmt = balance
        else:
            principal_pmt = min(payment - interest, balance)

        ending_balance = balance - principal_pmt

        schedule.append(
            {
                "period": period,
                "date": period_date.isoformat(),
                "beginning_balance": round(balance, 2),
                "payment": round(principal_pmt + interest, 2),
                "interest": round(interest, 2),
                "principal": round(principal_pmt, 2),
                "ending_balance": round(max(0.0, ending_balance), 2),
            }
        )

        balance = max(0.0, ending_balance)

        if balance == 0:
            break

    return schedule


def calculate_total_interest(schedule: List[Dict]) -> float:
    """Calculate total interest paid over the schedule."""
    return sum(row["interest"] for row in schedule)


def calculate_loan_constant(
    principal: float, annual_rate: float, amortization_years: int
) -> float:
    """Calculate loan constant (annual debt service / loan amount)."""
    monthly_payment = calculate_monthly_payment(principal, annual_rate, amortization_years)
    annual_debt_service = monthly_payment * 12
    return annual_debt_service / principal if principal > 0 else 0.0
