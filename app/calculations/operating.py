"""
Year-1 Operating Analysis

Converts rent roll assumptions into first-year income, expense, NOI,
cash flow and ratio figures.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.calculations.amortization import calculate_monthly_payment

if TYPE_CHECKING:
    from app.calculations.financials import PropertyFinancialInputs


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0 unless the denominator is positive."""
    if not denominator > 0:
        return 0.0
    return numerator / denominator


@dataclass(frozen=True)
class YearOneOperations:
    """Year-1 operating figures (annual and monthly) and ratios."""

    gross_potential_rent_annual: float
    effective_gross_income: float
    operating_expenses: float
    net_operating_income: float

    monthly_rent_income: float
    monthly_operating_expenses: float
    monthly_debt_service: float
    monthly_net_cash_flow: float
    annual_net_cash_flow: float
    annual_debt_service: float

    break_even_occupancy: float
    dscr: float
    cash_on_cash_return: float
    yield_on_cost: float


def calculate_effective_gross_income(
    gross_potential_rent: float, other_income_monthly: float, vacancy_rate: float
) -> float:
    """Apply vacancy to rent plus annualized other income."""
    return (gross_potential_rent + other_income_monthly * 12) * (1 - vacancy_rate)


def analyze_year_one(
    inputs: "PropertyFinancialInputs", total_project_cost: float
) -> YearOneOperations:
    """
    Calculate Year-1 operating figures.

    Operating expenses are a flat ratio of effective gross income. Ratios
    whose denominator is zero are reported as 0.

    Args:
        inputs: Property assumptions
        total_project_cost: Sum of all capital stack cost components

    Returns:
        YearOneOperations
    """
    gross_potential_rent_annual = inputs.avg_monthly_rent_per_unit * inputs.units * 12
    effective_gross_income = calculate_effective_gross_income(
        gross_potential_rent_annual, inputs.other_income_monthly, inputs.vacancy_rate
    )
    operating_expenses = effective_gross_income * inputs.expense_ratio
    net_operating_income = effective_gross_income - operating_expenses

    monthly_rent_income = effective_gross_income / 12
    monthly_operating_expenses = operating_expenses / 12
    monthly_debt_service = calculate_monthly_payment(
        inputs.debt_amount, inputs.debt_interest_rate, inputs.debt_amortization_years
    )
    monthly_net_cash_flow = (
        monthly_rent_income - monthly_operating_expenses - monthly_debt_service
    )
    annual_net_cash_flow = monthly_net_cash_flow * 12
    annual_debt_service = monthly_debt_service * 12

    return YearOneOperations(
        gross_potential_rent_annual=gross_potential_rent_annual,
        effective_gross_income=effective_gross_income,
        operating_expenses=operating_expenses,
        net_operating_income=net_operating_income,
        monthly_rent_income=monthly_rent_income,
        monthly_operating_expenses=monthly_operating_expenses,
        monthly_debt_service=monthly_debt_service,
        monthly_net_cash_flow=monthly_net_cash_flow,
        annual_net_cash_flow=annual_net_cash_flow,
        annual_debt_service=annual_debt_service,
        break_even_occupancy=safe_divide(
            monthly_operating_expenses + monthly_debt_service, monthly_rent_income
        ),
        dscr=safe_divide(net_operating_income, annual_debt_service),
        cash_on_cash_return=safe_divide(annual_net_cash_flow, inputs.equity_invested),
        yield_on_cost=safe_divide(net_operating_income, total_project_cost),
    )
