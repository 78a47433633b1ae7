"""
Property Financial Model

Derives the full investment model for a single property from static deal
assumptions: capital stack ratios, Year-1 operations, a year-by-year
projection over the hold period, exit proceeds and return metrics.

Every figure is a pure function of the inputs. Results that cannot be
represented as a finite number (a zero exit cap rate, an IRR with no
solution) are reported as None.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from app.calculations.amortization import calculate_remaining_balance
from app.calculations.irr import solve_irr
from app.calculations.operating import (
    analyze_year_one,
    calculate_effective_gross_income,
    safe_divide,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropertyFinancialInputs:
    """Deal assumptions for one property. Rates are decimals (0.05 = 5%)."""

    # Capital stack
    purchase_price: float
    hard_costs: float
    soft_costs: float
    financing_costs: float
    contingency: float
    equity_invested: float
    debt_amount: float

    # Debt terms
    debt_interest_rate: float
    debt_term_years: int
    debt_amortization_years: int

    # Unit economics
    units: int
    avg_monthly_rent_per_unit: float
    other_income_monthly: float
    vacancy_rate: float
    expense_ratio: float

    # Growth
    annual_rent_growth_rate: float
    annual_expense_growth_rate: float

    # Exit
    exit_cap_rate: float
    sale_cost_percentage: float
    hold_period_years: int


@dataclass(frozen=True)
class YearlyProjection:
    """One projected year of operations."""

    year: int
    gross_potential_rent: float
    effective_gross_income: float
    operating_expenses: float
    net_operating_income: float
    debt_service: float
    cash_flow: float
    remaining_loan_balance: float


@dataclass(frozen=True)
class CalculatedFinancials:
    """Complete set of derived figures for one property."""

    # Capital stack
    total_project_cost: float
    equity_percentage: float
    ltv: float

    # Operating analysis (Year 1)
    gross_potential_rent_annual: float
    effective_gross_income: float
    operating_expenses: float
    net_operating_income: float

    # Cash flow analysis
    monthly_rent_income: float
    monthly_operating_expenses: float
    monthly_debt_service: float
    monthly_net_cash_flow: float
    annual_net_cash_flow: float
    annual_debt_service: float

    # Performance metrics
    break_even_occupancy: float
    dscr: float
    cash_on_cash_return: float
    yield_on_cost: float

    # Exit analysis
    gross_sale_price: Optional[float]
    sale_costs: Optional[float]
    remaining_loan_balance: float
    net_sale_proceeds: Optional[float]
    total_profit: Optional[float]
    equity_multiple: Optional[float]

    # Multi-year
    projections: Tuple[YearlyProjection, ...]
    irr: Optional[float]
    irr_converged: bool


def calculate_total_project_cost(
    purchase_price: float,
    hard_costs: float,
    soft_costs: float,
    financing_costs: float,
    contingency: float,
) -> float:
    """Sum the capital stack cost components."""
    return purchase_price + hard_costs + soft_costs + financing_costs + contingency


def _finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


def project_years(
    inputs: PropertyFinancialInputs,
    gross_potential_rent_annual: float,
    operating_expenses: float,
    annual_debt_service: float,
) -> List[YearlyProjection]:
    """
    Project operations for each year of the hold period.

    Rent grows from the Year-1 gross potential rent; other income is held
    flat. Operating expenses grow from the Year-1 expense figure on their
    own curve, so the realized expense ratio drifts whenever rent and
    expense growth differ. Debt service is constant (fixed-rate loan).
    """
    projections = []

    for year in range(1, inputs.hold_period_years + 1):
        growth_factor = (1 + inputs.annual_rent_growth_rate) ** (year - 1)
        expense_growth_factor = (1 + inputs.annual_expense_growth_rate) ** (year - 1)

        year_gross_potential_rent = gross_potential_rent_annual * growth_factor
        year_effective_gross_income = calculate_effective_gross_income(
            year_gross_potential_rent, inputs.other_income_monthly, inputs.vacancy_rate
        )
        year_operating_expenses = operating_expenses * expense_growth_factor
        year_net_operating_income = year_effective_gross_income - year_operating_expenses

        projections.append(
            YearlyProjection(
                year=year,
                gross_potential_rent=year_gross_potential_rent,
                effective_gross_income=year_effective_gross_income,
                operating_expenses=year_operating_expenses,
                net_operating_income=year_net_operating_income,
                debt_service=annual_debt_service,
                cash_flow=year_net_operating_income - annual_debt_service,
                remaining_loan_balance=calculate_remaining_balance(
                    inputs.debt_amount,
                    inputs.debt_interest_rate,
                    inputs.debt_amortization_years,
                    year,
                ),
            )
        )

    return projections


def calculate_financials(inputs: PropertyFinancialInputs) -> CalculatedFinancials:
    """
    Calculate all financial metrics for a property.

    The caller is expected to have checked units, equity and hold period
    before calling; inputs are otherwise used as given.

    Args:
        inputs: Property assumptions with all defaults already resolved

    Returns:
        CalculatedFinancials
    """
    # Capital stack
    total_project_cost = calculate_total_project_cost(
        inputs.purchase_price,
        inputs.hard_costs,
        inputs.soft_costs,
        inputs.financing_costs,
        inputs.contingency,
    )
    equity_percentage = safe_divide(inputs.equity_invested, total_project_cost)
    ltv = safe_divide(inputs.debt_amount, total_project_cost)

    # Year 1
    year_one = analyze_year_one(inputs, total_project_cost)

    # Projection
    projections = project_years(
        inputs,
        year_one.gross_potential_rent_annual,
        year_one.operating_expenses,
        year_one.annual_debt_service,
    )

    cash_flows = [-inputs.equity_invested]
    cumulative_cash_flow = -inputs.equity_invested
    for projection in projections:
        cash_flows.append(projection.cash_flow)
        cumulative_cash_flow += projection.cash_flow

    # Exit at the end of the hold period
    if projections:
        final_year_noi = projections[-1].net_operating_income
        remaining_loan_balance = projections[-1].remaining_loan_balance
    else:
        final_year_noi = year_one.net_operating_income
        remaining_loan_balance = 0.0

    gross_sale_price = None
    sale_costs = None
    net_sale_proceeds = None
    total_profit = None
    if inputs.exit_cap_rate != 0:
        gross_sale_price = _finite_or_none(final_year_noi / inputs.exit_cap_rate)

    if gross_sale_price is not None:
        sale_costs = gross_sale_price * inputs.sale_cost_percentage
        net_sale_proceeds = _finite_or_none(
            gross_sale_price - sale_costs - remaining_loan_balance
        )

    if net_sale_proceeds is not None:
        total_profit = _finite_or_none(
            cumulative_cash_flow + net_sale_proceeds - inputs.equity_invested
        )
        # Sale proceeds land in the same period as the final year's operations
        cash_flows[-1] += net_sale_proceeds

    if not inputs.equity_invested > 0:
        equity_multiple = 0.0
    elif net_sale_proceeds is None:
        equity_multiple = None
    else:
        equity_multiple = _finite_or_none(
            (cumulative_cash_flow + net_sale_proceeds) / inputs.equity_invested
        )

    if net_sale_proceeds is None:
        irr = None
        irr_converged = False
    else:
        irr_result = solve_irr(cash_flows)
        irr = irr_result.rate
        irr_converged = irr_result.converged

    logger.debug(
        "Calculated financials: cost=%.2f noi=%.2f years=%d irr=%s converged=%s",
        total_project_cost,
        year_one.net_operating_income,
        len(projections),
        irr,
        irr_converged,
    )

    return CalculatedFinancials(
        total_project_cost=total_project_cost,
        equity_percentage=equity_percentage,
        ltv=ltv,
        gross_potential_rent_annual=year_one.gross_potential_rent_annual,
        effective_gross_income=year_one.effective_gross_income,
        operating_expenses=year_one.operating_expenses,
        net_operating_income=year_one.net_operating_income,
        monthly_rent_income=year_one.monthly_rent_income,
        monthly_operating_expenses=year_one.monthly_operating_expenses,
        monthly_debt_service=year_one.monthly_debt_service,
        monthly_net_cash_flow=year_one.monthly_net_cash_flow,
        annual_net_cash_flow=year_one.annual_net_cash_flow,
        annual_debt_service=year_one.annual_debt_service,
        break_even_occupancy=year_one.break_even_occupancy,
        dscr=year_one.dscr,
        cash_on_cash_return=year_one.cash_on_cash_return,
        yield_on_cost=year_one.yield_on_cost,
        gross_sale_price=gross_sale_price,
        sale_costs=sale_costs,
        remaining_loan_balance=remaining_loan_balance,
        net_sale_proceeds=net_sale_proceeds,
        total_profit=total_profit,
        equity_multiple=equity_multiple,
        projections=tuple(projections),
        irr=irr,
        irr_converged=irr_converged,
    )
