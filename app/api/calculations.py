"""
Financial calculation API endpoints.

These endpoints accept inputs and return calculated results without
touching the property store.
"""

import math
from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from app.calculations import irr
from app.calculations.amortization import (
    calculate_monthly_payment,
    calculate_total_interest,
    generate_amortization_schedule,
)
from app.calculations.financials import (
    CalculatedFinancials,
    PropertyFinancialInputs,
    calculate_financials,
)
from app.config import Settings, get_settings

router = APIRouter()


class FinancialInputsRequest(BaseModel):
    """
    Input for a full property financial model. Rates are decimals.

    Omitted assumptions take the configured defaults.
    """

    # Capital stack
    purchase_price: float = Field(ge=0)
    hard_costs: float = Field(0.0, ge=0)
    soft_costs: float = Field(0.0, ge=0)
    financing_costs: float = Field(0.0, ge=0)
    contingency: float = Field(0.0, ge=0)
    equity_invested: float = Field(gt=0)
    debt_amount: float = Field(0.0, ge=0)

    # Debt terms
    debt_interest_rate: Optional[float] = None
    debt_term_years: Optional[int] = Field(None, gt=0)
    debt_amortization_years: Optional[int] = Field(None, gt=0)

    # Unit economics
    units: int = Field(gt=0)
    avg_monthly_rent_per_unit: float = Field(ge=0)
    other_income_monthly: float = Field(0.0, ge=0)
    vacancy_rate: Optional[float] = None
    expense_ratio: Optional[float] = None

    # Growth
    annual_rent_growth_rate: Optional[float] = None
    annual_expense_growth_rate: Optional[float] = None

    # Exit
    exit_cap_rate: Optional[float] = None
    sale_cost_percentage: Optional[float] = None
    hold_period_years: int = Field(gt=0)

    def to_inputs(self, settings: Optional[Settings] = None) -> PropertyFinancialInputs:
        """Build engine inputs, filling omitted assumptions from settings."""
        settings = settings or get_settings()
        data = self.model_dump()
        for field, value in data.items():
            if value is None:
                data[field] = getattr(settings, f"default_{field}")
        return PropertyFinancialInputs(**data)


class YearlyProjectionResponse(BaseModel):
    """One projected year."""

    year: int
    gross_potential_rent: Optional[float]
    effective_gross_income: Optional[float]
    operating_expenses: Optional[float]
    net_operating_income: Optional[float]
    debt_service: Optional[float]
    cash_flow: Optional[float]
    remaining_loan_balance: Optional[float]


class FinancialsResponse(BaseModel):
    """
    Calculated property financials.

    Any figure that is not a finite number (for example the sale price
    under a zero exit cap rate) is returned as null.
    """

    # Capital stack
    total_project_cost: Optional[float]
    equity_percentage: Optional[float]
    ltv: Optional[float]

    # Operating analysis (Year 1)
    gross_potential_rent_annual: Optional[float]
    effective_gross_income: Optional[float]
    operating_expenses: Optional[float]
    net_operating_income: Optional[float]

    # Cash flow analysis
    monthly_rent_income: Optional[float]
    monthly_operating_expenses: Optional[float]
    monthly_debt_service: Optional[float]
    monthly_net_cash_flow: Optional[float]
    annual_net_cash_flow: Optional[float]
    annual_debt_service: Optional[float]

    # Performance metrics
    break_even_occupancy: Optional[float]
    dscr: Optional[float]
    cash_on_cash_return: Optional[float]
    yield_on_cost: Optional[float]

    # Exit analysis
    gross_sale_price: Optional[float]
    sale_costs: Optional[float]
    remaining_loan_balance: Optional[float]
    net_sale_proceeds: Optional[float]
    total_profit: Optional[float]
    equity_multiple: Optional[float]

    # Multi-year
    projections: List[YearlyProjectionResponse]
    irr: Optional[float]
    irr_converged: bool


def _finite(value):
    """Replace NaN and infinities with None so they serialize as null."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def financials_to_response(result: CalculatedFinancials) -> FinancialsResponse:
    """Convert engine output to the API response schema."""
    data = asdict(result)
    projections = [
        {key: _finite(value) for key, value in row.items()}
        for row in data.pop("projections")
    ]
    fields = {key: _finite(value) for key, value in data.items()}
    return FinancialsResponse(projections=projections, **fields)


@router.post("/financials", response_model=FinancialsResponse)
async def calculate_financials_endpoint(inputs: FinancialInputsRequest):
    """Calculate the full financial model for a set of deal assumptions."""
    result = calculate_financials(inputs.to_inputs())
    return financials_to_response(result)


class IRRInput(BaseModel):
    """Input for IRR calculation."""

    cash_flows: List[float] = Field(min_length=1)
    guess: float = irr.DEFAULT_GUESS


class IRRResponse(BaseModel):
    """Response with IRR calculation."""

    irr: Optional[float]
    converged: bool
    iterations: int
    multiple: Optional[float]
    npv_at_10_percent: Optional[float]


@router.post("/irr", response_model=IRRResponse)
async def calculate_irr_endpoint(inputs: IRRInput):
    """Calculate IRR for given periodic cash flows."""
    result = irr.solve_irr(inputs.cash_flows, inputs.guess)

    return IRRResponse(
        irr=result.rate,
        converged=result.converged,
        iterations=result.iterations,
        multiple=_finite(irr.calculate_multiple(inputs.cash_flows)),
        npv_at_10_percent=_finite(irr.calculate_npv(inputs.cash_flows, 0.10)),
    )


class AmortizationInput(BaseModel):
    """Input for amortization calculation."""

    principal: float = Field(ge=0)
    annual_rate: float = Field(ge=0)
    amortization_years: int = Field(gt=0)
    total_months: Optional[int] = Field(None, gt=0)


class AmortizationResponse(BaseModel):
    """Amortization schedule with payment and totals (null payment when undefined)."""

    monthly_payment: Optional[float]
    schedule: List[dict]
    total_interest: float
    total_principal: float


@router.post("/amortization", response_model=AmortizationResponse)
async def calculate_amortization(inputs: AmortizationInput):
    """Generate loan amortization schedule."""
    schedule = generate_amortization_schedule(
        principal=inputs.principal,
        annual_rate=inputs.annual_rate,
        amortization_years=inputs.amortization_years,
        total_months=inputs.total_months,
    )

    return AmortizationResponse(
        monthly_payment=_finite(
            calculate_monthly_payment(
                inputs.principal, inputs.annual_rate, inputs.amortization_years
            )
        ),
        schedule=schedule,
        total_interest=calculate_total_interest(schedule),
        total_principal=sum(row["principal"] for row in schedule),
    )
