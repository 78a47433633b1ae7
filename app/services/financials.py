"""
Property financials service.

Bridges stored property records and the calculation engine: decides
whether a property has enough data to model, and substitutes configured
defaults for assumptions that were never entered.
"""

import logging
from typing import Optional

from app.calculations.financials import (
    CalculatedFinancials,
    PropertyFinancialInputs,
    calculate_financials,
    calculate_total_project_cost,
)
from app.config import Settings, get_settings
from app.db.models import Property

logger = logging.getLogger(__name__)


def _or_default(value, default):
    return default if value is None else value


def can_calculate_financials(prop: Property) -> bool:
    """A property needs units, equity and a hold period before it can be modeled."""
    return bool(
        prop.units
        and prop.units > 0
        and prop.equity_invested is not None
        and prop.equity_invested > 0
        and prop.hold_period_years
        and prop.hold_period_years > 0
    )


def build_financial_inputs(
    prop: Property, settings: Optional[Settings] = None
) -> PropertyFinancialInputs:
    """
    Build engine inputs from a stored property.

    Only NULL columns are replaced by defaults; an explicit 0 is kept.
    """
    settings = settings or get_settings()

    return PropertyFinancialInputs(
        purchase_price=_or_default(prop.purchase_price, 0.0),
        hard_costs=_or_default(prop.hard_costs, 0.0),
        soft_costs=_or_default(prop.soft_costs, 0.0),
        financing_costs=_or_default(prop.financing_costs, 0.0),
        contingency=_or_default(prop.contingency, 0.0),
        equity_invested=_or_default(prop.equity_invested, 0.0),
        debt_amount=_or_default(prop.debt_amount, 0.0),
        debt_interest_rate=_or_default(
            prop.debt_interest_rate, settings.default_debt_interest_rate
        ),
        debt_term_years=_or_default(prop.debt_term_years, settings.default_debt_term_years),
        debt_amortization_years=_or_default(
            prop.debt_amortization_years, settings.default_debt_amortization_years
        ),
        units=_or_default(prop.units, 0),
        avg_monthly_rent_per_unit=_or_default(prop.avg_monthly_rent_per_unit, 0.0),
        other_income_monthly=_or_default(prop.other_income_monthly, 0.0),
        vacancy_rate=_or_default(prop.vacancy_rate, settings.default_vacancy_rate),
        expense_ratio=_or_default(prop.expense_ratio, settings.default_expense_ratio),
        annual_rent_growth_rate=_or_default(
            prop.annual_rent_growth_rate, settings.default_annual_rent_growth_rate
        ),
        annual_expense_growth_rate=_or_default(
            prop.annual_expense_growth_rate, settings.default_annual_expense_growth_rate
        ),
        exit_cap_rate=_or_default(prop.exit_cap_rate, settings.default_exit_cap_rate),
        sale_cost_percentage=_or_default(
            prop.sale_cost_percentage, settings.default_sale_cost_percentage
        ),
        hold_period_years=_or_default(prop.hold_period_years, 0),
    )


def calculate_property_financials(
    prop: Property, settings: Optional[Settings] = None
) -> Optional[CalculatedFinancials]:
    """
    Calculate financials for a stored property.

    Returns:
        CalculatedFinancials, or None when the property lacks the data needed
    """
    if not can_calculate_financials(prop):
        logger.info(
            f"Property {prop.id} lacks units, equity or hold period; skipping financials"
        )
        return None

    return calculate_financials(build_financial_inputs(prop, settings))


def refresh_total_project_cost(prop: Property) -> None:
    """Recompute the stored total project cost from the cost components."""
    prop.total_project_cost = calculate_total_project_cost(
        _or_default(prop.purchase_price, 0.0),
        _or_default(prop.hard_costs, 0.0),
        _or_default(prop.soft_costs, 0.0),
        _or_default(prop.financing_costs, 0.0),
        _or_default(prop.contingency, 0.0),
    )
