"""
Services module for business logic around stored properties.
"""

from app.services.financials import (
    build_financial_inputs,
    calculate_property_financials,
    can_calculate_financials,
    refresh_total_project_cost,
)

__all__ = [
    "build_financial_inputs",
    "calculate_property_financials",
    "can_calculate_financials",
    "refresh_total_project_cost",
]
