"""
Financial Calculation Engine

Pure calculation modules for real estate investment analysis.
No I/O and no shared state: every function is safe to call concurrently.
"""

from app.calculations import amortization, irr, operating, financials
from app.calculations.financials import (
    CalculatedFinancials,
    PropertyFinancialInputs,
    YearlyProjection,
    calculate_financials,
)

__all__ = [
    "amortization",
    "irr",
    "operating",
    "financials",
    "CalculatedFinancials",
    "PropertyFinancialInputs",
    "YearlyProjection",
    "calculate_financials",
]
