"""
Seed the database with a 10-unit demo property and print its returns.
"""
import sys
import os
from datetime import date

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.db.database import get_db_context, init_db
from app.db.models import Property
from app.services.financials import (
    calculate_property_financials,
    refresh_total_project_cost,
)

DEMO_NAME = "Maple Court Apartments"


def main():
    init_db()

    with get_db_context() as db:
        existing = db.query(Property).filter(Property.name == DEMO_NAME).first()
        if existing:
            print(f"Property '{DEMO_NAME}' already exists (ID: {existing.id})")
            return

        property = Property(
            name=DEMO_NAME,
            street="120 Maple Ct",
            city="Columbus",
            state="OH",
            zip="43215",
            asset_type="Residential",
            development_stage="Stabilized",
            units=10,
            acquisition_date=date(2025, 1, 1),
            hold_period_years=5,
            purchase_price=1000000,
            equity_invested=300000,
            debt_amount=700000,
            debt_interest_rate=0.05,
            debt_term_years=30,
            debt_amortization_years=30,
            avg_monthly_rent_per_unit=1500,
            other_income_monthly=0,
            vacancy_rate=0.05,
            expense_ratio=0.40,
            annual_rent_growth_rate=0.03,
            annual_expense_growth_rate=0.03,
            exit_cap_rate=0.06,
            sale_cost_percentage=0.05,
        )
        refresh_total_project_cost(property)
        db.add(property)
        db.flush()
        print(f"Created property: {property.name} (ID: {property.id})")

        financials = calculate_property_financials(property)
        print(f"  Year 1 NOI:      {financials.net_operating_income:,.2f}")
        print(f"  DSCR:            {financials.dscr:.2f}x")
        if financials.irr is not None:
            print(f"  IRR:             {financials.irr:.2%}")
        if financials.equity_multiple is not None:
            print(f"  Equity multiple: {financials.equity_multiple:.2f}x")


if __name__ == "__main__":
    main()
