"""
SQLAlchemy ORM models for property records.
"""

from datetime import datetime
from sqlalchemy import (
    Column,
    String,
    Float,
    Integer,
    Boolean,
    Date,
    DateTime,
)
from sqlalchemy.orm import declarative_base
import uuid

Base = declarative_base()


def generate_uuid():
    return str(uuid.uuid4())


class AuditMixin:
    """Mixin for audit fields on all models."""

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
    is_deleted = Column(Boolean, default=False, nullable=False)


class Property(AuditMixin, Base):
    """
    Property model holding the deal assumptions for one asset.

    Assumption columns left NULL were never entered; defaults are
    substituted when the financial model is built, not stored.
    """

    __tablename__ = "properties"

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)

    # Address
    street = Column(String(255), default="")
    city = Column(String(100), default="")
    state = Column(String(50), default="")
    zip = Column(String(20), default="")

    # Profile
    asset_type = Column(String(50), default="Residential")
    development_stage = Column(String(50), default="PreDevelopment")
    units = Column(Integer)
    square_feet = Column(Integer)
    acquisition_date = Column(Date)
    hold_period_years = Column(Integer)

    # Executive summary
    target_irr = Column(Float)
    target_cash_on_cash = Column(Float)
    status_indicator = Column(String(20), default="Green")

    # Capital stack
    purchase_price = Column(Float, nullable=False)
    hard_costs = Column(Float, default=0.0, nullable=False)
    soft_costs = Column(Float, default=0.0, nullable=False)
    financing_costs = Column(Float, default=0.0, nullable=False)
    contingency = Column(Float, default=0.0, nullable=False)
    total_project_cost = Column(Float)
    equity_invested = Column(Float, default=0.0, nullable=False)
    debt_amount = Column(Float, default=0.0, nullable=False)

    # Debt terms
    debt_interest_rate = Column(Float)
    debt_term_years = Column(Integer)
    debt_amortization_years = Column(Integer)

    # Operating assumptions
    avg_monthly_rent_per_unit = Column(Float, default=0.0, nullable=False)
    other_income_monthly = Column(Float, default=0.0, nullable=False)
    vacancy_rate = Column(Float)
    expense_ratio = Column(Float)
    annual_rent_growth_rate = Column(Float)
    annual_expense_growth_rate = Column(Float)

    # Exit assumptions
    exit_cap_rate = Column(Float)
    sale_cost_percentage = Column(Float)
