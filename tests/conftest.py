"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.database import get_db
from app.db.models import Base, Property
from app.calculations.financials import PropertyFinancialInputs


# Create a shared test database engine
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Override the dependency globally for all tests
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and drop after."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    """Create database session for test setup."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


DEMO_ASSUMPTIONS = dict(
    purchase_price=1_000_000,
    hard_costs=0,
    soft_costs=0,
    financing_costs=0,
    contingency=0,
    equity_invested=300_000,
    debt_amount=700_000,
    debt_interest_rate=0.05,
    debt_term_years=30,
    debt_amortization_years=30,
    units=10,
    avg_monthly_rent_per_unit=1500,
    other_income_monthly=0,
    vacancy_rate=0.05,
    expense_ratio=0.40,
    annual_rent_growth_rate=0.03,
    annual_expense_growth_rate=0.03,
    exit_cap_rate=0.06,
    sale_cost_percentage=0.05,
    hold_period_years=5,
)


@pytest.fixture
def demo_assumptions():
    """Assumptions for a stabilized 10-unit, $1M acquisition."""
    return dict(DEMO_ASSUMPTIONS)


@pytest.fixture
def demo_inputs(demo_assumptions):
    """Engine inputs for the 10-unit demo deal."""
    return PropertyFinancialInputs(**demo_assumptions)


@pytest.fixture
def demo_property(db_session, demo_assumptions):
    """Stored property carrying the demo assumptions."""
    prop = Property(name="Maple Court", total_project_cost=1_000_000, **demo_assumptions)
    db_session.add(prop)
    db_session.commit()
    db_session.refresh(prop)
    return prop
