"""
Tests for properties and calculations API endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.db.models import Property

# Database setup is handled by conftest.py


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


# ============================================================================
# CALCULATION API TESTS
# ============================================================================

class TestCalculationAPI:
    """Test stateless calculation endpoints."""

    def test_calculate_financials(self, client, demo_assumptions):
        response = client.post("/api/calculate/financials", json=demo_assumptions)
        assert response.status_code == 200
        data = response.json()

        assert data["total_project_cost"] == 1_000_000
        assert data["gross_potential_rent_annual"] == 180_000
        assert data["net_operating_income"] == pytest.approx(102_600)
        assert data["irr"] > 0
        assert data["irr_converged"] is True
        assert [p["year"] for p in data["projections"]] == [1, 2, 3, 4, 5]

    def test_zero_exit_cap_rate_returns_nulls(self, client, demo_assumptions):
        demo_assumptions["exit_cap_rate"] = 0
        response = client.post("/api/calculate/financials", json=demo_assumptions)
        assert response.status_code == 200
        data = response.json()

        assert data["gross_sale_price"] is None
        assert data["net_sale_proceeds"] is None
        assert data["irr"] is None
        assert data["irr_converged"] is False

    @pytest.mark.parametrize("field", ["units", "equity_invested", "hold_period_years"])
    def test_requires_positive_gating_fields(self, client, demo_assumptions, field):
        demo_assumptions[field] = 0
        response = client.post("/api/calculate/financials", json=demo_assumptions)
        assert response.status_code == 422

    def test_optional_assumptions_have_defaults(self, client):
        response = client.post(
            "/api/calculate/financials",
            json={
                "purchase_price": 1_000_000,
                "equity_invested": 300_000,
                "debt_amount": 700_000,
                "units": 10,
                "avg_monthly_rent_per_unit": 1500,
                "hold_period_years": 5,
            },
        )
        assert response.status_code == 200
        assert response.json()["effective_gross_income"] == pytest.approx(171_000)

    def test_calculate_irr(self, client):
        response = client.post(
            "/api/calculate/irr", json={"cash_flows": [-100, 0, 0, 133.1]}
        )
        assert response.status_code == 200
        data = response.json()

        assert abs(data["irr"] - 0.10) < 1e-3
        assert data["converged"] is True
        assert data["multiple"] == pytest.approx(1.331)
        assert data["npv_at_10_percent"] == pytest.approx(0, abs=1e-9)

    def test_calculate_irr_undefined(self, client):
        response = client.post("/api/calculate/irr", json={"cash_flows": [0, 0, 0]})
        assert response.status_code == 200
        data = response.json()

        assert data["irr"] is None
        assert data["converged"] is False

    def test_calculate_irr_overflowing_flows(self, client):
        """Figures too large to represent come back as null."""
        response = client.post(
            "/api/calculate/irr", json={"cash_flows": [-1, 1e308, 1e308, 1e308]}
        )
        assert response.status_code == 200
        data = response.json()

        assert data["multiple"] is None
        assert data["npv_at_10_percent"] is None
        assert data["irr"] is None

    def test_calculate_irr_requires_cash_flows(self, client):
        response = client.post("/api/calculate/irr", json={"cash_flows": []})
        assert response.status_code == 422

    def test_calculate_amortization(self, client):
        response = client.post(
            "/api/calculate/amortization",
            json={"principal": 100000, "annual_rate": 0.06, "amortization_years": 5},
        )
        assert response.status_code == 200
        data = response.json()

        assert len(data["schedule"]) == 60
        assert data["monthly_payment"] == pytest.approx(1933.28, abs=0.01)
        assert data["total_principal"] == pytest.approx(100000, abs=1.0)

    def test_calculate_amortization_undefined_payment(self, client):
        response = client.post(
            "/api/calculate/amortization",
            json={
                "principal": 100000,
                "annual_rate": 1e6,
                "amortization_years": 30,
                "total_months": 2,
            },
        )
        assert response.status_code == 200
        data = response.json()

        assert data["monthly_payment"] is None
        assert data["schedule"] == []
        assert data["total_interest"] == 0


# ============================================================================
# PROPERTY API TESTS
# ============================================================================

class TestPropertyAPI:
    """Test property endpoints."""

    def test_create_property(self, client):
        response = client.post(
            "/api/properties/",
            json={
                "name": "Cedar Flats",
                "city": "Austin",
                "state": "TX",
                "purchase_price": 2_000_000,
                "hard_costs": 250_000,
                "contingency": 50_000,
                "units": 16,
            },
        )
        assert response.status_code == 201
        data = response.json()

        assert data["name"] == "Cedar Flats"
        assert data["total_project_cost"] == 2_300_000
        assert data["asset_type"] == "Residential"
        assert data["vacancy_rate"] is None

    def test_create_property_requires_price(self, client):
        response = client.post("/api/properties/", json={"name": "No Price"})
        assert response.status_code == 422

    def test_list_properties(self, client, demo_property):
        response = client.get("/api/properties/")
        assert response.status_code == 200
        data = response.json()

        assert data["total"] == 1
        assert data["properties"][0]["name"] == "Maple Court"

    def test_list_properties_filters(self, client, demo_property):
        response = client.get("/api/properties/", params={"asset_type": "Office"})
        assert response.status_code == 200
        assert response.json()["total"] == 0

    def test_get_property_with_financials(self, client, demo_property):
        response = client.get(f"/api/properties/{demo_property.id}")
        assert response.status_code == 200
        data = response.json()

        assert data["property"]["id"] == demo_property.id
        assert data["financials"]["net_operating_income"] == pytest.approx(102_600)
        assert len(data["financials"]["projections"]) == 5

    def test_get_property_without_enough_data(self, client, db_session):
        prop = Property(name="Land Parcel", purchase_price=400_000)
        db_session.add(prop)
        db_session.commit()

        response = client.get(f"/api/properties/{prop.id}")
        assert response.status_code == 200
        assert response.json()["financials"] is None

        response = client.get(f"/api/properties/{prop.id}/financials")
        assert response.status_code == 422

    def test_get_property_financials(self, client, demo_property):
        response = client.get(f"/api/properties/{demo_property.id}/financials")
        assert response.status_code == 200
        assert response.json()["total_project_cost"] == 1_000_000

    def test_get_property_not_found(self, client):
        response = client.get("/api/properties/nonexistent-id")
        assert response.status_code == 404

    def test_update_property_recalculates_cost(self, client, demo_property):
        response = client.patch(
            f"/api/properties/{demo_property.id}",
            json={"hard_costs": 100_000, "name": "Maple Court II"},
        )
        assert response.status_code == 200
        data = response.json()

        assert data["name"] == "Maple Court II"
        assert data["total_project_cost"] == 1_100_000

    def test_update_assumption_changes_financials(self, client, demo_property):
        client.patch(f"/api/properties/{demo_property.id}", json={"vacancy_rate": 0.10})

        response = client.get(f"/api/properties/{demo_property.id}/financials")
        assert response.json()["effective_gross_income"] == pytest.approx(162_000)

    def test_update_cannot_clear_purchase_price(self, client, demo_property):
        response = client.patch(
            f"/api/properties/{demo_property.id}", json={"purchase_price": None}
        )
        assert response.status_code == 400

    def test_update_rejects_non_positive_purchase_price(self, client, demo_property):
        for price in (0, -1000):
            response = client.patch(
                f"/api/properties/{demo_property.id}", json={"purchase_price": price}
            )
            assert response.status_code == 422

    def test_zero_amortization_period_returns_nulls(self, client, demo_property):
        client.patch(
            f"/api/properties/{demo_property.id}", json={"debt_amortization_years": 0}
        )

        response = client.get(f"/api/properties/{demo_property.id}/financials")
        assert response.status_code == 200
        data = response.json()

        assert data["monthly_debt_service"] is None
        assert data["total_profit"] is None
        assert data["equity_multiple"] is None
        assert data["irr"] is None

    def test_delete_property(self, client, demo_property):
        response = client.delete(f"/api/properties/{demo_property.id}")
        assert response.status_code == 200
        assert response.json()["deleted"] is True

        response = client.get(f"/api/properties/{demo_property.id}")
        assert response.status_code == 404


class TestHealth:
    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
