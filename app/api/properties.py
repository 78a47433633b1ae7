"""
Property management API endpoints.
"""

import logging
from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date
from sqlalchemy.orm import Session

from app.api.calculations import FinancialsResponse, financials_to_response
from app.db.database import get_db
from app.db.models import Property
from app.services.financials import (
    calculate_property_financials,
    refresh_total_project_cost,
)

logger = logging.getLogger(__name__)

router = APIRouter()

COST_FIELDS = ("purchase_price", "hard_costs", "soft_costs", "financing_costs", "contingency")

# Amounts with no meaningful default: clearing one stores 0
ZERO_WHEN_CLEARED = (
    "hard_costs",
    "soft_costs",
    "financing_costs",
    "contingency",
    "equity_invested",
    "debt_amount",
    "avg_monthly_rent_per_unit",
    "other_income_monthly",
)


class PropertyCreate(BaseModel):
    """Schema for creating a property. Omitted assumptions use configured defaults."""

    name: str = Field(min_length=1)
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    asset_type: str = "Residential"
    development_stage: str = "PreDevelopment"
    units: Optional[int] = None
    square_feet: Optional[int] = None
    acquisition_date: Optional[date] = None
    hold_period_years: Optional[int] = None

    purchase_price: float = Field(gt=0)
    equity_invested: float = 0.0
    debt_amount: float = 0.0
    target_irr: Optional[float] = None
    target_cash_on_cash: Optional[float] = None
    status_indicator: str = "Green"

    hard_costs: float = 0.0
    soft_costs: float = 0.0
    financing_costs: float = 0.0
    contingency: float = 0.0

    debt_interest_rate: Optional[float] = None
    debt_term_years: Optional[int] = None
    debt_amortization_years: Optional[int] = None

    avg_monthly_rent_per_unit: float = 0.0
    other_income_monthly: float = 0.0
    vacancy_rate: Optional[float] = None
    expense_ratio: Optional[float] = None
    annual_rent_growth_rate: Optional[float] = None
    annual_expense_growth_rate: Optional[float] = None

    exit_cap_rate: Optional[float] = None
    sale_cost_percentage: Optional[float] = None


class PropertyUpdate(BaseModel):
    """Schema for updating a property. Only fields sent are changed."""

    name: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    asset_type: Optional[str] = None
    development_stage: Optional[str] = None
    units: Optional[int] = None
    square_feet: Optional[int] = None
    acquisition_date: Optional[date] = None
    hold_period_years: Optional[int] = None

    purchase_price: Optional[float] = Field(None, gt=0)
    equity_invested: Optional[float] = None
    debt_amount: Optional[float] = None
    target_irr: Optional[float] = None
    target_cash_on_cash: Optional[float] = None
    status_indicator: Optional[str] = None

    hard_costs: Optional[float] = None
    soft_costs: Optional[float] = None
    financing_costs: Optional[float] = None
    contingency: Optional[float] = None

    debt_interest_rate: Optional[float] = None
    debt_term_years: Optional[int] = None
    debt_amortization_years: Optional[int] = None

    avg_monthly_rent_per_unit: Optional[float] = None
    other_income_monthly: Optional[float] = None
    vacancy_rate: Optional[float] = None
    expense_ratio: Optional[float] = None
    annual_rent_growth_rate: Optional[float] = None
    annual_expense_growth_rate: Optional[float] = None

    exit_cap_rate: Optional[float] = None
    sale_cost_percentage: Optional[float] = None


class PropertyResponse(PropertyCreate):
    """Schema for property response."""

    id: str
    name: str
    purchase_price: float
    total_project_cost: Optional[float] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class PropertyListResponse(BaseModel):
    """Response for listing properties."""

    properties: List[PropertyResponse]
    total: int


class PropertyDetailResponse(BaseModel):
    """A property with its calculated financials (null when data is insufficient)."""

    property: PropertyResponse
    financials: Optional[FinancialsResponse] = None


def property_to_response(prop: Property) -> PropertyResponse:
    """Convert Property model to response schema."""
    fields = {
        name: getattr(prop, name)
        for name in PropertyCreate.model_fields
        if getattr(prop, name) is not None
    }
    return PropertyResponse(
        id=prop.id,
        total_project_cost=prop.total_project_cost,
        created_at=prop.created_at.isoformat() if prop.created_at else None,
        updated_at=prop.updated_at.isoformat() if prop.updated_at else None,
        **fields,
    )


def _get_property_or_404(db: Session, property_id: str) -> Property:
    db_property = (
        db.query(Property)
        .filter(Property.id == property_id, Property.is_deleted == False)
        .first()
    )

    if not db_property:
        raise HTTPException(status_code=404, detail="Property not found")

    return db_property


@router.get("/", response_model=PropertyListResponse)
async def list_properties(
    skip: int = 0,
    limit: int = 100,
    asset_type: Optional[str] = None,
    development_stage: Optional[str] = None,
    status_indicator: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """List all properties with optional filtering, newest first."""
    query = db.query(Property).filter(Property.is_deleted == False)

    if asset_type:
        query = query.filter(Property.asset_type == asset_type)
    if development_stage:
        query = query.filter(Property.development_stage == development_stage)
    if status_indicator:
        query = query.filter(Property.status_indicator == status_indicator)

    total = query.count()
    properties = (
        query.order_by(Property.created_at.desc()).offset(skip).limit(limit).all()
    )

    return PropertyListResponse(
        properties=[property_to_response(p) for p in properties],
        total=total,
    )


@router.post("/", response_model=PropertyResponse, status_code=201)
async def create_property(
    property_data: PropertyCreate,
    db: Session = Depends(get_db),
):
    """Create a new property."""
    db_property = Property(**property_data.model_dump())
    refresh_total_project_cost(db_property)

    db.add(db_property)
    db.commit()
    db.refresh(db_property)

    logger.info(f"Created property {db_property.id} ({db_property.name})")

    return property_to_response(db_property)


@router.get("/{property_id}", response_model=PropertyDetailResponse)
async def get_property(
    property_id: str,
    db: Session = Depends(get_db),
):
    """Get a property by ID together with its calculated financials."""
    db_property = _get_property_or_404(db, property_id)
    financials = calculate_property_financials(db_property)

    return PropertyDetailResponse(
        property=property_to_response(db_property),
        financials=financials_to_response(financials) if financials else None,
    )


@router.get("/{property_id}/financials", response_model=FinancialsResponse)
async def get_property_financials(
    property_id: str,
    db: Session = Depends(get_db),
):
    """Get calculated financials for a property."""
    db_property = _get_property_or_404(db, property_id)
    financials = calculate_property_financials(db_property)

    if financials is None:
        raise HTTPException(
            status_code=422,
            detail="Not enough data: units, equity invested and hold period are required",
        )

    return financials_to_response(financials)


@router.patch("/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: str,
    property_data: PropertyUpdate,
    db: Session = Depends(get_db),
):
    """Update a property."""
    db_property = _get_property_or_404(db, property_id)

    # Update only provided fields
    update_data = property_data.model_dump(exclude_unset=True)
    for field in ("name", "purchase_price"):
        if field in update_data and update_data[field] is None:
            raise HTTPException(status_code=400, detail=f"{field} cannot be cleared")

    for field, value in update_data.items():
        if value is None and field in ZERO_WHEN_CLEARED:
            value = 0.0
        setattr(db_property, field, value)

    if any(field in update_data for field in COST_FIELDS):
        refresh_total_project_cost(db_property)

    db.commit()
    db.refresh(db_property)

    return property_to_response(db_property)


@router.delete("/{property_id}")
async def delete_property(
    property_id: str,
    db: Session = Depends(get_db),
):
    """Soft delete a property."""
    db_property = _get_property_or_404(db, property_id)

    db_property.is_deleted = True
    db.commit()

    logger.info(f"Deleted property {property_id}")

    return {"deleted": True, "id": property_id}
