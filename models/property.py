# models/property.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.enums import (
    Facing,
    ListingFlag,
    ListingType,
    PropertyStatus,
    PropertyType,
)


def _parse_timestamp(value):
    if isinstance(value, str) and value.endswith("Z"):
        return value.replace("Z", "+00:00")
    return value


# ======================================================
# BASE MODEL
# ======================================================

class PropertyBase(BaseModel):
    """
    One listing as stored in the properties table.
    Column names are camelCase; Python attributes are snake_case.
    """

    model_config = ConfigDict(populate_by_name=True)

    # Stored values are shown as-is; only writes are checked against the enums
    property_type: Optional[str] = Field(None, alias="propertyType")
    listing_type: Optional[str] = Field(None, alias="listingType")
    cust_id: Optional[str] = Field(None, alias="custId", description="Owning customer ID")
    status: Optional[str] = None
    listing: Optional[str] = None

    # Financials
    rent_per_month: Optional[float] = Field(None, alias="rentPerMonth")
    advance_amount: Optional[float] = Field(None, alias="advanceAmount")
    lease_amount: Optional[float] = Field(None, alias="leaseAmount")
    contract_months: Optional[int] = Field(None, alias="contractMonths")

    # Physical attributes
    facing: Optional[str] = None
    floors: Optional[int] = None
    description: Optional[str] = None

    # Ordered photo file IDs (or absolute URLs)
    photos: List[str] = Field(default_factory=list)

    @field_validator("photos", mode="before")
    def normalize_photos(cls, v):
        if v is None:
            return []
        return v


# ======================================================
# READ
# ======================================================

class PropertyRead(PropertyBase):
    id: str
    created_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    def normalize_id(cls, v):
        return str(v)

    @field_validator("created_at", mode="before")
    def normalize_created_at(cls, v):
        return _parse_timestamp(v)


class PhotoLink(BaseModel):
    file_id: str
    url: str


class PropertyDetail(PropertyRead):
    """Single listing plus viewable photo URLs."""

    photo_urls: List[PhotoLink] = Field(default_factory=list)
    photo_notice: Optional[str] = None


# ======================================================
# UPDATE (PATCH): photos are not editable here
# ======================================================

class PropertyUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    property_type: Optional[PropertyType] = Field(None, alias="propertyType")
    listing_type: Optional[ListingType] = Field(None, alias="listingType")
    cust_id: Optional[str] = Field(None, alias="custId")
    status: Optional[PropertyStatus] = None
    listing: Optional[ListingFlag] = None
    rent_per_month: Optional[float] = Field(None, alias="rentPerMonth")
    advance_amount: Optional[float] = Field(None, alias="advanceAmount")
    lease_amount: Optional[float] = Field(None, alias="leaseAmount")
    contract_months: Optional[int] = Field(None, alias="contractMonths")
    facing: Optional[Facing] = None
    floors: Optional[int] = None
    description: Optional[str] = None

    @field_validator("property_type", "listing_type", "cust_id", "status", "listing", mode="before")
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


# ======================================================
# DASHBOARD
# ======================================================

class PropertyStats(BaseModel):
    total: int
    approved: int
    pending: int
    listed: int


class DashboardRead(BaseModel):
    stats: PropertyStats
    recent: List[PropertyRead]
