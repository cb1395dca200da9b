"""
Pydantic schemas for property responses.
Request bodies are validated by the service field rules, so only outputs are modelled here.
"""

from pydantic import Field
from typing import List
from datetime import datetime
from app.models.property import PropertyType, PropertyStatus
from app.schemas.common import CamelModel, ListMeta


class PropertyResponse(CamelModel):
    """Schema for property response data."""

    id: int = Field(..., description="Property ID")
    title: str = Field(..., description="Listing title", examples=["Modern Loft"])
    description: str = Field(..., description="Detailed listing description")
    price: int = Field(..., description="Asking price", examples=[500000])
    location: str = Field(..., description="Location", examples=["Austin, TX"])
    type: PropertyType = Field(..., description="Kind of property")
    bedrooms: int = Field(..., description="Number of bedrooms")
    bathrooms: int = Field(..., description="Number of bathrooms")
    area: int = Field(..., description="Area in square feet")
    images: List[str] = Field(default_factory=list, description="Ordered image URLs")
    featured: bool = Field(False, description="Whether the listing is featured")
    status: PropertyStatus = Field(PropertyStatus.AVAILABLE, description="Sale status")
    amenities: List[str] = Field(default_factory=list, description="Amenities")
    year_built: int = Field(..., description="Year the property was built")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")
    updated_at: datetime = Field(..., description="Last update timestamp (UTC)")


class PropertyEnvelope(CamelModel):
    """Single property with a result message."""

    property: PropertyResponse
    message: str


class PropertyListResponse(ListMeta):
    """Schema for a page of properties."""

    properties: List[PropertyResponse]
