"""
Pydantic schemas for listing requests and responses.
Covers properties, construction projects and condominiums.
"""

from pydantic import Field, model_validator
from typing import Optional, List
from decimal import Decimal
from realty.models.property import PropertyStatus, ProjectStatus, CondominiumStatus
from realty.schemas.base import RecordBase, InputModel


class PropertyCreate(InputModel):
    """Schema for creating a new property listing."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Property listing title",
        examples=["Apartamento T3 no Talatona"]
    )

    description: str = Field(
        ...,
        min_length=1,
        description="Detailed property description"
    )

    price: Decimal = Field(
        ...,
        gt=0,
        max_digits=14,
        decimal_places=2,
        description="Asking price in local currency",
        examples=["45000000.00"]
    )

    city_id: str = Field(..., min_length=1, description="ID of the city the property is in")
    category_id: str = Field(..., min_length=1, description="ID of the property category")

    bedrooms: Optional[int] = Field(None, ge=0, le=50, description="Number of bedrooms")
    bathrooms: Optional[int] = Field(None, ge=0, le=50, description="Number of bathrooms")

    area: int = Field(
        ...,
        gt=0,
        description="Area in square meters",
        examples=[120]
    )

    images: List[str] = Field(default_factory=list, description="Image URLs, first one is the cover")
    virtual_tour_url: Optional[str] = Field(None, description="Link to an external virtual tour")

    status: PropertyStatus = Field(
        PropertyStatus.AVAILABLE,
        description="Commercial status - available, sold or rented"
    )

    featured: bool = Field(False, description="Whether the property is highlighted on the home page")
    payment_terms: Optional[str] = Field(None, description="Free text payment conditions")


class PropertyUpdate(InputModel):
    """Schema for updating an existing property. Only provided fields change."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(None, gt=0, max_digits=14, decimal_places=2)
    city_id: Optional[str] = Field(None, min_length=1)
    category_id: Optional[str] = Field(None, min_length=1)
    bedrooms: Optional[int] = Field(None, ge=0, le=50)
    bathrooms: Optional[int] = Field(None, ge=0, le=50)
    area: Optional[int] = Field(None, gt=0)
    images: Optional[List[str]] = None
    virtual_tour_url: Optional[str] = None
    status: Optional[PropertyStatus] = None
    featured: Optional[bool] = None
    payment_terms: Optional[str] = None


class PropertyResponse(RecordBase):
    """Stored property as returned by the API."""

    title: str
    description: str
    price: Decimal
    city_id: str
    category_id: str
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    area: int
    images: List[str] = Field(default_factory=list)
    virtual_tour_url: Optional[str] = None
    status: PropertyStatus
    featured: bool
    payment_terms: Optional[str] = None


class ProjectCreate(InputModel):
    """Schema for creating a construction project."""

    title: str = Field(..., min_length=1, max_length=255, examples=["Edifício Kilamba Sul"])
    description: str = Field(..., min_length=1)
    area: int = Field(..., gt=0, description="Built area in square meters")
    duration: str = Field(..., min_length=1, description="Construction duration, e.g. 18 meses")
    units: str = Field(..., min_length=1, description="Units, rooms or stores delivered")
    year: str = Field(..., min_length=1, description="Completion or start year")
    status: ProjectStatus = Field(..., description="completed, in-progress or planning")
    images: List[str] = Field(default_factory=list)
    featured: bool = False


class ProjectUpdate(InputModel):
    """Schema for updating a construction project."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    area: Optional[int] = Field(None, gt=0)
    duration: Optional[str] = Field(None, min_length=1)
    units: Optional[str] = Field(None, min_length=1)
    year: Optional[str] = Field(None, min_length=1)
    status: Optional[ProjectStatus] = None
    images: Optional[List[str]] = None
    featured: Optional[bool] = None


class ProjectResponse(RecordBase):
    title: str
    description: str
    area: int
    duration: str
    units: str
    year: str
    status: ProjectStatus
    images: List[str] = Field(default_factory=list)
    featured: bool


class CondominiumCreate(InputModel):
    """Schema for creating a condominium development."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Condomínio Vila Verde"])
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1, max_length=255)
    centrality_or_district: str = Field(..., min_length=1, max_length=255)
    total_units: int = Field(..., ge=0, description="Total number of units planned")
    completed_units: int = Field(0, ge=0, description="Units already built")
    available_units: int = Field(..., ge=0, description="Units still for sale")
    price_range: str = Field(..., min_length=1, examples=["50M - 150M AKZ"])
    status: CondominiumStatus = CondominiumStatus.IN_DEVELOPMENT
    images: List[str] = Field(default_factory=list)
    amenities: List[str] = Field(default_factory=list, examples=[["Piscina", "Ginásio"]])
    featured: bool = False
    development_year: str = Field(..., min_length=1)
    payment_terms: Optional[str] = None

    @model_validator(mode="after")
    def validate_unit_counts(self):
        """Available and completed units cannot exceed the total."""
        if self.available_units > self.total_units:
            raise ValueError("available_units cannot be greater than total_units")
        if self.completed_units > self.total_units:
            raise ValueError("completed_units cannot be greater than total_units")
        return self


class CondominiumUpdate(InputModel):
    """Schema for updating a condominium development."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    centrality_or_district: Optional[str] = Field(None, min_length=1, max_length=255)
    total_units: Optional[int] = Field(None, ge=0)
    completed_units: Optional[int] = Field(None, ge=0)
    available_units: Optional[int] = Field(None, ge=0)
    price_range: Optional[str] = Field(None, min_length=1)
    status: Optional[CondominiumStatus] = None
    images: Optional[List[str]] = None
    amenities: Optional[List[str]] = None
    featured: Optional[bool] = None
    development_year: Optional[str] = Field(None, min_length=1)
    payment_terms: Optional[str] = None


class CondominiumResponse(RecordBase):
    name: str
    description: str
    location: str
    centrality_or_district: str
    total_units: int
    completed_units: int
    available_units: int
    price_range: str
    status: CondominiumStatus
    images: List[str] = Field(default_factory=list)
    amenities: List[str] = Field(default_factory=list)
    featured: bool
    development_year: str
    payment_terms: Optional[str] = None
