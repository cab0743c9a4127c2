"""
Pydantic schemas for site content: categories, cities, hero banner,
about-us sections, employees and contact messages.
"""

from pydantic import EmailStr, Field, field_validator
from typing import Optional, List
from realty.models.content import CompanyType, DEFAULT_HERO_DESCRIPTION
from realty.schemas.base import RecordBase, InputModel

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class CategoryCreate(InputModel):
    """Schema for creating a property category."""

    name: str = Field(..., min_length=1, max_length=100, examples=["Apartamentos"])
    slug: str = Field(..., min_length=1, max_length=100, pattern=SLUG_PATTERN, examples=["apartamentos"])
    image_url: str = Field(..., min_length=1)
    display_order: int = Field(0, description="Position in listings, lowest first")
    active: bool = True


class CategoryUpdate(InputModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(None, min_length=1, max_length=100, pattern=SLUG_PATTERN)
    image_url: Optional[str] = Field(None, min_length=1)
    display_order: Optional[int] = None
    active: Optional[bool] = None


class CategoryResponse(RecordBase):
    name: str
    slug: str
    image_url: str
    display_order: int
    active: bool


class CityCreate(InputModel):
    """Schema for creating a city."""

    name: str = Field(..., min_length=1, max_length=100, examples=["Luanda"])
    slug: str = Field(..., min_length=1, max_length=100, pattern=SLUG_PATTERN, examples=["luanda"])
    image_url: str = Field(..., min_length=1)
    display_order: int = 0
    active: bool = True


class CityUpdate(InputModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(None, min_length=1, max_length=100, pattern=SLUG_PATTERN)
    image_url: Optional[str] = Field(None, min_length=1)
    display_order: Optional[int] = None
    active: Optional[bool] = None


class CityResponse(RecordBase):
    name: str
    slug: str
    image_url: str
    display_order: int
    active: bool


class HeroSettingsCreate(InputModel):
    """
    Schema for creating a hero banner configuration.
    Every field has a default so an empty body yields the stock banner.
    """

    images: List[str] = Field(default_factory=list, description="Background image URLs")
    title_line1: str = Field("BEM-VINDO", max_length=255)
    title_line2: str = Field("AO SEU NOVO", max_length=255)
    title_line3: str = Field("COMEÇO !", max_length=255)
    description: str = DEFAULT_HERO_DESCRIPTION
    carousel_enabled: bool = False
    carousel_interval: int = Field(
        5000,
        ge=1000,
        le=60000,
        description="Milliseconds between carousel slides"
    )
    active: bool = True


class HeroSettingsUpdate(InputModel):
    images: Optional[List[str]] = None
    title_line1: Optional[str] = Field(None, max_length=255)
    title_line2: Optional[str] = Field(None, max_length=255)
    title_line3: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    carousel_enabled: Optional[bool] = None
    carousel_interval: Optional[int] = Field(None, ge=1000, le=60000)
    active: Optional[bool] = None


class HeroSettingsResponse(RecordBase):
    images: List[str] = Field(default_factory=list)
    title_line1: str
    title_line2: str
    title_line3: str
    description: str
    carousel_enabled: bool
    carousel_interval: int
    active: bool


class AboutUsCreate(InputModel):
    """Schema for creating an about-us section."""

    company_type: CompanyType = Field(..., description="imobiliario or construtora")
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    mission: Optional[str] = None
    vision: Optional[str] = None
    values: List[str] = Field(default_factory=list, description="Company values, one per entry")
    images: List[str] = Field(default_factory=list)
    display_order: int = 0


class AboutUsUpdate(InputModel):
    company_type: Optional[CompanyType] = None
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    mission: Optional[str] = None
    vision: Optional[str] = None
    values: Optional[List[str]] = None
    images: Optional[List[str]] = None
    display_order: Optional[int] = None


class AboutUsResponse(RecordBase):
    company_type: CompanyType
    title: str
    description: str
    mission: Optional[str] = None
    vision: Optional[str] = None
    values: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    display_order: int


class EmployeeCreate(InputModel):
    """Schema for creating a staff directory entry."""

    name: str = Field(..., min_length=1, max_length=255)
    position: str = Field(..., min_length=1, max_length=255, examples=["Consultora Imobiliária"])
    department: CompanyType = Field(..., description="Business line the employee works in")
    bio: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=64)
    image_url: Optional[str] = None
    display_order: int = 0
    active: bool = True


class EmployeeUpdate(InputModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    position: Optional[str] = Field(None, min_length=1, max_length=255)
    department: Optional[CompanyType] = None
    bio: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=64)
    image_url: Optional[str] = None
    display_order: Optional[int] = None
    active: Optional[bool] = None


class EmployeeResponse(RecordBase):
    name: str
    position: str
    department: CompanyType
    bio: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    image_url: Optional[str] = None
    display_order: int
    active: bool


class ContactCreate(InputModel):
    """Message submitted through the public contact form."""

    name: str = Field(..., min_length=1, max_length=255, examples=["João"])
    email: EmailStr = Field(..., examples=["joao@example.com"])
    phone: Optional[str] = Field(None, max_length=64)
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1, max_length=5000)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower()


class ContactResponse(RecordBase):
    name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
