"""
Listing tables: properties for sale or rent, construction projects and condominiums.
"""

from sqlalchemy import String, Text, Integer, Numeric, Boolean, JSON
from sqlalchemy.orm import Mapped, mapped_column
from realty.database import Base
from decimal import Decimal
import enum
from typing import List, Optional


class PropertyStatus(str, enum.Enum):
    """Commercial status of a property listing."""
    AVAILABLE = "available"
    SOLD = "sold"
    RENTED = "rented"


class ProjectStatus(str, enum.Enum):
    """Stage of a construction project."""
    COMPLETED = "completed"
    IN_PROGRESS = "in-progress"
    PLANNING = "planning"


class CondominiumStatus(str, enum.Enum):
    """Stage of a condominium development."""
    IN_DEVELOPMENT = "in-development"
    COMPLETED = "completed"
    PLANNING = "planning"


class Property(Base):
    """
    Property listing shown on the public storefront.
    References a city and a category by id; images are stored as a list of URLs.
    """

    __tablename__ = "properties"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Property listing title"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Detailed property description"
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=14, scale=2),
        nullable=False,
        index=True,
        comment="Asking price in local currency"
    )

    city_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
        comment="Reference to cities.id"
    )

    category_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
        comment="Reference to property_categories.id"
    )

    bedrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    bathrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    area: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Area in square meters"
    )

    images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    virtual_tour_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=PropertyStatus.AVAILABLE.value,
        index=True,
        comment="available, sold or rented"
    )

    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    payment_terms: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, title={self.title[:30]}, price={self.price})>"


class Project(Base):
    """Construction project portfolio entry."""

    __tablename__ = "projects"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    area: Mapped[int] = mapped_column(Integer, nullable=False, comment="Area in square meters")
    duration: Mapped[str] = mapped_column(String(100), nullable=False)
    units: Mapped[str] = mapped_column(String(100), nullable=False, comment="Units, rooms or stores delivered")
    year: Mapped[str] = mapped_column(String(16), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)


class Condominium(Base):
    """Condominium development with unit totals and a price range."""

    __tablename__ = "condominiums"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    centrality_or_district: Mapped[str] = mapped_column(String(255), nullable=False)
    total_units: Mapped[int] = mapped_column(Integer, nullable=False)
    completed_units: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    available_units: Mapped[int] = mapped_column(Integer, nullable=False)
    price_range: Mapped[str] = mapped_column(String(100), nullable=False, comment="e.g. 50M - 150M AKZ")
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=CondominiumStatus.IN_DEVELOPMENT.value,
        index=True
    )
    images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    amenities: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    development_year: Mapped[str] = mapped_column(String(16), nullable=False)
    payment_terms: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
