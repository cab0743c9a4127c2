"""
Site content tables: reference lookups, hero banner, about-us sections, staff and contact messages.
"""

from sqlalchemy import String, Text, Integer, Boolean, JSON
from sqlalchemy.orm import Mapped, mapped_column
from realty.database import Base
import enum
from typing import List, Optional

DEFAULT_HERO_DESCRIPTION = (
    "Especialistas em imóveis que conectam você aos melhores espaços para viver ou investir. "
    "Confiança, transparência e soluções sob medida para cada etapa do seu caminho imobiliário."
)


class CompanyType(str, enum.Enum):
    """Business line a content section or employee belongs to."""
    REAL_ESTATE = "imobiliario"
    CONSTRUCTION = "construtora"


class PropertyCategory(Base):
    """Property category used to populate listing filters."""

    __tablename__ = "property_categories"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    slug: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class City(Base):
    """City a property can be located in."""

    __tablename__ = "cities"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class HeroSettings(Base):
    """Home page banner configuration; the newest active record is served publicly."""

    __tablename__ = "hero_settings"

    images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    title_line1: Mapped[str] = mapped_column(String(255), nullable=False, default="BEM-VINDO")
    title_line2: Mapped[str] = mapped_column(String(255), nullable=False, default="AO SEU NOVO")
    title_line3: Mapped[str] = mapped_column(String(255), nullable=False, default="COMEÇO !")
    description: Mapped[str] = mapped_column(Text, nullable=False, default=DEFAULT_HERO_DESCRIPTION)
    carousel_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    carousel_interval: Mapped[int] = mapped_column(Integer, nullable=False, default=5000)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)


class AboutUs(Base):
    """Descriptive "about us" section for one of the company's business lines."""

    __tablename__ = "about_us"

    company_type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    mission: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    vision: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    values: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class Employee(Base):
    """Staff directory entry."""

    __tablename__ = "employees"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[str] = mapped_column(String(255), nullable=False)
    department: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)


class Contact(Base):
    """Message submitted by a site visitor through the contact form."""

    __tablename__ = "contacts"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
