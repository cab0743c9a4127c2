"""
Database models for the Realty Site API.
Importing this package registers every entity table on Base.metadata.
"""

from realty.models.user import User
from realty.models.property import (
    Property,
    PropertyStatus,
    Project,
    ProjectStatus,
    Condominium,
    CondominiumStatus,
)
from realty.models.content import (
    CompanyType,
    PropertyCategory,
    City,
    HeroSettings,
    AboutUs,
    Employee,
    Contact,
)

# Export all models for easy importing
__all__ = [
    "User",
    "Property",
    "PropertyStatus",
    "Project",
    "ProjectStatus",
    "Condominium",
    "CondominiumStatus",
    "CompanyType",
    "PropertyCategory",
    "City",
    "HeroSettings",
    "AboutUs",
    "Employee",
    "Contact",
]
