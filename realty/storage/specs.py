"""
Entity registry: maps each storage attribute to its table, record schema and ordering.
"""

from realty import models
from realty.schemas.auth import UserRecord
from realty.schemas.content import (
    AboutUsResponse,
    CategoryResponse,
    CityResponse,
    ContactResponse,
    EmployeeResponse,
    HeroSettingsResponse,
)
from realty.schemas.property import CondominiumResponse, ProjectResponse, PropertyResponse
from realty.storage.types import EntitySpec

NEWEST_FIRST = (("created_at", True),)
DISPLAY_ORDER = (("display_order", False), ("created_at", False))

# Keyed by the Storage attribute that exposes the repository
ENTITY_SPECS = {
    "properties": EntitySpec("properties", models.Property, PropertyResponse),
    "projects": EntitySpec("projects", models.Project, ProjectResponse),
    "condominiums": EntitySpec("condominiums", models.Condominium, CondominiumResponse),
    "contacts": EntitySpec("contacts", models.Contact, ContactResponse),
    "categories": EntitySpec(
        "property_categories",
        models.PropertyCategory,
        CategoryResponse,
        unique_fields=("name", "slug"),
        order_by=DISPLAY_ORDER,
    ),
    "cities": EntitySpec(
        "cities",
        models.City,
        CityResponse,
        unique_fields=("slug",),
        order_by=DISPLAY_ORDER,
    ),
    "hero_settings": EntitySpec("hero_settings", models.HeroSettings, HeroSettingsResponse),
    "about_us": EntitySpec("about_us", models.AboutUs, AboutUsResponse, order_by=DISPLAY_ORDER),
    "employees": EntitySpec("employees", models.Employee, EmployeeResponse, order_by=DISPLAY_ORDER),
}

USER_SPEC = EntitySpec("users", models.User, UserRecord, unique_fields=("email",))
