"""
Pydantic schemas for request/response validation.
"""

# Authentication schemas
from .auth import (
    LoginRequest,
    ChangePasswordRequest,
    UserRecord,
    UserResponse,
    MessageResponse,
)

# Listing schemas
from .property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    CondominiumCreate,
    CondominiumUpdate,
    CondominiumResponse,
)

# Site content schemas
from .content import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CityCreate,
    CityUpdate,
    CityResponse,
    HeroSettingsCreate,
    HeroSettingsUpdate,
    HeroSettingsResponse,
    AboutUsCreate,
    AboutUsUpdate,
    AboutUsResponse,
    EmployeeCreate,
    EmployeeUpdate,
    EmployeeResponse,
    ContactCreate,
    ContactResponse,
)

# Error schemas
from .error import (
    ErrorDetail,
    ErrorResponse,
    get_error_responses,
    get_crud_error_responses,
)

__all__ = [
    "LoginRequest",
    "ChangePasswordRequest",
    "UserRecord",
    "UserResponse",
    "MessageResponse",
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "CondominiumCreate",
    "CondominiumUpdate",
    "CondominiumResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CityCreate",
    "CityUpdate",
    "CityResponse",
    "HeroSettingsCreate",
    "HeroSettingsUpdate",
    "HeroSettingsResponse",
    "AboutUsCreate",
    "AboutUsUpdate",
    "AboutUsResponse",
    "EmployeeCreate",
    "EmployeeUpdate",
    "EmployeeResponse",
    "ContactCreate",
    "ContactResponse",
    "ErrorDetail",
    "ErrorResponse",
    "get_error_responses",
    "get_crud_error_responses",
]
