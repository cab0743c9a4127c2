"""
Property listing API endpoints.
Public listing and detail views with filtering; create, update and delete require a session.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from decimal import Decimal
from typing import Optional, List

from realty.models.property import PropertyStatus
from realty.schemas.auth import UserResponse
from realty.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
)
from realty.schemas.error import get_crud_error_responses, get_error_responses
from realty.routers.crud import eq_filters, partial_update_data
from realty.storage import Filter, Storage
from realty.utils.dependencies import get_storage, require_session_user
from realty.utils.exceptions import NotFoundError, ValidationError


router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get(
    "",
    response_model=List[PropertyResponse],
    status_code=status.HTTP_200_OK,
    summary="List properties with filtering",
    description="Get properties, newest first, optionally filtered by location, category, status and price"
)
async def list_properties(
    city_id: Optional[str] = Query(None, description="City ID filter"),
    category_id: Optional[str] = Query(None, description="Category ID filter"),
    status_filter: Optional[PropertyStatus] = Query(None, alias="status", description="Commercial status filter"),
    featured: Optional[bool] = Query(None, description="Only featured (or non-featured) properties"),

    # Price filters
    min_price: Optional[Decimal] = Query(None, ge=0, description="Minimum price filter"),
    max_price: Optional[Decimal] = Query(None, ge=0, description="Maximum price filter"),

    bedrooms: Optional[int] = Query(None, ge=0, le=50, description="Minimum number of bedrooms"),
    search: Optional[str] = Query(None, min_length=1, max_length=100, description="Search in property titles"),

    storage: Storage = Depends(get_storage)
) -> List[PropertyResponse]:
    """
    Get properties matching every supplied filter.

    Returns:
        List of properties ordered by creation date, newest first

    Raises:
        ValidationError: If min_price is greater than max_price
    """
    if min_price is not None and max_price is not None and min_price > max_price:
        raise ValidationError(
            "Invalid price range",
            field_errors=[{"field": "min_price", "message": "min_price cannot be greater than max_price"}]
        )

    filters = eq_filters(
        city_id=city_id,
        category_id=category_id,
        status=status_filter.value if status_filter else None,
        featured=featured,
    )
    if min_price is not None:
        filters.append(Filter("price", "gte", min_price))
    if max_price is not None:
        filters.append(Filter("price", "lte", max_price))
    if bedrooms is not None:
        filters.append(Filter("bedrooms", "gte", bedrooms))
    if search:
        filters.append(Filter("title", "contains", search.strip()))

    return await storage.properties.list(filters)


@router.get(
    "/{property_id}",
    response_model=PropertyResponse,
    status_code=status.HTTP_200_OK,
    summary="Get property details",
    responses=get_error_responses(404)
)
async def get_property(
    property_id: str = Path(..., description="Property ID"),
    storage: Storage = Depends(get_storage)
) -> PropertyResponse:
    """
    Get detailed information about a specific property.

    Raises:
        NotFoundError: If property doesn't exist
    """
    property_obj = await storage.properties.get(property_id)
    if property_obj is None:
        raise NotFoundError("Property", property_id)
    return property_obj


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new property",
    description="Create a new property listing. Requires a logged-in operator.",
    responses=get_crud_error_responses()
)
async def create_property(
    property_data: PropertyCreate,
    current_user: UserResponse = Depends(require_session_user),
    storage: Storage = Depends(get_storage)
) -> PropertyResponse:
    """
    Create a new property listing.

    Args:
        property_data: Property creation data
        current_user: Operator of the current session
        storage: Entity storage

    Returns:
        Created property with id and timestamps
    """
    return await storage.properties.create(property_data.model_dump())


@router.put(
    "/{property_id}",
    response_model=PropertyResponse,
    status_code=status.HTTP_200_OK,
    summary="Update property",
    description="Update only the supplied property fields.",
    responses=get_crud_error_responses()
)
async def update_property(
    property_data: PropertyUpdate,
    property_id: str = Path(..., description="Property ID"),
    current_user: UserResponse = Depends(require_session_user),
    storage: Storage = Depends(get_storage)
) -> PropertyResponse:
    """
    Update property details.

    Raises:
        NotFoundError: If property doesn't exist
    """
    updated_property = await storage.properties.update(
        property_id, partial_update_data(property_data, PropertyResponse)
    )
    if updated_property is None:
        raise NotFoundError("Property", property_id)
    return updated_property


@router.delete(
    "/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    summary="Delete property",
    responses=get_error_responses(401, 404)
)
async def delete_property(
    property_id: str = Path(..., description="Property ID"),
    current_user: UserResponse = Depends(require_session_user),
    storage: Storage = Depends(get_storage)
) -> None:
    """
    Delete property listing.

    Raises:
        NotFoundError: If property doesn't exist
    """
    if not await storage.properties.delete(property_id):
        raise NotFoundError("Property", property_id)
