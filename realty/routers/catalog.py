"""
Reference data endpoints: property categories and cities.
Both are listed by display order and feed the listing filters.
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from realty.routers.crud import eq_filters, register_crud_routes
from realty.schemas.content import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    CityCreate,
    CityResponse,
    CityUpdate,
)
from realty.storage import Storage
from realty.utils.dependencies import get_storage

categories_router = APIRouter(prefix="/property-categories", tags=["Categories"])
cities_router = APIRouter(prefix="/cities", tags=["Cities"])


@categories_router.get("", response_model=List[CategoryResponse], summary="List property categories")
async def list_categories(
    active: Optional[bool] = Query(None, description="Filter by active flag"),
    storage: Storage = Depends(get_storage)
):
    return await storage.categories.list(eq_filters(active=active))


@cities_router.get("", response_model=List[CityResponse], summary="List cities")
async def list_cities(
    active: Optional[bool] = Query(None, description="Filter by active flag"),
    storage: Storage = Depends(get_storage)
):
    return await storage.cities.list(eq_filters(active=active))


register_crud_routes(
    categories_router,
    repository="categories",
    resource="Category",
    response_schema=CategoryResponse,
    create_schema=CategoryCreate,
    update_schema=CategoryUpdate,
)

register_crud_routes(
    cities_router,
    repository="cities",
    resource="City",
    response_schema=CityResponse,
    create_schema=CityCreate,
    update_schema=CityUpdate,
)
