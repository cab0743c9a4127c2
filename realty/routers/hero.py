"""
Home page hero banner endpoints.
The public view serves the newest active configuration; the admin view serves the newest of all.
"""

from fastapi import APIRouter, Depends
from typing import Optional

from realty.routers.crud import register_crud_routes
from realty.schemas.content import HeroSettingsCreate, HeroSettingsResponse, HeroSettingsUpdate
from realty.storage import Storage
from realty.utils.dependencies import get_storage, require_session_user

router = APIRouter(prefix="/hero-settings", tags=["Hero"])
admin_router = APIRouter(prefix="/admin", tags=["Hero"])


@router.get(
    "",
    response_model=Optional[HeroSettingsResponse],
    summary="Get active hero settings",
    description="Newest active banner configuration, or null when none is active"
)
async def get_active_hero_settings(storage: Storage = Depends(get_storage)):
    return await storage.get_active_hero_settings()


@admin_router.get(
    "/hero-settings",
    response_model=Optional[HeroSettingsResponse],
    summary="Get latest hero settings",
    description="Newest banner configuration regardless of the active flag",
    dependencies=[Depends(require_session_user)]
)
async def get_latest_hero_settings(storage: Storage = Depends(get_storage)):
    return await storage.get_latest_hero_settings()


register_crud_routes(
    router,
    repository="hero_settings",
    resource="Hero settings",
    response_schema=HeroSettingsResponse,
    create_schema=HeroSettingsCreate,
    update_schema=HeroSettingsUpdate,
)
