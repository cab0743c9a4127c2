"""
Construction project and condominium API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from realty.models.property import CondominiumStatus, ProjectStatus
from realty.routers.crud import eq_filters, register_crud_routes
from realty.schemas.property import (
    CondominiumCreate,
    CondominiumResponse,
    CondominiumUpdate,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
)
from realty.storage import Storage
from realty.utils.dependencies import get_storage

projects_router = APIRouter(prefix="/projects", tags=["Projects"])
condominiums_router = APIRouter(prefix="/condominiums", tags=["Condominiums"])


@projects_router.get("", response_model=List[ProjectResponse], summary="List construction projects")
async def list_projects(
    featured: Optional[bool] = Query(None, description="Only featured (or non-featured) projects"),
    status: Optional[ProjectStatus] = Query(None, description="Project stage filter"),
    storage: Storage = Depends(get_storage)
):
    """Get construction projects, newest first."""
    return await storage.projects.list(
        eq_filters(featured=featured, status=status.value if status else None)
    )


@condominiums_router.get("", response_model=List[CondominiumResponse], summary="List condominiums")
async def list_condominiums(
    featured: Optional[bool] = Query(None, description="Only featured (or non-featured) condominiums"),
    status: Optional[CondominiumStatus] = Query(None, description="Development stage filter"),
    storage: Storage = Depends(get_storage)
):
    """Get condominium developments, newest first."""
    return await storage.condominiums.list(
        eq_filters(featured=featured, status=status.value if status else None)
    )


register_crud_routes(
    projects_router,
    repository="projects",
    resource="Project",
    response_schema=ProjectResponse,
    create_schema=ProjectCreate,
    update_schema=ProjectUpdate,
)

register_crud_routes(
    condominiums_router,
    repository="condominiums",
    resource="Condominium",
    response_schema=CondominiumResponse,
    create_schema=CondominiumCreate,
    update_schema=CondominiumUpdate,
)
