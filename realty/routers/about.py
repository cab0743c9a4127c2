"""
Company presentation endpoints: about-us sections and the staff directory.
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from realty.models.content import CompanyType
from realty.routers.crud import eq_filters, register_crud_routes
from realty.schemas.content import (
    AboutUsCreate,
    AboutUsResponse,
    AboutUsUpdate,
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
)
from realty.storage import Storage
from realty.utils.dependencies import get_storage

about_router = APIRouter(prefix="/about-us", tags=["About Us"])
employees_router = APIRouter(prefix="/employees", tags=["Employees"])


@about_router.get("", response_model=List[AboutUsResponse], summary="List about-us sections")
async def list_about_us(
    company_type: Optional[CompanyType] = Query(None, description="imobiliario or construtora"),
    storage: Storage = Depends(get_storage)
):
    """Get about-us sections in display order."""
    return await storage.about_us.list(
        eq_filters(company_type=company_type.value if company_type else None)
    )


@employees_router.get("", response_model=List[EmployeeResponse], summary="List employees")
async def list_employees(
    department: Optional[CompanyType] = Query(None, description="imobiliario or construtora"),
    active: Optional[bool] = Query(None, description="Filter by active flag"),
    storage: Storage = Depends(get_storage)
):
    """Get staff entries in display order."""
    return await storage.employees.list(
        eq_filters(department=department.value if department else None, active=active)
    )


register_crud_routes(
    about_router,
    repository="about_us",
    resource="About us section",
    response_schema=AboutUsResponse,
    create_schema=AboutUsCreate,
    update_schema=AboutUsUpdate,
)

register_crud_routes(
    employees_router,
    repository="employees",
    resource="Employee",
    response_schema=EmployeeResponse,
    create_schema=EmployeeCreate,
    update_schema=EmployeeUpdate,
)
