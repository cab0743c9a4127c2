"""
API routers for the Realty Site API.
"""

from .auth import router as auth_router
from .properties import router as properties_router
from .projects import projects_router, condominiums_router
from .catalog import categories_router, cities_router
from .about import about_router, employees_router
from .contacts import router as contacts_router
from .hero import router as hero_router, admin_router as hero_admin_router
from .uploads import router as uploads_router
from .database import router as database_router
from .monitoring import router as monitoring_router, health_router

# Routers mounted under the /api prefix
API_ROUTERS = [
    auth_router,
    properties_router,
    projects_router,
    condominiums_router,
    categories_router,
    cities_router,
    about_router,
    employees_router,
    contacts_router,
    hero_router,
    hero_admin_router,
    uploads_router,
    database_router,
    monitoring_router,
]

__all__ = ["API_ROUTERS", "health_router"]
