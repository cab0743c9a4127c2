"""
FastAPI application entry point.
create_app builds the storage backend and session store from the settings and wires
routers, middleware and exception handlers around them.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from pathlib import Path
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError as PydanticValidationError
from typing import Optional
import logging

from realty.config import Settings, get_settings
from realty.middleware import RequestLog, RequestLoggingMiddleware
from realty.routers import API_ROUTERS, health_router
from realty.services.auth import AuthService
from realty.services.error_handler import ErrorHandlerService
from realty.sessions import create_session_store
from realty.storage import DuplicateKeyError, create_storage
from realty.utils.exceptions import APIException

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Initializes the backends and bootstraps the admin account on startup, closes them on shutdown.
    """
    settings: Settings = app.state.settings
    storage = app.state.storage
    session_store = app.state.session_store

    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    await storage.initialize()
    await session_store.initialize()
    if not await storage.ping():
        logger.error(f"Failed to connect to {storage.backend} storage on startup")

    if settings.resolved_upload_mode == "disk":
        (Path(settings.upload_dir) / "images").mkdir(parents=True, exist_ok=True)

    await AuthService(storage, session_store, settings).bootstrap_admin()

    yield

    # Shutdown
    logger.info("Shutting down application")
    await session_store.close()
    await storage.close()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application for the given settings.

    Args:
        settings: Application settings; read from the environment when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
    Listings and content API for a real-estate and construction company site.

    ## Features

    * **Listings**: Properties, construction projects and condominiums with public filtering
    * **Site content**: Categories, cities, hero banner, about-us sections and staff
    * **Contact form**: Public message submission, reviewed in the back office
    * **Image upload**: Validated uploads with WebP renditions
    * **Pluggable storage**: In-memory, local SQLite file or remote PostgreSQL

    ## Authentication

    Public GET endpoints need no credentials. Back-office operations require the session
    cookie set by `POST /api/login`.
    """,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.storage = create_storage(settings)
    app.state.session_store = create_session_store(settings)
    app.state.request_log = RequestLog(max_entries=settings.log_buffer_size)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Processing-Time"],
    )

    # Add request logging middleware
    app.add_middleware(
        RequestLoggingMiddleware,
        request_log=app.state.request_log,
        slow_request_threshold=settings.slow_request_threshold,
    )

    # Include API routers
    for router in API_ROUTERS:
        app.include_router(router, prefix="/api")
    app.include_router(health_router)

    if settings.resolved_upload_mode == "disk":
        app.mount(
            "/uploads",
            StaticFiles(directory=settings.upload_dir, check_dir=False),
            name="uploads",
        )

    register_exception_handlers(app)

    @app.get("/", tags=["Monitoring"])
    async def root():
        """Basic API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "environment": settings.environment,
            "documentation": {
                "swagger_ui": "/docs",
                "redoc": "/redoc",
                "openapi_json": "/openapi.json"
            },
            "api_prefix": "/api"
        }

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Route every error through ErrorHandlerService."""

    @app.exception_handler(APIException)
    async def api_exception_handler(request: Request, exc: APIException):
        """Handle custom API exceptions with structured error responses."""
        return ErrorHandlerService.handle_api_exception(exc, request)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle FastAPI request validation errors with detailed field information."""
        return ErrorHandlerService.handle_validation_error(exc.errors(), request)

    @app.exception_handler(PydanticValidationError)
    async def pydantic_validation_exception_handler(request: Request, exc: PydanticValidationError):
        """Handle Pydantic validation errors raised outside request parsing."""
        return ErrorHandlerService.handle_validation_error(exc.errors(), request)

    @app.exception_handler(DuplicateKeyError)
    async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
        return ErrorHandlerService.handle_duplicate_key_error(exc, request)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        """Handle database errors with appropriate error responses."""
        return ErrorHandlerService.handle_database_error(exc, request)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions (unknown routes, wrong methods) with structured error responses."""
        return ErrorHandlerService.handle_http_exception(exc, request)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with secure error responses."""
        return ErrorHandlerService.handle_unexpected_error(exc, request)


app = create_app(get_settings())


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "realty.main:app",
        host="0.0.0.0",
        port=5000,
        reload=get_settings().debug
    )
