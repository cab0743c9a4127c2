"""
Database administration endpoints: backend status, connectivity test and
one-time migration of every record into another SQL database.
"""

from fastapi import APIRouter, Depends, status
import logging

from realty.config import Settings, normalize_async_url
from realty.schemas.admin import DatabaseStatus, MigrateRequest, MigrateResponse
from realty.schemas.error import get_error_responses
from realty.sessions.base import SessionStore
from realty.storage import SQLStorage, Storage
from realty.utils.dependencies import (
    get_app_settings,
    get_session_store,
    get_storage,
    require_session_user,
)
from realty.utils.exceptions import BadRequestError, ConflictError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/database", tags=["Database"])

SUPPORTED_URL_PREFIXES = ("postgresql+asyncpg://", "sqlite+aiosqlite://")


@router.get("/status", response_model=DatabaseStatus, summary="Storage backend status")
async def database_status(
    storage: Storage = Depends(get_storage),
    session_store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_app_settings)
) -> DatabaseStatus:
    return DatabaseStatus(
        backend=storage.backend,
        connected=await storage.ping(),
        session_store=session_store.name,
        upload_mode=settings.resolved_upload_mode,
    )


@router.post(
    "/test",
    response_model=MigrateResponse,
    summary="Test storage connection",
    dependencies=[Depends(require_session_user)]
)
async def check_connection(storage: Storage = Depends(get_storage)) -> MigrateResponse:
    """Run a round trip against the active storage backend."""
    connected = await storage.ping()
    message = f"{storage.backend} storage connection successful" if connected \
        else f"{storage.backend} storage connection failed"
    return MigrateResponse(success=connected, message=message)


@router.post(
    "/migrate",
    response_model=MigrateResponse,
    status_code=status.HTTP_200_OK,
    summary="Migrate data to a SQL database",
    description="Create the tables in the target database and copy every record, users included",
    dependencies=[Depends(require_session_user)],
    responses=get_error_responses(400, 401, 409)
)
async def migrate_database(
    migrate_data: MigrateRequest,
    storage: Storage = Depends(get_storage)
) -> MigrateResponse:
    """
    Copy all data from the active storage into the target database.

    Ids and timestamps are preserved. Every table is written in one
    transaction, so a failed copy leaves the target as it was.

    Raises:
        BadRequestError: If the URL is unsupported or the target is unreachable
        ConflictError: If the target already holds any rows
    """
    target_url = normalize_async_url(migrate_data.database_url.strip())
    if not target_url.startswith(SUPPORTED_URL_PREFIXES):
        raise BadRequestError("database_url must be a postgresql:// or sqlite:// URL")

    target = SQLStorage(target_url, auth_token=migrate_data.auth_token)
    try:
        if not await target.ping():
            raise BadRequestError("Could not connect to the target database")

        await target.initialize()
        if not await target.is_empty():
            raise ConflictError("Target database already contains data")
        snapshot = await storage.export_snapshot()
        counts = await target.import_snapshot(snapshot)
    finally:
        await target.close()

    total = sum(counts.values())
    logger.info(f"Migrated {total} records from {storage.backend} storage")
    return MigrateResponse(
        success=True,
        message=f"Migrated {total} records",
        counts=counts,
    )
