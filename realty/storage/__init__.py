"""
Pluggable entity storage: in-memory, local SQLite file or remote SQL database.
"""

import logging

from realty.config import Settings
from realty.storage.base import Repository, Storage
from realty.storage.memory import MemoryStorage
from realty.storage.sql import SQLStorage
from realty.storage.types import DuplicateKeyError, EntitySpec, Filter, StorageError

logger = logging.getLogger(__name__)


def create_storage(settings: Settings) -> Storage:
    """Build the storage backend selected by the settings."""
    backend = settings.resolved_storage_backend
    if backend == "memory":
        logger.info("Storage backend: memory")
        return MemoryStorage()

    if backend == "remote" and not settings.remote_database_url:
        raise ValueError("REMOTE_DATABASE_URL is required for the remote storage backend")

    logger.info(f"Storage backend: {backend}")
    return SQLStorage(
        settings.storage_database_url,
        auth_token=settings.remote_database_token if backend == "remote" else None,
        echo=settings.debug,
    )


__all__ = [
    "create_storage",
    "Repository",
    "Storage",
    "MemoryStorage",
    "SQLStorage",
    "DuplicateKeyError",
    "EntitySpec",
    "Filter",
    "StorageError",
]
