"""
Login session stores: in-process memory or a SQL table.
"""

import logging

from realty.config import Settings
from realty.sessions.base import SessionStore
from realty.sessions.memory import MemorySessionStore
from realty.sessions.sql import SQLSessionStore

logger = logging.getLogger(__name__)


def create_session_store(settings: Settings) -> SessionStore:
    """
    Build the session store selected by the settings.
    The database store falls back to memory when no SQL database is configured.
    """
    if settings.session_store == "database":
        database_url = settings.resolved_session_database_url
        if database_url:
            logger.info("Session store: database")
            token = None
            if not settings.session_database_url and settings.resolved_storage_backend == "remote":
                token = settings.remote_database_token
            return SQLSessionStore(database_url, auth_token=token)
        logger.warning("No SQL database configured for sessions, using memory session store")

    logger.info("Session store: memory")
    return MemorySessionStore()


__all__ = ["create_session_store", "SessionStore", "MemorySessionStore", "SQLSessionStore"]
