"""
Database engine and declarative base for the SQL storage backends.
Handles async engines for SQLite (aiosqlite) and PostgreSQL (asyncpg).
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import event, text, DateTime, String
from typing import Optional
from datetime import datetime, timezone
import logging
import uuid

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """SQLite drops tzinfo on the way back; treat naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def new_id() -> str:
    return str(uuid.uuid4())


def unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def register_sqlite_functions(dbapi_connection, connection_record):
    """
    Replace SQLite's ASCII-only lower() so case-insensitive matching
    also folds accented letters (Á, Ç, Õ).
    """
    dbapi_connection.create_function("lower", 1, unicode_lower)


def create_engine(database_url: str, echo: bool = False, auth_token: Optional[str] = None) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    Args:
        database_url: SQLAlchemy async URL (sqlite+aiosqlite or postgresql+asyncpg)
        echo: Whether to log emitted SQL
        auth_token: Optional password for managed databases, passed to the driver

    Returns:
        Configured AsyncEngine
    """
    if database_url.startswith("sqlite"):
        engine = create_async_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )
        event.listen(engine.sync_engine, "connect", register_sqlite_functions)
        return engine

    connect_args = {
        "server_settings": {
            "application_name": "realty_site_api",
        }
    }
    if auth_token:
        connect_args["password"] = auth_token

    return create_async_engine(
        database_url,
        echo=echo,
        # Connection pool settings for a small managed instance
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=3600,
        pool_timeout=30,
        connect_args=connect_args,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Create an async session factory bound to the engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


class Base(DeclarativeBase):
    """
    Base class for all entity tables.
    Includes common fields: id, created_at, updated_at.
    """

    # String UUID primary key, portable across SQLite and PostgreSQL
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_id,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id})>"


async def check_database_connection(engine: AsyncEngine) -> bool:
    """
    Test database connectivity.
    Returns True if connection is successful, False otherwise.
    """
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            result.scalar()
            logger.debug("Database connection successful")
            return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


async def create_tables(engine: AsyncEngine, metadata=None):
    """
    Create all tables of the given metadata (entity tables by default).
    """
    target = metadata if metadata is not None else Base.metadata
    async with engine.begin() as conn:
        await conn.run_sync(target.create_all)
        logger.info("Database tables created successfully")

