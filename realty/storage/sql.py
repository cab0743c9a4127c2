"""
SQL storage backend on async SQLAlchemy.
Serves both the local SQLite file (aiosqlite) and a remote PostgreSQL database (asyncpg).
Each operation opens its own session from the backend's session factory.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional
import logging
import re

from sqlalchemy import delete, func, select, update
from sqlalchemy.engine import make_url
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from realty import models  # noqa: F401  registers every table on Base.metadata
from realty.database import (
    check_database_connection,
    create_engine,
    create_session_factory,
    create_tables,
    utcnow,
)
from realty.storage.base import Repository, Storage
from realty.storage.types import DuplicateKeyError, EntitySpec, Filter

logger = logging.getLogger(__name__)


def duplicate_key_error(entity: str, error: IntegrityError) -> DuplicateKeyError:
    """Name the table and column behind a unique or primary key violation."""
    message = str(error.orig)
    # PostgreSQL: Key (slug)=(luanda) already exists.
    match = re.search(r"Key \((\w+)\)=\((.*?)\)", message)
    if match:
        return DuplicateKeyError(entity, match.group(1), match.group(2))
    # SQLite: UNIQUE constraint failed: cities.slug
    match = re.search(r"UNIQUE constraint failed: (\w+)\.(\w+)", message)
    if match:
        return DuplicateKeyError(match.group(1), match.group(2), None)
    return DuplicateKeyError(entity, "id", None)


class SQLRepository(Repository):
    """
    Generic repository translating filters into a WHERE clause.
    """

    def __init__(self, spec: EntitySpec, session_factory: async_sessionmaker):
        """
        Initialize repository with an entity spec and session factory.

        Args:
            spec: Entity description (ORM model, record schema, ordering)
            session_factory: Factory producing AsyncSession objects
        """
        super().__init__(spec)
        self.model = spec.model
        self.session_factory = session_factory

    def _column(self, field: str):
        if field not in self.model.__table__.columns:
            raise ValueError(f"Unknown field '{field}' for {self.spec.name}")
        return getattr(self.model, field)

    def _condition(self, condition: Filter):
        column = self._column(condition.field)
        if condition.op == "eq":
            return column == condition.value
        if condition.op == "gte":
            return column >= condition.value
        if condition.op == "lte":
            return column <= condition.value
        return column.icontains(str(condition.value), autoescape=True)

    def _ordering(self):
        clauses = []
        for field, descending in self.spec.order_by:
            column = self._column(field)
            clauses.append(column.desc() if descending else column.asc())
        return clauses

    def _to_record(self, obj):
        return self.spec.record.model_validate(obj)

    async def _check_unique(self, session: AsyncSession, values: Dict[str, Any], exclude_id: Optional[str] = None):
        """Report the offending field before the database raises a generic IntegrityError."""
        for field in self.spec.unique_fields:
            if field not in values:
                continue
            query = select(func.count()).select_from(self.model).where(self._column(field) == values[field])
            if exclude_id is not None:
                query = query.where(self.model.id != exclude_id)
            if (await session.execute(query)).scalar():
                raise DuplicateKeyError(self.spec.name, field, values[field])

    async def _commit(self, session: AsyncSession):
        try:
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            logger.warning(f"Integrity error on {self.spec.name}: {e.orig}")
            raise duplicate_key_error(self.spec.name, e) from e

    async def list(self, filters: Optional[List[Filter]] = None) -> List[Any]:
        query = select(self.model)
        for condition in filters or []:
            query = query.where(self._condition(condition))
        query = query.order_by(*self._ordering())

        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                records = [self._to_record(obj) for obj in result.scalars().all()]
        except Exception as e:
            logger.error(f"Failed to list {self.spec.name}: {e}")
            raise

        logger.debug(f"Retrieved {len(records)} {self.spec.name} records")
        return records

    async def get(self, id: str) -> Optional[Any]:
        async with self.session_factory() as session:
            obj = await session.get(self.model, id)
            if obj is None:
                logger.debug(f"{self.spec.name} with id {id} not found")
                return None
            return self._to_record(obj)

    async def create(self, data: Dict[str, Any]) -> Any:
        async with self.session_factory() as session:
            try:
                await self._check_unique(session, data)
                obj = self.model(**data)
                session.add(obj)
                await self._commit(session)
                await session.refresh(obj)
            except DuplicateKeyError:
                raise
            except Exception as e:
                await session.rollback()
                logger.error(f"Failed to create {self.spec.name}: {e}")
                raise
            logger.debug(f"Created {self.spec.name} with id: {obj.id}")
            return self._to_record(obj)

    async def update(self, id: str, partial: Dict[str, Any]) -> Optional[Any]:
        async with self.session_factory() as session:
            try:
                await self._check_unique(session, partial, exclude_id=id)
                stmt = (
                    update(self.model)
                    .where(self.model.id == id)
                    .values(**partial, updated_at=utcnow())
                )
                result = await session.execute(stmt)
                if result.rowcount == 0:
                    await session.rollback()
                    logger.debug(f"{self.spec.name} with id {id} not found for update")
                    return None
                await self._commit(session)
            except DuplicateKeyError:
                raise
            except Exception as e:
                await session.rollback()
                logger.error(f"Failed to update {self.spec.name} {id}: {e}")
                raise

        logger.debug(f"Updated {self.spec.name} with id: {id}")
        return await self.get(id)

    async def delete(self, id: str) -> bool:
        async with self.session_factory() as session:
            try:
                result = await session.execute(delete(self.model).where(self.model.id == id))
                await session.commit()
            except Exception as e:
                await session.rollback()
                logger.error(f"Failed to delete {self.spec.name} {id}: {e}")
                raise

        deleted = result.rowcount > 0
        if deleted:
            logger.debug(f"Deleted {self.spec.name} with id: {id}")
        else:
            logger.debug(f"{self.spec.name} with id {id} not found for deletion")
        return deleted

    def add_rows(self, session: AsyncSession, rows: List[Dict[str, Any]]) -> int:
        session.add_all([self.model(**row) for row in rows])
        return len(rows)

    async def import_rows(self, rows: List[Dict[str, Any]]) -> int:
        if not rows:
            return 0
        async with self.session_factory() as session:
            try:
                self.add_rows(session, rows)
                await self._commit(session)
            except DuplicateKeyError:
                raise
            except Exception as e:
                await session.rollback()
                logger.error(f"Failed to import {self.spec.name} rows: {e}")
                raise
        logger.debug(f"Imported {len(rows)} {self.spec.name} records")
        return len(rows)

    async def count(self) -> int:
        async with self.session_factory() as session:
            result = await session.execute(select(func.count()).select_from(self.model))
            return result.scalar()


class SQLStorage(Storage):
    """
    Storage on a SQL database.

    Args:
        database_url: Async SQLAlchemy URL
        auth_token: Optional password for managed databases
        echo: Whether to log emitted SQL
    """

    def __init__(self, database_url: str, auth_token: Optional[str] = None, echo: bool = False):
        self.database_url = database_url
        self.backend = "sqlite" if database_url.startswith("sqlite") else "remote"
        self.engine = create_engine(database_url, echo=echo, auth_token=auth_token)
        self.session_factory = create_session_factory(self.engine)
        super().__init__()

    def _make_repository(self, spec: EntitySpec) -> Repository:
        return SQLRepository(spec, self.session_factory)

    async def initialize(self) -> None:
        if self.backend == "sqlite":
            database = make_url(self.database_url).database
            if database and database != ":memory:":
                Path(database).parent.mkdir(parents=True, exist_ok=True)
        await create_tables(self.engine)
        logger.info(f"Initialized {self.backend} storage")

    async def ping(self) -> bool:
        return await check_database_connection(self.engine)

    async def import_snapshot(self, snapshot: Dict[str, List[Dict[str, Any]]]) -> Dict[str, int]:
        """
        Load rows produced by export_snapshot in a single transaction.
        A conflict in any table rolls back every table.

        Raises:
            DuplicateKeyError: If an id or unique value is already taken
        """
        counts = {}
        name = None
        async with self.session_factory() as session:
            try:
                for name, repository in self.repositories.items():
                    counts[name] = repository.add_rows(session, snapshot.get(name, []))
                    await session.flush()
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                logger.warning(f"Snapshot import rolled back at {name}: {e.orig}")
                raise duplicate_key_error(name, e) from e
            except Exception as e:
                await session.rollback()
                logger.error(f"Snapshot import failed at {name}: {e}")
                raise

        logger.info(f"Imported {sum(counts.values())} rows into {self.backend} storage")
        return counts

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info(f"Closed {self.backend} storage")
