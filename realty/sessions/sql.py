"""
SQL-backed session store.
Uses its own engine and metadata so it can live in a different database than the entities.
"""

from datetime import datetime
from typing import Any, Dict, Optional
import json
import logging

from sqlalchemy import DateTime, String, Text, delete, update
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from realty.database import as_utc, create_engine, create_session_factory, create_tables, utcnow
from realty.sessions.base import SessionStore

logger = logging.getLogger(__name__)


class SessionBase(DeclarativeBase):
    """Metadata holder for the session table only."""


class SessionRow(SessionBase):
    __tablename__ = "sessions"

    sid: Mapped[str] = mapped_column(String(255), primary_key=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False, comment="JSON encoded session data")
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)


class SQLSessionStore(SessionStore):
    """
    Session store on a SQL table.

    Args:
        database_url: Async SQLAlchemy URL of the session database
        auth_token: Optional password for managed databases
    """

    name = "database"

    def __init__(self, database_url: str, auth_token: Optional[str] = None):
        self.engine = create_engine(database_url, auth_token=auth_token)
        self.session_factory = create_session_factory(self.engine)

    async def initialize(self) -> None:
        await create_tables(self.engine, SessionBase.metadata)

    async def close(self) -> None:
        await self.engine.dispose()

    async def get(self, sid: str) -> Optional[Dict[str, Any]]:
        async with self.session_factory() as session:
            row = await session.get(SessionRow, sid)
            if row is None:
                return None
            if as_utc(row.expires_at) <= utcnow():
                await session.execute(delete(SessionRow).where(SessionRow.sid == sid))
                await session.commit()
                logger.debug("Dropped expired session")
                return None
            return json.loads(row.payload)

    async def set(self, sid: str, payload: Dict[str, Any], expires_at: datetime) -> None:
        async with self.session_factory() as session:
            await session.merge(SessionRow(sid=sid, payload=json.dumps(payload), expires_at=expires_at))
            await session.commit()

    async def destroy(self, sid: str) -> None:
        async with self.session_factory() as session:
            await session.execute(delete(SessionRow).where(SessionRow.sid == sid))
            await session.commit()

    async def touch(self, sid: str, expires_at: datetime) -> None:
        async with self.session_factory() as session:
            await session.execute(
                update(SessionRow).where(SessionRow.sid == sid).values(expires_at=expires_at)
            )
            await session.commit()
