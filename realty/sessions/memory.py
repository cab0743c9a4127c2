"""
In-process session store. Sessions do not survive a restart.
"""

from datetime import datetime
from typing import Any, Dict, Optional, Tuple
import copy
import logging

from realty.database import utcnow
from realty.sessions.base import SessionStore

logger = logging.getLogger(__name__)


class MemorySessionStore(SessionStore):
    """Dict of sid to (payload, expires_at)."""

    name = "memory"

    def __init__(self):
        self._sessions: Dict[str, Tuple[Dict[str, Any], datetime]] = {}

    async def get(self, sid: str) -> Optional[Dict[str, Any]]:
        entry = self._sessions.get(sid)
        if entry is None:
            return None
        payload, expires_at = entry
        if expires_at <= utcnow():
            logger.debug("Dropping expired session")
            del self._sessions[sid]
            return None
        return copy.deepcopy(payload)

    async def set(self, sid: str, payload: Dict[str, Any], expires_at: datetime) -> None:
        self._sessions[sid] = (copy.deepcopy(payload), expires_at)

    async def destroy(self, sid: str) -> None:
        self._sessions.pop(sid, None)

    async def touch(self, sid: str, expires_at: datetime) -> None:
        entry = self._sessions.get(sid)
        if entry is not None:
            self._sessions[sid] = (entry[0], expires_at)
