"""
Session store contract: key/value records with an expiry, keyed by session id.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Optional


class SessionStore(ABC):
    """
    Login session persistence.
    Expired sessions read as absent and are removed lazily.
    """

    name: str = "abstract"

    @abstractmethod
    async def get(self, sid: str) -> Optional[Dict[str, Any]]:
        """Return the payload of a live session, or None."""

    @abstractmethod
    async def set(self, sid: str, payload: Dict[str, Any], expires_at: datetime) -> None:
        """Create or replace a session. Last write wins."""

    @abstractmethod
    async def destroy(self, sid: str) -> None:
        """Remove a session if present."""

    @abstractmethod
    async def touch(self, sid: str, expires_at: datetime) -> None:
        """Push back the expiry of a live session."""

    async def initialize(self) -> None:
        return None

    async def close(self) -> None:
        return None
