"""
Abstract storage contract.
A Storage aggregates one generic Repository per entity plus the user account helpers.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar
import logging

from realty.schemas.auth import UserRecord
from realty.schemas.content import HeroSettingsResponse
from realty.storage.specs import ENTITY_SPECS, USER_SPEC
from realty.storage.types import EntitySpec, Filter

logger = logging.getLogger(__name__)

RecordType = TypeVar("RecordType")


class Repository(ABC, Generic[RecordType]):
    """
    CRUD operations over one entity.
    Implementations are parameterised by an EntitySpec rather than subclassed per entity.
    """

    def __init__(self, spec: EntitySpec):
        self.spec = spec

    @abstractmethod
    async def list(self, filters: Optional[List[Filter]] = None) -> List[RecordType]:
        """Return records matching every filter, in the entity's default order."""

    @abstractmethod
    async def get(self, id: str) -> Optional[RecordType]:
        """Return the record with this id, or None."""

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> RecordType:
        """
        Insert a new record. id, created_at and updated_at are generated.

        Raises:
            DuplicateKeyError: If a unique field value is already taken
        """

    @abstractmethod
    async def update(self, id: str, partial: Dict[str, Any]) -> Optional[RecordType]:
        """
        Change only the keys present in ``partial`` and refresh updated_at.
        Returns None when the record does not exist.
        """

    @abstractmethod
    async def delete(self, id: str) -> bool:
        """Delete a record. Returns whether it existed."""

    @abstractmethod
    async def import_rows(self, rows: List[Dict[str, Any]]) -> int:
        """Insert full rows keeping their ids and timestamps. Returns the row count."""

    async def export_rows(self) -> List[Dict[str, Any]]:
        """Dump every record, including ids and timestamps."""
        return [record.model_dump() for record in await self.list()]

    async def count(self) -> int:
        return len(await self.list())


class Storage(ABC):
    """
    Entity storage selected once at process start.

    Attributes:
        backend: Backend name (memory, sqlite or remote)
    """

    backend: str = "abstract"

    properties: Repository
    projects: Repository
    condominiums: Repository
    contacts: Repository
    categories: Repository
    cities: Repository
    hero_settings: Repository
    about_us: Repository
    employees: Repository

    def __init__(self):
        for attribute, spec in ENTITY_SPECS.items():
            setattr(self, attribute, self._make_repository(spec))
        self.users = self._make_repository(USER_SPEC)

    @abstractmethod
    def _make_repository(self, spec: EntitySpec) -> Repository:
        """Build this backend's repository for one entity."""

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the backend (create tables)."""

    @abstractmethod
    async def ping(self) -> bool:
        """Check that the backend is reachable."""

    @abstractmethod
    async def close(self) -> None:
        """Release connections."""

    @property
    def repositories(self) -> Dict[str, Repository]:
        """Every repository keyed by table name, users included."""
        repos = {spec.name: getattr(self, attribute) for attribute, spec in ENTITY_SPECS.items()}
        repos[USER_SPEC.name] = self.users
        return repos

    # Users

    async def get_user(self, id: str) -> Optional[UserRecord]:
        return await self.users.get(id)

    async def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        matches = await self.users.list([Filter("email", "eq", email.strip().lower())])
        return matches[0] if matches else None

    async def create_user(self, email: str, password_hash: str, name: str) -> UserRecord:
        user = await self.users.create({
            "email": email.strip().lower(),
            "password_hash": password_hash,
            "name": name,
        })
        logger.info(f"Created user {user.email}")
        return user

    async def update_user_password(self, id: str, password_hash: str) -> bool:
        return await self.users.update(id, {"password_hash": password_hash}) is not None

    # Hero banner

    async def get_active_hero_settings(self) -> Optional[HeroSettingsResponse]:
        """Newest hero settings record with active set, or None."""
        active = await self.hero_settings.list([Filter("active", "eq", True)])
        return active[0] if active else None

    async def get_latest_hero_settings(self) -> Optional[HeroSettingsResponse]:
        """Newest hero settings record regardless of the active flag."""
        records = await self.hero_settings.list()
        return records[0] if records else None

    # Snapshots

    async def is_empty(self) -> bool:
        """Whether every table, users included, has no rows."""
        for repository in self.repositories.values():
            if await repository.count():
                return False
        return True

    async def export_snapshot(self) -> Dict[str, List[Dict[str, Any]]]:
        """Dump every table as plain rows keyed by table name."""
        snapshot = {}
        for name, repository in self.repositories.items():
            snapshot[name] = await repository.export_rows()
        return snapshot

    async def import_snapshot(self, snapshot: Dict[str, List[Dict[str, Any]]]) -> Dict[str, int]:
        """
        Load rows produced by export_snapshot, keeping ids and timestamps.

        Returns:
            Number of rows written per table
        """
        counts = {}
        for name, repository in self.repositories.items():
            rows = snapshot.get(name, [])
            counts[name] = await repository.import_rows(rows)
            logger.info(f"Imported {counts[name]} rows into {name}")
        return counts
