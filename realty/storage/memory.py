"""
In-process storage backend.
Rows live in dicts keyed by id; lists are linear scans. Used for tests and quick local runs.
"""

from typing import Any, Dict, List, Optional
import logging

from realty.database import new_id, utcnow
from realty.storage.base import Repository, Storage
from realty.storage.types import DuplicateKeyError, EntitySpec, Filter

logger = logging.getLogger(__name__)


def matches(record: Any, condition: Filter) -> bool:
    """Evaluate one filter against a record."""
    actual = getattr(record, condition.field)
    if condition.op == "eq":
        return actual == condition.value
    if actual is None:
        return False
    if condition.op == "gte":
        return actual >= condition.value
    if condition.op == "lte":
        return actual <= condition.value
    return str(condition.value).lower() in str(actual).lower()


def sort_records(records: List[Any], order_by) -> List[Any]:
    """Stable multi-key sort; keys are applied last to first."""
    for field, descending in reversed(order_by):
        records.sort(key=lambda record: getattr(record, field), reverse=descending)
    return records


class MemoryRepository(Repository):
    """Generic dict-backed repository. Callers always receive copies of the stored records."""

    def __init__(self, spec: EntitySpec):
        super().__init__(spec)
        self._rows: Dict[str, Any] = {}

    def _check_unique(self, values: Dict[str, Any], exclude_id: Optional[str] = None):
        for field in self.spec.unique_fields:
            if field not in values:
                continue
            for row_id, row in self._rows.items():
                if row_id != exclude_id and getattr(row, field) == values[field]:
                    raise DuplicateKeyError(self.spec.name, field, values[field])

    async def list(self, filters: Optional[List[Filter]] = None) -> List[Any]:
        conditions = filters or []
        for condition in conditions:
            if condition.field not in self.spec.record.model_fields:
                raise ValueError(f"Unknown field '{condition.field}' for {self.spec.name}")
        records = [
            record for record in self._rows.values()
            if all(matches(record, condition) for condition in conditions)
        ]
        logger.debug(f"Retrieved {len(records)} {self.spec.name} records")
        return [record.model_copy(deep=True) for record in sort_records(records, self.spec.order_by)]

    async def get(self, id: str) -> Optional[Any]:
        record = self._rows.get(id)
        return record.model_copy(deep=True) if record is not None else None

    async def create(self, data: Dict[str, Any]) -> Any:
        self._check_unique(data)
        now = utcnow()
        record = self.spec.record.model_validate({
            **data,
            "id": new_id(),
            "created_at": now,
            "updated_at": now,
        })
        self._rows[record.id] = record
        logger.debug(f"Created {self.spec.name} with id: {record.id}")
        return record.model_copy(deep=True)

    async def update(self, id: str, partial: Dict[str, Any]) -> Optional[Any]:
        existing = self._rows.get(id)
        if existing is None:
            logger.debug(f"{self.spec.name} with id {id} not found for update")
            return None
        self._check_unique(partial, exclude_id=id)
        record = self.spec.record.model_validate({
            **existing.model_dump(),
            **partial,
            "id": id,
            "updated_at": utcnow(),
        })
        self._rows[id] = record
        logger.debug(f"Updated {self.spec.name} with id: {id}")
        return record.model_copy(deep=True)

    async def delete(self, id: str) -> bool:
        deleted = self._rows.pop(id, None) is not None
        logger.debug(f"Delete {self.spec.name} {id}: {deleted}")
        return deleted

    async def import_rows(self, rows: List[Dict[str, Any]]) -> int:
        for row in rows:
            self._check_unique(row, exclude_id=row["id"])
            record = self.spec.record.model_validate(row)
            self._rows[record.id] = record
        return len(rows)


class MemoryStorage(Storage):
    """Storage held entirely in process memory. Contents are lost on exit."""

    backend = "memory"

    def _make_repository(self, spec: EntitySpec) -> Repository:
        return MemoryRepository(spec)

    async def initialize(self) -> None:
        logger.info("Using in-memory storage")

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        return None
