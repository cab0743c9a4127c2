"""
Value types shared by every storage backend: list filters, entity specs and storage errors.
"""

from dataclasses import dataclass
from typing import Any, Tuple, Type

FILTER_OPERATORS = ("eq", "gte", "lte", "contains")


class StorageError(Exception):
    """Base class for errors raised by a storage backend."""


class DuplicateKeyError(StorageError):
    """A unique field already holds the given value."""

    def __init__(self, entity: str, field: str, value: Any):
        self.entity = entity
        self.field = field
        self.value = value
        if value is None:
            super().__init__(f"{entity} with this {field} already exists")
        else:
            super().__init__(f"{entity} with {field} '{value}' already exists")


@dataclass(frozen=True)
class Filter:
    """
    One list condition.

    ``contains`` is a case-insensitive substring match; the other operators
    compare the stored value with ``value``.
    """

    field: str
    op: str
    value: Any

    def __post_init__(self):
        if self.op not in FILTER_OPERATORS:
            raise ValueError(f"Unsupported filter operator '{self.op}'")


@dataclass(frozen=True)
class EntitySpec:
    """
    Everything a generic repository needs to know about one entity.

    Attributes:
        name: Table name, also used as the snapshot key
        model: SQLAlchemy ORM class
        record: Pydantic record class returned to callers
        unique_fields: Fields whose values must be unique across rows
        order_by: Default ordering as (field, descending) pairs
    """

    name: str
    model: Type
    record: Type
    unique_fields: Tuple[str, ...] = ()
    order_by: Tuple[Tuple[str, bool], ...] = (("created_at", True),)
