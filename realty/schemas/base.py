"""
Shared bases of the entity schemas: stored records and request bodies.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from realty.database import as_utc


class RecordBase(BaseModel):
    """
    Base for stored records returned by the storage layer.
    Records are immutable; repositories return new instances on update.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True, use_enum_values=True)

    id: str = Field(
        ...,
        description="Record unique identifier",
        examples=["123e4567-e89b-12d3-a456-426614174000"]
    )

    created_at: datetime = Field(..., description="Creation timestamp (UTC)")
    updated_at: datetime = Field(..., description="Last update timestamp (UTC)")

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, v):
        return as_utc(v)


class InputModel(BaseModel):
    """Base for create and update request bodies."""

    model_config = ConfigDict(use_enum_values=True, str_strip_whitespace=True)
