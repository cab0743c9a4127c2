"""
Pydantic schemas for authentication requests and responses.
Handles login, password change and the sanitised user exposed to clients.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from datetime import datetime
from realty.database import as_utc
import re

PASSWORD_RULES = [
    (r"[a-z]", "Password must contain at least one lowercase letter"),
    (r"[A-Z]", "Password must contain at least one uppercase letter"),
    (r"\d", "Password must contain at least one number"),
    (r"[^A-Za-z0-9]", "Password must contain at least one special character"),
]


class LoginRequest(BaseModel):
    """Login request schema."""

    email: EmailStr = Field(
        ...,
        description="Operator email address",
        examples=["admin@example.com"]
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Operator password"
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()


class ChangePasswordRequest(BaseModel):
    """Password change request for the logged-in operator."""

    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(
        ...,
        max_length=128,
        description="At least 8 characters with lower and upper case letters, a number and a symbol"
    )

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, v):
        """Validate new password strength."""
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters long")
        for pattern, message in PASSWORD_RULES:
            if not re.search(pattern, v):
                raise ValueError(message)
        return v


class UserRecord(BaseModel):
    """Stored operator account, including the password hash. Never sent to clients."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    email: str
    password_hash: str
    name: str
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, v):
        return as_utc(v)


class UserResponse(BaseModel):
    """User response schema (excluding sensitive data)."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(
        ...,
        description="User's unique identifier",
        examples=["123e4567-e89b-12d3-a456-426614174000"]
    )
    email: str = Field(..., description="User's email address", examples=["admin@example.com"])
    name: str = Field(..., description="Display name", examples=["Administrador"])


class MessageResponse(BaseModel):
    """Plain acknowledgement message."""

    message: str = Field(..., examples=["Logged out successfully"])
