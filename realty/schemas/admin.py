"""
Schemas for upload results, database administration and monitoring endpoints.
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class UploadedImage(BaseModel):
    """One processed upload: the original and its WebP copy."""

    filename: str
    original_name: str
    url: str = Field(..., description="URL of the stored original, or a data URL in inline mode")
    webp_url: str = Field(..., description="URL of the WebP rendition")
    size: int = Field(..., description="Size of the original in bytes")
    width: int
    height: int


class UploadResponse(BaseModel):
    success: bool = True
    message: str
    files: List[UploadedImage] = Field(default_factory=list)


class DatabaseStatus(BaseModel):
    """Active storage backend and its reachability."""

    backend: str = Field(..., examples=["sqlite"])
    connected: bool
    session_store: str = Field(..., examples=["database"])
    upload_mode: str = Field(..., examples=["disk"])


class MigrateRequest(BaseModel):
    """Target for a one-time copy of every record into a remote SQL database."""

    database_url: str = Field(
        ...,
        min_length=1,
        description="postgresql:// or sqlite:// URL of the target database",
        examples=["postgresql://user@db.example.com:5432/realty"]
    )
    auth_token: Optional[str] = Field(None, description="Password or access token for the target")


class MigrateResponse(BaseModel):
    success: bool
    message: str
    counts: Dict[str, int] = Field(default_factory=dict, description="Rows copied per table")
