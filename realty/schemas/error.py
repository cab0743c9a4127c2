"""
Error response schemas for API documentation and consistent error formatting.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorDetail(BaseModel):
    """Schema for individual field error."""

    field: Optional[str] = Field(
        None,
        description="Field name that caused the error",
        examples=["email"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["value is not a valid email address"]
    )

    type: Optional[str] = Field(
        None,
        description="Error type identifier",
        examples=["value_error"]
    )


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    message: str = Field(..., description="Human-readable error message", examples=["Not authenticated"])
    code: str = Field(..., description="Error code identifier", examples=["UNAUTHORIZED"])
    timestamp: str = Field(..., description="Error timestamp in ISO format")
    request_id: Optional[str] = Field(None, description="Request identifier for tracking")
    errors: Optional[List[ErrorDetail]] = Field(
        None,
        description="Field errors for validation failures"
    )


_DESCRIPTIONS = {
    400: "Bad Request - Invalid request body or parameters",
    401: "Unauthorized - Login required",
    404: "Not Found - Resource does not exist",
    409: "Conflict - Unique field already taken",
    500: "Internal Server Error",
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get OpenAPI error response entries for specific status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary usable as a route's ``responses`` argument
    """
    return {
        code: {"description": _DESCRIPTIONS[code], "model": ErrorResponse}
        for code in status_codes
        if code in _DESCRIPTIONS
    }


def get_crud_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for admin CRUD operations."""
    return get_error_responses(400, 401, 404, 409)
