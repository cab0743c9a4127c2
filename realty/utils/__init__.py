"""
Utility modules for the Realty Site API.
"""

from .auth import (
    hash_password,
    verify_password,
    new_session_id,
    sign_session_id,
    unsign_session_id,
)

from .exceptions import (
    APIException,
    ValidationError,
    NotFoundError,
    UnauthorizedError,
    InvalidCredentialsError,
    ConflictError,
    BadRequestError,
    FileUploadError,
    UnsupportedFileTypeError,
    FileSizeExceededError,
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    # Auth utilities
    "hash_password",
    "verify_password",
    "new_session_id",
    "sign_session_id",
    "unsign_session_id",

    # Exceptions
    "APIException",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "InvalidCredentialsError",
    "ConflictError",
    "BadRequestError",
    "FileUploadError",
    "UnsupportedFileTypeError",
    "FileSizeExceededError",
]
