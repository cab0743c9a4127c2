"""
Service layer for business logic implementation.
Contains services for authentication, image uploads and error handling.
"""

from .auth import AuthService
from .uploads import UploadService
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "UploadService",
    "ErrorHandlerService"
]
