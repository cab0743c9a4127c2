"""
Middleware package for the Realty Site API.
"""

from .logging import RequestLog, RequestLoggingMiddleware

__all__ = [
    "RequestLog",
    "RequestLoggingMiddleware",
]
