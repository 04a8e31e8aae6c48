# ============================================================================
# FILE: musicflow/core/exceptions.py
# ============================================================================
from typing import Any, Optional


class AppError(Exception):
    """Base error carrying the HTTP status the API answers with"""

    status_code: int = 500

    def __init__(self, message: str, error: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.error = error


class ValidationError(AppError):
    """Missing or malformed required input"""
    status_code = 400


class AuthenticationError(AppError):
    """Missing/invalid token or bad login credentials"""
    status_code = 401


class ForbiddenError(AppError):
    """Valid identity without ownership of the resource"""
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Duplicate membership or duplicate unique field"""
    status_code = 409


class MediaRelayError(AppError):
    """The remote media host rejected or failed a request"""
    status_code = 500
