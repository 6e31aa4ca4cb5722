"""
User Service Exceptions

Each exception carries the HTTP status the routes answer with.
"""

from typing import Optional


class UserServiceError(Exception):
    """Base class for errors raised by the user service."""

    status_code: int = 500

    def __init__(self, message: str, *, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(UserServiceError):
    """Missing or malformed request fields, invalid CPF."""

    status_code = 400


class AuthError(UserServiceError):
    """Unknown email or wrong password. Both cases share one message."""

    status_code = 400


class ConflictError(UserServiceError):
    """Email or CPF already registered."""

    status_code = 400


class NotFoundError(UserServiceError):
    """No user with the requested id."""

    status_code = 404


class StoreError(UserServiceError):
    """Connectivity or query failure in the relational store."""

    status_code = 500


class HashError(UserServiceError):
    """Failure inside the password hashing library."""

    status_code = 500
