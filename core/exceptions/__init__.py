"""Exception taxonomy and global exception handlers."""

from .errors import (
    UserServiceError,
    ValidationError,
    AuthError,
    ConflictError,
    NotFoundError,
    StoreError,
    HashError,
)

__all__ = [
    "UserServiceError",
    "ValidationError",
    "AuthError",
    "ConflictError",
    "NotFoundError",
    "StoreError",
    "HashError",
]
