"""
Authentication primitives: bcrypt password hashing and JWT session tokens.
"""

from .security import (
    get_pwd_context,
    hash_password,
    verify_password,
    hash_password_async,
    verify_password_async,
    create_access_token,
    decode_access_token,
    issue_user_token,
)

__all__ = [
    "get_pwd_context",
    "hash_password",
    "verify_password",
    "hash_password_async",
    "verify_password_async",
    "create_access_token",
    "decode_access_token",
    "issue_user_token",
]
