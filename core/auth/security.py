"""
Credential hashing and token issuing.

Passwords are stored as bcrypt digests through passlib; session tokens are
HS256 JWTs signed with the shared ``JWT_SECRET``.
"""

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional, Dict, Any

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError
from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

from config import get_settings
from core.exceptions import HashError

logger = logging.getLogger(__name__)


@lru_cache()
def get_pwd_context() -> CryptContext:
    """Password hashing context, cost factor taken from settings."""
    settings = get_settings()
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=settings.BCRYPT_ROUNDS,
    )


def hash_password(password: str) -> str:
    """Create a salted bcrypt digest of ``password``."""
    try:
        return get_pwd_context().hash(password)
    except (ValueError, TypeError) as exc:
        raise HashError("Falha ao gerar o hash da senha.", detail=str(exc)) from exc


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash. A malformed digest never matches."""
    try:
        return get_pwd_context().verify(plain_password, hashed_password)
    except (ValueError, TypeError) as exc:
        logger.warning(f"Password verification against malformed digest: {exc}")
        return False


async def hash_password_async(password: str) -> str:
    return await run_in_threadpool(hash_password, password)


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    return await run_in_threadpool(verify_password, plain_password, hashed_password)


def create_access_token(
    data: Dict[str, Any],
    secret_key: str,
    expires_delta: Optional[timedelta] = None,
    algorithm: Optional[str] = None,
) -> str:
    """
    Create JWT access token.

    Args:
        data: Claims to encode in the token
        secret_key: Secret key for signing
        expires_delta: Token lifetime, defaults to ACCESS_TOKEN_EXPIRE_MINUTES
        algorithm: Signing algorithm, defaults to JWT_ALGORITHM

    Returns:
        JWT token string
    """
    settings = get_settings()
    to_encode = data.copy()
    now = datetime.now(timezone.utc)

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    })

    return jwt.encode(to_encode, secret_key, algorithm=algorithm or settings.JWT_ALGORITHM)


def decode_access_token(token: str, secret_key: str, algorithm: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """
    Verify and decode a JWT issued by :func:`create_access_token`.

    Returns:
        Token payload if the signature and expiry are valid, None otherwise
    """
    settings = get_settings()
    try:
        return jwt.decode(token, secret_key, algorithms=[algorithm or settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        logger.info("Token signature has expired")
        return None
    except JWTError as e:
        logger.warning(f"Invalid token: {e}")
        return None


def issue_user_token(user_id: Any, email: str) -> str:
    """Sign the session token handed out on successful authentication."""
    settings = get_settings()
    return create_access_token(
        {"sub": str(user_id), "id": str(user_id), "email": email},
        secret_key=settings.JWT_SECRET,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
