from datetime import timedelta

import pytest

from config import get_settings
from core.auth.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    hash_password_async,
    issue_user_token,
    verify_password,
    verify_password_async,
)


def test_hash_then_verify_round_trips():
    digest = hash_password("secret1")

    assert digest != "secret1"
    assert verify_password("secret1", digest)
    assert not verify_password("secret2", digest)


def test_hash_is_salted():
    assert hash_password("secret1") != hash_password("secret1")


def test_malformed_digest_never_matches():
    assert verify_password("secret1", "not-a-bcrypt-digest") is False


@pytest.mark.asyncio
async def test_async_wrappers():
    digest = await hash_password_async("p@ss")
    assert await verify_password_async("p@ss", digest)
    assert not await verify_password_async("other", digest)


def test_user_token_carries_id_and_email_for_one_hour():
    settings = get_settings()
    token = issue_user_token(7, "ana@x.com")

    payload = decode_access_token(token, settings.JWT_SECRET)

    assert payload["sub"] == "7"
    assert payload["id"] == "7"
    assert payload["email"] == "ana@x.com"
    assert payload["exp"] - payload["iat"] == 3600


def test_token_signed_with_other_secret_is_rejected():
    token = create_access_token({"sub": "1"}, secret_key="a" * 32)

    assert decode_access_token(token, "b" * 32) is None


def test_expired_token_is_rejected():
    secret = "c" * 32
    token = create_access_token({"sub": "1"}, secret_key=secret, expires_delta=timedelta(seconds=-10))

    assert decode_access_token(token, secret) is None
