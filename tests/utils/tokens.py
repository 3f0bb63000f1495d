"""Mint JWTs the way the external issuer would (signature is never checked)."""

from __future__ import annotations

import time
from typing import Any

import jwt

TEST_DOMAIN = "tenant.example.com"
TEST_AUDIENCE = "https://api.example.com"
TEST_ISSUER = f"https://{TEST_DOMAIN}/"

_SIGNING_KEY = "test-signing-key-that-nobody-verifies-0123456789"


def mint_token(
    *,
    sub: str = "user-123",
    iss: str = TEST_ISSUER,
    aud: Any = TEST_AUDIENCE,
    exp_in_s: float | None = 3600.0,
    **extra: Any,
) -> str:
    payload: dict[str, Any] = {"sub": sub, "iss": iss, "aud": aud, **extra}
    if exp_in_s is not None:
        payload["exp"] = int(time.time() + exp_in_s)
    return jwt.encode(payload, _SIGNING_KEY, algorithm="HS256")


def auth_headers(token: str | None = None) -> dict[str, str]:
    return {"Authorization": f"Bearer {token or mint_token()}"}
