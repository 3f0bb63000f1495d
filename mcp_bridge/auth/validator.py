"""Structural bearer token validation.

Only the payload segment is decoded and signatures are NOT verified: the
issuer, audience and expiry claims are compared against configuration and
taken at face value otherwise. Anyone able to mint a well-formed token with
matching claims is accepted.
"""

from __future__ import annotations

import time
import logging
from typing import Any
from collections.abc import Callable

import orjson
from jwt.utils import base64url_decode

from mcp_bridge.errors import AuthError
from mcp_bridge.state.claims import Claims
from mcp_bridge.state.settings import AuthSettings

from .cache import TokenCache

logger = logging.getLogger(__name__)

TimeFn = Callable[[], float]

_TOKEN_SEGMENTS = 3


def _normalize_audience(raw: Any) -> tuple[str, ...]:
    if isinstance(raw, str):
        return (raw,)
    if isinstance(raw, (list, tuple)):
        return tuple(item for item in raw if isinstance(item, str))
    return ()


def _coerce_expiry(raw: Any) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise AuthError("Invalid expiry claim")
    return int(raw)


def decode_claims(token: str) -> Claims:
    """Decode the payload segment of `token`.

    The header and signature segments are never decoded, so their contents
    do not affect acceptance.
    """
    segments = token.split(".")
    if len(segments) != _TOKEN_SEGMENTS:
        raise AuthError("Invalid JWT format")
    try:
        payload = orjson.loads(base64url_decode(segments[1]))
    except ValueError as exc:
        raise AuthError(f"Invalid JWT format: {exc}") from exc
    if not isinstance(payload, dict):
        raise AuthError("Invalid JWT format: payload is not an object")

    subject = payload.get("sub")
    issuer = payload.get("iss")
    return Claims(
        subject=subject if isinstance(subject, str) else None,
        issuer=issuer if isinstance(issuer, str) else None,
        audience=_normalize_audience(payload.get("aud")),
        expires_at=_coerce_expiry(payload.get("exp")),
        raw=dict(payload),
    )


class TokenValidator:
    def __init__(
        self,
        settings: AuthSettings,
        *,
        cache: TokenCache | None = None,
        now_fn: TimeFn | None = None,
    ) -> None:
        self._issuer = settings.issuer
        self._audience = settings.audience
        self._now = now_fn or time.time
        self._cache = cache or TokenCache(ttl_s=settings.token_cache_ttl_s, now_fn=self._now)
        # Number of tokens that went through a full decode (cache misses).
        self.decode_count = 0

    @property
    def cache(self) -> TokenCache:
        return self._cache

    def check_claims(self, claims: Claims) -> None:
        if claims.issuer != self._issuer:
            raise AuthError(f"Invalid issuer: {claims.issuer}")
        if self._audience not in claims.audience:
            raise AuthError(f"Invalid audience: {claims.raw.get('aud')}")
        if claims.expires_at is not None and claims.expires_at < int(self._now()):
            raise AuthError("Token expired")

    def validate(self, token: str) -> Claims:
        cached = self._cache.get(token)
        if cached is not None:
            return cached

        self.decode_count += 1
        claims = decode_claims(token)
        self.check_claims(claims)

        logger.info("JWT validated for user: %s", claims.subject)
        self._cache.put(token, claims)
        return claims


__all__ = ["TokenValidator", "decode_claims"]
