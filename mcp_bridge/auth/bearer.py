"""Bearer credential extraction and request-level enforcement."""

from __future__ import annotations

import logging

from fastapi import Request

from mcp_bridge.errors import AuthError
from mcp_bridge.state.claims import Claims
from mcp_bridge.config.auth import BEARER_PREFIX, AUTH_MISSING_MESSAGE

from .validator import TokenValidator, decode_claims

logger = logging.getLogger(__name__)


def get_bearer_token(authorization: str | None) -> str | None:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX) :]


def _log_presented_claims(token: str) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    try:
        logger.debug("token claims: %s", decode_claims(token).raw)
    except AuthError:
        logger.debug("could not decode presented token")


def authenticate(authorization: str | None, validator: TokenValidator) -> Claims:
    token = get_bearer_token(authorization)
    if token is None:
        raise AuthError(AUTH_MISSING_MESSAGE, missing=True)
    _log_presented_claims(token)
    try:
        return validator.validate(token)
    except AuthError as exc:
        logger.warning("auth rejected: %s", exc)
        raise


async def require_claims(request: Request) -> Claims:
    """FastAPI dependency: resolve the caller's claims or raise `AuthError`."""
    from mcp_bridge.runtime.dependencies import get_runtime_deps

    runtime_deps = get_runtime_deps(request)
    claims = authenticate(request.headers.get("authorization"), runtime_deps.validator)
    request.state.claims = claims
    return claims


__all__ = ["authenticate", "get_bearer_token", "require_claims"]
