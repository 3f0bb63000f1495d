"""HTTP error translation for the gateway surface."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import ORJSONResponse

from mcp_bridge.errors import AuthError
from mcp_bridge.state.settings import AuthSettings
from mcp_bridge.runtime.dependencies import get_runtime_deps
from mcp_bridge.config.auth import AUTH_ERROR_CODE, AUTH_INVALID_MESSAGE, AUTH_MISSING_MESSAGE

logger = logging.getLogger(__name__)


def build_auth_challenge(settings: AuthSettings, exc: AuthError) -> str:
    if exc.missing:
        return f'Bearer realm="{settings.realm}", resource="{settings.audience}"'
    return f'Bearer realm="{settings.realm}", error="invalid_token"'


def build_auth_error_response(settings: AuthSettings, exc: AuthError) -> ORJSONResponse:
    return ORJSONResponse(
        {
            "error": AUTH_ERROR_CODE,
            "message": AUTH_MISSING_MESSAGE if exc.missing else AUTH_INVALID_MESSAGE,
        },
        status_code=401,
        headers={"WWW-Authenticate": build_auth_challenge(settings, exc)},
    )


async def _handle_auth_error(request: Request, exc: Exception) -> ORJSONResponse:
    if not isinstance(exc, AuthError):
        raise exc
    return build_auth_error_response(get_runtime_deps(request).settings.auth, exc)


async def _handle_unexpected_error(request: Request, exc: Exception) -> ORJSONResponse:
    logger.error("Server error on %s %s", request.method, request.url.path, exc_info=exc)
    return ORJSONResponse({"error": "Internal server error"}, status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthError, _handle_auth_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)


__all__ = [
    "build_auth_challenge",
    "build_auth_error_response",
    "register_exception_handlers",
]
