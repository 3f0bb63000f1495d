"""Unauthenticated routes: OAuth/OIDC discovery, health and self-description."""

from __future__ import annotations

from typing import Any

from fastapi import Request, APIRouter

from mcp_bridge.state.settings import AuthSettings
from mcp_bridge.runtime.dependencies import get_runtime_deps
from mcp_bridge.config.auth import RESOURCE_SCOPES, AUTHORIZATION_SCOPES
from mcp_bridge.config.http import (
    SSE_PATH,
    ROOT_PATH,
    HEALTH_PATH,
    OPENID_CONFIGURATION_PATH,
    OAUTH_PROTECTED_RESOURCE_PATH,
    OAUTH_AUTHORIZATION_SERVER_PATH,
)

router = APIRouter()


def authorization_server_metadata(auth: AuthSettings) -> dict[str, Any]:
    # RFC 8414 document describing the external issuer.
    base = f"https://{auth.domain}"
    return {
        "issuer": auth.issuer,
        "authorization_endpoint": f"{base}/authorize",
        "token_endpoint": f"{base}/oauth/token",
        "token_endpoint_auth_methods_supported": ["client_secret_post", "client_secret_basic"],
        "grant_types_supported": ["authorization_code", "client_credentials"],
        "response_types_supported": ["code", "token"],
        "scopes_supported": list(AUTHORIZATION_SCOPES),
        "jwks_uri": f"{base}/.well-known/jwks.json",
        "code_challenge_methods_supported": ["S256"],
        # Tells clients which audience to request.
        "resource": auth.audience,
        "audience": auth.audience,
    }


def openid_configuration(auth: AuthSettings) -> dict[str, Any]:
    base = f"https://{auth.domain}"
    return {
        "issuer": auth.issuer,
        "token_endpoint": f"{base}/oauth/token",
        "jwks_uri": f"{base}/.well-known/jwks.json",
        "grant_types_supported": ["client_credentials"],
        "token_endpoint_auth_methods_supported": ["client_secret_post", "client_secret_basic"],
    }


def protected_resource_metadata(auth: AuthSettings) -> dict[str, Any]:
    return {
        "resource": auth.audience,
        "authorization_servers": [auth.issuer],
        "bearer_methods_supported": ["header"],
        "scopes_supported": list(RESOURCE_SCOPES),
    }


@router.get(OAUTH_AUTHORIZATION_SERVER_PATH)
async def oauth_authorization_server(request: Request) -> dict[str, Any]:
    return authorization_server_metadata(get_runtime_deps(request).settings.auth)


@router.get(OPENID_CONFIGURATION_PATH)
async def openid_configuration_document(request: Request) -> dict[str, Any]:
    return openid_configuration(get_runtime_deps(request).settings.auth)


@router.get(OAUTH_PROTECTED_RESOURCE_PATH)
async def oauth_protected_resource(request: Request) -> dict[str, Any]:
    return protected_resource_metadata(get_runtime_deps(request).settings.auth)


@router.get(HEALTH_PATH)
async def health(request: Request) -> dict[str, Any]:
    runtime_deps = get_runtime_deps(request)
    return {"status": "ok", "workerRunning": runtime_deps.supervisor.is_running}


@router.get(ROOT_PATH)
async def server_info(request: Request) -> dict[str, Any]:
    http = get_runtime_deps(request).settings.http
    return {
        "name": http.server_name,
        "version": http.server_version,
        "protocol": "mcp",
        "endpoints": {"jsonrpc": ROOT_PATH, "sse": SSE_PATH},
    }


__all__ = [
    "authorization_server_metadata",
    "openid_configuration",
    "protected_resource_metadata",
    "router",
]
