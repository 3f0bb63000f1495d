"""Bearer token validation configuration (env names and defaults only)."""

from __future__ import annotations

ENV_AUTH0_DOMAIN = "AUTH0_DOMAIN"
ENV_AUTH0_AUDIENCE = "AUTH0_AUDIENCE"
ENV_AUTH_REALM = "AUTH_REALM"
ENV_TOKEN_CACHE_TTL_S = "TOKEN_CACHE_TTL_S"

DEFAULT_AUTH_REALM = "mcp-bridge"
# Validated tokens are trusted without re-checking claims for this long.
DEFAULT_TOKEN_CACHE_TTL_S = 5 * 60.0

BEARER_PREFIX = "Bearer "

# Scopes advertised in the discovery documents.
AUTHORIZATION_SCOPES = ["openid", "profile", "read:tools", "execute:tools"]
RESOURCE_SCOPES = ["read:tools", "execute:tools"]

AUTH_ERROR_CODE = "unauthorized"
AUTH_MISSING_MESSAGE = "Missing or invalid Authorization header"
AUTH_INVALID_MESSAGE = "Invalid or expired token"

__all__ = [
    "ENV_AUTH0_DOMAIN",
    "ENV_AUTH0_AUDIENCE",
    "ENV_AUTH_REALM",
    "ENV_TOKEN_CACHE_TTL_S",
    "DEFAULT_AUTH_REALM",
    "DEFAULT_TOKEN_CACHE_TTL_S",
    "BEARER_PREFIX",
    "AUTHORIZATION_SCOPES",
    "RESOURCE_SCOPES",
    "AUTH_ERROR_CODE",
    "AUTH_MISSING_MESSAGE",
    "AUTH_INVALID_MESSAGE",
]
