"""HTTP surface configuration (env names, defaults and route paths)."""

from __future__ import annotations

ENV_SERVER_NAME = "SERVER_NAME"
ENV_SERVER_VERSION = "SERVER_VERSION"
ENV_HOST = "HOST"
ENV_PORT = "PORT"
ENV_CORS_ALLOW_ORIGINS = "CORS_ALLOW_ORIGINS"

DEFAULT_SERVER_NAME = "mcp-bridge"
DEFAULT_SERVER_VERSION = "1.0.0"
DEFAULT_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_PORT = 3000
DEFAULT_CORS_ALLOW_ORIGINS = "*"

ROOT_PATH = "/"
HEALTH_PATH = "/health"
SSE_PATH = "/sse"
MESSAGE_PATH = "/message"
SESSION_QUERY_PARAM = "sessionId"

OAUTH_AUTHORIZATION_SERVER_PATH = "/.well-known/oauth-authorization-server"
OPENID_CONFIGURATION_PATH = "/.well-known/openid-configuration"
OAUTH_PROTECTED_RESOURCE_PATH = "/.well-known/oauth-protected-resource"

__all__ = [
    "ENV_SERVER_NAME",
    "ENV_SERVER_VERSION",
    "ENV_HOST",
    "ENV_PORT",
    "ENV_CORS_ALLOW_ORIGINS",
    "DEFAULT_SERVER_NAME",
    "DEFAULT_SERVER_VERSION",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_CORS_ALLOW_ORIGINS",
    "ROOT_PATH",
    "HEALTH_PATH",
    "SSE_PATH",
    "MESSAGE_PATH",
    "SESSION_QUERY_PARAM",
    "OAUTH_AUTHORIZATION_SERVER_PATH",
    "OPENID_CONFIGURATION_PATH",
    "OAUTH_PROTECTED_RESOURCE_PATH",
]
