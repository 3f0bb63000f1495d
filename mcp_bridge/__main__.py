"""Run the gateway with uvicorn: `python -m mcp_bridge`."""

from __future__ import annotations

import sys
import logging

import uvicorn

from mcp_bridge.config.http import SSE_PATH, HEALTH_PATH, MESSAGE_PATH, OAUTH_AUTHORIZATION_SERVER_PATH
from mcp_bridge.runtime.logging import configure_logging
from mcp_bridge.runtime.settings_loader import load_settings

logger = logging.getLogger("mcp_bridge")


def main() -> int:
    configure_logging()
    try:
        settings = load_settings()
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print(
            "Usage: AUTH0_DOMAIN=your-tenant.auth0.com AUTH0_AUDIENCE=your-api-identifier python -m mcp_bridge",
            file=sys.stderr,
        )
        return 1

    base = f"http://localhost:{settings.http.port}"
    logger.info("OAuth-enabled MCP gateway starting on port %s", settings.http.port)
    logger.info("issuer=%s audience=%s", settings.auth.issuer, settings.auth.audience)
    logger.info("OAuth metadata: %s%s", base, OAUTH_AUTHORIZATION_SERVER_PATH)
    logger.info("SSE: %s%s (requires Bearer token)", base, SSE_PATH)
    logger.info("Message: %s%s (requires Bearer token)", base, MESSAGE_PATH)
    logger.info("Health: %s%s", base, HEALTH_PATH)

    uvicorn.run("mcp_bridge.server:app", host=settings.http.host, port=settings.http.port, log_config=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
