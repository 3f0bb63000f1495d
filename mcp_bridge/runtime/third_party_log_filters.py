"""Log noise filters for third-party libraries.

Only adjusts a few logger levels so that request/stream chatter does not drown
out worker lifecycle and auth events.
"""

from __future__ import annotations

import os
import logging

from mcp_bridge.config.logging import ENV_SHOW_ACCESS_LOGS


def configure() -> None:
    # Every SSE keep-alive and POST shows up as an access line. Keep it tame unless explicitly enabled.
    if (os.getenv(ENV_SHOW_ACCESS_LOGS) or "").strip().lower() not in {"1", "true", "yes"}:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("sse_starlette").setLevel(logging.WARNING)
        logging.getLogger("sse_starlette.sse").setLevel(logging.WARNING)


__all__ = ["configure"]
