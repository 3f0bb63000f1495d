"""Streaming session configuration (env names and defaults only)."""

from __future__ import annotations

ENV_SSE_PING_INTERVAL_S = "SSE_PING_INTERVAL_S"
ENV_SSE_MAX_SESSIONS = "SSE_MAX_SESSIONS"
ENV_SSE_QUEUE_MAX = "SSE_QUEUE_MAX"

DEFAULT_SSE_PING_INTERVAL_S = 15.0
DEFAULT_SSE_MAX_SESSIONS = 100
DEFAULT_SSE_QUEUE_MAX = 1024

SSE_EVENT_ENDPOINT = "endpoint"
SSE_EVENT_MESSAGE = "message"

__all__ = [
    "ENV_SSE_PING_INTERVAL_S",
    "ENV_SSE_MAX_SESSIONS",
    "ENV_SSE_QUEUE_MAX",
    "DEFAULT_SSE_PING_INTERVAL_S",
    "DEFAULT_SSE_MAX_SESSIONS",
    "DEFAULT_SSE_QUEUE_MAX",
    "SSE_EVENT_ENDPOINT",
    "SSE_EVENT_MESSAGE",
]
