"""Environment parsing for runtime settings."""

from __future__ import annotations

import os
import shlex

from mcp_bridge.state.settings import (
    AppSettings,
    AuthSettings,
    HttpSettings,
    WorkerSettings,
    SessionSettings,
)
from mcp_bridge.config.auth import (
    ENV_AUTH_REALM,
    ENV_AUTH0_DOMAIN,
    ENV_AUTH0_AUDIENCE,
    DEFAULT_AUTH_REALM,
    ENV_TOKEN_CACHE_TTL_S,
    DEFAULT_TOKEN_CACHE_TTL_S,
)
from mcp_bridge.config.http import (
    ENV_HOST,
    ENV_PORT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    ENV_SERVER_NAME,
    ENV_SERVER_VERSION,
    DEFAULT_SERVER_NAME,
    DEFAULT_SERVER_VERSION,
    ENV_CORS_ALLOW_ORIGINS,
    DEFAULT_CORS_ALLOW_ORIGINS,
)
from mcp_bridge.config.sessions import (
    ENV_SSE_QUEUE_MAX,
    ENV_SSE_MAX_SESSIONS,
    DEFAULT_SSE_QUEUE_MAX,
    ENV_SSE_PING_INTERVAL_S,
    DEFAULT_SSE_MAX_SESSIONS,
    DEFAULT_SSE_PING_INTERVAL_S,
)
from mcp_bridge.config.worker import (
    ENV_MCP_WORKER_CWD,
    ENV_MCP_WORKER_COMMAND,
    ENV_WORKER_CALL_TIMEOUT_S,
    DEFAULT_MCP_WORKER_COMMAND,
    ENV_WORKER_READ_CHUNK_BYTES,
    ENV_WORKER_RESTART_DELAY_S,
    DEFAULT_WORKER_CALL_TIMEOUT_S,
    ENV_WORKER_FAIL_PENDING_ON_EXIT,
    DEFAULT_WORKER_READ_CHUNK_BYTES,
    DEFAULT_WORKER_RESTART_DELAY_S,
    DEFAULT_WORKER_FAIL_PENDING_ON_EXIT,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _required_env(name: str) -> str:
    v = (os.getenv(name) or "").strip()
    if not v:
        raise ValueError(f"{name} environment variable is required")
    return v


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _csv_env(name: str, default: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in _str_env(name, default).split(",") if item.strip())


def _load_auth_settings() -> AuthSettings:
    ttl = _float_env(ENV_TOKEN_CACHE_TTL_S, DEFAULT_TOKEN_CACHE_TTL_S)
    return AuthSettings(
        domain=_required_env(ENV_AUTH0_DOMAIN),
        audience=_required_env(ENV_AUTH0_AUDIENCE),
        realm=_str_env(ENV_AUTH_REALM, DEFAULT_AUTH_REALM),
        token_cache_ttl_s=max(0.0, ttl),
    )


def _load_worker_settings() -> WorkerSettings:
    command = tuple(shlex.split(_str_env(ENV_MCP_WORKER_COMMAND, DEFAULT_MCP_WORKER_COMMAND)))
    if not command:
        raise ValueError(f"{ENV_MCP_WORKER_COMMAND} must name an executable")
    cwd = (os.getenv(ENV_MCP_WORKER_CWD) or "").strip() or None

    restart_delay = _float_env(ENV_WORKER_RESTART_DELAY_S, DEFAULT_WORKER_RESTART_DELAY_S)
    call_timeout = _float_env(ENV_WORKER_CALL_TIMEOUT_S, DEFAULT_WORKER_CALL_TIMEOUT_S)
    if call_timeout <= 0:
        call_timeout = DEFAULT_WORKER_CALL_TIMEOUT_S

    return WorkerSettings(
        command=command,
        cwd=cwd,
        restart_delay_s=max(0.0, restart_delay),
        call_timeout_s=call_timeout,
        fail_pending_on_exit=_bool_env(ENV_WORKER_FAIL_PENDING_ON_EXIT, DEFAULT_WORKER_FAIL_PENDING_ON_EXIT),
        read_chunk_bytes=max(1, _int_env(ENV_WORKER_READ_CHUNK_BYTES, DEFAULT_WORKER_READ_CHUNK_BYTES)),
    )


def load_cors_origins() -> tuple[str, ...]:
    return _csv_env(ENV_CORS_ALLOW_ORIGINS, DEFAULT_CORS_ALLOW_ORIGINS)


def _load_http_settings() -> HttpSettings:
    return HttpSettings(
        server_name=_str_env(ENV_SERVER_NAME, DEFAULT_SERVER_NAME),
        server_version=_str_env(ENV_SERVER_VERSION, DEFAULT_SERVER_VERSION),
        host=_str_env(ENV_HOST, DEFAULT_HOST),
        port=_int_env(ENV_PORT, DEFAULT_PORT),
        cors_allow_origins=load_cors_origins(),
    )


def _load_session_settings() -> SessionSettings:
    return SessionSettings(
        ping_interval_s=max(1.0, _float_env(ENV_SSE_PING_INTERVAL_S, DEFAULT_SSE_PING_INTERVAL_S)),
        max_sessions=max(1, _int_env(ENV_SSE_MAX_SESSIONS, DEFAULT_SSE_MAX_SESSIONS)),
        queue_max=max(1, _int_env(ENV_SSE_QUEUE_MAX, DEFAULT_SSE_QUEUE_MAX)),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        auth=_load_auth_settings(),
        worker=_load_worker_settings(),
        http=_load_http_settings(),
        sessions=_load_session_settings(),
    )


__all__ = ["load_cors_origins", "load_settings"]
