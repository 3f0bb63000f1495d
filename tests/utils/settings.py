from __future__ import annotations

import sys
from pathlib import Path

from mcp_bridge.state.settings import AppSettings, AuthSettings, HttpSettings, WorkerSettings, SessionSettings

from .tokens import TEST_DOMAIN, TEST_AUDIENCE

FAKE_WORKER = Path(__file__).resolve().parents[1] / "fixtures" / "fake_worker.py"


def auth_settings(*, token_cache_ttl_s: float = 300.0) -> AuthSettings:
    return AuthSettings(
        domain=TEST_DOMAIN,
        audience=TEST_AUDIENCE,
        realm="mcp-bridge",
        token_cache_ttl_s=token_cache_ttl_s,
    )


def worker_settings(
    *,
    restart_delay_s: float = 0.05,
    call_timeout_s: float = 5.0,
    fail_pending_on_exit: bool = False,
) -> WorkerSettings:
    return WorkerSettings(
        command=(sys.executable, "-u", str(FAKE_WORKER)),
        cwd=None,
        restart_delay_s=restart_delay_s,
        call_timeout_s=call_timeout_s,
        fail_pending_on_exit=fail_pending_on_exit,
        read_chunk_bytes=65536,
    )


def app_settings(
    *,
    restart_delay_s: float = 0.05,
    call_timeout_s: float = 5.0,
    fail_pending_on_exit: bool = False,
    max_sessions: int = 10,
) -> AppSettings:
    return AppSettings(
        auth=auth_settings(),
        worker=worker_settings(
            restart_delay_s=restart_delay_s,
            call_timeout_s=call_timeout_s,
            fail_pending_on_exit=fail_pending_on_exit,
        ),
        http=HttpSettings(
            server_name="mcp-bridge-test",
            server_version="0.0.1",
            host="127.0.0.1",
            port=0,
            cors_allow_origins=("*",),
        ),
        sessions=SessionSettings(ping_interval_s=15.0, max_sessions=max_sessions, queue_max=16),
    )
