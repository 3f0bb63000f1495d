"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AuthSettings:
    domain: str
    audience: str
    realm: str
    token_cache_ttl_s: float

    @property
    def issuer(self) -> str:
        return f"https://{self.domain}/"


@dataclass(frozen=True, slots=True)
class WorkerSettings:
    command: tuple[str, ...]
    cwd: str | None
    restart_delay_s: float
    call_timeout_s: float
    fail_pending_on_exit: bool
    read_chunk_bytes: int


@dataclass(frozen=True, slots=True)
class HttpSettings:
    server_name: str
    server_version: str
    host: str
    port: int
    cors_allow_origins: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class SessionSettings:
    ping_interval_s: float
    max_sessions: int
    queue_max: int


@dataclass(frozen=True, slots=True)
class AppSettings:
    auth: AuthSettings
    worker: WorkerSettings
    http: HttpSettings
    sessions: SessionSettings


__all__ = [
    "AppSettings",
    "AuthSettings",
    "HttpSettings",
    "SessionSettings",
    "WorkerSettings",
]
