"""Shared error types for the gateway."""

from __future__ import annotations

from dataclasses import dataclass

# Not frozen: context managers reassign __traceback__ while an error propagates.


@dataclass(slots=True, eq=False)
class AuthError(Exception):
    """Raised when a request carries no usable bearer token or its claims fail checks."""

    reason: str
    missing: bool = False

    def __str__(self) -> str:
        return self.reason


@dataclass(slots=True, eq=False)
class WorkerNotRunningError(Exception):
    """Raised when a write is attempted while no worker process is live."""

    def __str__(self) -> str:
        return "MCP server not running"


@dataclass(slots=True, eq=False)
class UpstreamTimeoutError(Exception):
    """Raised when the worker does not answer a call before its deadline."""

    method: str
    call_id: int
    timeout_s: float

    def __str__(self) -> str:
        return "Request timeout"


@dataclass(slots=True, eq=False)
class UpstreamClosedError(Exception):
    """Raised for calls still pending when the worker process exited."""

    call_id: int
    returncode: int | None

    def __str__(self) -> str:
        return f"MCP server exited with code {self.returncode} before responding"


@dataclass(slots=True, eq=False)
class UnknownSessionError(Exception):
    """Raised when a call names a streaming session that is not open."""

    session_id: str

    def __str__(self) -> str:
        return f"No active SSE connection for session {self.session_id}"


@dataclass(slots=True, eq=False)
class SessionCapacityError(Exception):
    """Raised when the streaming session registry is at capacity."""

    limit: int

    def __str__(self) -> str:
        return f"Server cannot accept more than {self.limit} streaming sessions"


# Failures that originate on the worker side of the gateway.
UPSTREAM_ERRORS = (WorkerNotRunningError, UpstreamTimeoutError, UpstreamClosedError)


__all__ = [
    "AuthError",
    "SessionCapacityError",
    "UnknownSessionError",
    "UpstreamClosedError",
    "UpstreamTimeoutError",
    "UPSTREAM_ERRORS",
    "WorkerNotRunningError",
]
