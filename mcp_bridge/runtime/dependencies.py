"""Runtime dependency construction (worker supervision, correlation, auth, sessions)."""

from __future__ import annotations

import logging

from fastapi import Request

from mcp_bridge.state import RuntimeDeps
from mcp_bridge.auth.validator import TokenValidator
from mcp_bridge.state.settings import AppSettings
from mcp_bridge.sessions.registry import SessionRegistry
from mcp_bridge.rpc.correlator import RequestCorrelator
from mcp_bridge.worker.supervisor import ProcessSupervisor

from .settings_loader import load_settings

logger = logging.getLogger(__name__)


def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    """Wire the gateway's components together without starting the worker."""
    settings = settings or load_settings()

    supervisor = ProcessSupervisor(settings.worker)
    correlator = RequestCorrelator(
        supervisor,
        timeout_s=settings.worker.call_timeout_s,
        fail_pending_on_exit=settings.worker.fail_pending_on_exit,
    )
    sessions = SessionRegistry(
        max_sessions=settings.sessions.max_sessions,
        queue_max=settings.sessions.queue_max,
    )
    validator = TokenValidator(settings.auth)

    logger.warning(
        "bearer tokens are checked for issuer=%s audience=%s but signatures are NOT verified",
        settings.auth.issuer,
        settings.auth.audience,
    )
    return RuntimeDeps(
        settings=settings,
        validator=validator,
        supervisor=supervisor,
        correlator=correlator,
        sessions=sessions,
    )


def get_runtime_deps(request: Request) -> RuntimeDeps:
    runtime_deps = getattr(request.app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    return runtime_deps


__all__ = ["RuntimeDeps", "build_runtime_deps", "get_runtime_deps"]
