"""Main FastAPI server for the authenticated stdio JSON-RPC gateway."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import ORJSONResponse
from fastapi.middleware.cors import CORSMiddleware

from mcp_bridge.state import RuntimeDeps
from mcp_bridge.runtime.logging import configure_logging
from mcp_bridge.runtime.dependencies import build_runtime_deps
from mcp_bridge.runtime.settings_loader import load_cors_origins
from mcp_bridge.handlers import sse_router, jsonrpc_router, discovery_router, register_exception_handlers

logger = logging.getLogger(__name__)

configure_logging()


def create_app(runtime_deps: RuntimeDeps | None = None) -> FastAPI:
    """Build the gateway app.

    When `runtime_deps` is omitted they are built from the environment at
    startup. Either way the worker is started with the app and stopped on
    shutdown.
    """

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        deps = runtime_deps or build_runtime_deps()
        app.state.runtime_deps = deps
        await deps.start()
        logger.info("runtime: ready (worker pid=%s)", deps.supervisor.pid)
        try:
            yield
        finally:
            await deps.shutdown()

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)
    if runtime_deps is not None:
        app.state.runtime_deps = runtime_deps

    origins = list(runtime_deps.settings.http.cors_allow_origins) if runtime_deps else list(load_cors_origins())
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["WWW-Authenticate"],
    )
    register_exception_handlers(app)
    app.include_router(discovery_router)
    app.include_router(jsonrpc_router)
    app.include_router(sse_router)
    return app


app = create_app()


__all__ = ["app", "create_app"]
