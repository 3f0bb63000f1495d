from __future__ import annotations

import asyncio
from typing import Any
from contextlib import asynccontextmanager
from collections.abc import Callable, AsyncIterator

import httpx

from mcp_bridge.state import RuntimeDeps
from mcp_bridge.server import create_app
from mcp_bridge.state.settings import AppSettings
from mcp_bridge.runtime.dependencies import build_runtime_deps


@asynccontextmanager
async def gateway_client(
    settings: AppSettings,
    *,
    start_worker: bool = True,
) -> AsyncIterator[tuple[httpx.AsyncClient, RuntimeDeps]]:
    """Run the app in-process with real runtime deps.

    ASGITransport does not drive the lifespan, so the worker is started and
    stopped here instead.
    """
    deps = build_runtime_deps(settings)
    if start_worker:
        await deps.start()
    app = create_app(runtime_deps=deps)
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client, deps
    finally:
        await deps.shutdown()


async def wait_until(predicate: Callable[[], bool], *, timeout: float = 5.0, interval: float = 0.02) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met before timeout")
        await asyncio.sleep(interval)


class RawStream:
    """Drive one streaming request through the ASGI app without buffering.

    Sent messages are collected on `messages`; `disconnect()` makes the next
    `receive()` report that the client went away.
    """

    def __init__(self, app: Any, path: str, headers: dict[str, str]) -> None:
        path, _, query = path.partition("?")
        self._scope = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": "GET",
            "scheme": "http",
            "path": path,
            "raw_path": path.encode(),
            "query_string": query.encode(),
            "root_path": "",
            "headers": [(b"host", b"testserver")]
            + [(name.lower().encode(), value.encode()) for name, value in headers.items()],
            "client": ("127.0.0.1", 50000),
            "server": ("testserver", 80),
        }
        self._app = app
        self._disconnected = asyncio.Event()
        self.messages: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
        self.task: asyncio.Task | None = None

    def start(self) -> None:
        self.task = asyncio.create_task(self._app(self._scope, self._receive, self.messages.put))

    async def next_message(self, timeout: float = 5.0) -> dict[str, Any]:
        return await asyncio.wait_for(self.messages.get(), timeout=timeout)

    async def next_body(self, timeout: float = 5.0) -> bytes:
        while True:
            message = await self.next_message(timeout)
            if message["type"] == "http.response.body" and message.get("body"):
                return message["body"]

    async def disconnect(self, timeout: float = 5.0) -> None:
        self._disconnected.set()
        if self.task is not None:
            await asyncio.wait_for(self.task, timeout=timeout)

    async def _receive(self) -> dict[str, Any]:
        await self._disconnected.wait()
        return {"type": "http.disconnect"}
