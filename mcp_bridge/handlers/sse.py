"""Streaming transport: GET /sse opens a session, POST /message feeds it."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import AsyncIterator

import orjson
from fastapi import Depends, Request, Response, APIRouter
from fastapi.responses import ORJSONResponse, PlainTextResponse
from sse_starlette.sse import EventSourceResponse

from mcp_bridge.state.claims import Claims
from mcp_bridge.auth.bearer import require_claims
from mcp_bridge.state.session import StreamSession
from mcp_bridge.sessions.registry import SessionRegistry
from mcp_bridge.runtime.dependencies import get_runtime_deps
from mcp_bridge.config.jsonrpc import JSONRPC_PARSE_ERROR
from mcp_bridge.config.http import SSE_PATH, MESSAGE_PATH, SESSION_QUERY_PARAM
from mcp_bridge.config.sessions import SSE_EVENT_MESSAGE, SSE_EVENT_ENDPOINT
from mcp_bridge.errors import UnknownSessionError, SessionCapacityError, WorkerNotRunningError
from mcp_bridge.rpc.envelope import is_notification, parse_request_body, build_error_response

from .relay import relay_call, relay_notification

logger = logging.getLogger(__name__)

router = APIRouter()


def message_endpoint(session_id: str) -> str:
    return f"{MESSAGE_PATH}?{SESSION_QUERY_PARAM}={session_id}"


async def stream_session_events(sessions: SessionRegistry, session: StreamSession) -> AsyncIterator[dict[str, Any]]:
    """Yield SSE events for `session` until it is closed or the client goes away.

    The first event always names the companion POST endpoint. The session is
    removed from the registry however the stream ends.
    """
    try:
        yield {"event": SSE_EVENT_ENDPOINT, "data": message_endpoint(session.id)}
        while True:
            payload = await session.sink.get()
            if payload is None:
                return
            yield {"event": SSE_EVENT_MESSAGE, "data": orjson.dumps(payload).decode("utf-8")}
    finally:
        sessions.close(session.id)


@router.get(SSE_PATH)
async def open_stream(request: Request, claims: Claims = Depends(require_claims)) -> Response:
    runtime_deps = get_runtime_deps(request)
    try:
        session = runtime_deps.sessions.open(subject=claims.subject)
    except SessionCapacityError as exc:
        return ORJSONResponse({"error": "server_at_capacity", "message": str(exc)}, status_code=503)

    return EventSourceResponse(
        stream_session_events(runtime_deps.sessions, session),
        ping=int(runtime_deps.settings.sessions.ping_interval_s),
    )


@router.post(MESSAGE_PATH, dependencies=[Depends(require_claims)])
async def post_message(request: Request) -> Response:
    runtime_deps = get_runtime_deps(request)
    session_id = request.query_params.get(SESSION_QUERY_PARAM)
    if not session_id:
        return PlainTextResponse(f"Missing {SESSION_QUERY_PARAM} parameter", status_code=400)
    if session_id not in runtime_deps.sessions:
        return PlainTextResponse(str(UnknownSessionError(session_id=session_id)), status_code=400)

    try:
        message = parse_request_body(await request.body())
    except ValueError as exc:
        return ORJSONResponse(build_error_response(None, JSONRPC_PARSE_ERROR, str(exc)), status_code=400)

    if is_notification(message):
        try:
            await relay_notification(runtime_deps.correlator, message)
        except WorkerNotRunningError as exc:
            return PlainTextResponse(str(exc), status_code=503)
        return PlainTextResponse("Accepted", status_code=202)

    response = await relay_call(runtime_deps.correlator, message)
    try:
        await runtime_deps.sessions.send(session_id, response)
    except UnknownSessionError as exc:
        # The stream closed or stopped draining while the call was in flight.
        logger.info("dropping result for closed session id=%s", session_id)
        return PlainTextResponse(str(exc), status_code=400)
    return PlainTextResponse("Accepted", status_code=202)


__all__ = ["message_endpoint", "router", "stream_session_events"]
