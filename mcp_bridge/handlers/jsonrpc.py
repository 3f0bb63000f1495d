"""Direct JSON-RPC over HTTP: one POST, one response."""

from __future__ import annotations

import logging

import orjson
from fastapi import Depends, Request, Response, APIRouter
from fastapi.responses import ORJSONResponse

from mcp_bridge.config.http import ROOT_PATH
from mcp_bridge.auth.bearer import require_claims
from mcp_bridge.errors import WorkerNotRunningError
from mcp_bridge.runtime.dependencies import get_runtime_deps
from mcp_bridge.config.jsonrpc import KEY_METHOD, KEY_PARAMS, JSONRPC_PARSE_ERROR
from mcp_bridge.rpc.envelope import is_notification, parse_request_body, build_error_response

from .relay import relay_call, relay_notification

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(ROOT_PATH, dependencies=[Depends(require_claims)])
async def post_jsonrpc(request: Request) -> Response:
    runtime_deps = get_runtime_deps(request)
    try:
        message = parse_request_body(await request.body())
    except ValueError as exc:
        return ORJSONResponse(build_error_response(None, JSONRPC_PARSE_ERROR, str(exc)), status_code=400)

    method = message.get(KEY_METHOD)
    logger.info("[MCP HTTP] %s %.100s", method, orjson.dumps(message.get(KEY_PARAMS) or {}).decode("utf-8"))

    if is_notification(message):
        try:
            await relay_notification(runtime_deps.correlator, message)
        except WorkerNotRunningError as exc:
            return ORJSONResponse({"error": "worker_unavailable", "message": str(exc)}, status_code=503)
        return Response(status_code=202)

    return ORJSONResponse(await relay_call(runtime_deps.correlator, message))


__all__ = ["router"]
