"""Relay a client JSON-RPC message through the correlator."""

from __future__ import annotations

import logging
from typing import Any

from mcp_bridge.errors import UPSTREAM_ERRORS
from mcp_bridge.rpc.correlator import RequestCorrelator
from mcp_bridge.rpc.shaping import annotate_tool_visibility
from mcp_bridge.rpc.envelope import with_client_id, build_error_response
from mcp_bridge.config.jsonrpc import KEY_ID, KEY_METHOD, KEY_PARAMS, JSONRPC_INTERNAL_ERROR, JSONRPC_INVALID_REQUEST

logger = logging.getLogger(__name__)


async def relay_call(correlator: RequestCorrelator, message: dict[str, Any]) -> dict[str, Any]:
    """Issue `message` to the worker and return the response to hand back to the client.

    Worker-side failures come back as JSON-RPC error envelopes carrying the
    client's id, never as exceptions.
    """
    request_id = message.get(KEY_ID)
    method = message.get(KEY_METHOD)
    if not isinstance(method, str) or not method:
        return build_error_response(request_id, JSONRPC_INVALID_REQUEST, "request missing non-empty 'method'")

    try:
        response = await correlator.call(method, message.get(KEY_PARAMS))
    except UPSTREAM_ERRORS as exc:
        logger.warning("call %s failed: %s", method, exc)
        return build_error_response(request_id, JSONRPC_INTERNAL_ERROR, str(exc) or "Internal error")

    response = annotate_tool_visibility(method, response)
    return with_client_id(response, request_id)


async def relay_notification(correlator: RequestCorrelator, message: dict[str, Any]) -> None:
    await correlator.notify(message[KEY_METHOD], message.get(KEY_PARAMS))


__all__ = ["relay_call", "relay_notification"]
