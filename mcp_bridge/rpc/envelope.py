"""JSON-RPC envelope helpers."""

from __future__ import annotations

from typing import Any

import orjson

from mcp_bridge.config.jsonrpc import (
    KEY_ID,
    KEY_ERROR,
    KEY_METHOD,
    KEY_PARAMS,
    KEY_JSONRPC,
    JSONRPC_VERSION,
    NOTIFICATION_PREFIX,
)


def encode_request(call_id: int, method: str, params: Any = None) -> bytes:
    """Frame a request for the worker's stdin (one JSON object per line)."""
    request = {
        KEY_JSONRPC: JSONRPC_VERSION,
        KEY_ID: call_id,
        KEY_METHOD: method,
        KEY_PARAMS: params if params is not None else {},
    }
    return orjson.dumps(request) + b"\n"


def encode_notification(method: str, params: Any = None) -> bytes:
    notification: dict[str, Any] = {KEY_JSONRPC: JSONRPC_VERSION, KEY_METHOD: method}
    if params is not None:
        notification[KEY_PARAMS] = params
    return orjson.dumps(notification) + b"\n"


def parse_request_body(raw: bytes) -> dict[str, Any]:
    try:
        message = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc
    if not isinstance(message, dict):
        raise ValueError("request must be a JSON object")
    return message


def is_notification(message: dict[str, Any]) -> bool:
    method = message.get(KEY_METHOD)
    return KEY_ID not in message and isinstance(method, str) and method.startswith(NOTIFICATION_PREFIX)


def build_error_response(request_id: Any, code: int, message: str) -> dict[str, Any]:
    return {
        KEY_JSONRPC: JSONRPC_VERSION,
        KEY_ID: request_id,
        KEY_ERROR: {"code": code, "message": message},
    }


def with_client_id(response: dict[str, Any], request_id: Any) -> dict[str, Any]:
    # The worker saw the gateway's id; the client expects its own back.
    return {**response, KEY_ID: request_id}


__all__ = [
    "build_error_response",
    "encode_notification",
    "encode_request",
    "is_notification",
    "parse_request_body",
    "with_client_id",
]
