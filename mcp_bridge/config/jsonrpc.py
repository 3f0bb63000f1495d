"""JSON-RPC protocol constants."""

from __future__ import annotations

JSONRPC_VERSION = "2.0"

JSONRPC_PARSE_ERROR = -32700
JSONRPC_INVALID_REQUEST = -32600
JSONRPC_INTERNAL_ERROR = -32603

# Envelope keys
KEY_JSONRPC = "jsonrpc"
KEY_ID = "id"
KEY_METHOD = "method"
KEY_PARAMS = "params"
KEY_RESULT = "result"
KEY_ERROR = "error"

NOTIFICATION_PREFIX = "notifications/"

# Response shaping for tool enumeration.
TOOLS_LIST_METHOD = "tools/list"
TOOL_META_KEY = "_meta"
TOOL_VISIBILITY_KEY = "openai/visibility"
TOOL_VISIBILITY_PUBLIC = "public"

__all__ = [
    "JSONRPC_VERSION",
    "JSONRPC_PARSE_ERROR",
    "JSONRPC_INVALID_REQUEST",
    "JSONRPC_INTERNAL_ERROR",
    "KEY_JSONRPC",
    "KEY_ID",
    "KEY_METHOD",
    "KEY_PARAMS",
    "KEY_RESULT",
    "KEY_ERROR",
    "NOTIFICATION_PREFIX",
    "TOOLS_LIST_METHOD",
    "TOOL_META_KEY",
    "TOOL_VISIBILITY_KEY",
    "TOOL_VISIBILITY_PUBLIC",
]
