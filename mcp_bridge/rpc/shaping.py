"""Response shaping applied to specific worker methods before relaying."""

from __future__ import annotations

import logging
from typing import Any

from mcp_bridge.config.jsonrpc import (
    KEY_RESULT,
    TOOL_META_KEY,
    TOOLS_LIST_METHOD,
    TOOL_VISIBILITY_KEY,
    TOOL_VISIBILITY_PUBLIC,
)

logger = logging.getLogger(__name__)


def annotate_tool_visibility(method: str, response: dict[str, Any]) -> dict[str, Any]:
    """Mark every tool in a `tools/list` result as publicly visible.

    Responses for any other method, and `tools/list` responses without a tool
    list, are returned unchanged.
    """
    if method != TOOLS_LIST_METHOD:
        return response
    result = response.get(KEY_RESULT)
    if not isinstance(result, dict) or not isinstance(result.get("tools"), list):
        return response

    tools = []
    for tool in result["tools"]:
        if not isinstance(tool, dict):
            tools.append(tool)
            continue
        meta = tool.get(TOOL_META_KEY)
        meta = dict(meta) if isinstance(meta, dict) else {}
        meta[TOOL_VISIBILITY_KEY] = TOOL_VISIBILITY_PUBLIC
        tools.append({**tool, TOOL_META_KEY: meta})

    logger.info("added %s to %d tools", TOOL_VISIBILITY_KEY, len(tools))
    return {**response, KEY_RESULT: {**result, "tools": tools}}


__all__ = ["annotate_tool_visibility"]
