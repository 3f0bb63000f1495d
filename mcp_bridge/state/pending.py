"""In-flight JSON-RPC call bookkeeping (dataclasses only)."""

from __future__ import annotations

import asyncio
from typing import Any
from dataclasses import dataclass


@dataclass(slots=True)
class PendingCall:
    id: int
    method: str
    created_at: float
    deadline: float
    # Single-resolution completion handle; resolved with the worker's response frame.
    completion: asyncio.Future[dict[str, Any]]
    timer: asyncio.TimerHandle | None = None


__all__ = ["PendingCall"]
