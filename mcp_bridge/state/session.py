"""Per-connection streaming session state (dataclasses only)."""

from __future__ import annotations

import asyncio
from typing import Any
from dataclasses import dataclass


@dataclass(slots=True)
class StreamSession:
    id: str
    sink: asyncio.Queue[dict[str, Any] | None]
    subject: str | None = None


__all__ = ["StreamSession"]
