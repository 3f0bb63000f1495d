"""Worker lifecycle state."""

from __future__ import annotations

import enum


class WorkerState(str, enum.Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    EXITED = "exited"


__all__ = ["WorkerState"]
