"""Newline-delimited JSON framing for the worker's stdout."""

from __future__ import annotations

import logging
from typing import Any

import orjson

logger = logging.getLogger(__name__)


class FrameReassembler:
    """Rebuild discrete JSON messages from arbitrary stdout chunks.

    Complete lines are parsed and returned in order; the trailing partial line
    is kept for the next chunk. Lines that are not JSON objects (log output
    written to stdout, stray banners) are dropped and counted in
    `dropped_frames`.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()
        self.dropped_frames = 0

    @property
    def pending_bytes(self) -> int:
        return len(self._buffer)

    def reset(self) -> None:
        self._buffer.clear()

    def feed(self, chunk: bytes) -> list[dict[str, Any]]:
        self._buffer.extend(chunk)
        if b"\n" not in chunk:
            return []

        *lines, rest = self._buffer.split(b"\n")
        self._buffer = bytearray(rest)

        frames: list[dict[str, Any]] = []
        for line in lines:
            frame = self._parse(bytes(line).strip())
            if frame is not None:
                frames.append(frame)
        return frames

    def _parse(self, line: bytes) -> dict[str, Any] | None:
        if not line:
            return None
        try:
            frame = orjson.loads(line)
        except orjson.JSONDecodeError:
            frame = None
        if isinstance(frame, dict):
            return frame
        self.dropped_frames += 1
        logger.debug("dropping non-JSON worker output (%d dropped): %.200r", self.dropped_frames, line)
        return None


__all__ = ["FrameReassembler"]
