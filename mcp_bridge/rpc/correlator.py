"""Correlate JSON-RPC calls written to the worker with the responses it emits."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

from mcp_bridge.state.pending import PendingCall
from mcp_bridge.worker.framing import FrameReassembler
from mcp_bridge.errors import UpstreamClosedError, UpstreamTimeoutError

from .envelope import encode_request, encode_notification

logger = logging.getLogger(__name__)


class WorkerChannel(Protocol):
    async def send(self, data: bytes) -> None: ...

    def add_output_listener(self, listener: Any) -> None: ...

    def add_exit_listener(self, listener: Any) -> None: ...


class RequestCorrelator:
    """Multiplex many concurrent calls onto the single worker connection.

    Every call gets a fresh integer id and a future registered under it. A
    response frame resolves the future whose id it carries; a per-call timer
    fails it with `UpstreamTimeoutError`. Both paths first remove the entry
    from the pending map, so whichever runs first wins and the other is a
    no-op. Responses for ids no longer tracked are discarded and counted in
    `late_responses`.

    When `fail_pending_on_exit` is set, a worker exit fails every pending call
    with `UpstreamClosedError` instead of letting each one run to its timeout.
    """

    def __init__(
        self,
        worker: WorkerChannel,
        *,
        timeout_s: float,
        fail_pending_on_exit: bool = False,
        reassembler: FrameReassembler | None = None,
    ) -> None:
        self._worker = worker
        self._timeout_s = float(timeout_s)
        self._fail_pending_on_exit = fail_pending_on_exit
        self._reassembler = reassembler or FrameReassembler()
        self._pending: dict[int, PendingCall] = {}
        self._last_id = 0
        self.late_responses = 0
        worker.add_output_listener(self.feed)
        worker.add_exit_listener(self._on_worker_exit)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def dropped_frames(self) -> int:
        return self._reassembler.dropped_frames

    def _allocate_id(self) -> int:
        self._last_id += 1
        return self._last_id

    async def call(self, method: str, params: Any = None) -> dict[str, Any]:
        """Send `method` to the worker and wait for the matching response frame.

        Returns the full response envelope (`result` or `error`).

        Raises:
            WorkerNotRunningError: If the worker is not live when the call is written.
            UpstreamTimeoutError: If no response arrives within the call timeout.
            UpstreamClosedError: If the worker exits first and eager failure is enabled.
        """
        loop = asyncio.get_running_loop()
        call_id = self._allocate_id()
        created_at = loop.time()
        pending = PendingCall(
            id=call_id,
            method=method,
            created_at=created_at,
            deadline=created_at + self._timeout_s,
            completion=loop.create_future(),
        )
        self._pending[call_id] = pending
        pending.timer = loop.call_at(pending.deadline, self._expire, call_id)
        try:
            await self._worker.send(encode_request(call_id, method, params))
            return await pending.completion
        finally:
            self._discard(call_id)
            # A timeout can land while send() is still failing; mark it retrieved.
            if pending.completion.done() and not pending.completion.cancelled():
                pending.completion.exception()
            else:
                pending.completion.cancel()

    async def notify(self, method: str, params: Any = None) -> None:
        await self._worker.send(encode_notification(method, params))

    def feed(self, chunk: bytes) -> None:
        for frame in self._reassembler.feed(chunk):
            self.resolve(frame)

    def resolve(self, frame: dict[str, Any]) -> bool:
        if "method" in frame:
            # Requests and notifications from the worker never answer a call.
            logger.debug("ignoring worker-initiated %s frame", frame.get("method"))
            return False
        frame_id = frame.get("id")
        if isinstance(frame_id, bool) or not isinstance(frame_id, int):
            logger.debug("ignoring worker frame without a call id: %.200r", frame)
            return False

        pending = self._pending.pop(frame_id, None)
        if pending is None:
            self.late_responses += 1
            logger.debug("discarding response for untracked call id=%s", frame_id)
            return False

        if pending.timer is not None:
            pending.timer.cancel()
        if not pending.completion.done():
            pending.completion.set_result(frame)
        return True

    def _expire(self, call_id: int) -> None:
        pending = self._pending.pop(call_id, None)
        if pending is None:
            return
        logger.warning("call id=%s method=%s timed out after %.1fs", call_id, pending.method, self._timeout_s)
        if not pending.completion.done():
            pending.completion.set_exception(
                UpstreamTimeoutError(method=pending.method, call_id=call_id, timeout_s=self._timeout_s)
            )

    def _discard(self, call_id: int) -> None:
        pending = self._pending.pop(call_id, None)
        if pending is not None and pending.timer is not None:
            pending.timer.cancel()

    def _on_worker_exit(self, returncode: int | None) -> None:
        # A partial line from the dead worker must not prefix the next worker's output.
        self._reassembler.reset()
        if not self._fail_pending_on_exit or not self._pending:
            return

        failed = list(self._pending.values())
        self._pending.clear()
        logger.warning("failing %d pending call(s) after worker exit", len(failed))
        for pending in failed:
            if pending.timer is not None:
                pending.timer.cancel()
            if not pending.completion.done():
                pending.completion.set_exception(UpstreamClosedError(call_id=pending.id, returncode=returncode))


__all__ = ["RequestCorrelator", "WorkerChannel"]
