"""Registry of open streaming (SSE) sessions."""

from __future__ import annotations

import uuid
import asyncio
import logging
from typing import Any
from collections.abc import Callable

from mcp_bridge.state.session import StreamSession
from mcp_bridge.errors import UnknownSessionError, SessionCapacityError

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


def _new_session_id() -> str:
    return str(uuid.uuid4())


class SessionRegistry:
    """Track streaming sessions by id, each bound to one output queue.

    A `None` placed on a session's sink tells its stream to finish. All access
    happens on the event loop thread, so no lock is taken.
    """

    def __init__(
        self,
        *,
        max_sessions: int,
        queue_max: int,
        id_factory: IdFactory | None = None,
    ) -> None:
        self._max = max(1, int(max_sessions))
        self._queue_max = max(1, int(queue_max))
        self._new_id = id_factory or _new_session_id
        self._sessions: dict[str, StreamSession] = {}

    def open(self, *, subject: str | None = None) -> StreamSession:
        if len(self._sessions) >= self._max:
            raise SessionCapacityError(limit=self._max)
        session = StreamSession(
            id=self._new_id(),
            sink=asyncio.Queue(maxsize=self._queue_max),
            subject=subject,
        )
        self._sessions[session.id] = session
        logger.info("stream session opened id=%s subject=%s. Active: %d", session.id, subject, len(self._sessions))
        return session

    async def send(self, session_id: str, payload: dict[str, Any]) -> None:
        """Queue `payload` for delivery on the session's stream.

        A session whose sink is full belongs to a client that stopped reading;
        it is closed rather than waited on.

        Raises:
            UnknownSessionError: If no session with `session_id` is open, or it
                was just closed for falling behind.
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise UnknownSessionError(session_id=session_id)
        try:
            session.sink.put_nowait(payload)
        except asyncio.QueueFull:
            logger.warning("stream session id=%s stopped draining (%d queued); closing", session_id, session.sink.qsize())
            self.close(session_id)
            raise UnknownSessionError(session_id=session_id) from None

    def close(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        # Undelivered payloads are dropped so the end-of-stream marker always fits.
        while not session.sink.empty():
            session.sink.get_nowait()
        session.sink.put_nowait(None)
        logger.info("stream session closed id=%s. Active: %d", session_id, len(self._sessions))
        return True

    def close_all(self) -> None:
        for session_id in list(self._sessions):
            self.close(session_id)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


__all__ = ["SessionRegistry"]
