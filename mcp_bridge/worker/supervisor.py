"""Lifecycle management for the single stdio worker process."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections.abc import Callable

from mcp_bridge.state.worker import WorkerState
from mcp_bridge.errors import WorkerNotRunningError
from mcp_bridge.config.worker import WORKER_STOP_GRACE_S
from mcp_bridge.state.settings import WorkerSettings

logger = logging.getLogger(__name__)

OutputListener = Callable[[bytes], None]
ExitListener = Callable[[int | None], None]

# How long to keep draining pipes after the worker exits.
_PIPE_DRAIN_TIMEOUT_S = 1.0


class ProcessSupervisor:
    """Own exactly one worker process and respawn it whenever it exits.

    The worker is spawned with piped stdin/stdout/stderr. Raw stdout chunks are
    handed to output listeners as they arrive and each observed exit is
    reported to exit listeners before the fixed restart delay starts. Restart
    is unconditional: no backoff and no retry cap.
    """

    def __init__(self, settings: WorkerSettings) -> None:
        if not settings.command:
            raise ValueError("worker command must not be empty")
        self._command = tuple(settings.command)
        self._cwd = settings.cwd
        self._restart_delay_s = max(0.0, float(settings.restart_delay_s))
        self._read_chunk_bytes = max(1, int(settings.read_chunk_bytes))
        self._state = WorkerState.NOT_STARTED
        self._proc: asyncio.subprocess.Process | None = None
        self._task: asyncio.Task | None = None
        self._stopping = False
        self._output_listeners: list[OutputListener] = []
        self._exit_listeners: list[ExitListener] = []
        self.spawn_count = 0

    @property
    def state(self) -> WorkerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is WorkerState.RUNNING

    @property
    def pid(self) -> int | None:
        return self._proc.pid if self._proc is not None else None

    def add_output_listener(self, listener: OutputListener) -> None:
        self._output_listeners.append(listener)

    def add_exit_listener(self, listener: ExitListener) -> None:
        self._exit_listeners.append(listener)

    async def start(self) -> None:
        if self._task is not None:
            return
        self._stopping = False
        proc = await self._spawn()
        self._task = asyncio.create_task(self._supervise(proc))

    async def stop(self) -> None:
        self._stopping = True
        proc = self._proc
        if proc is not None and proc.returncode is None:
            logger.info("stopping worker pid=%s", proc.pid)
            with contextlib.suppress(ProcessLookupError):
                proc.terminate()
            try:
                await asyncio.wait_for(proc.wait(), timeout=WORKER_STOP_GRACE_S)
            except TimeoutError:
                logger.warning("worker pid=%s ignored terminate; killing", proc.pid)
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
                await proc.wait()

        task = self._task
        self._task = None
        if task is None:
            return
        # No live worker: the task is waiting out the restart delay.
        if proc is None:
            task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def send(self, data: bytes) -> None:
        """Write `data` to the worker's stdin.

        Raises:
            WorkerNotRunningError: If no worker is live or its stdin is closed.
        """
        proc = self._proc
        if self._state is not WorkerState.RUNNING or proc is None or proc.stdin is None:
            raise WorkerNotRunningError()
        if proc.stdin.is_closing():
            raise WorkerNotRunningError()
        proc.stdin.write(data)
        try:
            await proc.stdin.drain()
        except (BrokenPipeError, ConnectionResetError) as exc:
            raise WorkerNotRunningError() from exc

    async def _spawn(self) -> asyncio.subprocess.Process | None:
        try:
            proc = await asyncio.create_subprocess_exec(
                *self._command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self._cwd,
            )
        except OSError:
            logger.exception("failed to spawn worker: %s", " ".join(self._command))
            self._state = WorkerState.EXITED
            return None
        self.spawn_count += 1
        self._proc = proc
        self._state = WorkerState.RUNNING
        logger.info("worker started pid=%s (spawn #%d)", proc.pid, self.spawn_count)
        return proc

    async def _supervise(self, proc: asyncio.subprocess.Process | None) -> None:
        while True:
            if proc is not None:
                await self._watch(proc)
            if self._stopping:
                return
            await asyncio.sleep(self._restart_delay_s)
            if self._stopping:
                return
            logger.info("restarting worker after %.2fs", self._restart_delay_s)
            proc = await self._spawn()

    async def _watch(self, proc: asyncio.subprocess.Process) -> None:
        pumps = [
            asyncio.create_task(self._pump_stdout(proc)),
            asyncio.create_task(self._pump_stderr(proc)),
        ]
        returncode = await proc.wait()
        self._state = WorkerState.EXITED
        self._proc = None
        logger.warning("MCP process exited with code: %s", returncode)

        # Late stdout can still answer pending calls.
        _done, still_running = await asyncio.wait(pumps, timeout=_PIPE_DRAIN_TIMEOUT_S)
        for task in still_running:
            task.cancel()

        for listener in list(self._exit_listeners):
            try:
                listener(returncode)
            except Exception:
                logger.exception("worker exit listener failed")

    async def _pump_stdout(self, proc: asyncio.subprocess.Process) -> None:
        reader = proc.stdout
        if reader is None:
            return
        while True:
            chunk = await reader.read(self._read_chunk_bytes)
            if not chunk:
                return
            for listener in list(self._output_listeners):
                try:
                    listener(chunk)
                except Exception:
                    logger.exception("worker output listener failed")

    async def _pump_stderr(self, proc: asyncio.subprocess.Process) -> None:
        reader = proc.stderr
        if reader is None:
            return
        while True:
            chunk = await reader.read(self._read_chunk_bytes)
            if not chunk:
                return
            for line in chunk.decode("utf-8", errors="replace").splitlines():
                if line.strip():
                    logger.warning("[MCP] %s", line.rstrip())


__all__ = ["ProcessSupervisor"]
