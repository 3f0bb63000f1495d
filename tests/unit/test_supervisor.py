from __future__ import annotations

import asyncio

import pytest

from mcp_bridge.state.worker import WorkerState
from mcp_bridge.errors import WorkerNotRunningError
from mcp_bridge.rpc.correlator import RequestCorrelator
from mcp_bridge.worker.supervisor import ProcessSupervisor
from tests.utils.gateway import wait_until
from tests.utils.settings import worker_settings


@pytest.mark.asyncio
async def test_supervisor_relays_worker_output_to_correlator() -> None:
    supervisor = ProcessSupervisor(worker_settings())
    correlator = RequestCorrelator(supervisor, timeout_s=5.0)
    await supervisor.start()
    try:
        assert supervisor.state is WorkerState.RUNNING
        assert supervisor.pid is not None

        response = await correlator.call("echo", {"hello": "world"})
        assert response["result"] == {"hello": "world"}
        # The startup banner is not JSON.
        assert correlator.dropped_frames == 1
    finally:
        await supervisor.stop()


@pytest.mark.asyncio
async def test_concurrent_calls_resolve_independently() -> None:
    supervisor = ProcessSupervisor(worker_settings())
    correlator = RequestCorrelator(supervisor, timeout_s=5.0)
    await supervisor.start()
    try:
        slow = asyncio.create_task(correlator.call("sleep", {"seconds": 0.3}))
        fast = asyncio.create_task(correlator.call("echo", {"fast": True}))

        fast_response = await asyncio.wait_for(fast, timeout=5.0)
        assert fast_response["result"] == {"fast": True}
        assert not slow.done()

        slow_response = await asyncio.wait_for(slow, timeout=5.0)
        assert slow_response["result"] == {"slept": {"seconds": 0.3}}
    finally:
        await supervisor.stop()


@pytest.mark.asyncio
async def test_supervisor_restarts_worker_after_exit() -> None:
    supervisor = ProcessSupervisor(worker_settings(restart_delay_s=0.3))
    correlator = RequestCorrelator(supervisor, timeout_s=0.5)
    exits: list[int | None] = []
    supervisor.add_exit_listener(exits.append)
    await supervisor.start()
    try:
        first_pid = supervisor.pid
        await supervisor.send(b'{"jsonrpc":"2.0","id":999,"method":"crash"}\n')

        await wait_until(lambda: supervisor.state is WorkerState.EXITED)
        with pytest.raises(WorkerNotRunningError):
            await supervisor.send(b"{}\n")

        await wait_until(lambda: supervisor.is_running and supervisor.spawn_count == 2)
        assert exits == [3]
        assert supervisor.pid != first_pid

        response = await correlator.call("echo", {"after": "restart"})
        assert response["result"] == {"after": "restart"}
    finally:
        await supervisor.stop()


@pytest.mark.asyncio
async def test_stop_terminates_worker_without_restart() -> None:
    supervisor = ProcessSupervisor(worker_settings(restart_delay_s=0.01))
    await supervisor.start()
    await supervisor.stop()

    assert not supervisor.is_running
    await asyncio.sleep(0.1)
    assert supervisor.spawn_count == 1


@pytest.mark.asyncio
async def test_unlaunchable_command_is_retried_not_raised() -> None:
    settings = worker_settings(restart_delay_s=0.05)
    settings = type(settings)(
        command=("/nonexistent/worker-binary",),
        cwd=None,
        restart_delay_s=settings.restart_delay_s,
        call_timeout_s=settings.call_timeout_s,
        fail_pending_on_exit=False,
        read_chunk_bytes=settings.read_chunk_bytes,
    )
    supervisor = ProcessSupervisor(settings)
    await supervisor.start()
    try:
        assert supervisor.state is WorkerState.EXITED
        with pytest.raises(WorkerNotRunningError):
            await supervisor.send(b"{}\n")
    finally:
        await supervisor.stop()


def test_empty_command_is_rejected() -> None:
    settings = worker_settings()
    with pytest.raises(ValueError):
        ProcessSupervisor(type(settings)(
            command=(),
            cwd=None,
            restart_delay_s=1.0,
            call_timeout_s=1.0,
            fail_pending_on_exit=False,
            read_chunk_bytes=1024,
        ))
