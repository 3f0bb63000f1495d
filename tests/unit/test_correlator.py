from __future__ import annotations

import gc
import asyncio

import pytest

from mcp_bridge.rpc.correlator import RequestCorrelator
from mcp_bridge.errors import UpstreamClosedError, UpstreamTimeoutError, WorkerNotRunningError
from tests.utils.channel import FakeChannel


async def _wait_for_sent(channel: FakeChannel, count: int) -> None:
    while len(channel.sent) < count:
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_call_writes_one_request_line_with_fresh_id() -> None:
    channel = FakeChannel()
    correlator = RequestCorrelator(channel, timeout_s=1.0)

    task = asyncio.create_task(correlator.call("tools/list"))
    await _wait_for_sent(channel, 1)

    request = channel.sent[0]
    assert request == {"jsonrpc": "2.0", "id": 1, "method": "tools/list", "params": {}}
    channel.respond(1, {"tools": []})

    response = await asyncio.wait_for(task, timeout=1.0)
    assert response["result"] == {"tools": []}
    assert correlator.pending_count == 0


@pytest.mark.asyncio
async def test_out_of_order_responses_resolve_matching_calls() -> None:
    channel = FakeChannel()
    correlator = RequestCorrelator(channel, timeout_s=1.0)

    tasks = [asyncio.create_task(correlator.call("echo", {"n": n})) for n in range(3)]
    await _wait_for_sent(channel, 3)
    ids = [request["id"] for request in channel.sent]
    assert len(set(ids)) == 3

    for call_id in reversed(ids):
        channel.respond(call_id, {"answered": call_id})

    results = await asyncio.wait_for(asyncio.gather(*tasks), timeout=1.0)
    assert [result["result"]["answered"] for result in results] == ids


@pytest.mark.asyncio
async def test_response_split_across_chunks_resolves_call() -> None:
    channel = FakeChannel()
    correlator = RequestCorrelator(channel, timeout_s=1.0)

    task = asyncio.create_task(correlator.call("echo"))
    await _wait_for_sent(channel, 1)
    channel.emit_raw(b"log line from worker\n")
    channel.emit_raw(b'{"jsonrpc":"2.0","id":1,')
    channel.emit_raw(b'"result":{"ok":true}}\n')

    response = await asyncio.wait_for(task, timeout=1.0)
    assert response["result"] == {"ok": True}
    assert correlator.dropped_frames == 1


@pytest.mark.asyncio
async def test_timeout_fails_call_once_and_late_response_is_ignored() -> None:
    channel = FakeChannel()
    correlator = RequestCorrelator(channel, timeout_s=0.05)

    with pytest.raises(UpstreamTimeoutError) as exc:
        await correlator.call("noreply")
    assert exc.value.method == "noreply"
    assert str(exc.value) == "Request timeout"
    assert correlator.pending_count == 0

    channel.respond(exc.value.call_id, {"too": "late"})
    assert correlator.late_responses == 1


@pytest.mark.asyncio
async def test_call_fails_immediately_when_worker_not_running() -> None:
    channel = FakeChannel(running=False)
    correlator = RequestCorrelator(channel, timeout_s=1.0)

    with pytest.raises(WorkerNotRunningError):
        await correlator.call("tools/list")
    assert correlator.pending_count == 0


@pytest.mark.asyncio
async def test_worker_exit_leaves_pending_calls_until_timeout_by_default() -> None:
    channel = FakeChannel()
    correlator = RequestCorrelator(channel, timeout_s=0.1)

    task = asyncio.create_task(correlator.call("noreply"))
    await _wait_for_sent(channel, 1)
    channel.exit(1)
    await asyncio.sleep(0)
    assert correlator.pending_count == 1

    with pytest.raises(UpstreamTimeoutError):
        await asyncio.wait_for(task, timeout=1.0)


@pytest.mark.asyncio
async def test_worker_exit_fails_pending_calls_when_enabled() -> None:
    channel = FakeChannel()
    correlator = RequestCorrelator(channel, timeout_s=5.0, fail_pending_on_exit=True)

    task = asyncio.create_task(correlator.call("noreply"))
    await _wait_for_sent(channel, 1)
    channel.exit(3)

    with pytest.raises(UpstreamClosedError) as exc:
        await asyncio.wait_for(task, timeout=1.0)
    assert exc.value.returncode == 3
    assert correlator.pending_count == 0


@pytest.mark.asyncio
async def test_worker_exit_discards_partial_output() -> None:
    channel = FakeChannel()
    correlator = RequestCorrelator(channel, timeout_s=1.0)

    task = asyncio.create_task(correlator.call("echo"))
    await _wait_for_sent(channel, 1)
    channel.emit_raw(b'{"jsonrpc":"2.0","id":1,"res')
    channel.exit(1)
    channel.running = True
    channel.emit_raw(b'{"jsonrpc":"2.0","id":1,"result":{}}\n')

    response = await asyncio.wait_for(task, timeout=1.0)
    assert response["result"] == {}
    assert correlator.dropped_frames == 0


@pytest.mark.asyncio
async def test_frames_without_integer_id_are_ignored() -> None:
    channel = FakeChannel()
    correlator = RequestCorrelator(channel, timeout_s=1.0)

    assert correlator.resolve({"jsonrpc": "2.0", "method": "notifications/progress"}) is False
    assert correlator.resolve({"jsonrpc": "2.0", "id": "abc", "result": {}}) is False
    assert correlator.late_responses == 0


@pytest.mark.asyncio
async def test_notify_writes_without_tracking() -> None:
    channel = FakeChannel()
    correlator = RequestCorrelator(channel, timeout_s=1.0)

    await correlator.notify("notifications/initialized")
    assert channel.sent == [{"jsonrpc": "2.0", "method": "notifications/initialized"}]
    assert correlator.pending_count == 0


@pytest.mark.asyncio
async def test_worker_initiated_request_does_not_resolve_call() -> None:
    channel = FakeChannel()
    correlator = RequestCorrelator(channel, timeout_s=1.0)

    task = asyncio.create_task(correlator.call("echo"))
    await _wait_for_sent(channel, 1)
    channel.emit_raw(b'{"jsonrpc":"2.0","id":1,"method":"sampling/createMessage","params":{}}\n')
    await asyncio.sleep(0)
    assert not task.done()

    channel.respond(1, {"real": True})
    response = await asyncio.wait_for(task, timeout=1.0)
    assert response["result"] == {"real": True}


class _StalledChannel(FakeChannel):
    async def send(self, data: bytes) -> None:
        await asyncio.sleep(0.2)
        raise WorkerNotRunningError()


@pytest.mark.asyncio
async def test_timeout_during_failed_send_leaves_no_unretrieved_exception() -> None:
    loop = asyncio.get_running_loop()
    contexts: list[dict] = []
    loop.set_exception_handler(lambda _loop, context: contexts.append(context))
    try:
        correlator = RequestCorrelator(_StalledChannel(), timeout_s=0.05)

        with pytest.raises(WorkerNotRunningError):
            await correlator.call("tools/list")
        assert correlator.pending_count == 0

        gc.collect()
        await asyncio.sleep(0)
    finally:
        loop.set_exception_handler(None)

    assert not [c for c in contexts if "never retrieved" in str(c.get("message", ""))]
