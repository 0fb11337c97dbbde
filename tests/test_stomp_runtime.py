from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from types import SimpleNamespace

import pytest
from conftest import FakeConnection, FakeFactory, fast_config

from pyrfid._stomp import StompRuntime, _parse_ws_url
from pyrfid.exceptions import RfidConfigError
from pyrfid.ingestion.push import PushFrame


async def _wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.005)


def _runtime(factory: FakeFactory, frames: list[PushFrame]) -> StompRuntime:
    return StompRuntime(
        loop=asyncio.get_running_loop(),
        config=fast_config(),
        on_frame=frames.append,
        connection_factory=factory,
    )


def test_parse_ws_url() -> None:
    assert _parse_ws_url("ws://localhost:8080/ws/websocket") == ("localhost", 8080, "/ws/websocket", False)
    assert _parse_ws_url("wss://example.com/ws") == ("example.com", 443, "/ws", True)
    with pytest.raises(RfidConfigError):
        _parse_ws_url("http://localhost:8080/ws")


@pytest.mark.asyncio
async def test_start_twice_makes_one_attempt_and_subscribes_both_topics() -> None:
    factory = FakeFactory()
    runtime = _runtime(factory, [])

    runtime.start()
    runtime.start()
    await _wait_until(lambda: runtime.is_connected)

    assert runtime.attempts == 1
    assert len(factory.made) == 1
    assert factory.made[0].subscriptions == [("/topic/rfid", "rfid"), ("/topic/alerts", "alerts")]
    await runtime.stop()


@pytest.mark.asyncio
async def test_messages_are_forwarded_to_the_loop() -> None:
    factory = FakeFactory()
    frames: list[PushFrame] = []
    runtime = _runtime(factory, frames)
    runtime.start()
    await _wait_until(lambda: runtime.is_connected)

    body = json.dumps({"type": "ENTRY", "rfidTag": "T1"})
    factory.made[0].listener.on_message(SimpleNamespace(headers={"destination": "/topic/rfid"}, body=body))
    await _wait_until(lambda: bool(frames))

    assert frames[0].destination == "/topic/rfid"
    assert frames[0].body == body
    await runtime.stop()


@pytest.mark.asyncio
async def test_refused_handshake_is_retried_after_delay() -> None:
    factory = FakeFactory(FakeConnection(refuse=True))
    runtime = _runtime(factory, [])

    runtime.start()
    await _wait_until(lambda: runtime.is_connected)

    assert runtime.attempts == 2
    assert factory.made[0].connects == 0
    await runtime.stop()


@pytest.mark.asyncio
async def test_disconnect_triggers_reconnect_and_ignores_old_listener() -> None:
    factory = FakeFactory()
    frames: list[PushFrame] = []
    runtime = _runtime(factory, frames)
    runtime.start()
    await _wait_until(lambda: runtime.is_connected)
    old = factory.made[0]

    old.listener.on_disconnected()
    await _wait_until(lambda: len(factory.made) == 2 and runtime.is_connected)
    await _wait_until(lambda: old.disconnects == 1)

    old.listener.on_message(SimpleNamespace(headers={"destination": "/topic/rfid"}, body="{}"))
    old.listener.on_disconnected()
    await asyncio.sleep(0.05)

    assert frames == []
    assert runtime.attempts == 2
    await runtime.stop()


@pytest.mark.asyncio
async def test_error_frame_triggers_reconnect() -> None:
    factory = FakeFactory()
    runtime = _runtime(factory, [])
    runtime.start()
    await _wait_until(lambda: runtime.is_connected)

    factory.made[0].listener.on_error(SimpleNamespace(headers={"message": "broker shutting down"}, body=""))
    await _wait_until(lambda: runtime.attempts == 2 and runtime.is_connected)
    await runtime.stop()


@pytest.mark.asyncio
async def test_stop_disconnects_and_disables_reconnect() -> None:
    factory = FakeFactory()
    runtime = _runtime(factory, [])
    runtime.start()
    await _wait_until(lambda: runtime.is_connected)

    await runtime.stop()
    factory.made[0].listener.on_disconnected()
    await asyncio.sleep(0.05)

    assert not runtime.is_running
    assert not runtime.is_connected
    assert factory.made[0].disconnects == 1
    assert len(factory.made) == 1


@pytest.mark.asyncio
async def test_stalled_handshake_times_out_and_reconnects() -> None:
    stalled = FakeConnection(hang=True)
    factory = FakeFactory(stalled)
    runtime = StompRuntime(
        loop=asyncio.get_running_loop(),
        config=fast_config(connect_timeout=0.05),
        on_frame=lambda _frame: None,
        connection_factory=factory,
    )

    runtime.start()
    await _wait_until(lambda: runtime.is_connected)

    assert stalled.socket_closes == 1
    assert runtime.attempts == 2
    assert factory.made[1].connects == 1
    await runtime.stop()
