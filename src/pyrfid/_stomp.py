"""Internal STOMP-over-WebSocket runtime for the push channel."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import Any, Protocol
from urllib.parse import urlsplit

import stomp

from pyrfid._constants import PUSH_TOPICS
from pyrfid.config import RfidConfig
from pyrfid.exceptions import RfidConfigError
from pyrfid.ingestion.push import PushFrame

_LISTENER_NAME = "pyrfid"


class StompConnection(Protocol):
    """The subset of ``stomp.py`` connection methods the runtime uses."""

    def set_listener(self, name: str, listener: Any) -> None:
        ...

    def connect(self, *args: Any, **kwargs: Any) -> Any:
        ...

    def subscribe(self, destination: str, id: str, ack: str = "auto", **kwargs: Any) -> None:  # noqa: A002
        ...

    def disconnect(self, *args: Any, **kwargs: Any) -> None:
        ...


ConnectionFactory = Callable[[RfidConfig], StompConnection]


def _parse_ws_url(ws_url: str) -> tuple[str, int, str, bool]:
    parts = urlsplit(ws_url.strip())
    if parts.scheme not in ("ws", "wss") or not parts.hostname:
        raise RfidConfigError(f"ws_url must be a ws:// or wss:// URL, got {ws_url!r}")
    secure = parts.scheme == "wss"
    port = parts.port or (443 if secure else 80)
    return parts.hostname, port, parts.path or "/", secure


def create_stomp_connection(config: RfidConfig) -> StompConnection:
    """Build a ``stomp.py`` WebSocket connection for ``config.ws_url``.

    Reconnects are driven by :class:`StompRuntime`, so the connection
    itself makes a single attempt.
    """
    host, port, path, secure = _parse_ws_url(config.ws_url)
    conn = stomp.WSStompConnection(
        host_and_ports=[(host, port)],
        ws_path=path,
        heartbeats=config.heartbeats,
        reconnect_attempts_max=1,
    )
    if secure:
        conn.set_ssl(for_hosts=[(host, port)])
    return conn


def _subscription_id(topic: str) -> str:
    return topic.rsplit("/", 1)[-1] or topic


class _Listener(stomp.ConnectionListener):
    """Forwards stomp.py callbacks (receiver thread) onto the runtime's loop."""

    def __init__(self, runtime: StompRuntime, generation: int) -> None:
        self._runtime = runtime
        self._generation = generation

    def on_message(self, frame: Any) -> None:
        headers = dict(getattr(frame, "headers", {}) or {})
        push_frame = PushFrame(
            destination=str(headers.get("destination", "")),
            body=getattr(frame, "body", None),
            headers=headers,
        )
        self._runtime.call_from_thread(self._runtime._handle_frame, self._generation, push_frame)

    def on_error(self, frame: Any) -> None:
        headers = dict(getattr(frame, "headers", {}) or {})
        self._runtime.call_from_thread(
            self._runtime._handle_lost, self._generation, f"error frame: {headers.get('message', '')}"
        )

    def on_disconnected(self) -> None:
        self._runtime.call_from_thread(self._runtime._handle_lost, self._generation, "disconnected")

    def on_heartbeat_timeout(self) -> None:
        self._runtime.call_from_thread(self._runtime._handle_lost, self._generation, "heartbeat timeout")


class StompRuntime:
    """Single push connection with fixed-delay, unbounded reconnects.

    All state transitions happen on the asyncio loop; stomp.py callbacks
    are marshalled there with ``call_soon_threadsafe``. Callbacks from a
    superseded connection are ignored.
    """

    def __init__(
        self,
        *,
        loop: asyncio.AbstractEventLoop,
        config: RfidConfig,
        on_frame: Callable[[PushFrame], None],
        topics: Iterable[str] = PUSH_TOPICS,
        connection_factory: ConnectionFactory | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._loop = loop
        self._config = config
        self._on_frame = on_frame
        self._topics = tuple(topics)
        self._factory = connection_factory or create_stomp_connection
        self._logger = logger or logging.getLogger(__name__)

        self._running = False
        self._connecting = False
        self._connected = False
        self._lost_during_handshake = False
        self._generation = 0
        self._connection: StompConnection | None = None
        self._attempt_task: asyncio.Task[None] | None = None
        self._reconnect_handle: asyncio.TimerHandle | None = None
        self.attempts = 0

    @property
    def is_running(self) -> bool:
        """Whether the runtime wants a connection (start called, stop not called)."""
        return self._running

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def is_connecting(self) -> bool:
        return self._connecting

    def call_from_thread(self, callback: Callable[..., None], *args: Any) -> None:
        try:
            self._loop.call_soon_threadsafe(callback, *args)
        except RuntimeError:
            self._logger.debug("Push callback dropped, event loop is closed")

    def start(self) -> None:
        """Begin connecting. No-op while already running."""
        if self._running:
            return
        self._running = True
        self._logger.debug("Push runtime start requested url=%s", self._config.ws_url)
        self._begin_attempt()

    async def stop(self) -> None:
        """Disconnect and disable reconnects."""
        self._running = False
        self._generation += 1
        self._connecting = False
        self._connected = False
        if self._reconnect_handle is not None:
            self._reconnect_handle.cancel()
            self._reconnect_handle = None
        connection = self._connection
        self._connection = None
        if connection is not None:
            self._logger.debug("Push disconnect requested")
            await self._loop.run_in_executor(None, self._close_quietly, connection)

    def _begin_attempt(self) -> None:
        self._generation += 1
        self._connecting = True
        self._lost_during_handshake = False
        self._connected = False
        self.attempts += 1
        self._attempt_task = self._loop.create_task(self._attempt(self._generation))

    async def _attempt(self, generation: int) -> None:
        connection: StompConnection | None = None
        try:
            connection = self._factory(self._config)
            connection.set_listener(_LISTENER_NAME, _Listener(self, generation))
            opening = self._loop.run_in_executor(None, self._open, connection)
            await asyncio.wait_for(opening, timeout=self._config.connect_timeout or None)
        except TimeoutError:
            self._logger.debug("Push connect attempt %d timed out", self.attempts)
            if connection is not None:
                await self._loop.run_in_executor(None, self._abort, connection)
            self._attempt_failed(generation)
            return
        except Exception:
            self._logger.debug("Push connect attempt %d failed", self.attempts, exc_info=True)
            self._attempt_failed(generation)
            return

        if generation != self._generation or not self._running:
            # Stopped or superseded while the handshake was in flight.
            await self._loop.run_in_executor(None, self._close_quietly, connection)
            return

        if self._lost_during_handshake:
            self._lost_during_handshake = False
            self._connecting = False
            await self._loop.run_in_executor(None, self._close_quietly, connection)
            self._schedule_reconnect()
            return

        self._connection = connection
        self._connecting = False
        self._connected = True
        self._logger.debug("Push connected topics=%s", ",".join(self._topics))

    def _attempt_failed(self, generation: int) -> None:
        if generation == self._generation and self._running:
            self._connecting = False
            self._schedule_reconnect()

    def _open(self, connection: StompConnection) -> None:
        """Blocking handshake and subscriptions (runs in the executor)."""
        connection.connect(wait=True)
        try:
            for topic in self._topics:
                connection.subscribe(destination=topic, id=_subscription_id(topic), ack="auto")
        except Exception:
            self._close_quietly(connection)
            raise

    def _close_quietly(self, connection: StompConnection) -> None:
        try:
            connection.disconnect()
        except Exception:
            self._logger.debug("Push disconnect failed", exc_info=True)

    def _abort(self, connection: StompConnection) -> None:
        """Drop a connection whose handshake never completed."""
        self._close_quietly(connection)
        transport = getattr(connection, "transport", None)
        if transport is not None:
            try:
                transport.disconnect_socket()
            except Exception:
                self._logger.debug("Push socket close failed", exc_info=True)

    def _schedule_reconnect(self) -> None:
        if self._reconnect_handle is not None:
            return
        delay = self._config.reconnect_delay
        self._logger.debug("Push reconnect scheduled in %.1fs", delay)
        self._reconnect_handle = self._loop.call_later(delay, self._reconnect_due)

    def _reconnect_due(self) -> None:
        self._reconnect_handle = None
        if self._running and not self._connecting and not self._connected:
            self._begin_attempt()

    def _handle_frame(self, generation: int, frame: PushFrame) -> None:
        if generation != self._generation or not self._running:
            return
        self._on_frame(frame)

    def _handle_lost(self, generation: int, reason: str) -> None:
        if generation != self._generation or not self._running:
            return
        if self._connecting:
            self._lost_during_handshake = True
            return
        if not self._connected:
            return
        if reason.startswith("error frame"):
            self._logger.warning("Push connection lost: %s", reason)
        else:
            self._logger.debug("Push connection lost: %s", reason)
        connection = self._connection
        self._connection = None
        self._connected = False
        self._generation += 1
        if connection is not None:
            self._loop.run_in_executor(None, self._close_quietly, connection)
        self._schedule_reconnect()
