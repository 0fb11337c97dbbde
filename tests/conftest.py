from __future__ import annotations

import asyncio
import threading
from typing import Any

import pytest

from pyrfid.config import RfidConfig
from pyrfid.exceptions import RfidError, RfidTransportError
from pyrfid.ingestion.streams import EventStream
from pyrfid.models.alert import Alert
from pyrfid.models.product import Product, ProductWithStock, RfidWsMessage
from pyrfid.models.rfid import DashboardStats, RfidEventWithProduct
from pyrfid.models.shelf import Shelf
from pyrfid.models.store_stock import StoreStockWithDetails


class FakeBackend:
    """In-memory stand-in for RfidClient that records every call.

    ``hold(name)`` parks the next call of *name* on a future so a test can
    choose the completion order; ``fail(name, exc)`` makes every call of
    *name* raise.
    """

    def __init__(self) -> None:
        self.rfid_events: EventStream[RfidWsMessage] = EventStream("rfid")
        self.alerts: EventStream[Alert] = EventStream("alerts")
        self.go_home: EventStream[None] = EventStream("go-home")
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.push_connects = 0

        self.stats = DashboardStats(total_products=3, total_stock=10, total_store_stock=4, total_shelves=2)
        self.recent_events: list[RfidEventWithProduct] = []
        self.store_stock: list[StoreStockWithDetails] = []
        self.products: list[ProductWithStock] = []
        self.shelves: list[Shelf] = []
        self.open_alerts: list[Alert] = []
        self.barcodes: dict[str, ProductWithStock] = {}

        self._holds: dict[str, list[asyncio.Future[Any]]] = {}
        self._failures: dict[str, RfidError] = {}

    def connect_push(self) -> None:
        self.push_connects += 1

    def hold(self, name: str) -> asyncio.Future[Any]:
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._holds.setdefault(name, []).append(future)
        return future

    def fail(self, name: str, exc: RfidError) -> None:
        self._failures[name] = exc

    def names(self) -> list[str]:
        return [name for name, _args in self.calls]

    def count(self, name: str) -> int:
        return self.names().count(name)

    async def _call(self, name: str, args: tuple[Any, ...], result: Any) -> Any:
        self.calls.append((name, args))
        pending = self._holds.get(name)
        if pending:
            outcome = await pending.pop(0)
            if isinstance(outcome, BaseException):
                raise outcome
            return outcome
        failure = self._failures.get(name)
        if failure is not None:
            raise failure
        return result

    async def get_stats(self) -> DashboardStats:
        return await self._call("get_stats", (), self.stats)

    async def get_recent_events(self, limit: int = 20) -> list[RfidEventWithProduct]:
        return await self._call("get_recent_events", (limit,), list(self.recent_events))

    async def get_store_stock(self) -> list[StoreStockWithDetails]:
        return await self._call("get_store_stock", (), list(self.store_stock))

    async def get_products_with_stock(self) -> list[ProductWithStock]:
        return await self._call("get_products_with_stock", (), list(self.products))

    async def get_product_by_barcode(self, barcode: str) -> ProductWithStock:
        product = await self._call("get_product_by_barcode", (barcode,), self.barcodes.get(barcode))
        if product is None:
            raise RfidTransportError("HTTP 404", status_code=404, endpoint="/api/products/barcode")
        return product

    async def register_product(self, request: Any) -> Product:
        return await self._call("register_product", (request,), Product(id=100, name=request.name))

    async def update_product(self, product_id: int, request: Any) -> Product:
        return await self._call("update_product", (product_id, request), Product(id=product_id, name=request.name))

    async def delete_product(self, product_id: int) -> str:
        return await self._call("delete_product", (product_id,), "deleted")

    async def delete_event(self, event_id: int) -> str:
        return await self._call("delete_event", (event_id,), "deleted")

    async def get_shelves(self) -> list[Shelf]:
        return await self._call("get_shelves", (), list(self.shelves))

    async def create_shelf(self, request: Any) -> Shelf:
        return await self._call("create_shelf", (request,), Shelf(id=50, name=request.name))

    async def update_shelf(self, shelf_id: int, request: Any) -> Shelf:
        return await self._call("update_shelf", (shelf_id, request), Shelf(id=shelf_id, name=request.name))

    async def delete_shelf(self, shelf_id: int) -> str:
        return await self._call("delete_shelf", (shelf_id,), "deleted")

    async def get_open_alerts(self) -> list[Alert]:
        return await self._call("get_open_alerts", (), list(self.open_alerts))

    async def resolve_alert(self, alert_id: int) -> None:
        await self._call("resolve_alert", (alert_id,), None)

    async def record_multiple_sale(self, request: Any) -> str:
        return await self._call("record_multiple_sale", (request,), "sale recorded")


class FakeTransport:
    """Records ``request_json`` calls and replays queued responses."""

    def __init__(self, *responses: Any) -> None:
        self.requests: list[dict[str, Any]] = []
        self._responses = list(responses)

    async def request_json(self, method: str, endpoint: str, *, params: Any = None, body: Any = None) -> Any:
        self.requests.append({"method": method, "endpoint": endpoint, "params": params, "body": body})
        response = self._responses.pop(0) if self._responses else None
        if isinstance(response, BaseException):
            raise response
        return response


class FakeConnection:
    """Scripted stand-in for a stomp.py connection.

    With ``hang=True`` the handshake blocks until ``transport.disconnect_socket()``
    is called, like a server that accepts the socket but never sends CONNECTED.
    """

    def __init__(self, *, refuse: bool = False, hang: bool = False) -> None:
        self.refuse = refuse
        self.hang = hang
        self.listener: Any = None
        self.connects = 0
        self.disconnects = 0
        self.socket_closes = 0
        self.subscriptions: list[tuple[str, str]] = []
        self.transport = self
        self._socket_closed = threading.Event()

    def set_listener(self, name: str, listener: Any) -> None:
        self.listener = listener

    def connect(self, *args: Any, **kwargs: Any) -> None:
        if self.refuse:
            raise ConnectionRefusedError("connection refused")
        if self.hang:
            self._socket_closed.wait(5.0)
            raise ConnectionAbortedError("socket closed during handshake")
        self.connects += 1

    def disconnect_socket(self) -> None:
        self.socket_closes += 1
        self._socket_closed.set()

    def subscribe(self, destination: str, id: str, ack: str = "auto", **kwargs: Any) -> None:  # noqa: A002
        self.subscriptions.append((destination, id))

    def disconnect(self, *args: Any, **kwargs: Any) -> None:
        self.disconnects += 1


class FakeFactory:
    def __init__(self, *planned: FakeConnection) -> None:
        self._planned = list(planned)
        self.made: list[FakeConnection] = []

    def __call__(self, _config: RfidConfig) -> FakeConnection:
        connection = self._planned.pop(0) if self._planned else FakeConnection()
        self.made.append(connection)
        return connection


def fast_config(**overrides: Any) -> RfidConfig:
    values: dict[str, Any] = {
        "push_enabled": False,
        "reconnect_delay": 0.01,
        "toast_duration": 0.05,
        "form_close_delay": 0.01,
        "message_clear_delay": 0.05,
        "cart_message_clear_delay": 0.05,
        "sale_message_clear_delay": 0.05,
    }
    values.update(overrides)
    return RfidConfig(**values)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()
