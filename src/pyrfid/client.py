"""High-level async client for the RFID inventory backend."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from pyrfid._api import alerts as _alerts_api
from pyrfid._api import products as _products_api
from pyrfid._api import rfid as _rfid_api
from pyrfid._api import sales as _sales_api
from pyrfid._api import shelves as _shelves_api
from pyrfid._stomp import ConnectionFactory, StompRuntime
from pyrfid._transport import HttpTransport, Transport
from pyrfid.config import RfidConfig
from pyrfid.exceptions import RfidError
from pyrfid.ingestion.push import TopicDemultiplexer
from pyrfid.ingestion.streams import EventStream
from pyrfid.models.alert import Alert
from pyrfid.models.product import Product, ProductRegisterRequest, ProductWithStock, RfidWsMessage
from pyrfid.models.rfid import DashboardStats, RfidEventWithProduct
from pyrfid.models.sales import MultipleSaleRequest, SaleRequest
from pyrfid.models.shelf import Shelf, ShelfRequest
from pyrfid.models.store_stock import StoreStockWithDetails

_logger = logging.getLogger(__name__)


class RfidClient:
    """Async client for the inventory REST API and its push channel.

    Usage::

        async with RfidClient(config) as client:
            client.rfid_events.subscribe(print)
            client.connect_push()
            stats = await client.get_stats()
    """

    def __init__(
        self,
        config: RfidConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        connection_factory: ConnectionFactory | None = None,
    ) -> None:
        self._config = config or RfidConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self._connection_factory = connection_factory
        self._loop: asyncio.AbstractEventLoop | None = None
        self._push_runtime: StompRuntime | None = None

        self._rfid_events: EventStream[RfidWsMessage] = EventStream("rfid")
        self._alerts: EventStream[Alert] = EventStream("alerts")
        self._go_home: EventStream[None] = EventStream("go-home")
        self._demux = TopicDemultiplexer(self._rfid_events, self._alerts)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> RfidClient:
        self._loop = asyncio.get_running_loop()
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.disconnect_push()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None
        self._loop = None

    @property
    def config(self) -> RfidConfig:
        return self._config

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise RfidError("Client not initialized. Use 'async with RfidClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Push channel
    # ------------------------------------------------------------------

    @property
    def rfid_events(self) -> EventStream[RfidWsMessage]:
        """Reader events pushed on ``/topic/rfid``."""
        return self._rfid_events

    @property
    def alerts(self) -> EventStream[Alert]:
        """Shelf alerts pushed on ``/topic/alerts``."""
        return self._alerts

    @property
    def go_home(self) -> EventStream[None]:
        """Navigation requests raised by :meth:`trigger_go_home`."""
        return self._go_home

    @property
    def push_runtime(self) -> StompRuntime | None:
        return self._push_runtime

    @property
    def demultiplexer(self) -> TopicDemultiplexer:
        return self._demux

    def connect_push(self) -> None:
        """Open the push connection. Calling it again while running is a no-op."""
        if self._push_runtime is not None and self._push_runtime.is_running:
            return
        loop = self._loop or asyncio.get_running_loop()
        if self._push_runtime is None:
            self._push_runtime = StompRuntime(
                loop=loop,
                config=self._config,
                on_frame=self._demux.dispatch,
                topics=self._demux.topics,
                connection_factory=self._connection_factory,
                logger=_logger,
            )
        self._push_runtime.start()

    async def disconnect_push(self) -> None:
        runtime = self._push_runtime
        if runtime is None:
            return
        self._push_runtime = None
        await runtime.stop()

    def trigger_go_home(self) -> None:
        self._go_home.publish(None)

    # ------------------------------------------------------------------
    # RFID events and statistics
    # ------------------------------------------------------------------

    async def get_stats(self) -> DashboardStats:
        return await _rfid_api.get_stats(self._require_transport())

    async def get_recent_events(self, limit: int = 20) -> list[RfidEventWithProduct]:
        return await _rfid_api.get_recent_events(self._require_transport(), limit)

    async def delete_event(self, event_id: int) -> str:
        return await _rfid_api.delete_event(self._require_transport(), event_id)

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    async def get_products_with_stock(self) -> list[ProductWithStock]:
        return await _products_api.get_products_with_stock(self._require_transport())

    async def get_product_by_barcode(self, barcode: str) -> ProductWithStock:
        return await _products_api.get_product_by_barcode(self._require_transport(), barcode)

    async def register_product(self, request: ProductRegisterRequest) -> Product:
        return await _products_api.register_product(self._require_transport(), request)

    async def update_product(self, product_id: int, request: ProductRegisterRequest) -> Product:
        return await _products_api.update_product(self._require_transport(), product_id, request)

    async def delete_product(self, product_id: int) -> str:
        return await _products_api.delete_product(self._require_transport(), product_id)

    # ------------------------------------------------------------------
    # Shelves
    # ------------------------------------------------------------------

    async def get_shelves(self) -> list[Shelf]:
        return await _shelves_api.get_shelves(self._require_transport())

    async def create_shelf(self, request: ShelfRequest) -> Shelf:
        return await _shelves_api.create_shelf(self._require_transport(), request)

    async def update_shelf(self, shelf_id: int, request: ShelfRequest) -> Shelf:
        return await _shelves_api.update_shelf(self._require_transport(), shelf_id, request)

    async def delete_shelf(self, shelf_id: int) -> str:
        return await _shelves_api.delete_shelf(self._require_transport(), shelf_id)

    # ------------------------------------------------------------------
    # Alerts
    # ------------------------------------------------------------------

    async def get_open_alerts(self) -> list[Alert]:
        return await _alerts_api.get_open_alerts(self._require_transport())

    async def resolve_alert(self, alert_id: int) -> None:
        await _alerts_api.resolve_alert(self._require_transport(), alert_id)

    # ------------------------------------------------------------------
    # Sales and store stock
    # ------------------------------------------------------------------

    async def get_store_stock(self) -> list[StoreStockWithDetails]:
        return await _sales_api.get_store_stock(self._require_transport())

    async def record_sale(self, request: SaleRequest) -> str:
        return await _sales_api.record_sale(self._require_transport(), request)

    async def record_multiple_sale(self, request: MultipleSaleRequest) -> str:
        return await _sales_api.record_multiple_sale(self._require_transport(), request)
