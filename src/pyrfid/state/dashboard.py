"""Dashboard state reducer.

The :class:`Dashboard` subscribes to the pushed RFID and alert streams,
issues REST snapshot refreshes, and applies both origins to a set of named
cells. Everything runs on one asyncio loop: stream callbacks and request
completions are serialized there, so cell updates never interleave.

Rules applied here:

* RFID event: ``NEW_PRODUCT`` at ``STOCK`` opens the product form prefilled
  with the tag; every event refreshes recent events; ``ENTRY``/``EXIT``
  also refresh stats and shelves.
* Alert event: prepended to the open alerts, counted, toasted; weight
  alerts refresh shelves.
* View switch: each view triggers only the refreshes it needs.
"""

from __future__ import annotations

import asyncio
import enum
import inspect
import logging
from collections.abc import Awaitable, Callable, Coroutine
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

from pyrfid.config import RfidConfig
from pyrfid.exceptions import InsufficientStockError, RfidBusinessRuleError, RfidError
from pyrfid.ingestion.streams import EventStream, SubscriptionGroup
from pyrfid.models.alert import Alert
from pyrfid.models.enums import AlertType, Location, RfidEventType
from pyrfid.models.product import Product, ProductRegisterRequest, ProductWithStock, RfidWsMessage
from pyrfid.models.rfid import DashboardStats, RfidEventWithProduct
from pyrfid.models.sales import MultipleSaleRequest
from pyrfid.models.shelf import Shelf, ShelfRequest
from pyrfid.models.store_stock import StoreStockWithDetails
from pyrfid.state.cart import Cart, CartLine
from pyrfid.state.cells import Cell, MarkerCell
from pyrfid.state.forms import FormMode, FormState
from pyrfid.state.messages import Messages
from pyrfid.state.timers import ExpiringSlot

_logger = logging.getLogger(__name__)

T = TypeVar("T")

ConfirmCallback = Callable[[str], "bool | Awaitable[bool]"]


class View(enum.StrEnum):
    HOME = "home"
    STOCK = "stock"
    STORE = "store"
    PRODUCTS = "products"
    SHELVES = "shelves"
    ALERTS = "alerts"
    SALES = "sales"


@dataclass(frozen=True)
class AlertToast:
    message: str
    alert: Alert


class DashboardService(Protocol):
    """What the dashboard needs from the backend; :class:`~pyrfid.client.RfidClient` provides it."""

    @property
    def rfid_events(self) -> EventStream[RfidWsMessage]: ...

    @property
    def alerts(self) -> EventStream[Alert]: ...

    @property
    def go_home(self) -> EventStream[None]: ...

    def connect_push(self) -> None: ...

    async def get_stats(self) -> DashboardStats: ...

    async def get_recent_events(self, limit: int = 20) -> list[RfidEventWithProduct]: ...

    async def get_store_stock(self) -> list[StoreStockWithDetails]: ...

    async def get_products_with_stock(self) -> list[ProductWithStock]: ...

    async def get_product_by_barcode(self, barcode: str) -> ProductWithStock: ...

    async def register_product(self, request: ProductRegisterRequest) -> Product: ...

    async def update_product(self, product_id: int, request: ProductRegisterRequest) -> Product: ...

    async def delete_product(self, product_id: int) -> str: ...

    async def delete_event(self, event_id: int) -> str: ...

    async def get_shelves(self) -> list[Shelf]: ...

    async def create_shelf(self, request: ShelfRequest) -> Shelf: ...

    async def update_shelf(self, shelf_id: int, request: ShelfRequest) -> Shelf: ...

    async def delete_shelf(self, shelf_id: int) -> str: ...

    async def get_open_alerts(self) -> list[Alert]: ...

    async def resolve_alert(self, alert_id: int) -> None: ...

    async def record_multiple_sale(self, request: MultipleSaleRequest) -> str: ...


def _approve(_prompt: str) -> bool:
    return True


_PRODUCT_DEFAULTS: dict[str, Any] = {
    "name": "",
    "barcode": "",
    "rfid_tag": "",
    "description": "",
    "unit_weight": 0.001,
}

_SHELF_DEFAULTS: dict[str, Any] = {
    "name": "",
    "max_weight": 0.0,
    "min_threshold": 0.0,
}


class Dashboard:
    """Owns every dashboard state cell and the rules that update them.

    Parameters
    ----------
    service : DashboardService
        Backend access (REST calls and push streams).
    config : RfidConfig
        Limits and delays.
    confirm : callable
        Asked before destructive actions; may be sync or async. Defaults
        to approving everything (headless use).
    messages : Messages
        User-facing text templates.
    """

    def __init__(
        self,
        service: DashboardService,
        config: RfidConfig | None = None,
        *,
        confirm: ConfirmCallback | None = None,
        messages: Messages | None = None,
    ) -> None:
        self._service = service
        self._config = config or RfidConfig()
        self._confirm_cb = confirm or _approve
        self._messages = messages or Messages()
        self._subscriptions = SubscriptionGroup()
        self._tasks: set[asyncio.Task[Any]] = set()
        self._started = False

        self.changes: EventStream[str] = EventStream("dashboard-changes")
        notify = self.changes.publish

        self._stats: Cell[DashboardStats | None] = Cell("stats", None, notify)
        self._recent_events: Cell[list[RfidEventWithProduct]] = Cell("recent_events", [], notify)
        self._store_stock: Cell[list[StoreStockWithDetails]] = Cell("store_stock", [], notify)
        self._products: Cell[list[ProductWithStock]] = Cell("products", [], notify)
        self._shelves: Cell[list[Shelf]] = Cell("shelves", [], notify)
        self._alerts: Cell[list[Alert]] = Cell("alerts", [], notify)
        self._open_alerts_count: Cell[int] = Cell("open_alerts_count", 0, notify)
        self._selected_view: Cell[View] = Cell("selected_view", View.HOME, notify)

        self._toast = ExpiringSlot[AlertToast](Cell("alert_toast", None, notify))
        self._error = ExpiringSlot[str](Cell("error_message", None, notify))
        self._success = ExpiringSlot[str](Cell("success_message", None, notify))
        self._sale_error = ExpiringSlot[str](Cell("sale_error_message", None, notify))
        self._sale_success = ExpiringSlot[str](Cell("sale_success_message", None, notify))

        self.deleting_products = MarkerCell("deleting_products", notify)
        self.deleting_events = MarkerCell("deleting_events", notify)
        self.deleting_shelves = MarkerCell("deleting_shelves", notify)
        self.resolving_alerts = MarkerCell("resolving_alerts", notify)

        self.product_form: FormState[ProductRegisterRequest] = FormState(
            "product_form", ProductRegisterRequest, _PRODUCT_DEFAULTS, notify
        )
        self.shelf_form: FormState[ShelfRequest] = FormState("shelf_form", ShelfRequest, _SHELF_DEFAULTS, notify)

        self._cart = Cart()
        self._cart_lines: Cell[tuple[CartLine, ...]] = Cell("cart", (), notify)
        self._cart_total: Cell[int] = Cell("cart_total", 0, notify)
        self._sale_barcode: Cell[str] = Cell("sale_barcode", "", notify)
        self._sale_quantity: Cell[int] = Cell("sale_quantity", 1, notify)
        self._found_product: Cell[ProductWithStock | None] = Cell("found_product", None, notify)
        self._searching_product: Cell[bool] = Cell("searching_product", False, notify)
        self._processing_sale: Cell[bool] = Cell("processing_sale", False, notify)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def stats(self) -> DashboardStats | None:
        return self._stats.value

    @property
    def recent_events(self) -> list[RfidEventWithProduct]:
        return self._recent_events.value

    @property
    def store_stock(self) -> list[StoreStockWithDetails]:
        return self._store_stock.value

    @property
    def products(self) -> list[ProductWithStock]:
        return self._products.value

    @property
    def shelves(self) -> list[Shelf]:
        return self._shelves.value

    @property
    def alerts(self) -> list[Alert]:
        return self._alerts.value

    @property
    def open_alerts_count(self) -> int:
        return self._open_alerts_count.value

    @property
    def selected_view(self) -> View:
        return self._selected_view.value

    @property
    def alert_toast(self) -> AlertToast | None:
        return self._toast.value

    @property
    def error_message(self) -> str | None:
        return self._error.value

    @property
    def success_message(self) -> str | None:
        return self._success.value

    @property
    def sale_error_message(self) -> str | None:
        return self._sale_error.value

    @property
    def sale_success_message(self) -> str | None:
        return self._sale_success.value

    @property
    def cart(self) -> tuple[CartLine, ...]:
        return self._cart_lines.value

    @property
    def cart_total(self) -> int:
        return self._cart_total.value

    @property
    def found_product(self) -> ProductWithStock | None:
        return self._found_product.value

    @property
    def sale_barcode(self) -> str:
        return self._sale_barcode.value

    @property
    def sale_quantity(self) -> int:
        return self._sale_quantity.value

    @property
    def is_searching_product(self) -> bool:
        return self._searching_product.value

    @property
    def is_processing_sale(self) -> bool:
        return self._processing_sale.value

    def is_loading(self, cell_name: str) -> bool:
        """Whether a snapshot fetch for *cell_name* (e.g. ``"shelves"``) is pending."""
        cells: dict[str, Cell[Any]] = {
            "stats": self._stats,
            "recent_events": self._recent_events,
            "store_stock": self._store_stock,
            "products": self._products,
            "shelves": self._shelves,
            "alerts": self._alerts,
        }
        cell = cells.get(cell_name)
        if cell is None:
            raise KeyError(cell_name)
        return cell.is_loading

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Subscribe to the push streams, connect, and load the home view."""
        if self._started:
            return
        self._started = True
        self._subscriptions.add(self._service.rfid_events.subscribe(self.handle_rfid_event))
        self._subscriptions.add(self._service.alerts.subscribe(self.handle_new_alert))
        self._subscriptions.add(self._service.go_home.subscribe(lambda _event: self.go_back()))
        if self._config.push_enabled:
            self._service.connect_push()
        await self.load_dashboard_data()

    async def close(self) -> None:
        """Tear down subscriptions, timers and in-flight work."""
        self._subscriptions.close()
        for slot in (self._toast, self._error, self._success, self._sale_error, self._sale_success):
            slot.close()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._started = False

    async def drain(self) -> None:
        """Wait until every refresh or deferred action spawned so far has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.error("Dashboard background task failed", exc_info=exc)

    async def _confirm(self, prompt: str) -> bool:
        result = self._confirm_cb(prompt)
        if inspect.isawaitable(result):
            result = await result
        return bool(result)

    # ------------------------------------------------------------------
    # Snapshot refreshes
    # ------------------------------------------------------------------

    async def _refresh(self, cell: Cell[T], fetch: Callable[[], Awaitable[T]]) -> bool:
        ticket = cell.begin_fetch()
        try:
            value = await fetch()
            return cell.apply_snapshot(ticket, value)
        except RfidError:
            _logger.debug("Error loading %s", cell.name, exc_info=True)
            return False
        finally:
            cell.end_fetch()

    async def load_dashboard_data(self) -> None:
        await asyncio.gather(self.load_stats(), self.load_recent_events(), self.load_alerts())

    async def load_stats(self) -> bool:
        return await self._refresh(self._stats, self._service.get_stats)

    async def load_recent_events(self) -> bool:
        limit = self._config.recent_events_limit
        return await self._refresh(self._recent_events, lambda: self._service.get_recent_events(limit))

    async def load_events_by_location(self, location: Location | str) -> bool:
        """Load recent events and keep those recorded at *location*."""
        wanted = Location(location)
        limit = self._config.location_events_limit

        async def fetch() -> list[RfidEventWithProduct]:
            events = await self._service.get_recent_events(limit)
            return [event for event in events if Location(event.location or "UNKNOWN") is wanted]

        return await self._refresh(self._recent_events, fetch)

    async def refresh_current_location_events(self) -> bool:
        view = self.selected_view
        if view is View.STOCK:
            return await self.load_events_by_location(Location.STOCK)
        if view is View.STORE:
            return await self.load_events_by_location(Location.STORE)
        return False

    async def load_store_stock(self) -> bool:
        return await self._refresh(self._store_stock, self._service.get_store_stock)

    async def load_products(self) -> bool:
        return await self._refresh(self._products, self._service.get_products_with_stock)

    async def load_shelves(self) -> bool:
        return await self._refresh(self._shelves, self._service.get_shelves)

    async def load_alerts(self) -> bool:
        applied = await self._refresh(self._alerts, self._service.get_open_alerts)
        if applied:
            self._open_alerts_count.set(len(self._alerts.value))
        return applied

    # ------------------------------------------------------------------
    # Push reactions
    # ------------------------------------------------------------------

    def handle_rfid_event(self, event: RfidWsMessage) -> None:
        event_type = event.event_type
        if event.type == RfidEventType.NEW_PRODUCT and event.location == Location.STOCK:
            self.open_product_form_from_event(event.rfid_tag, event.location)
        self._spawn(self.load_recent_events())
        if event_type.affects_weight:
            self._spawn(self.load_stats())
            self._spawn(self.load_shelves())

    def handle_new_alert(self, alert: Alert) -> None:
        self._alerts.set([alert, *self._alerts.value])
        self._open_alerts_count.set(self._open_alerts_count.value + 1)

        if alert.kind is AlertType.LOW_WEIGHT:
            message = self._messages.refill_shelf.format(shelf_name=alert.shelf_name)
        else:
            message = self._messages.new_alert.format(alert_type=alert.alert_type)
        self.show_alert_toast(AlertToast(message=message, alert=alert))

        if alert.kind.affects_weight:
            self._spawn(self.load_shelves())

    def show_alert_toast(self, toast: AlertToast) -> None:
        self._toast.show(toast, self._config.toast_duration)

    def dismiss_alert_toast(self) -> None:
        self._toast.clear()

    def go_to_alerts_from_toast(self) -> None:
        self.dismiss_alert_toast()
        self.select_view(View.ALERTS)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def select_view(self, view: View | str) -> None:
        """Switch view and prefetch only what that view shows."""
        selected = View(view)
        self._selected_view.set(selected)
        if selected is View.STOCK:
            self._spawn(self.load_events_by_location(Location.STOCK))
        elif selected is View.STORE:
            self._spawn(self.load_store_stock())
        elif selected is not View.HOME:
            self._spawn(self.load_recent_events())

        if selected is View.PRODUCTS:
            self._spawn(self.load_products())
        elif selected is View.SHELVES:
            self._spawn(self.load_shelves())
        elif selected is View.ALERTS:
            self._spawn(self.load_alerts())
        elif selected is View.SALES:
            self.reset_sale_form()

    def go_back(self) -> None:
        self._selected_view.set(View.HOME)

    # ------------------------------------------------------------------
    # Product form
    # ------------------------------------------------------------------

    def _clear_banners(self) -> None:
        self._error.clear()
        self._success.clear()

    def open_product_form_from_event(self, rfid_tag: str, location: str) -> None:
        self._clear_banners()
        self.product_form.open(FormMode.NEW_FROM_EVENT, values={"rfid_tag": rfid_tag}, location=location)

    def open_add_product_form(self) -> None:
        self._clear_banners()
        self.product_form.open(FormMode.ADD)

    def open_edit_product_form(self, product: Product) -> None:
        self._clear_banners()
        self.product_form.open(
            FormMode.EDIT,
            values={
                "name": product.name,
                "barcode": product.barcode,
                "rfid_tag": product.rfid_tag,
                "description": product.description,
                "unit_weight": product.unit_weight,
            },
            editing_id=product.id,
        )

    def close_product_form(self) -> None:
        self.product_form.close()

    async def submit_product(self) -> bool:
        """Validate and send the product form.

        Returns ``True`` once the request succeeded; the form then closes
        after ``form_close_delay``.
        """
        form = self.product_form
        if form.saving or not form.is_open:
            return False
        request = form.validate(extra={"esp32_id": self._config.esp32_id})
        if request is None:
            return False

        editing_id = form.editing_id if form.mode is FormMode.EDIT else None
        form.begin_submit()
        self._clear_banners()
        try:
            if editing_id is not None:
                await self._service.update_product(editing_id, request)
            else:
                await self._service.register_product(request)
        except RfidError as exc:
            _logger.debug("Product submit failed", exc_info=True)
            form.fail()
            fallback = (
                self._messages.product_update_failed if editing_id is not None else self._messages.product_register_failed
            )
            self._error.show(exc.server_message or fallback)
            return False

        if editing_id is not None:
            self._success.show(self._messages.product_updated)
            self._spawn(self._close_form_later(form, self.load_products))
        else:
            self._success.show(self._messages.product_registered)
            self._spawn(self._close_form_later(form, self._after_product_registered))
        return True

    async def _after_product_registered(self) -> None:
        loads = [self.load_stats(), self.load_recent_events()]
        if self.selected_view is View.PRODUCTS:
            loads.append(self.load_products())
        await asyncio.gather(*loads)

    async def _close_form_later(self, form: FormState[Any], reload: Callable[[], Awaitable[Any]]) -> None:
        await asyncio.sleep(self._config.form_close_delay)
        if form.saving:
            form.close()
        await reload()

    # ------------------------------------------------------------------
    # Shelf form
    # ------------------------------------------------------------------

    def open_add_shelf_form(self) -> None:
        self._clear_banners()
        self.shelf_form.open(FormMode.ADD)

    def open_edit_shelf_form(self, shelf: Shelf) -> None:
        self._clear_banners()
        self.shelf_form.open(
            FormMode.EDIT,
            values={"name": shelf.name, "max_weight": shelf.max_weight, "min_threshold": shelf.min_threshold},
            editing_id=shelf.id,
        )

    def close_shelf_form(self) -> None:
        self.shelf_form.close()

    async def submit_shelf(self) -> bool:
        form = self.shelf_form
        if form.saving or not form.is_open:
            return False
        request = form.validate()
        if request is None:
            return False

        editing_id = form.editing_id if form.mode is FormMode.EDIT else None
        form.begin_submit()
        self._clear_banners()
        try:
            if editing_id is not None:
                await self._service.update_shelf(editing_id, request)
            else:
                await self._service.create_shelf(request)
        except RfidError as exc:
            _logger.debug("Shelf submit failed", exc_info=True)
            form.fail()
            fallback = self._messages.shelf_update_failed if editing_id is not None else self._messages.shelf_create_failed
            self._error.show(exc.server_message or fallback)
            return False

        self._success.show(self._messages.shelf_updated if editing_id is not None else self._messages.shelf_created)
        self._spawn(self._close_form_later(form, self.load_shelves))
        return True

    # ------------------------------------------------------------------
    # Deletions
    # ------------------------------------------------------------------

    async def _run_guarded(
        self,
        *,
        markers: MarkerCell,
        entity_id: int,
        prompt: str,
        action: Callable[[], Awaitable[Any]],
        success_message: str | None,
        fallback: str,
        reloads: tuple[Callable[[], Coroutine[Any, Any, Any]], ...],
    ) -> bool:
        if entity_id in markers:
            return False
        if not await self._confirm(prompt):
            return False

        delay = self._config.message_clear_delay
        markers.mark(entity_id)
        try:
            await action()
        except RfidError as exc:
            _logger.debug("%s failed for id=%s", markers.name, entity_id, exc_info=True)
            self._error.show(exc.server_message or fallback, delay)
            return False
        finally:
            markers.clear(entity_id)

        if success_message is not None:
            self._success.show(success_message, delay)
        for reload in reloads:
            self._spawn(reload())
        return True

    async def delete_product(self, product: Product) -> bool:
        return await self._run_guarded(
            markers=self.deleting_products,
            entity_id=product.id,
            prompt=self._messages.confirm_delete_product.format(name=product.name),
            action=lambda: self._service.delete_product(product.id),
            success_message=self._messages.product_deleted,
            fallback=self._messages.product_delete_failed,
            reloads=(self.load_products, self.load_stats),
        )

    async def delete_event(self, event: RfidEventWithProduct) -> bool:
        return await self._run_guarded(
            markers=self.deleting_events,
            entity_id=event.id,
            prompt=self._messages.confirm_delete_event,
            action=lambda: self._service.delete_event(event.id),
            success_message=None,
            fallback=self._messages.event_delete_failed,
            reloads=(self.load_recent_events, self.load_stats),
        )

    async def delete_shelf(self, shelf: Shelf) -> bool:
        return await self._run_guarded(
            markers=self.deleting_shelves,
            entity_id=shelf.id,
            prompt=self._messages.confirm_delete_shelf.format(name=shelf.name),
            action=lambda: self._service.delete_shelf(shelf.id),
            success_message=self._messages.shelf_deleted,
            fallback=self._messages.shelf_delete_failed,
            reloads=(self.load_shelves,),
        )

    async def resolve_alert(self, alert: Alert) -> bool:
        return await self._run_guarded(
            markers=self.resolving_alerts,
            entity_id=alert.id,
            prompt=self._messages.confirm_resolve_alert.format(shelf_name=alert.shelf_name),
            action=lambda: self._service.resolve_alert(alert.id),
            success_message=self._messages.alert_resolved,
            fallback=self._messages.alert_resolve_failed,
            reloads=(self.load_alerts,),
        )

    # ------------------------------------------------------------------
    # Sales
    # ------------------------------------------------------------------

    def _sync_cart(self) -> None:
        self._cart_lines.set(self._cart.lines)
        self._cart_total.set(self._cart.total)

    def set_sale_input(self, *, barcode: str | None = None, quantity: int | None = None) -> None:
        if barcode is not None:
            self._sale_barcode.set(barcode)
        if quantity is not None:
            self._sale_quantity.set(quantity)

    def reset_sale_form(self) -> None:
        self._sale_barcode.set("")
        self._sale_quantity.set(1)
        self._found_product.set(None)
        self._sale_error.clear()
        self._sale_success.clear()
        self._cart.clear()
        self._sync_cart()

    async def search_product_by_barcode(self, barcode: str | None = None) -> ProductWithStock | None:
        if barcode is not None:
            self._sale_barcode.set(barcode)
        code = self._sale_barcode.value.strip()
        if not code:
            self._sale_error.show(self._messages.barcode_required)
            return None

        self._searching_product.set(True)
        self._sale_error.clear()
        self._found_product.set(None)
        try:
            product = await self._service.get_product_by_barcode(code)
        except RfidError as exc:
            _logger.debug("Product search failed barcode=%s", code, exc_info=True)
            self._sale_error.show(exc.server_message or self._messages.product_not_found)
            return None
        finally:
            self._searching_product.set(False)

        self._found_product.set(product)
        return product

    def add_to_cart(self) -> bool:
        product = self._found_product.value
        if product is None:
            self._sale_error.show(self._messages.search_first)
            return False

        quantity = self._sale_quantity.value
        try:
            self._cart.add(product, quantity)
        except InsufficientStockError as exc:
            self._sale_error.show(self._messages.insufficient_stock.format(available=exc.available))
            return False
        except RfidBusinessRuleError:
            self._sale_error.show(self._messages.quantity_too_low)
            return False

        self._sync_cart()
        self._sale_barcode.set("")
        self._sale_quantity.set(1)
        self._found_product.set(None)
        self._sale_error.clear()
        self._sale_success.show(
            self._messages.added_to_cart.format(name=product.name), self._config.cart_message_clear_delay
        )
        return True

    def remove_from_cart(self, index: int) -> None:
        if self._cart.remove(index) is not None:
            self._sync_cart()

    def update_cart_item_quantity(self, index: int, quantity: int) -> bool:
        if quantity < 1 or not 0 <= index < len(self._cart):
            return False
        try:
            self._cart.update_quantity(index, quantity)
        except InsufficientStockError as exc:
            self._sale_error.show(
                self._messages.insufficient_stock_for.format(name=exc.product_name, available=exc.available),
                self._config.message_clear_delay,
            )
            return False
        self._sync_cart()
        return True

    async def process_sale(self) -> bool:
        """Submit the whole cart as one sale."""
        if self._processing_sale.value:
            return False
        if self._cart.is_empty:
            self._sale_error.show(self._messages.empty_cart)
            return False

        lines = self._cart.lines
        request = self._cart.to_sale_request()
        self._processing_sale.set(True)
        self._sale_error.clear()
        try:
            await self._service.record_multiple_sale(request)
        except RfidError as exc:
            _logger.debug("Sale failed lines=%d", len(lines), exc_info=True)
            self._sale_error.show(exc.server_message or self._messages.sale_failed)
            return False
        finally:
            self._processing_sale.set(False)

        total_items = sum(line.quantity for line in lines)
        self.reset_sale_form()
        self._sale_success.show(
            self._messages.sale_recorded.format(items=total_items, products=len(lines)),
            self._config.sale_message_clear_delay,
        )
        self._spawn(self.load_stats())
        self._spawn(self.load_store_stock())
        return True
