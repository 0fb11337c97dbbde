from __future__ import annotations

import pytest
from conftest import FakeTransport

from pyrfid._api import alerts, products, rfid, sales, shelves
from pyrfid._api._common import unwrap_envelope
from pyrfid.exceptions import RfidApiError
from pyrfid.models.product import ProductRegisterRequest
from pyrfid.models.sales import MultipleSaleRequest, SaleItem
from pyrfid.models.shelf import ShelfRequest


def _wrapped(data: object, message: str = "ok") -> dict[str, object]:
    return {"success": True, "message": message, "data": data}


def test_unwrap_envelope_raises_on_failure_flag() -> None:
    with pytest.raises(RfidApiError) as exc_info:
        unwrap_envelope(endpoint="/api/shelf", response={"success": False, "message": "Shelf not found"})

    assert exc_info.value.server_message == "Shelf not found"
    assert exc_info.value.endpoint == "/api/shelf"


def test_unwrap_envelope_rejects_non_object() -> None:
    with pytest.raises(RfidApiError):
        unwrap_envelope(endpoint="/api/shelf", response=[1, 2])


@pytest.mark.asyncio
async def test_recent_events_passes_limit_and_skips_malformed_rows() -> None:
    transport = FakeTransport(
        _wrapped(
            [
                {"id": 1, "productName": "Milk", "eventType": "ENTRY", "location": "STOCK"},
                {"productName": "no id"},
            ]
        )
    )

    events = await rfid.get_recent_events(transport, 15)

    assert [event.id for event in events] == [1]
    assert transport.requests[0]["endpoint"] == "/api/rfid/events/recent-with-product"
    assert transport.requests[0]["params"] == {"limit": 15}


@pytest.mark.asyncio
async def test_delete_event_returns_server_message() -> None:
    transport = FakeTransport({"success": True, "message": "Event deleted"})

    assert await rfid.delete_event(transport, 12) == "Event deleted"
    assert transport.requests[0]["method"] == "DELETE"
    assert transport.requests[0]["endpoint"] == "/api/rfid/12"


@pytest.mark.asyncio
async def test_register_product_reads_bare_reply() -> None:
    transport = FakeTransport({"id": 8, "name": "Milk", "rfidTag": "T1"})
    request = ProductRegisterRequest(name="Milk", barcode="1", rfid_tag="T1", unit_weight=1, esp32_id="ESP32_STOCK")

    product = await products.register_product(transport, request)

    assert product.id == 8
    assert transport.requests[0]["body"]["esp32Id"] == "ESP32_STOCK"


@pytest.mark.asyncio
async def test_product_by_barcode_quotes_path() -> None:
    transport = FakeTransport(_wrapped({"id": 1, "name": "Milk", "stockQuantity": 4}))

    product = await products.get_product_by_barcode(transport, "12/34")

    assert product.stock_quantity == 4
    assert transport.requests[0]["endpoint"] == "/api/products/barcode/12%2F34"


@pytest.mark.asyncio
async def test_product_by_barcode_not_available() -> None:
    transport = FakeTransport({"success": False, "message": "Product not available in store"})

    with pytest.raises(RfidApiError) as exc_info:
        await products.get_product_by_barcode(transport, "1")

    assert exc_info.value.server_message == "Product not available in store"


@pytest.mark.asyncio
async def test_shelf_crud_endpoints() -> None:
    transport = FakeTransport(
        _wrapped([{"id": 1, "name": "A1"}]),
        _wrapped({"id": 2, "name": "B1", "maxWeight": 10, "minThreshold": 1}),
        _wrapped({"id": 2, "name": "B2", "maxWeight": 10, "minThreshold": 1}),
        {"success": True, "message": "Shelf deleted"},
    )
    request = ShelfRequest(name="B1", max_weight=10, min_threshold=1)

    assert [shelf.name for shelf in await shelves.get_shelves(transport)] == ["A1"]
    assert (await shelves.create_shelf(transport, request)).id == 2
    assert (await shelves.update_shelf(transport, 2, request)).name == "B2"
    assert await shelves.delete_shelf(transport, 2) == "Shelf deleted"

    assert [(r["method"], r["endpoint"]) for r in transport.requests] == [
        ("GET", "/api/shelf"),
        ("POST", "/api/shelf"),
        ("PUT", "/api/shelf/2"),
        ("DELETE", "/api/shelf/2"),
    ]
    assert transport.requests[1]["body"] == {"name": "B1", "maxWeight": 10.0, "minThreshold": 1.0}


@pytest.mark.asyncio
async def test_open_alerts_and_resolve() -> None:
    transport = FakeTransport([{"id": 5, "alertType": "LOW_WEIGHT", "shelfName": "A1"}], None)

    open_alerts = await alerts.get_open_alerts(transport)
    await alerts.resolve_alert(transport, 5)

    assert [alert.id for alert in open_alerts] == [5]
    assert transport.requests[1]["method"] == "PUT"
    assert transport.requests[1]["endpoint"] == "/api/alerts/5/resolve"


@pytest.mark.asyncio
async def test_multiple_sale_and_store_stock() -> None:
    transport = FakeTransport(
        {"success": True, "message": "Sale recorded"},
        _wrapped([{"id": 1, "productId": 2, "quantity": 3, "productName": "Milk"}]),
    )
    request = MultipleSaleRequest(items=[SaleItem(product_id=2, quantity=3)])

    assert await sales.record_multiple_sale(transport, request) == "Sale recorded"
    stock = await sales.get_store_stock(transport)

    assert transport.requests[0]["endpoint"] == "/api/sales/multiple"
    assert transport.requests[0]["body"] == {"items": [{"productId": 2, "quantity": 3}]}
    assert stock[0].product_name == "Milk"


@pytest.mark.asyncio
async def test_stats_failure_flag() -> None:
    transport = FakeTransport({"success": False, "message": "database unavailable"})

    with pytest.raises(RfidApiError):
        await rfid.get_stats(transport)
