"""Tests for model parsing with RfidBaseModel + RfidEnum."""

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from pyrfid.models.alert import Alert
from pyrfid.models.enums import AlertType, Location, RfidEventType
from pyrfid.models.product import ProductRegisterRequest, ProductWithStock, RfidWsMessage
from pyrfid.models.rfid import DashboardStats, RfidEventWithProduct
from pyrfid.models.sales import MultipleSaleRequest, SaleItem, SaleRequest
from pyrfid.models.shelf import Shelf, ShelfRequest
from pyrfid.models.store_stock import StoreStockWithDetails

# ------------------------------------------------------------------
# RfidEnum
# ------------------------------------------------------------------


class TestRfidEnum:
    def test_unknown_value_falls_back(self) -> None:
        assert RfidEventType("TELEPORT") is RfidEventType.UNKNOWN

    def test_lowercase_value_matches(self) -> None:
        assert Location("store") is Location.STORE

    def test_all_enums_have_unknown(self) -> None:
        for cls in (RfidEventType, Location, AlertType):
            assert cls.UNKNOWN == "UNKNOWN", f"{cls.__name__}.UNKNOWN != 'UNKNOWN'"

    def test_weight_affecting_kinds(self) -> None:
        assert RfidEventType.ENTRY.affects_weight
        assert not RfidEventType.NEW_PRODUCT.affects_weight
        assert AlertType.OVERLOAD.affects_weight
        assert not AlertType.UNKNOWN.affects_weight


# ------------------------------------------------------------------
# Response models
# ------------------------------------------------------------------


class TestResponseModels:
    def test_product_with_stock_from_camel_case(self) -> None:
        product = ProductWithStock.model_validate(
            {
                "id": 4,
                "name": "Milk",
                "barcode": "3017620422003",
                "rfidTag": "E200341201",
                "description": None,
                "unitWeight": 1.03,
                "createdAt": "2025-03-01T10:15:00",
                "stockQuantity": 12,
            }
        )
        assert product.rfid_tag == "E200341201"
        assert product.description == ""
        assert product.stock_quantity == 12
        assert product.created_at == datetime(2025, 3, 1, 10, 15)
        assert product.raw["rfidTag"] == "E200341201"

    def test_alert_keeps_unmapped_type(self) -> None:
        alert = Alert.model_validate({"id": 3, "alertType": "TEMPERATURE", "shelfName": "A1", "productName": None})
        assert alert.alert_type == "TEMPERATURE"
        assert alert.kind is AlertType.UNKNOWN
        assert alert.product_name is None

    def test_stats_default_to_zero(self) -> None:
        stats = DashboardStats.model_validate({"totalProducts": 5})
        assert stats.total_products == 5
        assert stats.total_shelves == 0

    @pytest.mark.parametrize(
        ("event_type", "location", "label"),
        [
            ("ENTRY", "STOCK", "Stock entry"),
            ("EXIT", "STORE", "Store exit"),
            ("NEW_PRODUCT", "STOCK", "NEW_PRODUCT STOCK"),
        ],
    )
    def test_event_label(self, event_type: str, location: str, label: str) -> None:
        event = RfidEventWithProduct.model_validate({"id": 1, "eventType": event_type, "location": location})
        assert event.label == label

    def test_store_stock_details(self) -> None:
        row = StoreStockWithDetails.model_validate(
            {"id": 1, "productId": 2, "shelfId": None, "quantity": 3, "productName": "Milk", "shelfName": "A1"}
        )
        assert row.shelf_id is None
        assert row.product_name == "Milk"

    def test_shelf(self) -> None:
        shelf = Shelf.model_validate({"id": 1, "name": "A1", "maxWeight": 50, "minThreshold": 5, "currentWeight": 4.5})
        assert shelf.current_weight == 4.5

    def test_ws_message_event_type(self) -> None:
        message = RfidWsMessage.model_validate({"type": "entry", "rfidTag": "T1", "location": "STOCK"})
        assert message.event_type is RfidEventType.ENTRY


# ------------------------------------------------------------------
# Request models
# ------------------------------------------------------------------


class TestRequestModels:
    def test_product_request_trims_and_dumps_camel_case(self) -> None:
        request = ProductRegisterRequest(name=" Milk ", barcode="1", rfid_tag="T1", unit_weight=0.5)
        assert request.to_payload() == {
            "name": "Milk",
            "barcode": "1",
            "rfidTag": "T1",
            "description": "",
            "unitWeight": 0.5,
        }

    def test_product_request_limits(self) -> None:
        with pytest.raises(ValidationError):
            ProductRegisterRequest(name="x" * 121, barcode="1", rfid_tag="T1", unit_weight=0.5)
        with pytest.raises(ValidationError):
            ProductRegisterRequest(name="Milk", barcode="1", rfid_tag="T1", unit_weight=0.0001)

    def test_field_for_alias(self) -> None:
        assert ProductRegisterRequest.field_for_alias("rfidTag") == "rfid_tag"
        assert ProductRegisterRequest.field_for_alias("other") == "other"

    def test_shelf_request_minimums(self) -> None:
        with pytest.raises(ValidationError):
            ShelfRequest(name="A1", max_weight=0, min_threshold=1)

    def test_sale_requests(self) -> None:
        assert SaleRequest(product_id=3, quantity=2).to_payload() == {"productId": 3, "quantity": 2}
        with pytest.raises(ValidationError):
            MultipleSaleRequest(items=[])
        batch = MultipleSaleRequest(items=[SaleItem(product_id=1, quantity=1)])
        assert batch.to_payload() == {"items": [{"productId": 1, "quantity": 1}]}
