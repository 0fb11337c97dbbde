"""RFID event history and dashboard statistics models."""

from __future__ import annotations

from datetime import datetime

from pyrfid.models._base import RfidBaseModel
from pyrfid.models.enums import Location, RfidEventType

_EVENT_LABELS: dict[tuple[RfidEventType, Location], str] = {
    (RfidEventType.ENTRY, Location.STOCK): "Stock entry",
    (RfidEventType.ENTRY, Location.STORE): "Store entry",
    (RfidEventType.EXIT, Location.STOCK): "Stock exit",
    (RfidEventType.EXIT, Location.STORE): "Store exit",
}


class DashboardStats(RfidBaseModel):
    """Totals shown on the dashboard home view."""

    total_products: int = 0
    total_stock: int = 0
    total_store_stock: int = 0
    total_shelves: int = 0


class RfidEventWithProduct(RfidBaseModel):
    """A persisted reader event joined with its product."""

    id: int
    product_id: int | None = None
    product_name: str = ""
    event_type: str = ""
    location: str = ""
    esp32_id: str = ""
    created_at: datetime | None = None

    @property
    def label(self) -> str:
        """Human-readable description, e.g. ``"Store exit"``."""
        key = (RfidEventType(self.event_type or "UNKNOWN"), Location(self.location or "UNKNOWN"))
        return _EVENT_LABELS.get(key, f"{self.event_type} {self.location}".strip())
