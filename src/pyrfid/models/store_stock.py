"""Store stock models."""

from __future__ import annotations

from datetime import datetime

from pyrfid.models._base import RfidBaseModel


class StoreStock(RfidBaseModel):
    id: int
    product_id: int
    shelf_id: int | None = None
    quantity: int = 0
    last_updated: datetime | None = None


class StoreStockWithDetails(StoreStock):
    """Store stock row joined with product and shelf names."""

    product_name: str = ""
    product_barcode: str = ""
    shelf_name: str = ""
    unit_weight: float = 0.0
