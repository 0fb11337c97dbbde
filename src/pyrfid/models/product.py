"""Product models."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from pyrfid.models._base import RfidBaseModel, RfidRequestModel
from pyrfid.models.enums import RfidEventType


class Product(RfidBaseModel):
    """A catalogue product with its RFID tag binding."""

    id: int
    name: str = ""
    barcode: str = ""
    rfid_tag: str = ""
    description: str = ""
    unit_weight: float = 0.0
    created_at: datetime | None = None


class ProductWithStock(Product):
    """Product joined with its current stock level."""

    stock_quantity: int = 0
    """Units currently available for sale."""


class ProductRegisterRequest(RfidRequestModel):
    """Body for ``POST /api/products`` and ``PUT /api/products/{id}``.

    The length and minimum constraints are the form rules enforced
    before any request is issued.
    """

    name: str = Field(min_length=1, max_length=120)
    barcode: str = Field(min_length=1, max_length=64)
    rfid_tag: str = Field(min_length=1, max_length=128)
    description: str = Field(default="", max_length=500)
    unit_weight: float = Field(ge=0.001)
    esp32_id: str | None = None


class RfidWsMessage(RfidBaseModel):
    """Reader event pushed on ``/topic/rfid``."""

    type: str = Field(min_length=1)
    rfid_tag: str = Field(min_length=1)
    location: str = ""

    @property
    def event_type(self) -> RfidEventType:
        return RfidEventType(self.type)
