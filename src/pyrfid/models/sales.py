"""Sale request models."""

from __future__ import annotations

from pydantic import Field

from pyrfid.models._base import RfidRequestModel


class SaleRequest(RfidRequestModel):
    """Body for ``POST /api/sales`` (single product)."""

    product_id: int
    quantity: int = Field(ge=1)


class SaleItem(SaleRequest):
    """One line of a multi-product sale."""


class MultipleSaleRequest(RfidRequestModel):
    """Body for ``POST /api/sales/multiple``."""

    items: list[SaleItem] = Field(min_length=1)
