"""Sale and store stock endpoints."""

from __future__ import annotations

import logging

from pyrfid._api._common import parse_model_list, request_ack, request_wrapped
from pyrfid._constants import MULTIPLE_SALES_ENDPOINT, SALES_ENDPOINT, STORE_STOCK_ENDPOINT
from pyrfid._transport import Transport
from pyrfid.models.sales import MultipleSaleRequest, SaleRequest
from pyrfid.models.store_stock import StoreStockWithDetails

_logger = logging.getLogger(__name__)


async def get_store_stock(transport: Transport) -> list[StoreStockWithDetails]:
    data = await request_wrapped(transport, "GET", STORE_STOCK_ENDPOINT)
    return parse_model_list(StoreStockWithDetails, endpoint=STORE_STOCK_ENDPOINT, data=data or [])


async def record_sale(transport: Transport, request: SaleRequest) -> str:
    return await request_ack(transport, "POST", SALES_ENDPOINT, body=request.to_payload())


async def record_multiple_sale(transport: Transport, request: MultipleSaleRequest) -> str:
    """Record every cart line in one batched request."""
    _logger.debug("Recording sale lines=%d", len(request.items))
    return await request_ack(transport, "POST", MULTIPLE_SALES_ENDPOINT, body=request.to_payload())
