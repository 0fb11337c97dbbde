"""Product catalogue endpoints.

Endpoints:
  - GET    /api/products/with-stock
  - GET    /api/products/barcode/{code}
  - POST   /api/products          (bare Product reply)
  - PUT    /api/products/{id}     (bare Product reply)
  - DELETE /api/products/{id}
"""

from __future__ import annotations

import logging
from urllib.parse import quote

from pyrfid._api._common import parse_model, parse_model_list, request_ack, request_wrapped
from pyrfid._constants import (
    PRODUCT_BY_BARCODE_ENDPOINT,
    PRODUCT_ENDPOINT,
    PRODUCTS_ENDPOINT,
    PRODUCTS_WITH_STOCK_ENDPOINT,
)
from pyrfid._transport import Transport
from pyrfid.models.product import Product, ProductRegisterRequest, ProductWithStock

_logger = logging.getLogger(__name__)


async def get_products_with_stock(transport: Transport) -> list[ProductWithStock]:
    data = await request_wrapped(transport, "GET", PRODUCTS_WITH_STOCK_ENDPOINT)
    return parse_model_list(ProductWithStock, endpoint=PRODUCTS_WITH_STOCK_ENDPOINT, data=data or [])


async def get_product_by_barcode(transport: Transport, barcode: str) -> ProductWithStock:
    endpoint = PRODUCT_BY_BARCODE_ENDPOINT.format(barcode=quote(barcode, safe=""))
    data = await request_wrapped(transport, "GET", endpoint)
    return parse_model(ProductWithStock, endpoint=endpoint, data=data)


async def register_product(transport: Transport, request: ProductRegisterRequest) -> Product:
    response = await transport.request_json("POST", PRODUCTS_ENDPOINT, body=request.to_payload())
    _logger.debug("Product registered rfid_tag=%s", request.rfid_tag)
    return parse_model(Product, endpoint=PRODUCTS_ENDPOINT, data=response)


async def update_product(transport: Transport, product_id: int, request: ProductRegisterRequest) -> Product:
    endpoint = PRODUCT_ENDPOINT.format(product_id=product_id)
    response = await transport.request_json("PUT", endpoint, body=request.to_payload())
    return parse_model(Product, endpoint=endpoint, data=response)


async def delete_product(transport: Transport, product_id: int) -> str:
    return await request_ack(transport, "DELETE", PRODUCT_ENDPOINT.format(product_id=product_id))
