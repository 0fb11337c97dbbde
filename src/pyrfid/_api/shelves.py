"""Shelf CRUD endpoints (``/api/shelf``)."""

from __future__ import annotations

from pyrfid._api._common import parse_model, parse_model_list, request_ack, request_wrapped
from pyrfid._constants import SHELF_ENDPOINT, SHELVES_ENDPOINT
from pyrfid._transport import Transport
from pyrfid.models.shelf import Shelf, ShelfRequest


async def get_shelves(transport: Transport) -> list[Shelf]:
    data = await request_wrapped(transport, "GET", SHELVES_ENDPOINT)
    return parse_model_list(Shelf, endpoint=SHELVES_ENDPOINT, data=data or [])


async def create_shelf(transport: Transport, request: ShelfRequest) -> Shelf:
    data = await request_wrapped(transport, "POST", SHELVES_ENDPOINT, body=request.to_payload())
    return parse_model(Shelf, endpoint=SHELVES_ENDPOINT, data=data)


async def update_shelf(transport: Transport, shelf_id: int, request: ShelfRequest) -> Shelf:
    endpoint = SHELF_ENDPOINT.format(shelf_id=shelf_id)
    data = await request_wrapped(transport, "PUT", endpoint, body=request.to_payload())
    return parse_model(Shelf, endpoint=endpoint, data=data)


async def delete_shelf(transport: Transport, shelf_id: int) -> str:
    return await request_ack(transport, "DELETE", SHELF_ENDPOINT.format(shelf_id=shelf_id))
