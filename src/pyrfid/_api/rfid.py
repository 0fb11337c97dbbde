"""RFID statistics and event history endpoints.

Endpoints:
  - GET    /api/rfid/stats
  - GET    /api/rfid/events/recent-with-product?limit=N
  - DELETE /api/rfid/{id}
"""

from __future__ import annotations

from pyrfid._api._common import parse_model, parse_model_list, request_ack, request_wrapped
from pyrfid._constants import RECENT_EVENTS_ENDPOINT, RFID_EVENT_ENDPOINT, STATS_ENDPOINT
from pyrfid._transport import Transport
from pyrfid.models.rfid import DashboardStats, RfidEventWithProduct


async def get_stats(transport: Transport) -> DashboardStats:
    data = await request_wrapped(transport, "GET", STATS_ENDPOINT)
    return parse_model(DashboardStats, endpoint=STATS_ENDPOINT, data=data or {})


async def get_recent_events(transport: Transport, limit: int = 20) -> list[RfidEventWithProduct]:
    """Fetch the latest reader events joined with their products."""
    data = await request_wrapped(transport, "GET", RECENT_EVENTS_ENDPOINT, params={"limit": limit})
    return parse_model_list(RfidEventWithProduct, endpoint=RECENT_EVENTS_ENDPOINT, data=data or [])


async def delete_event(transport: Transport, event_id: int) -> str:
    return await request_ack(transport, "DELETE", RFID_EVENT_ENDPOINT.format(event_id=event_id))
