"""Shelf alert endpoints.

``GET /api/alerts/open`` answers with a bare list, and
``PUT /api/alerts/{id}/resolve`` with an empty body.
"""

from __future__ import annotations

from pyrfid._api._common import parse_model_list
from pyrfid._constants import OPEN_ALERTS_ENDPOINT, RESOLVE_ALERT_ENDPOINT
from pyrfid._transport import Transport
from pyrfid.models.alert import Alert


async def get_open_alerts(transport: Transport) -> list[Alert]:
    response = await transport.request_json("GET", OPEN_ALERTS_ENDPOINT)
    return parse_model_list(Alert, endpoint=OPEN_ALERTS_ENDPOINT, data=response or [])


async def resolve_alert(transport: Transport, alert_id: int) -> None:
    await transport.request_json("PUT", RESOLVE_ALERT_ENDPOINT.format(alert_id=alert_id), body={})
