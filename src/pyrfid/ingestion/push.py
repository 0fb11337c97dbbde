"""Topic demultiplexing for the push channel.

Each inbound STOMP frame carries a destination and a JSON body. Frames on
``/topic/rfid`` become :class:`RfidWsMessage` events and frames on
``/topic/alerts`` become :class:`Alert` events. Anything that does not
decode or validate is dropped here and never reaches subscribers.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from pyrfid._constants import TOPIC_ALERTS, TOPIC_RFID
from pyrfid.ingestion.streams import EventStream
from pyrfid.models.alert import Alert
from pyrfid.models.product import RfidWsMessage

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PushFrame:
    """One MESSAGE frame received from the push connection."""

    destination: str
    body: str | None
    headers: Mapping[str, str] = field(default_factory=dict)


def _load_object(body: str | bytes | None) -> dict[str, Any] | None:
    if body is None:
        return None
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if not body.strip():
        return None
    try:
        parsed = json.loads(body)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def decode_rfid_message(body: str | bytes | None) -> RfidWsMessage | None:
    """Decode a ``/topic/rfid`` body; ``None`` unless ``type`` and ``rfidTag`` are non-empty."""
    payload = _load_object(body)
    if payload is None:
        return None
    if not _non_empty_str(payload.get("type")) or not _non_empty_str(payload.get("rfidTag")):
        return None
    try:
        return RfidWsMessage.model_validate(payload)
    except ValidationError:
        return None


def decode_alert(body: str | bytes | None) -> Alert | None:
    """Decode a ``/topic/alerts`` body; ``None`` unless an ``id`` is present."""
    payload = _load_object(body)
    if payload is None or payload.get("id") is None:
        return None
    try:
        return Alert.model_validate(payload)
    except ValidationError:
        return None


class TopicDemultiplexer:
    """Routes frames by destination onto the two typed event streams.

    Owns no application state. Frames are published in arrival order.
    """

    def __init__(self, rfid_events: EventStream[RfidWsMessage], alerts: EventStream[Alert]) -> None:
        self._routes: dict[str, tuple[Callable[[Any], Any], EventStream[Any]]] = {
            TOPIC_RFID: (decode_rfid_message, rfid_events),
            TOPIC_ALERTS: (decode_alert, alerts),
        }
        self.dropped = 0

    @property
    def topics(self) -> tuple[str, ...]:
        return tuple(self._routes)

    def dispatch(self, frame: PushFrame) -> None:
        route = self._routes.get(frame.destination)
        if route is None:
            self.dropped += 1
            _logger.debug("Dropping frame for unknown destination=%s", frame.destination)
            return
        decoder, stream = route
        event = decoder(frame.body)
        if event is None:
            self.dropped += 1
            _logger.debug("Dropping malformed frame destination=%s body=%.200s", frame.destination, frame.body)
            return
        stream.publish(event)
