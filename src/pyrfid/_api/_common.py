"""Shared helpers for endpoint modules.

Most endpoints wrap their payload as ``{success, message, data}``; a few
(open alerts, product create/update) answer with the bare payload.

It is internal to pyrfid and may change at any time.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from pyrfid._transport import Transport
from pyrfid.exceptions import RfidApiError

_logger = logging.getLogger(__name__)

TModel = TypeVar("TModel", bound=BaseModel)


def unwrap_envelope(*, endpoint: str, response: Any) -> Any:
    """Return ``data`` from a wrapped response.

    Raises :class:`RfidApiError` when the backend flags ``success: false``.
    """
    if not isinstance(response, dict):
        raise RfidApiError(f"{endpoint} returned a non-object response", endpoint=endpoint)
    message = response.get("message")
    if response.get("success") is False:
        text = message if isinstance(message, str) and message else None
        raise RfidApiError(
            f"{endpoint} failed: message={message}",
            endpoint=endpoint,
            server_message=text,
        )
    return response.get("data")


def parse_model(model: type[TModel], *, endpoint: str, data: Any) -> TModel:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise RfidApiError(f"{endpoint} returned an unexpected payload: {exc}", endpoint=endpoint) from exc


def parse_model_list(model: type[TModel], *, endpoint: str, data: Any) -> list[TModel]:
    """Validate a list payload, skipping items that do not fit the model."""
    if not isinstance(data, list):
        raise RfidApiError(f"{endpoint} returned a non-list payload", endpoint=endpoint)
    items: list[TModel] = []
    for entry in data:
        try:
            items.append(model.model_validate(entry))
        except ValidationError:
            _logger.debug("Skipping malformed %s item from %s", model.__name__, endpoint, exc_info=True)
    return items


async def request_wrapped(
    transport: Transport,
    method: str,
    endpoint: str,
    *,
    params: Mapping[str, Any] | None = None,
    body: Any = None,
) -> Any:
    """Send a request to an endpoint that wraps its payload and return ``data``."""
    response = await transport.request_json(method, endpoint, params=params, body=body)
    return unwrap_envelope(endpoint=endpoint, response=response)


async def request_ack(
    transport: Transport,
    method: str,
    endpoint: str,
    *,
    body: Any = None,
) -> str:
    """Send a command whose reply is ``{success, message}``; return the message."""
    response = await transport.request_json(method, endpoint, body=body)
    if response is None:
        return ""
    unwrap_envelope(endpoint=endpoint, response=response)
    message = response.get("message")
    return message if isinstance(message, str) else ""
