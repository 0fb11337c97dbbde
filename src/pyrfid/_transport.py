"""HTTP transport for the inventory REST API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyrfid._constants import USER_AGENT
from pyrfid.config import RfidConfig
from pyrfid.exceptions import RfidTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request_json(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        ...


def _extract_server_message(text: str) -> str | None:
    """Pull the ``message`` field out of a JSON error body, if any."""
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return None
    if isinstance(parsed, dict):
        message = parsed.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


class HttpTransport:
    """JSON-over-HTTP transport backed by an ``aiohttp.ClientSession``."""

    def __init__(self, config: RfidConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout or None)

    async def request_json(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Returns ``None`` for empty bodies. Non-2xx statuses raise
        :class:`RfidTransportError` carrying the server's ``message``
        field when the error body is JSON.
        """
        url = f"{self._config.base_url}{endpoint}"
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }

        _logger.debug("%s %s params=%s", method, url, dict(params) if params else None)

        try:
            async with self._http.request(
                method,
                url,
                params=params,
                json=body,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                raw = await resp.read()
                text = raw.decode("utf-8", errors="replace")
                if resp.status >= 400:
                    raise RfidTransportError(
                        f"HTTP {resp.status} from {method} {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                        server_message=_extract_server_message(text),
                    )
        except RfidTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise RfidTransportError(
                f"Request to {method} {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        if not text.strip():
            return None

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise RfidTransportError(
                f"Invalid JSON from {method} {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc
