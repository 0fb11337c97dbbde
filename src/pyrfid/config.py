"""Client configuration for pyrfid."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyrfid.exceptions import RfidConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _parse_heartbeats(value: str) -> tuple[int, int]:
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        raise RfidConfigError(f"RFID_HEARTBEATS must look like '10000,10000', got {value!r}")
    return int(parts[0]), int(parts[1])


@dataclasses.dataclass(frozen=True)
class RfidConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        REST API base URL (scheme, host and port, no trailing slash).
    ws_url : str
        STOMP-over-WebSocket endpoint. The backend exposes ``/ws`` as a
        SockJS endpoint; its raw WebSocket transport lives at
        ``/ws/websocket``.
    reconnect_delay : float
        Fixed delay in seconds between push reconnect attempts. Retries
        are unbounded.
    connect_timeout : float
        Seconds to wait for the STOMP handshake before the attempt counts
        as failed and a reconnect is scheduled. ``0`` disables it.
    heartbeats : tuple[int, int]
        STOMP heart-beat (outgoing, incoming) in milliseconds.
    push_enabled : bool
        Start the push listener when a dashboard starts.
    request_timeout : float
        Total timeout in seconds for a single REST call. ``0`` disables it.
    recent_events_limit : int
        Number of events requested for the recent-events list.
    location_events_limit : int
        Number of events requested before filtering by location.
    toast_duration : float
        Seconds an alert toast stays visible.
    form_close_delay : float
        Seconds a form success message is shown before the form closes.
    message_clear_delay : float
        Seconds before delete/resolve banners are cleared.
    cart_message_clear_delay : float
        Seconds before the "added to cart" message is cleared.
    sale_message_clear_delay : float
        Seconds before the sale confirmation is cleared.
    esp32_id : str
        Reader identifier attached to product registrations.
    """

    base_url: str = "http://localhost:8080"
    ws_url: str = "ws://localhost:8080/ws/websocket"
    reconnect_delay: float = 5.0
    connect_timeout: float = 10.0
    heartbeats: tuple[int, int] = (10000, 10000)
    push_enabled: bool = True
    request_timeout: float = 30.0
    recent_events_limit: int = 15
    location_events_limit: int = 30
    toast_duration: float = 10.0
    form_close_delay: float = 1.5
    message_clear_delay: float = 3.0
    cart_message_clear_delay: float = 2.0
    sale_message_clear_delay: float = 5.0
    esp32_id: str = "ESP32_STOCK"

    def __post_init__(self) -> None:
        if self.reconnect_delay < 0:
            raise RfidConfigError("reconnect_delay must be >= 0")
        if self.connect_timeout < 0:
            raise RfidConfigError("connect_timeout must be >= 0")
        if self.recent_events_limit < 1 or self.location_events_limit < 1:
            raise RfidConfigError("event limits must be >= 1")

    @classmethod
    def from_env(cls, **overrides: Any) -> RfidConfig:
        """Create configuration from ``RFID_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "RFID_BASE_URL": "base_url",
            "RFID_WS_URL": "ws_url",
            "RFID_ESP32_ID": "esp32_id",
        }
        _ENV_FLOAT_MAP = {
            "RFID_RECONNECT_DELAY": "reconnect_delay",
            "RFID_CONNECT_TIMEOUT": "connect_timeout",
            "RFID_REQUEST_TIMEOUT": "request_timeout",
            "RFID_TOAST_DURATION": "toast_duration",
            "RFID_FORM_CLOSE_DELAY": "form_close_delay",
            "RFID_MESSAGE_CLEAR_DELAY": "message_clear_delay",
            "RFID_CART_MESSAGE_CLEAR_DELAY": "cart_message_clear_delay",
            "RFID_SALE_MESSAGE_CLEAR_DELAY": "sale_message_clear_delay",
        }
        _ENV_INT_MAP = {
            "RFID_RECENT_EVENTS_LIMIT": "recent_events_limit",
            "RFID_LOCATION_EVENTS_LIMIT": "location_events_limit",
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val.rstrip("/") if field_name == "base_url" else val

        try:
            for env_key, field_name in _ENV_FLOAT_MAP.items():
                val = env.get(env_key)
                if val is not None:
                    config_kwargs[field_name] = float(val)
            for env_key, field_name in _ENV_INT_MAP.items():
                val = env.get(env_key)
                if val is not None:
                    config_kwargs[field_name] = int(val)
        except ValueError as exc:
            raise RfidConfigError(f"Invalid numeric RFID_* environment value: {exc}") from exc

        heartbeats_env = env.get("RFID_HEARTBEATS")
        if heartbeats_env is not None:
            config_kwargs["heartbeats"] = _parse_heartbeats(heartbeats_env)

        if "push_enabled" not in overrides:
            config_kwargs["push_enabled"] = _env_bool(env.get("RFID_PUSH_ENABLED"), True)

        config_kwargs.update(overrides)
        return cls(**config_kwargs)
