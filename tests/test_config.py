from __future__ import annotations

import pytest

from pyrfid.config import RfidConfig
from pyrfid.exceptions import RfidConfigError


def test_defaults() -> None:
    config = RfidConfig()
    assert config.reconnect_delay == 5.0
    assert config.connect_timeout == 10.0
    assert config.recent_events_limit == 15
    assert config.location_events_limit == 30
    assert config.toast_duration == 10.0
    assert config.esp32_id == "ESP32_STOCK"


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RFID_BASE_URL", "http://inventory.local:8080/")
    monkeypatch.setenv("RFID_WS_URL", "ws://inventory.local:8080/ws/websocket")
    monkeypatch.setenv("RFID_RECONNECT_DELAY", "2.5")
    monkeypatch.setenv("RFID_CONNECT_TIMEOUT", "3")
    monkeypatch.setenv("RFID_RECENT_EVENTS_LIMIT", "20")
    monkeypatch.setenv("RFID_HEARTBEATS", "0,4000")
    monkeypatch.setenv("RFID_PUSH_ENABLED", "off")

    config = RfidConfig.from_env(esp32_id="ESP32_FRONT")

    assert config.base_url == "http://inventory.local:8080"
    assert config.ws_url == "ws://inventory.local:8080/ws/websocket"
    assert config.reconnect_delay == 2.5
    assert config.connect_timeout == 3.0
    assert config.recent_events_limit == 20
    assert config.heartbeats == (0, 4000)
    assert config.push_enabled is False
    assert config.esp32_id == "ESP32_FRONT"


def test_from_env_override_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RFID_PUSH_ENABLED", "no")
    assert RfidConfig.from_env(push_enabled=True).push_enabled is True


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("RFID_RECONNECT_DELAY", "soon"),
        ("RFID_CONNECT_TIMEOUT", "-1"),
        ("RFID_HEARTBEATS", "10000"),
        ("RFID_LOCATION_EVENTS_LIMIT", "0"),
    ],
)
def test_from_env_rejects_bad_values(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(RfidConfigError):
        RfidConfig.from_env()
