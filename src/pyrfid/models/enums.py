"""Enumerations shared by the inventory models."""

from __future__ import annotations

from pyrfid.models._base import RfidEnum


class RfidEventType(RfidEnum):
    """Kind of RFID reader event."""

    NEW_PRODUCT = "NEW_PRODUCT"
    ENTRY = "ENTRY"
    EXIT = "EXIT"
    UNKNOWN = "UNKNOWN"

    @property
    def affects_weight(self) -> bool:
        """Whether the event moves stock on or off a weighed shelf."""
        return self in (RfidEventType.ENTRY, RfidEventType.EXIT)


class Location(RfidEnum):
    """Where a reader is installed."""

    STOCK = "STOCK"
    STORE = "STORE"
    UNKNOWN = "UNKNOWN"


class AlertType(RfidEnum):
    """Shelf alert categories raised by the backend."""

    LOW_WEIGHT = "LOW_WEIGHT"
    OVERLOAD = "OVERLOAD"
    UNKNOWN = "UNKNOWN"

    @property
    def affects_weight(self) -> bool:
        return self in (AlertType.LOW_WEIGHT, AlertType.OVERLOAD)
