"""Shelf alert model."""

from __future__ import annotations

from datetime import datetime

from pyrfid.models._base import RfidBaseModel
from pyrfid.models.enums import AlertType


class Alert(RfidBaseModel):
    """An open or resolved shelf alert.

    ``alert_type`` stays a plain string so types added server-side
    still render; use :attr:`kind` for comparisons.
    """

    id: int
    shelf_id: int | None = None
    shelf_name: str = ""
    product_id: int | None = None
    product_name: str | None = None
    alert_type: str = ""
    status: str = ""
    created_at: datetime | None = None

    @property
    def kind(self) -> AlertType:
        return AlertType(self.alert_type or "UNKNOWN")
