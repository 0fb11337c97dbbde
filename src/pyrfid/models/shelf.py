"""Shelf models."""

from __future__ import annotations

from pydantic import Field

from pyrfid.models._base import RfidBaseModel, RfidRequestModel


class Shelf(RfidBaseModel):
    """A weighed store shelf."""

    id: int
    name: str = ""
    max_weight: float = 0.0
    min_threshold: float = 0.0
    current_weight: float = 0.0


class ShelfRequest(RfidRequestModel):
    """Body for ``POST /api/shelf`` and ``PUT /api/shelf/{id}``."""

    name: str = Field(min_length=1, max_length=100)
    max_weight: float = Field(ge=0.1)
    min_threshold: float = Field(ge=0.1)
