"""Time-bounded transient values (toasts, banner messages).

An :class:`ExpiringSlot` holds at most one value and at most one pending
clear timer. Showing a new value cancels the previous timer first, so a
superseded clear can never wipe the newer value.
"""

from __future__ import annotations

import asyncio
from typing import Generic, TypeVar

from pyrfid.state.cells import Cell

T = TypeVar("T")


class ExpiringSlot(Generic[T]):
    def __init__(self, cell: Cell[T | None]) -> None:
        self._cell = cell
        self._handle: asyncio.TimerHandle | None = None

    @property
    def value(self) -> T | None:
        return self._cell.value

    @property
    def has_pending_clear(self) -> bool:
        return self._handle is not None

    def show(self, value: T, ttl: float | None = None) -> None:
        """Replace the current value; clear it after *ttl* seconds when given."""
        self._cancel()
        self._cell.set(value)
        if ttl is not None:
            loop = asyncio.get_running_loop()
            self._handle = loop.call_later(max(ttl, 0.0), self._expire)

    def clear(self) -> None:
        self._cancel()
        self._cell.set(None)

    def close(self) -> None:
        """Drop the pending timer without touching the value."""
        self._cancel()

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _expire(self) -> None:
        self._handle = None
        self._cell.set(None)
