"""Observable state cells.

A :class:`Cell` is an explicit mutable field with a name. Every change
invokes the owner's ``on_change`` callback with that name, so a renderer
can re-read just the cells that moved.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

from pyrfid.state.policy import should_accept_snapshot

T = TypeVar("T")

ChangeCallback = Callable[[str], None]


def _noop(_name: str) -> None:
    return None


class Cell(Generic[T]):
    """A named value with change notification and fetch bookkeeping."""

    def __init__(self, name: str, initial: T, on_change: ChangeCallback | None = None) -> None:
        self.name = name
        self._value = initial
        self._on_change = on_change or _noop
        self._issued = 0
        self._applied: int | None = None
        self._in_flight = 0

    def __repr__(self) -> str:
        return f"Cell({self.name!r}, {self._value!r})"

    @property
    def value(self) -> T:
        return self._value

    @property
    def is_loading(self) -> bool:
        """Whether at least one fetch for this cell has not settled yet."""
        return self._in_flight > 0

    def set(self, value: T) -> None:
        if value == self._value:
            return
        self._value = value
        self._on_change(self.name)

    def begin_fetch(self) -> int:
        """Register an outgoing fetch and return its ticket."""
        self._issued += 1
        self._in_flight += 1
        if self._in_flight == 1:
            self._on_change(self.name)
        return self._issued

    def end_fetch(self) -> None:
        self._in_flight = max(0, self._in_flight - 1)
        if self._in_flight == 0:
            self._on_change(self.name)

    def apply_snapshot(self, ticket: int, value: T) -> bool:
        """Replace the value with a fetched snapshot unless a newer one already landed."""
        if not should_accept_snapshot(applied_ticket=self._applied, incoming_ticket=ticket):
            return False
        self._applied = ticket
        self.set(value)
        return True


class MarkerCell(Cell[frozenset[int]]):
    """Per-entity in-flight markers (e.g. ids of products being deleted)."""

    def __init__(self, name: str, on_change: ChangeCallback | None = None) -> None:
        super().__init__(name, frozenset(), on_change)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self.value

    def mark(self, entity_id: int) -> None:
        self.set(self.value | {entity_id})

    def clear(self, entity_id: int) -> None:
        self.set(self.value - {entity_id})
