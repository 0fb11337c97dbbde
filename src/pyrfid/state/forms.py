"""Product and shelf form lifecycle.

Both forms follow the same machine::

    closed -> open(mode) -> submitting -> closed
                               |
                               +--> open   (request failed, user may retry)

Values are validated locally with the pydantic request model before any
request is issued; failures are kept per field.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from pyrfid.models._base import RfidRequestModel
from pyrfid.state.cells import ChangeCallback, Cell

TRequest = TypeVar("TRequest", bound=RfidRequestModel)


class FormPhase(enum.StrEnum):
    CLOSED = "closed"
    OPEN = "open"
    SUBMITTING = "submitting"


class FormMode(enum.StrEnum):
    NEW_FROM_EVENT = "new_from_event"
    ADD = "add"
    EDIT = "edit"


class FormState(Generic[TRequest]):
    """State of one form; publishes its name on every transition or edit."""

    def __init__(
        self,
        name: str,
        request_model: type[TRequest],
        defaults: Mapping[str, Any],
        on_change: ChangeCallback | None = None,
    ) -> None:
        self._request_model = request_model
        self._defaults = dict(defaults)
        self._cell: Cell[int] = Cell(name, 0, on_change)
        self.phase = FormPhase.CLOSED
        self.mode = FormMode.ADD
        self.editing_id: int | None = None
        self.location: str | None = None
        self.values: dict[str, Any] = dict(defaults)
        self.field_errors: dict[str, str] = {}

    @property
    def name(self) -> str:
        return self._cell.name

    @property
    def is_open(self) -> bool:
        return self.phase is not FormPhase.CLOSED

    @property
    def saving(self) -> bool:
        return self.phase is FormPhase.SUBMITTING

    def _touch(self) -> None:
        self._cell.set(self._cell.value + 1)

    def open(
        self,
        mode: FormMode,
        *,
        values: Mapping[str, Any] | None = None,
        editing_id: int | None = None,
        location: str | None = None,
    ) -> None:
        self.phase = FormPhase.OPEN
        self.mode = mode
        self.editing_id = editing_id
        self.location = location
        self.values = {**self._defaults, **(values or {})}
        self.field_errors = {}
        self._touch()

    def close(self) -> None:
        self.phase = FormPhase.CLOSED
        self.field_errors = {}
        self._touch()

    def update(self, **values: Any) -> None:
        """Apply user edits; unknown field names are rejected."""
        unknown = set(values) - set(self._defaults)
        if unknown:
            raise ValueError(f"unknown {self.name} field(s): {', '.join(sorted(unknown))}")
        self.values.update(values)
        for key in values:
            self.field_errors.pop(key, None)
        self._touch()

    def validate(self, extra: Mapping[str, Any] | None = None) -> TRequest | None:
        """Build the request model, or record field errors and return ``None``."""
        try:
            request = self._request_model.model_validate({**self.values, **(extra or {})})
        except ValidationError as exc:
            errors: dict[str, str] = {}
            for error in exc.errors():
                loc = error.get("loc") or ("__root__",)
                field = self._request_model.field_for_alias(str(loc[0]))
                errors.setdefault(field, error.get("msg", "invalid value"))
            self.field_errors = errors
            self._touch()
            return None
        self.field_errors = {}
        return request

    def begin_submit(self) -> bool:
        """Enter ``submitting``; refused unless the form is open and idle."""
        if self.phase is not FormPhase.OPEN:
            return False
        self.phase = FormPhase.SUBMITTING
        self._touch()
        return True

    def fail(self) -> None:
        """Return to ``open`` after a failed request so the user can retry."""
        if self.phase is FormPhase.SUBMITTING:
            self.phase = FormPhase.OPEN
            self._touch()
