"""Base model and enum for inventory API payloads.

Every response model inherits from :class:`RfidBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase API keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that drops ``None`` values so
  the field default is used.
* A ``raw`` dict that captures the original payload.

Enums inherit from :class:`RfidEnum` which adds an ``UNKNOWN`` member
and a ``_missing_`` hook that returns ``UNKNOWN`` for any value without
a mapped member.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class RfidEnum(enum.StrEnum):
    """Base for backend string enums.

    Every subclass **must** define ``UNKNOWN``. Values the API sends that
    have no mapped member resolve to ``UNKNOWN`` instead of raising.
    """

    @classmethod
    def _missing_(cls, value: object) -> RfidEnum:
        if isinstance(value, str):
            upper = value.strip().upper()
            for member in cls:
                if member.value == upper:
                    return member
        unknown: RfidEnum = cls["UNKNOWN"]
        return unknown


class RfidBaseModel(BaseModel):
    """Base for inventory API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Original API payload."""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        """Drop explicit nulls and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned = {key: value for key, value in values.items() if value is not None}
        # Keep a caller-supplied raw when constructing with kwargs.
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned


class RfidRequestModel(BaseModel):
    """Base for request bodies sent to the backend.

    Strings are trimmed and the model dumps camelCase keys via
    :meth:`to_payload`.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
        validate_default=True,
    )

    @classmethod
    def field_for_alias(cls, key: str) -> str:
        """Map a camelCase key (as reported in validation errors) to its field name."""
        for name, info in cls.model_fields.items():
            if info.alias == key:
                return name
        return key

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
