"""
cms/models/values.py -- Stored property values as a tagged variant.

An upload property's stored value can be a structured payload (a dict, or
JSON text holding an object), a bare legacy string, or nothing at all.
``read_stored_value`` decides which once, so callers match on the variant
instead of probing the raw value repeatedly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from cms.utils import parse_json_object


@dataclass(frozen=True)
class Structured:
    """A structured payload such as ``{"src": "...", "crops": [...]}``."""

    payload: dict[str, Any]

    @property
    def has_src(self) -> bool:
        return "src" in self.payload

    @property
    def src(self) -> str:
        value = self.payload.get("src")
        return "" if value is None else str(value)


@dataclass(frozen=True)
class Scalar:
    """A bare, non-empty string value (the legacy upload format)."""

    text: str


@dataclass(frozen=True)
class Absent:
    """No value: ``None`` or a blank string."""


@dataclass(frozen=True)
class Opaque:
    """A non-string value that is not a payload either (a list, a number)."""

    value: Any


StoredValue = Union[Structured, Scalar, Absent, Opaque]


def read_stored_value(value: Any) -> StoredValue:
    """Classify a raw property value.

    Strings holding a JSON object are read as ``Structured``.  Whitespace-only
    strings count as ``Absent``.  Any other non-string value is ``Opaque``.
    """
    if value is None:
        return Absent()
    if isinstance(value, dict):
        return Structured(value)
    if isinstance(value, str):
        if not value.strip():
            return Absent()
        payload = parse_json_object(value)
        if payload is not None:
            return Structured(payload)
        return Scalar(value)
    return Opaque(value)
