"""
Payload helpers: JSON-safe conversion of field values and error-bag normalization.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel

FIELDS_PREFIX = "fields."


class _Missing:
    """Marker for "no value". Dropped from dicts, becomes None inside lists."""

    _instance = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def _iso(value: date) -> str:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return value.isoformat()


def to_plain(value: Any) -> Any:
    """Recursively convert ``value`` into something ``json.dumps`` accepts.

    A mapping whose only key is ``"value"`` is treated as a wrapper around a
    single value and unwrapped. A plain dict that happens to have exactly that
    shape is unwrapped too; the two cannot be told apart.

    Enums give their value, ``Decimal`` a float, ``UUID`` a string and sets a
    list. Other objects are returned unchanged and must be JSON-encodable.
    """
    if value is None or value is MISSING or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Enum):
        return to_plain(value.value)
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (set, frozenset)):
        return to_plain(sorted(value, key=repr))
    if isinstance(value, (list, tuple)):
        out = []
        for item in value:
            converted = to_plain(item)
            out.append(None if converted is MISSING else converted)
        return out
    if isinstance(value, date):
        return _iso(value)
    if isinstance(value, BaseModel):
        return to_plain(value.model_dump())
    if isinstance(value, Mapping):
        if len(value) == 1 and "value" in value:
            return to_plain(value["value"])
        result: dict[str, Any] = {}
        for key, item in value.items():
            converted = to_plain(item)
            if converted is not MISSING:
                result[key] = converted
        return result
    return value


def normalize_errors(raw: Any) -> dict[str, list[str]]:
    """Turn a server error body into ``{field_name: [message, ...]}``.

    Accepts either ``{"errors": ...}`` or the error mapping itself. A list is
    keyed by index, so its plain-string items carry no messages. Keys lose
    a leading ``fields.`` prefix; keys that collide after stripping have their
    messages concatenated. Non-list values give an empty list and non-string
    messages are dropped. Never raises.
    """
    bag: dict[str, list[str]] = {}
    source = raw
    if isinstance(raw, Mapping) and isinstance(raw.get("errors"), (Mapping, list)):
        source = raw["errors"]
    if isinstance(source, list):
        source = {str(index): item for index, item in enumerate(source)}
    if not isinstance(source, Mapping):
        return bag
    for key, messages in source.items():
        name = str(key)
        if name.startswith(FIELDS_PREFIX):
            name = name[len(FIELDS_PREFIX):]
        texts = [m for m in messages if isinstance(m, str)] if isinstance(messages, list) else []
        bag.setdefault(name, []).extend(texts)
    return bag


def is_empty(value: Any) -> bool:
    """True for the values a required field must not hold."""
    if value is None or value is MISSING:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False
