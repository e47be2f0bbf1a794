"""Deterministic JSON serialization.

Used to build cache keys, so the same logical value must always produce the same
text: mapping keys are sorted, separators are tight and output is ASCII only.
"""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol
from uuid import UUID

from pydantic import BaseModel

from commonkit.core.exceptions import SerializationError

__all__ = [
    "CanonicalJsonSerializer",
    "Serializer",
    "canonical_dumps",
    "to_json",
]


class Serializer(Protocol):
    """Turns a value into deterministic text.

    Implementations should raise :class:`SerializationError` when a value cannot
    be serialized. The cache key functions wrap ``TypeError`` / ``ValueError``
    from other serializers into one.
    """

    def dumps(self, value: Any) -> str: ...


def _json_default(value: Any) -> Any:
    """Convert supported non-JSON types into JSON-friendly values."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if is_dataclass(value) and not isinstance(value, type):
        # shallow; nested members go back through the encoder cycle check
        return {f.name: getattr(value, f.name) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    if isinstance(value, (set, frozenset)):
        # set members have no total order (frozensets compare by subset), so
        # order them by their canonical text
        return sorted(value, key=_canonical_text)
    raise TypeError(f"Type {type(value).__name__} not serializable")


def to_json(value: Any, **options: Any) -> str:
    """Serialize ``value`` to JSON text.

    Extra keyword options are forwarded to :func:`json.dumps`. Unlike
    :func:`canonical_dumps` the key order is whatever the value carries.
    """
    options.setdefault("default", _json_default)
    try:
        return json.dumps(value, **options)
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationError(f"cannot serialize {type(value).__name__}: {exc}") from exc


_CANONICAL_OPTIONS: dict[str, Any] = {
    "sort_keys": True,
    "separators": (",", ":"),
    "ensure_ascii": True,
    "allow_nan": False,
    "check_circular": True,
}


def _canonical_text(value: Any) -> str:
    return json.dumps(value, default=_json_default, **_CANONICAL_OPTIONS)


class CanonicalJsonSerializer:
    """JSON serializer whose output is stable across calls and interpreter runs."""

    def dumps(self, value: Any) -> str:
        return to_json(value, **_CANONICAL_OPTIONS)


_DEFAULT_SERIALIZER = CanonicalJsonSerializer()


def canonical_dumps(value: Any) -> str:
    """Return deterministic JSON with sorted keys and tight separators."""
    return _DEFAULT_SERIALIZER.dumps(value)
