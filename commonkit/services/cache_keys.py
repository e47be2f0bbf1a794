"""Cache key generation.

Keys look like ``[prefix_]TypeName_HASH`` where ``HASH`` is eight upper-case hex
digits computed over the canonical JSON form of the value.

``to_cache_key_stable`` uses 32-bit FNV-1a and gives the same key in every
interpreter run, so it is the one to use for shared or persisted caches.
``to_cache_key_fast`` relies on the built-in ``hash`` of the serialized text;
string hashing is salted per process (see ``PYTHONHASHSEED``), so its keys are
only meaningful inside a single process.
"""

from __future__ import annotations

import struct
from typing import Any

from commonkit.core.config import Settings, get_settings
from commonkit.core.exceptions import SerializationError
from commonkit.logging import get_logger
from commonkit.utils.serialization import CanonicalJsonSerializer, Serializer

logger = get_logger(__name__)

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
_MASK_32 = 0xFFFFFFFF

_DEFAULT_SERIALIZER = CanonicalJsonSerializer()


def _utf16_code_units(text: str) -> tuple[int, ...]:
    data = text.encode("utf-16-le", "surrogatepass")
    return struct.unpack(f"<{len(data) // 2}H", data)


def fnv1a_32(text: str) -> int:
    """32-bit FNV-1a over the UTF-16 code units of ``text``."""
    h = FNV_OFFSET_BASIS
    for unit in _utf16_code_units(text):
        h ^= unit
        h = (h * FNV_PRIME) & _MASK_32
    return h


def type_tag(value: Any) -> str:
    return type(value).__name__


def _serialize(value: Any, serializer: Serializer | None) -> str:
    try:
        return (serializer or _DEFAULT_SERIALIZER).dumps(value)
    except SerializationError as exc:
        logger.warning("cache_key_serialization_failed", type_tag=type_tag(value), error=str(exc))
        raise
    except (TypeError, ValueError, RecursionError) as exc:
        logger.warning("cache_key_serialization_failed", type_tag=type_tag(value), error=str(exc))
        raise SerializationError(f"cannot serialize {type_tag(value)}: {exc}") from exc


def _compose(tag: str, digest: int, prefix: str | None) -> str:
    key = f"{tag}_{digest & _MASK_32:08X}"
    return f"{prefix}_{key}" if prefix else key


def to_cache_key_stable(
    value: Any,
    prefix: str | None = None,
    *,
    type_name: str | None = None,
    serializer: Serializer | None = None,
) -> str:
    """Build a cache key that is identical across calls and process restarts.

    ``to_cache_key_stable(person, "App1")`` returns ``"App1_Person_<HASH>"``.
    ``type_name`` replaces the tag derived from ``type(value)``, e.g. when a plain
    dict stands in for a model. Serialization failures raise
    :class:`SerializationError`.
    """
    text = _serialize(value, serializer)
    return _compose(type_name or type_tag(value), fnv1a_32(text), prefix)


def to_cache_key_fast(
    value: Any,
    prefix: str | None = None,
    *,
    type_name: str | None = None,
    serializer: Serializer | None = None,
) -> str:
    """Build a cache key from the built-in string hash.

    Cheaper than :func:`to_cache_key_stable` but NOT reproducible across
    separate interpreter runs.
    """
    text = _serialize(value, serializer)
    return _compose(type_name or type_tag(value), hash(text), prefix)


def cache_key(value: Any, *, settings: Settings | None = None) -> str:
    """Stable key prefixed with ``Settings.cache_key_prefix`` when it is set."""
    settings = settings or get_settings()
    return to_cache_key_stable(value, settings.cache_key_prefix)


fingerprint = to_cache_key_stable


__all__ = [
    "FNV_OFFSET_BASIS",
    "FNV_PRIME",
    "cache_key",
    "fingerprint",
    "fnv1a_32",
    "to_cache_key_fast",
    "to_cache_key_stable",
    "type_tag",
]
