"""Domain-level exception hierarchy for the helper modules."""

from __future__ import annotations


class DomainError(Exception):
    """Base class for library-specific failures."""


class SerializationError(DomainError):
    """Raised when a value cannot be canonically serialized.

    The original error (cycle, unsupported type, non-finite float) is kept as
    ``__cause__``.
    """
