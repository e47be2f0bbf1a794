from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import TypeVar

E = TypeVar("E", bound=Enum)


def get_enum_values(enum_cls: type[E], ignore: Iterable[E] | None = None) -> list[E]:
    """Members of ``enum_cls`` minus ``ignore``, ordered by member name."""
    excluded = set(ignore or ())
    values = [member for member in enum_cls if member not in excluded]
    return sorted(values, key=lambda member: member.name)


__all__ = ["get_enum_values"]
