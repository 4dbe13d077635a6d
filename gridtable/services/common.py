"""Common helper functions for the table pipeline.

This module provides reusable utilities for:
- Reading dotted paths out of rows
- Emptiness checks for displayed values
- Name conversion for table keys and component names
- Lenient parsing of request parameters
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

_MISSING = object()
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def data_get(target: Any, path: str | None, default: Any = None) -> Any:
    """Read a value from a nested row using dot notation.

    Args:
        target: Mapping, object, or sequence to read from
        path: Dotted path such as ``company.name`` or ``tags.0``
        default: Returned when any segment is missing

    Returns:
        The value at ``path`` or ``default``
    """
    if path is None or path == "":
        return target
    current = target
    for segment in path.split("."):
        if current is None:
            return default
        if isinstance(current, Mapping):
            current = current.get(segment, _MISSING)
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError):
                current = _MISSING
        else:
            current = getattr(current, segment, _MISSING)
        if current is _MISSING:
            return default
    return current


def is_blank(value: Any) -> bool:
    """Return True for ``None`` and for sized values of length zero."""
    if value is None:
        return True
    try:
        return len(value) == 0
    except TypeError:
        return False


def snake_case(name: str) -> str:
    """Convert ``ContactTable`` or ``Delete Contacts`` to ``contact_table`` / ``delete_contacts``."""
    name = _CAMEL_BOUNDARY.sub("_", name.strip())
    name = re.sub(r"[\s\-]+", "_", name)
    return re.sub(r"_+", "_", name).lower()


def kebab_case(name: str) -> str:
    """Convert ``TextColumn`` to ``text-column``."""
    return snake_case(name).replace("_", "-")


def parse_positive_int(value: Any) -> int | None:
    """Parse a request parameter as an integer greater than zero.

    Returns None for missing, non-numeric, or non-positive input.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return parsed if parsed > 0 else None


def unique_merge(existing: Iterable[str], extra: Iterable[str]) -> list[str]:
    """Append ``extra`` to ``existing`` keeping the first occurrence of each entry."""
    merged: list[str] = []
    for item in [*existing, *extra]:
        if item not in merged:
            merged.append(item)
    return merged


def as_list(value: str | Iterable[str] | None) -> list[str]:
    """Wrap a single string, copy an iterable, and map None to an empty list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)
