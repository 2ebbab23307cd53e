"""Defensive accessors for untyped raw documents."""

from collections.abc import Mapping, Sequence
from typing import Any


def get_list(entry: Any, key: str) -> Sequence[Mapping[str, Any]]:
    """Return the objects stored in a list under ``key``, or nothing.

    Non-object items of the list are dropped.
    """
    if not isinstance(entry, Mapping):
        return []
    value = entry.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def get_str(entry: Any, key: str) -> str | None:
    """Return the non-empty string stored under ``key``."""
    if not isinstance(entry, Mapping):
        return None
    value = entry.get(key)
    if isinstance(value, str) and value:
        return value
    return None


def get_text(entry: Any, key: str) -> str | None:
    """Return free text stored under ``key``.

    Some runners split long messages into a list of lines; those are joined
    with newlines.
    """
    if isinstance(entry, Mapping) and isinstance(value := entry.get(key), list):
        lines = [line for line in value if isinstance(line, str)]
        return "\n".join(lines) or None
    return get_str(entry, key)


def get_duration(entry: Any, key: str) -> float:
    """Return a non-negative duration, defaulting to 0 when absent or invalid."""
    if not isinstance(entry, Mapping):
        return 0
    value = entry.get(key)
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0
    return value if value >= 0 else 0
