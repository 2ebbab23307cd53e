"""Loading of parsers from entry points."""

from importlib.metadata import entry_points
from typing import Any

from testreport.parsers.manifest import ParserManifest

ENTRY_POINT_GROUP = "testreport.parsers"


class ParserNotFoundError(Exception):
    """Raised when a parser is not found."""


def available_parsers() -> list[str]:
    """Return the keys of all registered parsers, sorted."""
    return sorted(e.name for e in entry_points(group=ENTRY_POINT_GROUP))


def load_parser_manifest(key: str) -> ParserManifest[Any]:
    """Load a parser manifest by key.

    Args:
        key: The parser key as registered in pyproject.toml
             (e.g., "behave-json", "mocha-json")

    Returns:
        The parser manifest instance

    Raises:
        ParserNotFoundError: If no parser with the given key is found

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)

    for entry in entries:
        if entry.name == key:
            manifest: ParserManifest[Any] = entry.load()
            return manifest

    raise ParserNotFoundError(
        f"Parser '{key}' not found. Available parsers: {available_parsers()}"
    )
