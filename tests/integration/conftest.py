"""Fixtures for integration tests."""

from pathlib import Path
from typing import Protocol

import pytest

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


class ReadFixtureFn(Protocol):
    """Protocol for fixture reading function."""

    def __call__(self, name: str) -> str:
        """Return the content of a fixture file."""


@pytest.fixture
def read_fixture() -> ReadFixtureFn:
    """Read a fixture file relative to the fixtures directory."""

    def _read(name: str) -> str:
        return (FIXTURES_DIR / name).read_text(encoding="utf-8")

    return _read
