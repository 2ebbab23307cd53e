"""Abstract base class for test result parsers."""

import json
from abc import ABC, abstractmethod
from typing import Any

from testreport.models.result import TestRunResult


class MalformedInputError(ValueError):
    """Raised when a results document cannot be deserialized."""


class TestParser(ABC):
    """Contract implemented by every result document dialect.

    A parser converts one raw document into the canonical result tree. It
    performs no I/O: the caller reads the document and passes its content.
    """

    __test__ = False

    @abstractmethod
    async def parse(self, path: str, content: str) -> TestRunResult:
        """Parse a results document into a sorted run result.

        Args:
            path: Path of the document, used for the run result and errors
            content: Raw document text

        Returns:
            Fully populated and sorted run result

        Raises:
            MalformedInputError: If the document cannot be deserialized

        """


def load_json_document(path: str, content: str) -> Any:
    """Deserialize a JSON results document.

    Raises:
        MalformedInputError: With the document path and decoder message

    """
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Invalid JSON at {path}\n\n{e}") from e
