"""Locate the source of an exception in a stack trace."""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from testreport.utils.path_utils import normalize_file_path

# at fn (/abs/path/file.js:12:5)
NODE_FRAME_RE = re.compile(r"\((.*):(\d+):\d+\)$")
# File "/abs/path/file.py", line 12, in fn
PYTHON_FRAME_RE = re.compile(r'File "(.*)", line (\d+)')


@dataclass(frozen=True, kw_only=True)
class ExceptionSource:
    """Location of the first stack frame inside a tracked file."""

    path: str
    line: int


class StackLocator(Protocol):
    """Protocol for stack trace locator functions."""

    def __call__(
        self,
        stack_trace: str,
        tracked_files: Sequence[str],
        relativize: Callable[[str], str],
    ) -> ExceptionSource | None:
        """Return the first frame that points into a tracked file."""


def _iter_frames(stack_trace: str) -> list[tuple[str, str]]:
    frames: list[tuple[str, str]] = []
    for line in stack_trace.splitlines():
        line = line.strip()
        if match := NODE_FRAME_RE.search(line):
            frames.append((match.group(1), match.group(2)))
        elif match := PYTHON_FRAME_RE.search(line):
            frames.append((match.group(1), match.group(2)))
    return frames


def get_exception_source(
    stack_trace: str,
    tracked_files: Sequence[str],
    relativize: Callable[[str], str],
) -> ExceptionSource | None:
    """Find the first stack frame whose file is a tracked source file.

    Node internals and dependencies under node_modules are skipped.
    """
    for file_str, line_str in _iter_frames(stack_trace):
        file_path = normalize_file_path(file_str)
        if file_path.startswith(("internal/", "node:")) or "/node_modules/" in file_path:
            continue

        path = relativize(file_path)
        if not path:
            continue

        if path in tracked_files:
            return ExceptionSource(path=path, line=int(line_str))

    return None
