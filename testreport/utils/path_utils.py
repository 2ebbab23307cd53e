"""Normalization of file paths reported by test runners."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

log = logging.getLogger(__name__)


def normalize_file_path(path: str) -> str:
    """Trim a path and convert backslashes to forward slashes."""
    if not path:
        return path
    return path.strip().replace("\\", "/")


def normalize_dir_path(path: str, add_trailing_slash: bool) -> str:
    """Normalize a directory path, optionally ensuring a trailing slash."""
    if not path:
        return path
    path = normalize_file_path(path)
    if add_trailing_slash and not path.endswith("/"):
        path += "/"
    return path


def get_base_path(path: str, tracked_files: Sequence[str]) -> str | None:
    """Infer the project root from a path reported by a test runner.

    Args:
        path: Normalized path as it appears in the results document
            (e.g., "/home/runner/work/repo/features/login.feature")
        tracked_files: Paths of known source files relative to the project
            root (e.g., ["features/login.feature"])

    Returns:
        The prefix to strip (e.g., "/home/runner/work/repo/"), an empty string
        when the path is already a tracked relative path, or None when no
        tracked file matches.

    """
    if path in tracked_files:
        return ""

    longest = ""
    for file in tracked_files:
        if len(file) <= len(longest) or not path.endswith(file):
            continue
        # The match must start at a path component boundary
        if len(path) == len(file) or path[-len(file) - 1] == "/":
            longest = file

    if not longest:
        return None

    return path[: len(path) - len(longest)]


@dataclass(kw_only=True)
class PathResolver:
    """Converts reported paths to paths relative to the project root.

    When no explicit work directory is configured, the root is inferred from
    the first path resolved and reused for every later path, even if a later
    path would infer a different root.
    """

    work_dir: str | None = None
    tracked_files: Sequence[str] = ()
    _assumed_work_dir: str | None = field(default=None, init=False, repr=False)
    _inferred: bool = field(default=False, init=False, repr=False)

    def relativize(self, path: str) -> str:
        """Return ``path`` relative to the work directory when possible."""
        path = normalize_file_path(path)
        if not path:
            return path
        work_dir = self.get_work_dir(path)
        if work_dir and path.startswith(work_dir):
            path = path[len(work_dir) :]
        return path

    def get_work_dir(self, path: str) -> str | None:
        """Return the configured work directory or the memoized inference."""
        if self.work_dir is not None:
            return normalize_dir_path(self.work_dir, add_trailing_slash=True)

        if not self._inferred:
            self._assumed_work_dir = get_base_path(path, self.tracked_files)
            self._inferred = True
            log.debug("Inferred work directory %r from %s", self._assumed_work_dir, path)

        return self._assumed_work_dir
