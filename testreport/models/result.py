"""Canonical test result model shared by all parsers.

A parsed document becomes a ``TestRunResult`` holding suites, which hold
groups, which hold cases. Durations are in milliseconds.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

TestExecutionResult = Literal["success", "failed", "skipped"]

# Lower rank sorts first
SEVERITY_RANK: dict[str, int] = {"failed": 0, "skipped": 1, "success": 2}


def aggregate_result(results: Sequence[TestExecutionResult]) -> TestExecutionResult:
    """Derive a parent status from the statuses of all its cases.

    ``success`` when every case succeeded (or there are none), otherwise
    ``failed`` when any case failed, otherwise ``skipped``.
    """
    if all(r == "success" for r in results):
        return "success"
    if any(r == "failed" for r in results):
        return "failed"
    return "skipped"


def _sort_key(
    result: TestExecutionResult, name: str | None, *ties: Any
) -> tuple[Any, ...]:
    return SEVERITY_RANK[result], name or "", *ties


def _case_sort_key(case: "TestCaseResult") -> tuple[Any, ...]:
    error = case.error or TestCaseError()
    return _sort_key(
        case.result,
        case.name,
        case.time,
        error.message or "",
        error.details or "",
        error.path or "",
        error.line or 0,
    )


@dataclass(frozen=True, kw_only=True)
class TestCaseError:
    """Diagnostic details attached to a failed test case."""

    __test__ = False

    path: str | None = None
    line: int | None = None
    message: str | None = None
    details: str | None = None


@dataclass(frozen=True, kw_only=True)
class TestCaseResult:
    """Outcome of a single test case or scenario."""

    __test__ = False

    name: str
    result: TestExecutionResult
    time: float = 0
    error: TestCaseError | None = None

    def __post_init__(self) -> None:
        if self.time < 0:
            raise ValueError(f"Negative duration for test case '{self.name}'")
        if self.error is not None and self.result != "failed":
            raise ValueError(
                f"Error attached to test case '{self.name}' with result {self.result}"
            )


@dataclass(kw_only=True)
class TestGroupResult:
    """Cases sharing a logical context, such as a scenario or title prefix."""

    __test__ = False

    name: str | None
    tests: list[TestCaseResult] = field(default_factory=list)

    @property
    def passed(self) -> Sequence[TestCaseResult]:
        return [t for t in self.tests if t.result == "success"]

    @property
    def failed(self) -> Sequence[TestCaseResult]:
        return [t for t in self.tests if t.result == "failed"]

    @property
    def skipped(self) -> Sequence[TestCaseResult]:
        return [t for t in self.tests if t.result == "skipped"]

    @property
    def result(self) -> TestExecutionResult:
        return aggregate_result([t.result for t in self.tests])

    @property
    def time(self) -> float:
        return sum(t.time for t in self.tests)

    def sort(self) -> None:
        """Order cases by severity, then by name.

        Cases with the same name are ordered by duration, then by error.
        """
        self.tests.sort(key=_case_sort_key)


@dataclass(kw_only=True)
class TestSuiteResult:
    """All groups parsed from one source file or feature."""

    __test__ = False

    name: str
    groups: list[TestGroupResult] = field(default_factory=list)

    @property
    def cases(self) -> Sequence[TestCaseResult]:
        return [t for g in self.groups for t in g.tests]

    @property
    def tests(self) -> int:
        return len(self.cases)

    @property
    def passed(self) -> int:
        return sum(len(g.passed) for g in self.groups)

    @property
    def failed(self) -> int:
        return sum(len(g.failed) for g in self.groups)

    @property
    def skipped(self) -> int:
        return sum(len(g.skipped) for g in self.groups)

    @property
    def result(self) -> TestExecutionResult:
        return aggregate_result([t.result for t in self.cases])

    @property
    def time(self) -> float:
        return sum(g.time for g in self.groups)

    def sort(self, deep: bool) -> None:
        """Order groups by severity, then by name.

        With ``deep`` the cases inside each group are ordered as well.
        """
        if deep:
            for group in self.groups:
                group.sort()
        self.groups.sort(
            key=lambda g: _sort_key(g.result, g.name, g.time, len(g.tests))
        )


@dataclass(kw_only=True)
class TestRunResult:
    """Everything parsed from one result document."""

    __test__ = False

    path: str
    suites: list[TestSuiteResult] = field(default_factory=list)
    time: float = 0

    @property
    def cases(self) -> Sequence[TestCaseResult]:
        return [t for s in self.suites for t in s.cases]

    @property
    def tests(self) -> int:
        return sum(s.tests for s in self.suites)

    @property
    def passed(self) -> int:
        return sum(s.passed for s in self.suites)

    @property
    def failed(self) -> int:
        return sum(s.failed for s in self.suites)

    @property
    def skipped(self) -> int:
        return sum(s.skipped for s in self.suites)

    @property
    def result(self) -> TestExecutionResult:
        return aggregate_result([t.result for t in self.cases])

    @property
    def failed_suites(self) -> Sequence[TestSuiteResult]:
        return [s for s in self.suites if s.result == "failed"]

    def sort(self, deep: bool) -> None:
        """Reorder suites (and, with ``deep``, groups and cases) canonically.

        Ordering is by severity (failed, skipped, success) then by name,
        with duration breaking ties. Calling it again leaves the run unchanged.
        """
        if deep:
            for suite in self.suites:
                suite.sort(deep)
        self.suites.sort(key=lambda s: _sort_key(s.result, s.name, s.time, s.tests))

    def to_summary(self) -> dict[str, Any]:
        """Summarize the run as a JSON-ready mapping."""
        return {
            "path": self.path,
            "result": self.result,
            "tests": self.tests,
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
            "time": self.time,
        }
