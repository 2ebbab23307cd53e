"""Parser for mocha JSON reporter documents."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from testreport.models.options import ParseOptions
from testreport.models.result import (
    TestCaseError,
    TestCaseResult,
    TestExecutionResult,
    TestRunResult,
    TestSuiteResult,
)
from testreport.parsers.assembly import get_or_create_group, get_or_create_suite
from testreport.parsers.base import TestParser, load_json_document
from testreport.parsers.raw import get_duration, get_list, get_str
from testreport.utils.path_utils import PathResolver
from testreport.utils.stack import StackLocator, get_exception_source

log = logging.getLogger(__name__)

# Each collection of the document holds tests of a single outcome
COLLECTIONS: tuple[tuple[str, TestExecutionResult], ...] = (
    ("passes", "success"),
    ("pending", "skipped"),
    ("failures", "failed"),
)


def get_group_name(title: str, full_title: str) -> str | None:
    """Return the describe-block prefix of a test's full title."""
    if full_title == title or not full_title.endswith(title):
        return None
    return full_title[: len(full_title) - len(title)].rstrip() or None


@dataclass(frozen=True, kw_only=True)
class MochaJsonParser(TestParser):
    """Parses mocha ``--reporter json`` output.

    Tests are listed per outcome in ``passes``, ``pending`` and ``failures``.
    Suites are the test files and groups are the describe blocks.
    """

    options: ParseOptions
    resolver: PathResolver = field(repr=False)
    locate: StackLocator = field(default=get_exception_source, repr=False)

    @classmethod
    def from_options(cls, options: ParseOptions) -> "MochaJsonParser":
        """Create a parser with its own path resolver."""
        resolver = PathResolver(
            work_dir=options.work_dir, tracked_files=options.tracked_files
        )
        return cls(options=options, resolver=resolver)

    async def parse(self, path: str, content: str) -> TestRunResult:
        """Parse a mocha JSON document into a sorted run result."""
        document = load_json_document(path, content)
        result = self.get_test_run_result(path, document)
        result.sort(deep=True)
        return result

    def get_test_run_result(self, results_path: str, document: Any) -> TestRunResult:
        """Build the run result from a deserialized document."""
        suites: list[TestSuiteResult] = []

        for key, result in COLLECTIONS:
            for test in get_list(document, key):
                self.process_test(suites, test, result)

        if not suites:
            log.info("No tests found in %s", results_path)

        # stats.duration is not trusted, the sum of parsed tests is used
        time = sum(suite.time for suite in suites)
        return TestRunResult(path=results_path, suites=suites, time=time)

    def process_test(
        self,
        suites: list[TestSuiteResult],
        test: Mapping[str, Any],
        result: TestExecutionResult,
    ) -> None:
        """Append one test to the group of its file and describe block."""
        title = get_str(test, "title") or ""
        full_title = get_str(test, "fullTitle") or title
        suite_path = self.resolver.relativize(get_str(test, "file") or "")

        suite = get_or_create_suite(suites, suite_path)
        group = get_or_create_group(suite, get_group_name(title, full_title))

        error = None
        if result == "failed" and self.options.parse_errors:
            error = self.get_test_case_error(test)

        group.tests.append(
            TestCaseResult(
                name=title,
                result=result,
                time=get_duration(test, "duration"),
                error=error,
            )
        )

    def get_test_case_error(self, test: Mapping[str, Any]) -> TestCaseError | None:
        """Build the error from the test's ``err`` object.

        Without a stack trace the message alone is recorded, and a failure
        with neither gets no error record.
        """
        err = test.get("err")
        message = get_str(err, "message")
        details = get_str(err, "stack")
        if details is None:
            if not message:
                return None
            return TestCaseError(message=message, details=message)

        path = None
        line = None
        source = self.locate(
            details, self.options.tracked_files, self.resolver.relativize
        )
        if source is not None:
            path = source.path
            line = source.line

        return TestCaseError(
            path=path,
            line=line,
            message=message,
            details=details,
        )
