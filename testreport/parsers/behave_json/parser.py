"""Parser for behave JSON result documents."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from testreport.models.options import ParseOptions
from testreport.models.result import (
    TestCaseResult,
    TestRunResult,
    TestSuiteResult,
)
from testreport.parsers.assembly import get_or_create_group
from testreport.parsers.base import TestParser, load_json_document
from testreport.parsers.errors import ErrorExtractor, StepOutcome
from testreport.parsers.raw import get_duration, get_list, get_str, get_text
from testreport.parsers.status import (
    BEHAVE_STATUS_TABLE,
    classify_status,
    roll_up_status,
)
from testreport.utils.path_utils import PathResolver

log = logging.getLogger(__name__)

DEFAULT_SUITE_NAME = "Feature"


@dataclass(frozen=True, kw_only=True)
class BehaveJsonParser(TestParser):
    """Parses behave results: features containing scenarios of steps.

    Expected shape::

        {"features": [{"name": ..., "filename": ..., "scenarios": [
            {"name": ..., "status": ..., "duration": ..., "steps": [
                {"step_type": ..., "name": ..., "status": ..., "text": ...}
            ]}
        ]}]}
    """

    options: ParseOptions
    resolver: PathResolver = field(repr=False)
    extractor: ErrorExtractor = field(repr=False)

    @classmethod
    def from_options(cls, options: ParseOptions) -> "BehaveJsonParser":
        """Create a parser with its own path resolver."""
        resolver = PathResolver(
            work_dir=options.work_dir, tracked_files=options.tracked_files
        )
        extractor = ErrorExtractor(
            tracked_files=options.tracked_files, relativize=resolver.relativize
        )
        return cls(options=options, resolver=resolver, extractor=extractor)

    async def parse(self, path: str, content: str) -> TestRunResult:
        """Parse a behave JSON document into a sorted run result."""
        document = load_json_document(path, content)
        result = self.get_test_run_result(path, document)
        result.sort(deep=True)
        return result

    def get_test_run_result(self, results_path: str, document: Any) -> TestRunResult:
        """Build the run result from a deserialized document."""
        features = document.get("features") if isinstance(document, Mapping) else None
        if not isinstance(features, list):
            log.info("No features found in %s", results_path)
            return TestRunResult(path=results_path)

        suites = [
            self.get_suite(feature)
            for feature in features
            if isinstance(feature, Mapping)
        ]
        time = sum(suite.time for suite in suites)
        return TestRunResult(path=results_path, suites=suites, time=time)

    def get_suite(self, feature: Mapping[str, Any]) -> TestSuiteResult:
        """Build the suite of one feature."""
        if (filename := get_str(feature, "filename")) is not None:
            suite_path = self.resolver.relativize(filename)
        else:
            suite_path = get_str(feature, "name") or DEFAULT_SUITE_NAME

        suite = TestSuiteResult(name=suite_path)
        scenarios = get_list(feature, "scenarios")
        log.debug("Parsing feature %s (%d scenario(s))", suite_path, len(scenarios))

        for scenario in scenarios:
            self.process_scenario(suite, scenario)
        return suite

    def process_scenario(
        self, suite: TestSuiteResult, scenario: Mapping[str, Any]
    ) -> None:
        """Append the case of one scenario to its group."""
        name = get_str(scenario, "name")
        group = get_or_create_group(suite, name)

        steps = self.get_steps(scenario)
        status = roll_up_status(
            classify_status(scenario.get("status"), BEHAVE_STATUS_TABLE),
            (step.status for step in steps),
        )

        error = None
        if status == "failed" and self.options.parse_errors:
            error = self.extractor.extract(steps, get_text(scenario, "error_message"))

        group.tests.append(
            TestCaseResult(
                name=name or "",
                result=status,
                time=get_duration(scenario, "duration"),
                error=error,
            )
        )

    def get_steps(self, scenario: Mapping[str, Any]) -> Sequence[StepOutcome]:
        """Classify the steps of a scenario, keeping their order."""
        steps: list[StepOutcome] = []
        for step in get_list(scenario, "steps"):
            # behave's own formatter nests the outcome under "result"
            outcome = step.get("result")
            if not isinstance(outcome, Mapping):
                outcome = step
            raw_status = outcome.get("status")

            steps.append(
                StepOutcome(
                    keyword=get_str(step, "step_type") or get_str(step, "keyword") or "",
                    name=get_str(step, "name") or "",
                    raw_status=raw_status if isinstance(raw_status, str) else "",
                    status=classify_status(raw_status, BEHAVE_STATUS_TABLE),
                    text=get_text(step, "text"),
                    error_message=get_text(outcome, "error_message"),
                )
            )
        return steps
