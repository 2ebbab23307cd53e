"""Extraction of error details from failed steps."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from testreport.models.result import TestCaseError, TestExecutionResult
from testreport.utils.stack import StackLocator, get_exception_source


@dataclass(frozen=True, kw_only=True)
class StepOutcome:
    """One step or assertion of a test case, already classified."""

    keyword: str
    name: str
    raw_status: str
    status: TestExecutionResult
    text: str | None = None
    error_message: str | None = None

    def transcript_line(self) -> str:
        return f"{self.keyword}: {self.name} [{self.raw_status}]"


@dataclass(frozen=True, kw_only=True)
class ErrorExtractor:
    """Builds the error record of a failed case from its steps."""

    tracked_files: Sequence[str]
    relativize: Callable[[str], str]
    locate: StackLocator = get_exception_source

    def extract(
        self,
        steps: Sequence[StepOutcome],
        case_message: str | None = None,
    ) -> TestCaseError | None:
        """Return the error of a failed case, or None when nothing explains it.

        The first failed step provides the message; the details hold its text
        followed by a transcript of every step. Without a failed step the
        case level message is used on its own.
        """
        failed_step = next((s for s in steps if s.status == "failed"), None)

        if failed_step is None:
            if not case_message:
                return None
            path, line = self._locate(case_message)
            return TestCaseError(
                path=path, line=line, message=case_message, details=case_message
            )

        body = failed_step.text or failed_step.error_message or ""
        transcript = "\n".join(s.transcript_line() for s in steps)
        details = f"{body}\n{transcript}" if body else transcript

        diagnostic = failed_step.error_message or failed_step.text or case_message
        path, line = self._locate(diagnostic)

        return TestCaseError(
            path=path, line=line, message=failed_step.name, details=details
        )

    def _locate(self, diagnostic: str | None) -> tuple[str | None, int | None]:
        if not diagnostic:
            return None, None
        source = self.locate(diagnostic, self.tracked_files, self.relativize)
        if source is None:
            return None, None
        return source.path, source.line
