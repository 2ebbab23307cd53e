"""Classification of runner specific statuses into canonical results."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, TypeAlias

from testreport.models.result import TestExecutionResult

log = logging.getLogger(__name__)

StatusTable: TypeAlias = Mapping[str, TestExecutionResult]

BEHAVE_STATUS_TABLE: StatusTable = {
    "passed": "success",
    "success": "success",
    "failed": "failed",
    "error": "failed",
    "untested": "skipped",
    "skipped": "skipped",
}


def classify_status(raw_status: Any, table: StatusTable) -> TestExecutionResult:
    """Map a native status onto success, failed or skipped.

    Unknown or missing statuses are treated as skipped, never as success.
    """
    key = raw_status.strip().lower() if isinstance(raw_status, str) else None
    if key is not None and key in table:
        return table[key]

    log.warning("Unclassified status %r, treating as skipped", raw_status)
    return "skipped"


def roll_up_status(
    case_status: TestExecutionResult, step_statuses: Iterable[TestExecutionResult]
) -> TestExecutionResult:
    """Escalate a case to failed when any of its steps failed.

    Steps can only escalate: a failed case stays failed whatever its steps
    report.
    """
    if any(status == "failed" for status in step_statuses):
        return "failed"
    return case_status
