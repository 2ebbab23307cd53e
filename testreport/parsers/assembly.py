"""Assembly of suites and groups from raw result entries."""

from testreport.models.result import TestGroupResult, TestSuiteResult


def get_or_create_group(suite: TestSuiteResult, name: str | None) -> TestGroupResult:
    """Return the group with ``name`` in ``suite``, appending it when missing.

    The first group with an equal name wins; None is a valid name for
    ungrouped cases.
    """
    for group in suite.groups:
        if group.name == name:
            return group

    group = TestGroupResult(name=name)
    suite.groups.append(group)
    return group


def get_or_create_suite(suites: list[TestSuiteResult], name: str) -> TestSuiteResult:
    """Return the suite named ``name``, appending it when missing."""
    for suite in suites:
        if suite.name == name:
            return suite

    suite = TestSuiteResult(name=name)
    suites.append(suite)
    return suite
