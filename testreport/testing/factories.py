"""Test factories for generating result model data."""

from polyfactory.factories import DataclassFactory

from testreport.models.result import TestCaseError, TestCaseResult


class TestCaseErrorFactory(DataclassFactory[TestCaseError]):
    """Factory for TestCaseError."""

    __model__ = TestCaseError

    path = None
    line = None


class TestCaseResultFactory(DataclassFactory[TestCaseResult]):
    """Factory for TestCaseResult.

    Builds successful cases without errors unless told otherwise.
    """

    __model__ = TestCaseResult

    result = "success"
    time = 10.0
    error = None
