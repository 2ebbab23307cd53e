"""Tests for the mocha JSON parser."""

import json

import pytest

from testreport.models.options import ParseOptions
from testreport.parsers.base import MalformedInputError
from testreport.parsers.mocha_json import MochaJsonParser
from testreport.parsers.mocha_json.parser import get_group_name
from testreport.testing.mocha.payloads import case, document, failure_err

TRACKED = ["test/math.test.js", "test/string.test.js"]


def make_parser(**options: object) -> MochaJsonParser:
    """Create a parser with the given options."""
    return MochaJsonParser.from_options(ParseOptions.model_validate(options))


@pytest.mark.parametrize(
    ("title", "full_title", "expected"),
    [
        ("adds", "Math adds", "Math"),
        ("adds", "Math  nested   adds", "Math  nested"),
        ("adds", "adds", None),
        ("adds", "something else", None),
    ],
)
def test_get_group_name(title: str, full_title: str, expected: str | None) -> None:
    """Groups are the describe blocks preceding the title."""
    assert get_group_name(title, full_title) == expected


@pytest.mark.parametrize("payload", [{}, {"passes": None}, [], {"stats": {}}])
async def test_returns_empty_run(payload: object) -> None:
    """Documents without tests give an empty successful run."""
    result = await make_parser().parse("mocha.json", json.dumps(payload))

    assert result.suites == []
    assert result.time == 0
    assert result.result == "success"


async def test_raises_for_invalid_json() -> None:
    """Raises MalformedInputError mentioning the document path."""
    with pytest.raises(MalformedInputError, match="Invalid JSON at mocha.json"):
        await make_parser().parse("mocha.json", "")


async def test_maps_collections_to_results() -> None:
    """Passes succeed, pending tests are skipped and failures fail."""
    payload = document(
        passes=[case(title="adds", full_title="Math adds")],
        pending=[case(title="divides", full_title="Math divides")],
        failures=[
            case(title="subtracts", full_title="Math subtracts", err=failure_err())
        ],
    )

    result = await make_parser(trackedFiles=TRACKED).parse(
        "mocha.json", json.dumps(payload)
    )

    assert [s.name for s in result.suites] == ["test/math.test.js"]
    group = result.suites[0].groups[0]
    assert group.name == "Math"
    assert [(t.name, t.result) for t in group.tests] == [
        ("subtracts", "failed"),
        ("divides", "skipped"),
        ("adds", "success"),
    ]


async def test_locates_failure_source() -> None:
    """Failed tests get message, stack and tracked source location."""
    payload = document(failures=[case(err=failure_err())])

    result = await make_parser(trackedFiles=TRACKED).parse(
        "mocha.json", json.dumps(payload)
    )

    error = result.cases[0].error
    assert error is not None
    assert error.message == "expected 2 to equal 3"
    assert error.path == "test/math.test.js"
    assert error.line == 12
    assert error.details is not None
    assert error.details.startswith("AssertionError")


async def test_failure_without_stack_keeps_message() -> None:
    """Failures without a stack trace still record their message."""
    payload = document(failures=[case(err=failure_err(stack=None))])

    result = await make_parser(trackedFiles=TRACKED).parse(
        "mocha.json", json.dumps(payload)
    )

    error = result.cases[0].error
    assert result.cases[0].result == "failed"
    assert error is not None
    assert error.message == "expected 2 to equal 3"
    assert error.details == "expected 2 to equal 3"
    assert error.path is None
    assert error.line is None


async def test_failure_without_message_or_stack_has_no_error() -> None:
    """Failures with an empty err object get no error record."""
    payload = document(failures=[case(err={})])

    result = await make_parser().parse("mocha.json", json.dumps(payload))

    assert result.cases[0].result == "failed"
    assert result.cases[0].error is None


async def test_parse_errors_disabled() -> None:
    """No error is attached when error parsing is disabled."""
    payload = document(failures=[case(err=failure_err())])

    result = await make_parser(parseErrors=False).parse(
        "mocha.json", json.dumps(payload)
    )

    assert result.cases[0].result == "failed"
    assert result.cases[0].error is None


async def test_ungrouped_tests_and_suites_per_file() -> None:
    """Top level tests form a None group, one suite per file."""
    payload = document(
        passes=[
            case(title="trims", full_title="trims", file="/w/test/string.test.js"),
            case(title="adds", full_title="Math adds", file="/w/test/math.test.js"),
            case(title="pads", full_title="pads", file="/w/test/string.test.js"),
        ]
    )

    result = await make_parser(trackedFiles=TRACKED).parse(
        "mocha.json", json.dumps(payload)
    )

    assert [s.name for s in result.suites] == [
        "test/math.test.js",
        "test/string.test.js",
    ]
    string_suite = result.suites[1]
    assert [g.name for g in string_suite.groups] == [None]
    assert [t.name for t in string_suite.groups[0].tests] == ["pads", "trims"]


async def test_sums_test_durations() -> None:
    """Ignores stats.duration and sums the parsed tests."""
    payload = document(
        passes=[case(duration=5), case(title="other", duration=None)],
        failures=[case(title="bad", duration=7, err=failure_err())],
        duration=1000,
    )

    result = await make_parser().parse("mocha.json", json.dumps(payload))

    assert result.time == 12
