"""CLI entry point for parsing test result documents."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from testreport.models.result import TestRunResult
from testreport.options_loader import load_parse_options
from testreport.parsers.base import TestParser
from testreport.parsers.loading import available_parsers, load_parser_manifest
from testreport.utils.path_utils import normalize_file_path

STATUS_SYMBOLS = {
    "success": "✅",
    "failed": "❌",
    "skipped": "⚪",
}


@dataclass(frozen=True, kw_only=True)
class ParseFailure:
    """A results document that could not be parsed."""

    path: str
    message: str


def log_results_summary(log: logging.Logger, runs: Sequence[TestRunResult]) -> None:
    """Log a formatted summary of parsed runs and their failed cases."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    for run in runs:
        symbol = STATUS_SYMBOLS.get(run.result, "?")
        log.info(
            "%s %s: %d passed, %d failed, %d skipped (%.0fms)",
            symbol,
            run.path,
            run.passed,
            run.failed,
            run.skipped,
            run.time,
        )
        for suite in run.failed_suites:
            for group in suite.groups:
                for case in group.failed:
                    log.info("  %s › %s", suite.name, case.name)
                    if case.error is None:
                        continue
                    if case.error.message:
                        log.info("    Message: %s", case.error.message)
                    if case.error.path:
                        log.info("    Source: %s:%s", case.error.path, case.error.line)


def read_tracked_files(tracked_files_path: Path) -> Sequence[str]:
    """Read newline separated source file paths, e.g. ``git ls-files`` output."""
    lines = tracked_files_path.read_text(encoding="utf-8").splitlines()
    return tuple(normalize_file_path(line) for line in lines if line.strip())


async def build_options(
    options_cls: type[BaseModel],
    options_path: Path | None = None,
    tracked_files_path: Path | None = None,
    work_dir: str | None = None,
    parse_errors: bool | None = None,
) -> BaseModel:
    """Merge the options file with command line overrides."""
    data: dict[str, Any] = {}
    if options_path is not None:
        data.update((await load_parse_options(options_path)).model_dump())

    if tracked_files_path is not None:
        data["tracked_files"] = read_tracked_files(tracked_files_path)
    if work_dir is not None:
        data["work_dir"] = work_dir
    if parse_errors is not None:
        data["parse_errors"] = parse_errors

    return options_cls.model_validate(data)


async def parse_file(parser: TestParser, results_path: Path) -> TestRunResult:
    """Read one results document and parse it."""
    content = await asyncio.to_thread(results_path.read_text, encoding="utf-8")
    return await parser.parse(normalize_file_path(str(results_path)), content)


async def run(
    parser_key: str,
    results_paths: Sequence[Path],
    options_path: Path | None = None,
    tracked_files_path: Path | None = None,
    work_dir: str | None = None,
    parse_errors: bool | None = None,
) -> int:
    """Parse the results documents and return exit code."""
    log = logging.getLogger("testreport")

    log.info("Loading parser: %s", parser_key)
    manifest = load_parser_manifest(parser_key)

    options = await build_options(
        manifest.options_cls, options_path, tracked_files_path, work_dir, parse_errors
    )

    log.info("Parsing %d document(s)...", len(results_paths))
    # One parser per document: the inferred work directory is per parser
    outcomes = await asyncio.gather(
        *(parse_file(manifest.parser_factory(options), p) for p in results_paths),
        return_exceptions=True,
    )

    runs: list[TestRunResult] = []
    failures: list[ParseFailure] = []
    for results_path, outcome in zip(results_paths, outcomes, strict=True):
        if isinstance(outcome, TestRunResult):
            runs.append(outcome)
        elif isinstance(outcome, Exception):
            log.error("Failed to parse %s: %s", results_path, outcome)
            failures.append(ParseFailure(path=str(results_path), message=str(outcome)))
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            raise TypeError(
                f"Unexpected parse outcome for {results_path}: {outcome!r}"
            )

    log_results_summary(log, runs)

    output = format_output(runs, failures)
    print(json.dumps(output, indent=2))

    has_failures = bool(failures) or any(r.result == "failed" for r in runs)
    return 1 if has_failures else 0


def format_output(
    runs: Sequence[TestRunResult], failures: Sequence[ParseFailure] = ()
) -> dict[str, Any]:
    """Format parsed runs for JSON output."""
    return {
        "total": sum(r.tests for r in runs),
        "passed": sum(r.passed for r in runs),
        "failed": sum(r.failed for r in runs),
        "skipped": sum(r.skipped for r in runs),
        "runs": [r.to_summary() for r in runs],
        "errors": [{"path": f.path, "message": f.message} for f in failures],
    }


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Parse test result documents into a canonical summary"
    )
    parser.add_argument(
        "--parser",
        required=True,
        help=f"Parser key ({', '.join(available_parsers())})",
    )
    parser.add_argument(
        "--options",
        type=Path,
        default=None,
        help="YAML file with parse options",
    )
    parser.add_argument(
        "--tracked-files-from",
        type=Path,
        default=None,
        help="File listing tracked source files, one per line",
    )
    parser.add_argument(
        "--work-dir",
        default=None,
        help="Project root used to relativize reported paths",
    )
    parser.add_argument(
        "--no-parse-errors",
        dest="parse_errors",
        action="store_const",
        const=False,
        default=None,
        help="Do not extract error details for failed tests",
    )
    parser.add_argument(
        "results",
        type=Path,
        nargs="+",
        help="Results documents to parse",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            parser_key=args.parser,
            results_paths=args.results,
            options_path=args.options,
            tracked_files_path=args.tracked_files_from,
            work_dir=args.work_dir,
            parse_errors=args.parse_errors,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
