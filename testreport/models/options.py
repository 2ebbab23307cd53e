"""Options shared by all result parsers."""

from collections.abc import Sequence

from pydantic import AliasChoices, Field

from testreport.models.base import Model


class ParseOptions(Model):
    """Options controlling path resolution and error extraction."""

    tracked_files: Sequence[str] = Field(
        default=(),
        validation_alias=AliasChoices("tracked_files", "trackedFiles"),
        description="Known source file paths, relative to the project root",
    )
    work_dir: str | None = Field(
        default=None,
        validation_alias=AliasChoices("work_dir", "workDir"),
        description="Explicit project root; disables work directory inference",
    )
    parse_errors: bool = Field(
        default=True,
        validation_alias=AliasChoices("parse_errors", "parseErrors"),
        description="Extract error details for failed test cases",
    )
