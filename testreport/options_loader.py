"""Load parse options from YAML files."""

import asyncio
from pathlib import Path

import yaml
from pydantic import ValidationError

from testreport.models.options import ParseOptions


async def load_parse_options(options_path: Path) -> ParseOptions:
    """Load and validate parse options from a YAML file.

    Example file::

        trackedFiles:
          - features/login.feature
          - features/steps/login.py
        workDir: /home/runner/work/project
        parseErrors: true

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is empty, not valid YAML, or does not match
            the options schema

    """
    if not options_path.is_file():
        raise FileNotFoundError(f"Options file not found: {options_path}")

    text = await asyncio.to_thread(options_path.read_text, encoding="utf-8")

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {options_path}: {e}") from e

    if data is None:
        raise ValueError(f"Empty options file: {options_path}")

    if not isinstance(data, dict):
        raise ValueError(f"Invalid parse options schema in {options_path}: not a mapping")

    try:
        return ParseOptions.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid parse options schema in {options_path}: {e}") from e
