"""Mocha JSON parser module."""

from testreport.parsers.mocha_json.manifest import mocha_json_manifest
from testreport.parsers.mocha_json.parser import MochaJsonParser

__all__ = ["MochaJsonParser", "mocha_json_manifest"]
