"""Behave JSON parser module."""

from testreport.parsers.behave_json.manifest import behave_json_manifest
from testreport.parsers.behave_json.parser import BehaveJsonParser

__all__ = ["BehaveJsonParser", "behave_json_manifest"]
