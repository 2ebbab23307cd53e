"""Behave JSON parser manifest."""

from testreport.models.options import ParseOptions
from testreport.parsers.behave_json.parser import BehaveJsonParser
from testreport.parsers.manifest import ParserManifest

behave_json_manifest = ParserManifest(
    options_cls=ParseOptions,
    parser_factory=BehaveJsonParser.from_options,
)
