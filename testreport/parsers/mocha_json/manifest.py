"""Mocha JSON parser manifest."""

from testreport.models.options import ParseOptions
from testreport.parsers.manifest import ParserManifest
from testreport.parsers.mocha_json.parser import MochaJsonParser

mocha_json_manifest = ParserManifest(
    options_cls=ParseOptions,
    parser_factory=MochaJsonParser.from_options,
)
