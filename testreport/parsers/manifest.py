"""Parser manifest definition for the plugin system."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel

from testreport.parsers.base import TestParser

OptionsT = TypeVar("OptionsT", bound=BaseModel)


@dataclass(frozen=True, kw_only=True)
class ParserManifest(Generic[OptionsT]):
    """Manifest describing a result document dialect.

    The manifest references the options class and the parser factory so that
    parsers can be loaded lazily by their key.
    """

    options_cls: type[OptionsT]
    parser_factory: Callable[[OptionsT], TestParser]
