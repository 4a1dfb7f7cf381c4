"""typemake: typefile parser for tool-based build workflows."""

from typemake.errors import ParseError, TypefileReadError, TypemakeError
from typemake.ir.typefile import ParsedFile, Tool, ToolProperty
from typemake.parsers import parse_from_path, parse_from_text
from typemake.syntax.types import PropertyStage

__all__ = [
    "ParseError",
    "ParsedFile",
    "PropertyStage",
    "Tool",
    "ToolProperty",
    "TypefileReadError",
    "TypemakeError",
    "parse_from_path",
    "parse_from_text",
]
