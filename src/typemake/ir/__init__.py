"""Intermediate representation of a parsed typefile."""

from typemake.ir.typefile import CodeLine, ParsedFile, Tool, ToolProperty, ToplevelItem

__all__ = [
    "CodeLine",
    "ParsedFile",
    "Tool",
    "ToolProperty",
    "ToplevelItem",
]
