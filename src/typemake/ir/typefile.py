"""Typefile IR: tools, their properties and the parsed file.

A ``ParsedFile`` is assembled from the ordered toplevel items the parser
produces. Code lines are concatenated into the initialization text, tools are
keyed by name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Union

from typemake.errors import TerminalFailure
from typemake.syntax.types import PropertyStage

logger = logging.getLogger(__name__)


@dataclass
class ToolProperty:
    """A property of a tool as it moves from typefile text to an evaluated value.

    ``text`` holds the raw text from the typefile once the property left the
    ``Empty`` stage; ``value`` holds the partial or resolved evaluation result.
    """

    text: str = ""
    stage: PropertyStage = field(default_factory=PropertyStage.default)
    value: Any = None

    @classmethod
    def from_text(cls, text: str) -> ToolProperty:
        return cls(text=text, stage=PropertyStage.Raw)

    def is_empty(self) -> bool:
        return self.stage is PropertyStage.Empty

    def set_text(self, text: str) -> None:
        self.text = text
        self.stage = PropertyStage.Raw
        self.value = None

    def set_partial(self, value: Any) -> None:
        """Store an intermediate evaluation result."""
        if self.is_empty():
            raise ValueError("cannot evaluate an empty property")
        self.value = value
        self.stage = PropertyStage.Partial

    def resolve(self, value: Any) -> None:
        """Store the final evaluation result."""
        if self.is_empty():
            raise ValueError("cannot evaluate an empty property")
        self.value = value
        self.stage = PropertyStage.Resolved


@dataclass
class Tool:
    """A tool definition, the basic building block of a workflow.

    It describes how files are transformed into other files. ``script`` is the
    script executing the tool, typically a shell script calling other programs.
    """

    name: str
    script: ToolProperty = field(default_factory=ToolProperty)


@dataclass
class CodeLine:
    """A toplevel line without meaning to typemake, kept as initialization code."""

    text: str


ToplevelItem = Union[CodeLine, Tool]


@dataclass
class ParsedFile:
    initialization: str = ""
    tools: dict[str, Tool] = field(default_factory=dict)

    @classmethod
    def from_items(cls, items: list[ToplevelItem], offsets: list[int] | None = None) -> ParsedFile:
        """Build a ParsedFile from toplevel items in file order.

        ``offsets`` gives the input offset each item started at and is only
        used to locate a duplicate tool in the raised failure.
        """
        lines: list[str] = []
        tools: dict[str, Tool] = {}
        for index, item in enumerate(items):
            if isinstance(item, CodeLine):
                lines.append(item.text)
                lines.append("\n")
                continue
            if item.name in tools:
                offset = offsets[index] if offsets else 0
                raise TerminalFailure(f"tool already exists: {item.name!r}", offset)
            tools[item.name] = item
        logger.debug("assembled %d code lines and %d tools", len(lines) // 2, len(tools))
        return cls(initialization="".join(lines), tools=tools)

    def tool_names(self) -> list[str]:
        return sorted(self.tools)
