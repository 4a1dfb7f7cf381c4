"""Typefile parser: hand-rolled recursive descent.

A typefile is a sequence of toplevel items. Each item is either a tool
definition or a single line of code that means nothing to typemake:

    import os

    tool compile:
        script:
            gcc -c main.c
            gcc -o main main.o

Tool properties are indented by the first property line of the block. A
property value continues on every following line that is indented deeper
than the block.
"""

from __future__ import annotations

import logging
import re
from operator import attrgetter
from typing import Callable

from typemake.errors import RecoverableFailure, TerminalFailure
from typemake.ir.typefile import CodeLine, ParsedFile, Tool, ToolProperty, ToplevelItem
from typemake.parsers.cursor import Cursor
from typemake.syntax.types import RuleKind

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"[A-Za-z_]+")
_SPACE0_RE = re.compile(r"[ \t]*")
_SPACE1_RE = re.compile(r"[ \t]+")

# Properties are tried in this order.
TOOL_PROPERTIES: list[tuple[str, Callable[[Tool], ToolProperty]]] = [
    ("script", attrgetter("script")),
]


class TypefileParser(Cursor):
    """Parser state over one typefile."""

    # ── Properties ────────────────────────────────────────────────────────────

    def parse_property(
        self,
        indentation: str,
        name: str,
        accessor: Callable[[Tool], ToolProperty],
        tool: Tool,
    ) -> None:
        """Parse ``name: value`` plus its continuation lines into ``tool``."""
        start = self.pos
        self.expect(name)
        self.expect(":")
        self.match_re(_SPACE0_RE)
        pieces = [self.take_line(allow_empty=True)]

        # Probed past blank lines: a deeper line after them still continues the value.
        deep_indentation = self.deeper_indentation(indentation, skip_blank=True)
        if deep_indentation is not None:
            while not self.eof():
                if self.skip_blank_line():
                    continue
                if not self.consume(deep_indentation):
                    break
                pieces.append(self.take_line())

        value = "\n".join(pieces).strip()
        if not value:
            raise TerminalFailure(f"found an empty-valued property {name!r} in tool {tool.name!r}", start)

        prop = accessor(tool)
        if not prop.is_empty():
            raise TerminalFailure(
                f"found a duplicate definition of {name!r} within tool {tool.name!r}",
                start,
            )
        prop.set_text(value)

    def parse_any_property(self, indentation: str, tool: Tool) -> None:
        saved = self.pos
        failure = RecoverableFailure()
        for name, accessor in TOOL_PROPERTIES:
            try:
                self.parse_property(indentation, name, accessor, tool)
                return
            except RecoverableFailure as e:
                self.pos = saved
                failure.trace.extend(e.trace)
        raise failure.push(saved, RuleKind.Property)

    def parse_properties(self, indentation: str, tool: Tool) -> None:
        """Parse properties at ``indentation`` until a line is not one."""
        while True:
            saved = self.pos
            try:
                self.skip_blank_lines()
                self.expect(indentation, RuleKind.Indentation)
                self.parse_any_property(indentation, tool)
            except RecoverableFailure:
                self.pos = saved
                return

    # ── Tool ──────────────────────────────────────────────────────────────────

    def parse_tool_header(self) -> str:
        """Parse ``tool <name>:`` and the line endings after it. Returns the name."""
        self.expect("tool")
        if self.match_re(_SPACE1_RE) is None:
            raise RecoverableFailure.at(self.pos, RuleKind.Space)
        name = self.match_re(_IDENTIFIER_RE)
        if name is None:
            raise RecoverableFailure.at(self.pos, RuleKind.Identifier)
        self.expect(":")
        self.match_re(_SPACE0_RE)
        if not self.consume_newline():
            raise RecoverableFailure.at(self.pos, RuleKind.LineEnding)
        self.skip_newlines()
        return name

    def try_parse_tool(self) -> Tool:
        # Blank lines in front of a tool belong to the tool, not to the code.
        self.skip_blank_lines()
        tool = Tool(name=self.parse_tool_header())

        # The first non-blank line fixes the indentation of the properties.
        # An unindented line means the tool has none.
        indentation = self.peek_indentation(skip_blank=True)
        if indentation:
            self.parse_properties(indentation, tool)

        self.skip_blank_lines()
        if self.peek(" ") or self.peek("\t"):
            raise TerminalFailure(
                f"found an indented line after the end of tool definition {tool.name!r}. "
                "Either a line after the tool should not be indented, "
                "or the indentation inside the tool is inconsistent",
                self.pos,
            )
        logger.debug("parsed tool %r", tool.name)
        return tool

    def header_offset(self, start: int) -> int:
        """Return the offset of the tool header of an item starting at ``start``."""
        end = self.pos
        self.pos = start
        self.skip_blank_lines()
        offset = self.pos
        self.pos = end
        return offset

    # ── Code lines ────────────────────────────────────────────────────────────

    def parse_code_line(self) -> CodeLine:
        """Parse any single line, including an empty one, as code."""
        if self.eof():
            raise RecoverableFailure.at(self.pos, RuleKind.Eof)
        try:
            return CodeLine(self.take_line())
        except RecoverableFailure as e:
            if self.consume_newline():
                return CodeLine("")
            raise e.push(self.pos, RuleKind.LineEnding)

    # ── Toplevel ──────────────────────────────────────────────────────────────

    def parse_toplevel_item(self) -> ToplevelItem:
        saved = self.pos
        failure = RecoverableFailure()
        for alternative in (self.try_parse_tool, self.parse_code_line):
            try:
                return alternative()
            except RecoverableFailure as e:
                self.pos = saved
                failure.trace.extend(e.trace)
        raise failure.push(saved, RuleKind.Alternative)

    def parse_items(self) -> tuple[list[ToplevelItem], list[int]]:
        """Parse toplevel items until the input is exhausted.

        Returns the items and the offset each one started at.
        """
        items: list[ToplevelItem] = []
        offsets: list[int] = []
        stopped_by: RecoverableFailure | None = None
        while True:
            start = self.pos
            try:
                item = self.parse_toplevel_item()
            except RecoverableFailure as e:
                stopped_by = e
                break
            if self.pos == start:
                break
            if isinstance(item, Tool):
                start = self.header_offset(start)
            items.append(item)
            offsets.append(start)

        if not self.eof():
            rest = self.src[self.pos : self.pos + 40]
            raise TerminalFailure(
                f"found additional characters after parser terminated: {rest!r}",
                self.pos,
                trace=stopped_by.trace if stopped_by else None,
            )
        return items, offsets

    def parse_typefile(self) -> ParsedFile:
        items, offsets = self.parse_items()
        return ParsedFile.from_items(items, offsets)
