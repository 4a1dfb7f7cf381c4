"""Line-level cursor primitives shared by the typefile parser.

The cursor never tokenizes ahead: every helper looks at the text from the
current position, and consuming helpers only move ``pos`` forward.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from typemake.errors import RecoverableFailure
from typemake.syntax.types import RuleKind

_NEWLINE_RE = re.compile(r"\r\n|\n|\r")
_LINE_RE = re.compile(r"[^\r\n]*")
_INDENT_RE = re.compile(r"[ \t]*")
_BLANK_LINE_RE = re.compile(r"[ \t]*(?:\r\n|\n|\r|\Z)")


@dataclass
class Cursor:
    """Stateful cursor over the input string."""

    src: str
    pos: int = 0

    # ── Primitive helpers ─────────────────────────────────────────────────────

    def eof(self) -> bool:
        return self.pos >= len(self.src)

    def peek(self, s: str) -> bool:
        return self.src.startswith(s, self.pos)

    def consume(self, s: str) -> bool:
        if self.peek(s):
            self.pos += len(s)
            return True
        return False

    def expect(self, s: str, kind: RuleKind = RuleKind.Tag) -> None:
        """Consume ``s`` or fail recoverably."""
        if not self.consume(s):
            raise RecoverableFailure.at(self.pos, kind)

    def match_re(self, pattern: re.Pattern[str]) -> str | None:
        m = pattern.match(self.src, self.pos)
        if m:
            self.pos = m.end()
            return m.group(0)
        return None

    def consume_newline(self) -> bool:
        m = _NEWLINE_RE.match(self.src, self.pos)
        if m:
            self.pos = m.end()
            return True
        return False

    def skip_newlines(self) -> None:
        while self.consume_newline():
            pass

    # ── Lines ─────────────────────────────────────────────────────────────────

    def take_line(self, allow_empty: bool = False) -> str:
        """Return the rest of the current line and move past its line ending.

        Accepts ``\\n``, ``\\r\\n``, ``\\r`` and a last line without ending.
        Fails if the line is empty, unless ``allow_empty`` is set.
        """
        m = _LINE_RE.match(self.src, self.pos)
        line = m.group(0) if m else ""
        if not line and not allow_empty:
            raise RecoverableFailure.at(self.pos, RuleKind.Line)
        self.pos += len(line)
        self.consume_newline()
        return line

    def at_blank_line(self) -> bool:
        """True if the current line holds only spaces and tabs. False at end of input."""
        if self.eof():
            return False
        return _BLANK_LINE_RE.match(self.src, self.pos) is not None

    def skip_blank_line(self) -> bool:
        if self.eof():
            return False
        m = _BLANK_LINE_RE.match(self.src, self.pos)
        if m is None:
            return False
        self.pos = m.end()
        return True

    def skip_blank_lines(self) -> None:
        """Skip whitespace-only lines, including a whitespace-only last line."""
        while self.skip_blank_line():
            pass

    # ── Indentation ───────────────────────────────────────────────────────────

    def peek_indentation(self, skip_blank: bool = False) -> str:
        """Return the leading spaces and tabs of the current line without consuming them.

        With ``skip_blank``, look at the first line that is not whitespace-only.
        """
        saved = self.pos
        if skip_blank:
            self.skip_blank_lines()
        m = _INDENT_RE.match(self.src, self.pos)
        self.pos = saved
        return m.group(0) if m else ""

    def deeper_indentation(self, shallow: str, skip_blank: bool = False) -> str | None:
        """Return the indentation of the current line if it strictly extends ``shallow``.

        The comparison is a literal prefix test: a tab never matches spaces.
        """
        indentation = self.peek_indentation(skip_blank=skip_blank)
        if indentation.startswith(shallow) and len(indentation) > len(shallow):
            return indentation
        return None
