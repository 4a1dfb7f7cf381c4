"""Tests for typemake.parsers.cursor — line scanning and indentation probing."""

import pytest

from typemake.errors import RecoverableFailure
from typemake.parsers.cursor import Cursor
from typemake.syntax.types import RuleKind


# ─── Lines ───────────────────────────────────────────────────────────────────


def test_take_line_handles_all_line_endings():
    c = Cursor("abc\r\ndef\nghi\rjkl")
    assert c.take_line() == "abc"
    assert c.pos == 5
    assert c.take_line() == "def"
    assert c.take_line() == "ghi"
    assert c.take_line() == "jkl"
    assert c.eof()


def test_take_line_rejects_empty_line():
    c = Cursor("\nx")
    with pytest.raises(RecoverableFailure) as excinfo:
        c.take_line()
    assert excinfo.value.trace == [(0, RuleKind.Line)]
    assert c.pos == 0


def test_take_line_allow_empty():
    c = Cursor("\nx")
    assert c.take_line(allow_empty=True) == ""
    assert c.pos == 1
    assert Cursor("").take_line(allow_empty=True) == ""


def test_take_line_at_end_of_input():
    with pytest.raises(RecoverableFailure):
        Cursor("").take_line()


def test_skip_blank_lines():
    c = Cursor("  \n\t\n\nx")
    c.skip_blank_lines()
    assert c.pos == 6
    assert c.peek("x")


def test_skip_blank_lines_at_whitespace_tail():
    c = Cursor("   ")
    c.skip_blank_lines()
    assert c.eof()


def test_skip_blank_line_leaves_content_lines():
    c = Cursor(" x\n")
    assert not c.skip_blank_line()
    assert c.pos == 0
    assert not Cursor("").skip_blank_line()


def test_at_blank_line():
    assert Cursor(" \t\n").at_blank_line()
    assert not Cursor(" x\n").at_blank_line()
    assert not Cursor("").at_blank_line()


# ─── Indentation ─────────────────────────────────────────────────────────────


def test_peek_indentation_does_not_consume():
    c = Cursor("  \t x")
    assert c.peek_indentation() == "  \t "
    assert c.pos == 0


def test_peek_indentation_skipping_blank_lines():
    c = Cursor("\n   \n    x")
    assert c.peek_indentation() == ""
    assert c.peek_indentation(skip_blank=True) == "    "
    assert c.pos == 0


def test_deeper_indentation():
    assert Cursor("    x").deeper_indentation("  ") == "    "
    assert Cursor("  \tx").deeper_indentation("  ") == "  \t"


def test_deeper_indentation_requires_strictly_longer():
    assert Cursor("  x").deeper_indentation("  ") is None
    assert Cursor(" x").deeper_indentation("  ") is None


def test_deeper_indentation_is_a_literal_prefix_test():
    assert Cursor("\t\tx").deeper_indentation("  ") is None
    assert Cursor("    x").deeper_indentation("\t") is None
