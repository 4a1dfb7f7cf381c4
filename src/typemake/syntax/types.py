"""Shared type definitions for typemake.

Enums used across the parser, the IR and the error model.
"""

from __future__ import annotations

from enum import Enum, auto


class PropertyStage(Enum):
    Empty = auto()  # not given in the typefile
    Raw = auto()  # text captured by the parser, not evaluated yet
    Partial = auto()  # intermediate result of an evaluation
    Resolved = auto()  # final evaluated value

    @classmethod
    def default(cls) -> PropertyStage:
        return cls.Empty


class RuleKind(Enum):
    """The grammar rule a recoverable failure was raised from."""

    Tag = auto()
    Space = auto()
    LineEnding = auto()
    Identifier = auto()
    Line = auto()
    Indentation = auto()
    Property = auto()
    Alternative = auto()
    Eof = auto()
