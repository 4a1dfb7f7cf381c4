"""Error types for typefile parsing.

Two layers live here. The grammar layer (``GrammarFailure`` and its two
subclasses) is raised and caught inside the parser: a ``RecoverableFailure``
means a rule did not match and the next alternative may be tried, a
``TerminalFailure`` means the input had the shape of a rule but broke one of
its constraints, and the whole parse stops.

The public layer (``TypemakeError`` and its subclasses) is what callers of
``parse_from_text`` and ``parse_from_path`` see.
"""

from __future__ import annotations

from pathlib import Path

from typemake.syntax.types import RuleKind

Trace = list[tuple[int, RuleKind]]


def _format_trace(trace: Trace) -> str:
    return ", ".join(f"({offset}, {kind.name})" for offset, kind in trace)


# ─── Grammar layer ───────────────────────────────────────────────────────────


class GrammarFailure(Exception):
    """A failure of a grammar rule, with the rules that led up to it."""

    def __init__(self, trace: Trace | None = None) -> None:
        self.trace: Trace = list(trace or [])
        super().__init__(_format_trace(self.trace))

    def push(self, offset: int, kind: RuleKind) -> GrammarFailure:
        """Record that the rule ``kind`` at ``offset`` failed because of this failure."""
        self.trace.append((offset, kind))
        return self


class RecoverableFailure(GrammarFailure):
    """The attempted rule did not match; a sibling alternative may still match."""

    @classmethod
    def at(cls, offset: int, kind: RuleKind) -> RecoverableFailure:
        return cls([(offset, kind)])


class TerminalFailure(GrammarFailure):
    """The input broke a constraint of a matched rule. No alternative is tried."""

    def __init__(self, message: str, offset: int, trace: Trace | None = None) -> None:
        super().__init__(trace)
        self.message = message
        self.offset = offset
        self.args = (message,)


# ─── Public layer ────────────────────────────────────────────────────────────


class TypemakeError(Exception):
    """Base exception for all typemake errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ParseError(TypemakeError):
    """Raised when a typefile cannot be parsed.

    Attributes:
        message: Human-readable description of the problem.
        trace: The low-level grammar failures, as ``(offset, RuleKind)`` pairs.
        line: 1-based line where the failure was raised, if known.
        recoverable: True if the failure that ended the parse was a rule
            mismatch rather than a broken constraint.
    """

    def __init__(
        self,
        message: str,
        trace: Trace | None = None,
        line: int | None = None,
        recoverable: bool = False,
    ) -> None:
        self.trace: Trace = list(trace or [])
        self.line = line
        self.recoverable = recoverable
        super().__init__(message)

    def __str__(self) -> str:
        text = self.message if self.line is None else f"line {self.line}: {self.message}"
        if self.trace:
            return f"{text}\ntrace: [{_format_trace(self.trace)}]"
        return text

    @classmethod
    def from_failure(cls, failure: GrammarFailure, src: str) -> ParseError:
        """Convert a grammar failure that survived the parse into a ParseError."""
        if isinstance(failure, TerminalFailure):
            return cls(
                f"parser had an unrecoverable error: {failure.message}",
                trace=failure.trace,
                line=line_of(src, failure.offset),
            )
        offset = failure.trace[0][0] if failure.trace else 0
        return cls(
            "parser had a recoverable error",
            trace=failure.trace,
            line=line_of(src, offset),
            recoverable=True,
        )


class TypefileReadError(TypemakeError):
    """Raised when the typefile cannot be read. The OSError is the ``__cause__``."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"cannot read '{path}': {reason}")


def line_of(src: str, offset: int) -> int:
    """Return the 1-based line number of ``offset`` in ``src``.

    ``\\r\\n`` counts as one line break, a lone ``\\r`` as one as well.
    """
    head = src[:offset]
    return head.count("\n") + head.count("\r") - head.count("\r\n") + 1
