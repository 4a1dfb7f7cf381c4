"""Typefile parsing entry points."""

from __future__ import annotations

import logging
from pathlib import Path

from typemake.errors import GrammarFailure, ParseError, TypefileReadError
from typemake.ir.typefile import ParsedFile
from typemake.parsers.typefile import TypefileParser

logger = logging.getLogger(__name__)


def parse_from_text(text: str) -> ParsedFile:
    """Parse the contents of a typefile.

    Raises:
        ParseError: If the text is not a valid typefile.
    """
    parser = TypefileParser(src=text)
    try:
        return parser.parse_typefile()
    except GrammarFailure as failure:
        raise ParseError.from_failure(failure, text) from failure


def parse_from_path(path: str | Path) -> ParsedFile:
    """Read and parse the typefile at ``path``.

    Raises:
        TypefileReadError: If the file cannot be read.
        ParseError: If the file is not a valid typefile.
    """
    path = Path(path)
    logger.debug("reading typefile %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TypefileReadError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise TypefileReadError(path, str(e)) from e
    return parse_from_text(text)
