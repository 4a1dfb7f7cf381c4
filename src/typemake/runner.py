"""typemake's high-level mode of operation."""

from __future__ import annotations

import logging

from typemake.config import RunConfig
from typemake.ir.typefile import ParsedFile
from typemake.parsers import parse_from_path

logger = logging.getLogger(__name__)


def run(config: RunConfig) -> ParsedFile:
    """Run typemake with the given configuration and return the parsed typefile."""
    logger.info("Parsing typefile '%s'", config.typefile)
    parsed = parse_from_path(config.typefile)
    logger.info(
        "Found %d tool(s) and %d line(s) of initialization code",
        len(parsed.tools),
        parsed.initialization.count("\n"),
    )
    for name in parsed.tool_names():
        logger.debug("tool %s: script is %s", name, parsed.tools[name].script.stage.name)
    return parsed


def dump(parsed: ParsedFile) -> str:
    """Render a parsed typefile as text: the initialization code, then every tool."""
    out: list[str] = []
    out.append("# initialization")
    out.append(parsed.initialization.rstrip("\n"))
    for name in parsed.tool_names():
        script = parsed.tools[name].script
        out.append("")
        out.append(f"tool {name}:")
        if script.is_empty():
            continue
        lines = script.text.split("\n")
        out.append(f"    script: {lines[0]}")
        out.extend(f"        {line}" for line in lines[1:])
    return "\n".join(out) + "\n"
