"""Centralized configuration for typemake."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

DEFAULT_TYPEFILE = Path("Typefile")


@dataclass
class RunConfig:
    """Configuration for one typemake run."""

    typefile: Path = DEFAULT_TYPEFILE
    verbose: bool = False
    dump: bool = False

    @property
    def log_level(self) -> int:
        return logging.DEBUG if self.verbose else logging.INFO
