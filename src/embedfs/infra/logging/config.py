from __future__ import annotations

"""
Logging Settings for embedfs.

Holds the settings the generator CLI and the HTTP adapter pass to
configure_logging, plus level name parsing. Console output is terse by
default; debug runs add the emitting module so snapshot, vfs and emit
messages can be told apart.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

CONSOLE_FMT = "%(levelname)s | %(message)s"
DEBUG_CONSOLE_FMT = "%(levelname)s | %(name)s | %(message)s"
FILE_FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def parse_level(level: Optional[str]) -> int:
    """Convert a level name to its numeric constant (INFO when unknown)."""
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable settings for the logging subsystem.

    Attributes:
        level: Level name; unknown names fall back to INFO.
        console: Emit to stderr.
        log_file: Rotating log file, written only when set.
        max_bytes: Segment size before rotation.
        backup_count: Rotated segments to keep.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = CONSOLE_FMT
    file_fmt: str = FILE_FMT
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def for_cli(cls, debug: bool = False, log_file: Optional[str] = None) -> "LoggingConfig":
        """Settings for one generator run (--debug / --log-file)."""
        if debug:
            return cls(level="DEBUG", log_file=log_file, console_fmt=DEBUG_CONSOLE_FMT)
        return cls(level="INFO", log_file=log_file)

    @property
    def level_no(self) -> int:
        return parse_level(self.level)
