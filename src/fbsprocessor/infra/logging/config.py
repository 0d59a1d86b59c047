from __future__ import annotations

"""
Logging Configuration Model.

The CLI decides three things about logging: the threshold, whether messages
go to stderr and whether they are also kept in a file. Formats and rotation
limits are fixed for every run.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

CONSOLE_FORMAT = "%(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_MAX_BYTES = 1024 * 1024
LOG_FILE_BACKUPS = 2


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging options of one CLI run.

    Attributes:
        level: Level name; unknown names fall back to INFO.
        console: Write messages to stderr.
        log_file: Optional rotating log file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    @classmethod
    def for_cli(cls, debug: bool, log_file: Optional[str] = None) -> LoggingConfig:
        return cls(level="DEBUG" if debug else "INFO", console=True, log_file=log_file)
