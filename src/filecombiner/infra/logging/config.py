from __future__ import annotations

"""
Logging Settings.

The console stream (stderr) follows the CLI verbosity flags. An optional
rotating log file keeps its own threshold so a quiet run can still leave
the full processing trail on disk.
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


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings consumed by configure_logging.

    Attributes:
        level: Console threshold.
        console: Emit records on stderr.
        log_file: Rotating log file path, or None for no file.
        file_level: Threshold for the log file.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files to keep.
        console_fmt: Console record format.
        file_fmt: Log file record format.
        datefmt: Timestamp format for the log file.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None
    file_level: str = "DEBUG"

    max_bytes: int = 512 * 1024
    backup_count: int = 1

    console_fmt: str = "filecombiner: %(levelname)s: %(message)s"
    file_fmt: str = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def for_cli(cls, debug: bool = False, verbose: bool = False, log_file: Optional[str] = None) -> LoggingConfig:
        """Map the --debug / --verbose / --log-file flags to settings."""
        if debug:
            level = "DEBUG"
        elif verbose:
            level = "INFO"
        else:
            level = "WARNING"
        return cls(level=level, console=True, log_file=log_file or None)
