"""
Runtime settings for the symdiff front end.

The expression core never reads the environment; only the command line
builds a SymDiffConfig from it and applies it to the logging system.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .logging_system import LogLevel, SymDiffLogger, configure_logging

ENV_LOG_LEVEL = "SYMDIFF_LOG_LEVEL"
ENV_LOG_FILE = "SYMDIFF_LOG_FILE"


def parse_log_level(text: str) -> LogLevel:
    """Accept a level name (case-insensitive) or its numeric value"""
    text = text.strip()
    if text.isdigit():
        return LogLevel(int(text))
    try:
        return LogLevel[text.upper()]
    except KeyError:
        names = ", ".join(level.name for level in LogLevel)
        raise ValueError(f"Unknown log level {text!r}, expected one of {names}") from None


@dataclass
class SymDiffConfig:
    log_level: LogLevel = LogLevel.MINIMAL
    log_to_file: bool = False
    log_file_path: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> SymDiffConfig:
        if environ is None:
            environ = os.environ
        config = cls()
        level = environ.get(ENV_LOG_LEVEL)
        if level:
            config.log_level = parse_log_level(level)
        log_file = environ.get(ENV_LOG_FILE)
        if log_file:
            config.log_to_file = True
            config.log_file_path = log_file
        return config

    def apply(self) -> SymDiffLogger:
        return configure_logging(
            log_level=self.log_level,
            log_to_file=self.log_to_file,
            log_file_path=self.log_file_path,
        )
