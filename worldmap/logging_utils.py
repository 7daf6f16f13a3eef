"""Logging utilities for the world map.

Provides color-coded output to distinguish load progress, failures, and
debug detail, plus ``MapLogger``, the leveled sink injected into ``WorldMap``.
"""

import os
import sys
from enum import Enum, IntEnum
from typing import Optional, TextIO

from .config import Config


class Color(Enum):
    """ANSI color codes for terminal output."""

    # Colors for operation types
    BLUE = "\033[94m"      # Deterministic build steps (grid, zones, checkpoints)
    RED = "\033[91m"       # Errors
    GREEN = "\033[92m"     # Map ready
    CYAN = "\033[96m"      # Info/metadata

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if WORLDMAP_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("WORLDMAP_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def log_error(message: str) -> None:
    """Log an error (red)."""
    print(colored(message, Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    print(colored(message, Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(message, Color.CYAN))


# Markers for operation types (color-blind accessible)
LOG_TAG_DETERMINISTIC = "[•]"
LOG_TAG_ERROR = "[!]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"


class LogLevel(IntEnum):
    ERROR = 1
    INFO = 2
    DEBUG = 3

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown log level {name!r}; expected ERROR, INFO or DEBUG") from None


class MapLogger:
    """Leveled logger handed to ``WorldMap`` as a dependency.

    Messages at or below the configured level are printed with a tag and a
    color. Errors go to ``sys.stderr`` and everything else to ``sys.stdout``,
    both looked up at call time so ``contextlib.redirect_stdout`` and
    ``redirect_stderr`` capture output in tests. Passing ``stream`` sends every
    level there instead.
    """

    ERROR = LogLevel.ERROR
    INFO = LogLevel.INFO
    DEBUG = LogLevel.DEBUG

    def __init__(self, level: LogLevel | str | None = None, stream: Optional[TextIO] = None):
        if level is None:
            level = Config.LOG_LEVEL
        self.level = LogLevel.from_name(level) if isinstance(level, str) else LogLevel(level)
        self.stream = stream

    def _emit(self, level: LogLevel, tag: str, color: Color, message: str) -> None:
        if self.level >= level:
            stream = self.stream
            if stream is None and level is LogLevel.ERROR:
                stream = sys.stderr
            print(colored(f"{tag} {message}", color), file=stream)

    def error(self, message: str) -> None:
        self._emit(LogLevel.ERROR, LOG_TAG_ERROR, Color.RED, message)

    def info(self, message: str) -> None:
        self._emit(LogLevel.INFO, LOG_TAG_INFO, Color.CYAN, message)

    def success(self, message: str) -> None:
        self._emit(LogLevel.INFO, LOG_TAG_SUCCESS, Color.GREEN, message)

    def debug(self, message: str) -> None:
        self._emit(LogLevel.DEBUG, LOG_TAG_DETERMINISTIC, Color.BLUE, message)
