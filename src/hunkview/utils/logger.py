from __future__ import annotations

import os
import sys
import traceback
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Any, TextIO

# Levelled logger for hunkview. Rendered diffs own stdout, so console output
# goes to stderr and, with DEBUG=1, to a debug file as well.
# Use: from hunkview.utils.logger import log
# log.debug("[PARSE] ...")
# log.error("failed", exc_info=sys.exc_info())

DEBUG_LOG_PATH = Path("/tmp/hunkview_debug.log")


class LogLevel(IntEnum):
    """Log severity levels."""
    DEBUG = 10
    INFO = 20
    WARN = 30
    WARNING = 30  # Alias for WARN
    ERROR = 40
    CRITICAL = 50


_RESET = "\033[0m"
_LEVEL_COLORS = {
    LogLevel.DEBUG: "\033[90m",     # Gray
    LogLevel.INFO: _RESET,
    LogLevel.WARN: "\033[93m",      # Yellow
    LogLevel.ERROR: "\033[91m",     # Red
    LogLevel.CRITICAL: "\033[95m",  # Magenta
}


class Logger:
    """Levelled logger writing to stderr and an optional file."""

    def __init__(self, stream: TextIO | None = None):
        self._level = LogLevel.WARN
        self._stream = stream
        self._file: TextIO | None = None

        self._configure_from_env()

    def _configure_from_env(self) -> None:
        """DEBUG=1 turns on debug output and the debug file; LOG_LEVEL sets the level."""
        if os.environ.get("DEBUG") == "1":
            self._level = LogLevel.DEBUG
            self.set_file_output(DEBUG_LOG_PATH)

        name = os.environ.get("LOG_LEVEL", "").upper()
        if name in LogLevel.__members__:
            self._level = LogLevel[name]

    @property
    def level(self) -> LogLevel:
        return self._level

    def set_level(self, level: LogLevel) -> None:
        self._level = level

    def set_stream(self, stream: TextIO | None) -> None:
        """Redirect console output (None means whatever sys.stderr is at write time)."""
        self._stream = stream

    def set_file_output(self, path: Path, append: bool = True) -> None:
        """Copy every message to ``path``. An unopenable file disables file output."""
        self.close()
        try:
            self._file = open(path, "a" if append else "w", encoding="utf-8")
        except OSError:
            # Can't log errors about logging setup
            self._file = None

    def close(self) -> None:
        if self._file is not None:
            try:
                self._file.close()
            except OSError:
                pass
            self._file = None

    @staticmethod
    def _format(level: LogLevel, message: str, extra: dict | None, exc_info: tuple | None) -> str:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        formatted = f"{timestamp} [{level.name:8}] {message}"
        if extra:
            formatted += f" | {extra}"
        if exc_info and exc_info[0] is not None:
            formatted += "\n" + "".join(traceback.format_exception(*exc_info))
        return formatted

    def _write(
        self,
        level: LogLevel,
        *args: Any,
        sep: str = " ",
        extra: dict | None = None,
        exc_info: tuple | None = None,
    ) -> None:
        if level < self._level:
            return

        formatted = self._format(level, sep.join(str(a) for a in args), extra, exc_info)

        if self._file is not None:
            try:
                self._file.write(formatted + "\n")
                self._file.flush()
            except OSError:
                pass

        stream = self._stream or sys.stderr
        try:
            if stream.isatty():
                formatted = f"{_LEVEL_COLORS.get(level, _RESET)}{formatted}{_RESET}"
            stream.write(formatted + "\n")
            stream.flush()
        except (OSError, ValueError, AttributeError):
            # Never raise from logging
            pass

    def debug(self, *args: Any, **kwargs) -> None:
        self._write(LogLevel.DEBUG, *args, **kwargs)

    def info(self, *args: Any, **kwargs) -> None:
        self._write(LogLevel.INFO, *args, **kwargs)

    def warn(self, *args: Any, **kwargs) -> None:
        self._write(LogLevel.WARN, *args, **kwargs)

    def warning(self, *args: Any, **kwargs) -> None:
        """Alias for warn()."""
        self.warn(*args, **kwargs)

    def error(self, *args: Any, **kwargs) -> None:
        self._write(LogLevel.ERROR, *args, **kwargs)

    def critical(self, *args: Any, **kwargs) -> None:
        self._write(LogLevel.CRITICAL, *args, **kwargs)

    def __call__(self, *args: Any, sep: str = " ") -> None:
        """log("...") is shorthand for log.info("...")."""
        self.info(*args, sep=sep)


log = Logger()
