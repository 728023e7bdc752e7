"""Standardized error logging helpers for hunkview.

The rendering engine degrades instead of failing, so the interesting
failures are the ones it absorbs. These helpers give every absorbed
failure the same shape in the log, grouped by a bracketed category.
"""

from typing import Any, Optional

from .logger import log


def log_parse_warning(line: str, reason: str) -> None:
    """Log a diff line the parser could not fully interpret.

    Parsing continues after these; line numbering may drift.

    Args:
        line: The raw diff line
        reason: Short description of what went wrong
    """
    log.debug(f"[PARSE] {reason}: {line!r}")


def log_highlight_error(filename: str, exception: Exception) -> None:
    """Log a tokenizer failure; the line is shown uncolored instead.

    Args:
        filename: Filename hint used to pick the lexer
        exception: The exception that was raised
    """
    error_type = type(exception).__name__
    log.debug(f"[HIGHLIGHT] Failed tokenizing line of {filename or '<unnamed>'}: {error_type}: {exception}")


def log_theme_error(theme_name: str, operation: str, exception: Optional[Exception] = None) -> None:
    """Log palette or syntax-style problems.

    Args:
        theme_name: Name of the palette or Pygments style
        operation: The operation being performed (e.g., "loading", "resolving")
        exception: The exception that was raised, if any
    """
    if exception is None:
        log.warning(f"[THEME] Failed {operation} theme '{theme_name}'")
        return
    error_type = type(exception).__name__
    log.warning(f"[THEME] Failed {operation} theme '{theme_name}': {error_type}: {exception}")


def log_config_error(field: str, value: Any, exception: Exception) -> None:
    """Log configuration values that were rejected.

    Args:
        field: Name of the configuration field or environment variable
        value: The value that failed
        exception: The exception that was raised
    """
    error_type = type(exception).__name__
    log.warning(f"[CONFIG] Ignoring {field}={value!r}: {error_type}: {exception}")


def log_file_error(file_path: str, operation: str, exception: Exception) -> None:
    """Log file operation errors with consistent formatting.

    Args:
        file_path: Path to the file that caused the error
        operation: Description of the operation (e.g., "reading", "writing")
        exception: The exception that was raised
    """
    error_type = type(exception).__name__
    log.error(f"[IO] Failed {operation} {file_path}: {error_type}: {exception}")
