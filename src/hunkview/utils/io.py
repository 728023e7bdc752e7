from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .error_handling import log_file_error
from .logger import log

# Tried in order; latin-1 accepts any byte sequence
DEFAULT_ENCODINGS: tuple[str, ...] = (
    "utf-8",
    "utf-8-sig",
    "cp1252",
    "latin-1",
)


@dataclass
class FileReadResult:
    """Outcome of reading a diff or an untracked file from disk."""
    success: bool
    content: str = ""
    encoding: str = ""
    error_message: str = ""

    @property
    def is_binary(self) -> bool:
        return "\x00" in self.content


def decode_bytes(data: bytes, encodings: Iterable[str] = DEFAULT_ENCODINGS) -> tuple[str, str]:
    """Decode with the first encoding that accepts ``data``.

    Returns (text, used_encoding). When every encoding fails, the last one is
    retried with errors="replace" and the encoding is reported as "<enc>+replace".
    Line endings are normalised to "\\n".
    """
    last_enc = ""
    for enc in encodings:
        last_enc = enc
        try:
            text = data.decode(enc)
        except UnicodeDecodeError:
            continue
        return _normalise_newlines(text), enc

    if not last_enc:
        return "", ""
    log.warning(f"[IO] No encoding decoded cleanly, replacing bad bytes ({last_enc})")
    return _normalise_newlines(data.decode(last_enc, errors="replace")), f"{last_enc}+replace"


def _normalise_newlines(text: str) -> str:
    if "\r" not in text:
        return text
    return text.replace("\r\n", "\n").replace("\r", "\n")


def read_text(path: str, encodings: Iterable[str] = DEFAULT_ENCODINGS) -> tuple[str, str]:
    """Read a whole file as text. OSError propagates to the caller."""
    with open(path, "rb") as f:
        data = f.read()
    return decode_bytes(data, encodings)


def safe_read_file(file_path: str) -> FileReadResult:
    """Read a whole file, reporting failure in the result instead of raising.

    Args:
        file_path: Path to the file to read

    Returns:
        FileReadResult with success status, content, and error details
    """
    if not file_path:
        return FileReadResult(success=False, error_message="No file path provided")

    try:
        content, encoding = read_text(file_path)
    except OSError as e:
        log_file_error(file_path, "reading", e)
        return FileReadResult(success=False, error_message=f"Error reading {file_path}: {e}")

    return FileReadResult(success=True, content=content, encoding=encoding)
