"""Unified diff parsing for hunkview.

This module turns the plain text produced by ``git diff`` (or any other
unified-diff producer) into typed lines suitable for rendering. It does not
compute diffs; it only reads them, tolerating truncated or malformed input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .error_handling import log_parse_warning
from .logger import log

MAX_DIFF_LINES = 10000

BINARY_MARKER = "Binary files"
BINARY_DIFFER = "differ"

# Raw git metadata; a clean file banner is shown instead
HEADER_PREFIXES = (
    "diff --git",
    "index ",
    "new file",
    "deleted file",
    "similarity",
    "rename",
    "old mode",
    "new mode",
    "--- ",
    "+++ ",
)


class DiffLineKind(Enum):
    """Enumeration of retained diff line kinds."""

    CONTEXT = "context"
    ADDED = "added"
    REMOVED = "removed"
    HUNK_HEADER = "hunk"


@dataclass(frozen=True)
class DiffLine:
    """A single logical row of a unified diff."""

    kind: DiffLineKind
    content: str
    old_line_number: Optional[int] = None
    new_line_number: Optional[int] = None


@dataclass(frozen=True)
class LineCounters:
    """Running old/new line numbers threaded through classification."""

    old_num: int = 0
    new_num: int = 0


@dataclass(frozen=True)
class ParsedDiff:
    """Result of parsing a raw unified diff.

    A binary diff never carries lines; constructing one that does is an error.
    """

    lines: tuple[DiffLine, ...] = field(default_factory=tuple)
    binary: bool = False

    def __post_init__(self):
        if not isinstance(self.lines, tuple):
            object.__setattr__(self, "lines", tuple(self.lines))
        if self.binary and self.lines:
            raise ValueError("a binary diff cannot carry lines")

    @classmethod
    def binary_file(cls) -> ParsedDiff:
        return cls(lines=(), binary=True)

    @property
    def truncated(self) -> bool:
        if not self.lines:
            return False
        last = self.lines[-1]
        return last.kind is DiffLineKind.HUNK_HEADER and last.content.startswith(TRUNCATION_PREFIX)


TRUNCATION_PREFIX = "… truncated"


def truncation_notice(max_lines: int = MAX_DIFF_LINES) -> str:
    return f"{TRUNCATION_PREFIX} ({max_lines}+ lines)"


def is_binary_diff(raw: str) -> bool:
    """Check for git's "Binary files a/x and b/x differ" notice."""
    return BINARY_MARKER in raw and BINARY_DIFFER in raw


def extract_hunk_context(line: str) -> str:
    """Pull the human-readable part out of a hunk header.

    "@@ -13,6 +13,7 @@ func main() {" -> "func main() {"
    "@@ -13,6 +13,7 @@"                -> "-13,6 +13,7"
    """
    parts = line.split("@@", 2)
    if len(parts) == 3:
        context = parts[2].strip()
        if context:
            return context
    # Show the range info as fallback
    if len(parts) >= 2:
        return parts[1].strip()
    return line


def parse_hunk_header(line: str, counters: LineCounters) -> LineCounters:
    """Reseed the running counters from "@@ -old,count +new,count @@".

    Ranges that cannot be parsed leave the matching counter unchanged.
    """
    parts = line.split("@@", 2)
    if len(parts) < 2:
        log_parse_warning(line, "hunk header without range")
        return counters

    old_num, new_num = counters.old_num, counters.new_num
    for token in parts[1].split():
        if token.startswith("-"):
            try:
                old_num = int(token[1:].split(",", 1)[0])
            except ValueError:
                log_parse_warning(line, "unparseable old range")
        elif token.startswith("+"):
            try:
                new_num = int(token[1:].split(",", 1)[0])
            except ValueError:
                log_parse_warning(line, "unparseable new range")
    return LineCounters(old_num, new_num)


def classify_line(line: str, counters: LineCounters) -> tuple[Optional[DiffLine], LineCounters]:
    """Classify one raw diff line.

    Returns the typed line (or None when the line is discarded) together
    with the counters to use for the next line.
    """
    if line.startswith(HEADER_PREFIXES):
        return None, counters

    if line.startswith("@@"):
        counters = parse_hunk_header(line, counters)
        return DiffLine(DiffLineKind.HUNK_HEADER, extract_hunk_context(line)), counters

    if line.startswith("+"):
        added = DiffLine(DiffLineKind.ADDED, line[1:], new_line_number=counters.new_num)
        return added, LineCounters(counters.old_num, counters.new_num + 1)

    if line.startswith("-"):
        removed = DiffLine(DiffLineKind.REMOVED, line[1:], old_line_number=counters.old_num)
        return removed, LineCounters(counters.old_num + 1, counters.new_num)

    # "\ No newline at end of file"
    if line.startswith("\\") or line == "":
        return None, counters

    content = line[1:] if line.startswith(" ") else line
    context = DiffLine(
        DiffLineKind.CONTEXT,
        content,
        old_line_number=counters.old_num,
        new_line_number=counters.new_num,
    )
    return context, LineCounters(counters.old_num + 1, counters.new_num + 1)


def parse_diff(raw: str, max_lines: int = MAX_DIFF_LINES) -> ParsedDiff:
    """Parse raw unified diff text into a ParsedDiff.

    Args:
        raw: Unified diff text, without colour escapes
        max_lines: Cap on retained lines; one truncation marker is appended
            when it is reached

    Returns:
        ParsedDiff with ordered lines, or a binary result with no lines
    """
    if is_binary_diff(raw):
        return ParsedDiff.binary_file()

    lines: list[DiffLine] = []
    counters = LineCounters()

    for raw_line in raw.split("\n"):
        if len(lines) >= max_lines:
            log.debug(f"[PARSE] Diff truncated at {max_lines} lines")
            lines.append(DiffLine(DiffLineKind.HUNK_HEADER, truncation_notice(max_lines)))
            break
        diff_line, counters = classify_line(raw_line, counters)
        if diff_line is not None:
            lines.append(diff_line)

    return ParsedDiff(lines=tuple(lines))


def new_file_lines(content: str) -> list[DiffLine]:
    """Treat raw file content as an all-added diff numbered from 1."""
    return [
        DiffLine(DiffLineKind.ADDED, line, new_line_number=number)
        for number, line in enumerate(content.split("\n"), start=1)
    ]
