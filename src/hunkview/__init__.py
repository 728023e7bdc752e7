"""hunkview package initialization.

Renders unified diffs as styled terminal text. The usual entry points are
re-exported here:

    parsed = parse_diff(raw)
    text = render_diff(parsed, "main.py", 120)
    text = render_split_diff(parsed, "main.py", 120)
"""

from __future__ import annotations

from hunkview.renderer import (
    DiffRenderer,
    render_binary_file,
    render_diff,
    render_new_file,
    render_new_file_split,
    render_split_diff,
    to_ansi,
)
from hunkview.utils.diff_engine import DiffLine, DiffLineKind, ParsedDiff, parse_diff
from hunkview.utils.line_pairing import SplitLine, pair_lines

__version__ = "0.1.0"

__all__ = [
    "DiffLine",
    "DiffLineKind",
    "DiffRenderer",
    "ParsedDiff",
    "SplitLine",
    "pair_lines",
    "parse_diff",
    "render_binary_file",
    "render_diff",
    "render_new_file",
    "render_new_file_split",
    "render_split_diff",
    "to_ansi",
]
