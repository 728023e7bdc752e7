from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    """Colours used to paint a diff. All colours are hex strings."""

    name: str
    fg: str

    # Diff colors
    added_fg: str
    added_bg: str
    removed_fg: str
    removed_bg: str
    hunk_fg: str
    hunk_bg: str

    # Line numbers
    line_num_fg: str
    line_num_added_fg: str
    line_num_removed_fg: str

    # File banner
    header_bg: str
    header_fg: str

    # Pygments style used for token foregrounds
    syntax_style: str = "monokai"
    dark: bool = True
