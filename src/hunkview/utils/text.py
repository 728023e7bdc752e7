"""Numeric and display-width helpers shared by the diff renderers.

All widths here are terminal cells, not characters: a CJK ideograph or
most emoji occupy two cells, combining marks occupy none.
"""

from __future__ import annotations

from rich.cells import cell_len
from rich.text import Text

LINE_NUM_WIDTH = 4
ELLIPSIS = "…"


def format_line_number(number: int | None) -> str:
    """Right-align a line number in the gutter, or blank it when absent.

    Numbers wider than the gutter are kept whole rather than truncated.
    """
    if number is None or number < 0:
        return " " * LINE_NUM_WIDTH
    return f"{number:>{LINE_NUM_WIDTH}}"


def expand_tabs(text: str, tab_width: int = 4) -> str:
    """Replace tabs with spaces so every character has a known cell width."""
    if "\t" not in text:
        return text
    return text.expandtabs(tab_width)


def display_width(text: str | Text) -> int:
    """Number of terminal cells needed to show ``text``."""
    if isinstance(text, Text):
        return text.cell_len
    return cell_len(text)


def fit_text(text: Text, width: int, pad_style) -> Text:
    """Crop or pad ``text`` in place to exactly ``width`` cells.

    Overflow is cut on a cell boundary and marked with an ellipsis; padding
    uses ``pad_style`` so background colour runs to the column edge.
    """
    width = max(0, width)
    if width == 0:
        text.plain = ""
        return text
    if text.cell_len > width:
        text.truncate(width, overflow="ellipsis")
    if text.cell_len < width:
        # A wide character cut at the edge can leave one cell short
        text.append(" " * (width - text.cell_len), style=pad_style)
    return text


def crop_text(text: Text, width: int) -> Text:
    """Cut ``text`` in place when it is wider than ``width`` cells; never pads."""
    width = max(0, width)
    if text.cell_len > width:
        text.truncate(width, overflow="crop")
    return text
