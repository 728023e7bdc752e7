"""Diff layout for hunkview.

Turns parsed diffs into fixed-width Rich ``Text``, either inline (one
old/new gutter per row) or split into two panels. Three concerns are layered
on every code row: the line-number gutter, the background for the kind of
line, and the syntax foregrounds from the highlighter. Widths are always
measured in terminal cells.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Iterable, Optional

from rich.console import Console
from rich.style import Style
from rich.text import Text

from hunkview.themes import get_palette
from hunkview.themes.palette import Palette
from hunkview.utils.diff_engine import (
    MAX_DIFF_LINES,
    DiffLine,
    DiffLineKind,
    ParsedDiff,
    new_file_lines,
    parse_diff,
)
from hunkview.utils.highlighter import TokenHighlighter, get_highlighter
from hunkview.utils.line_pairing import SplitLine, pair_lines
from hunkview.utils.styles import DiffStyles
from hunkview.utils.text import (
    LINE_NUM_WIDTH,
    crop_text,
    display_width,
    expand_tabs,
    fit_text,
    format_line_number,
)

BINARY_PLACEHOLDER = "  Binary file — cannot display diff"
HUNK_MARKER = "    ···  "
SPLIT_SEPARATOR = "│"

# old gutter, space, new gutter, space, and the slack cell
INLINE_CHROME = LINE_NUM_WIDTH * 2 + 3
# gutter and the space after it
SPLIT_GUTTER = LINE_NUM_WIDTH + 1


@dataclass(frozen=True)
class KindStyle:
    indicator: str
    text: Style
    pad: Style
    number: Style
    bgcolor: Optional[str]


@dataclass(frozen=True)
class FileDiff:
    """One file's section of a multi-file diff."""

    filename: str
    raw: str


def extract_filename(diff_header: str) -> str:
    """Pull the b/ path from "diff --git a/foo b/foo"."""
    parts = diff_header.split(" b/", 1)
    if len(parts) == 2:
        return parts[1]
    return ""


def split_file_diffs(raw: str) -> list[FileDiff]:
    """Split a multi-file diff at each "diff --git" line."""
    sections: list[FileDiff] = []
    filename = ""
    current: list[str] = []

    for line in raw.split("\n"):
        if line.startswith("diff --git"):
            if current:
                sections.append(FileDiff(filename, "\n".join(current)))
            filename = extract_filename(line)
            current = [line]
        else:
            current.append(line)

    if current and (filename or any(current)):
        sections.append(FileDiff(filename, "\n".join(current)))
    return sections


def to_ansi(text: Text, width: int | None = None, color_system: str = "truecolor") -> str:
    """Export rendered text as a string of ANSI escape sequences."""
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        force_terminal=True,
        color_system=color_system,
        width=width or max(1, text.cell_len),
        legacy_windows=False,
    )
    console.print(text, end="", soft_wrap=True, highlight=False)
    return buffer.getvalue()


class DiffRenderer:
    """Renders parsed diffs with one palette and one highlighter."""

    def __init__(
        self,
        palette: Palette | None = None,
        highlighter: TokenHighlighter | None = None,
        tab_width: int = 4,
        strategy: str = "positional",
    ):
        self.palette = palette or get_palette()
        self.styles = DiffStyles.from_palette(self.palette)
        if highlighter is None:
            highlighter = get_highlighter(self.palette.syntax_style)
        self.highlighter = highlighter
        self.tab_width = tab_width
        self.strategy = strategy

        styles = self.styles
        self._kinds = {
            DiffLineKind.CONTEXT: KindStyle(" ", styles.context, styles.blank, styles.line_num, None),
            DiffLineKind.ADDED: KindStyle(
                "+", styles.added, styles.added_bg, styles.line_num_added, self.palette.added_bg
            ),
            DiffLineKind.REMOVED: KindStyle(
                "-", styles.removed, styles.removed_bg, styles.line_num_removed, self.palette.removed_bg
            ),
        }

    # Row builders

    def _kind_style(self, line: DiffLine) -> KindStyle:
        try:
            return self._kinds[line.kind]
        except KeyError:
            raise ValueError(f"{line.kind} is not a code line") from None

    def _code_column(self, line: DiffLine, filename: str, width: int) -> Text:
        """Indicator, highlighted content and background padding."""
        kind = self._kind_style(line)
        column = Text(f"{kind.indicator} ", style=kind.text, end="")
        content = expand_tabs(line.content, self.tab_width)
        for run, fg in self.highlighter.highlight(content, filename):
            column.append(run, style=Style(color=fg, bgcolor=kind.bgcolor) if fg else None)
        return fit_text(column, width, kind.pad)

    def _hunk_row(self, line: DiffLine, width: int) -> Text:
        row = Text(HUNK_MARKER, style=self.styles.line_num, end="")
        if line.content:
            row.append(" " + line.content, style=self.styles.hunk_header)
        return fit_text(row, width, self.styles.hunk_header)

    def _inline_row(self, line: DiffLine, filename: str, width: int) -> Text:
        if line.kind is DiffLineKind.HUNK_HEADER:
            return self._hunk_row(line, width)

        kind = self._kind_style(line)
        numbers = Text(
            f"{format_line_number(line.old_line_number)} {format_line_number(line.new_line_number)}",
            style=kind.number,
        )
        column = self._code_column(line, filename, width - INLINE_CHROME)
        return crop_text(Text.assemble(numbers, " ", column, end=""), width)

    def _split_side(self, line: DiffLine | None, filename: str, panel_width: int, left: bool) -> Text:
        panel_width = max(0, panel_width)
        if line is None:
            return Text(" " * panel_width, style=self.styles.blank, end="")

        kind = self._kind_style(line)
        number = line.old_line_number if left else line.new_line_number
        gutter = Text(format_line_number(number) + " ", style=kind.number)
        column = self._code_column(line, filename, panel_width - SPLIT_GUTTER)
        return fit_text(Text.assemble(gutter, column, end=""), panel_width, kind.pad)

    def _split_hunk_row(self, line: DiffLine, panel_width: int, width: int) -> Text:
        """Full-width hunk bar; the divider is kept when the text leaves room for it."""
        row = self._hunk_row(line, panel_width)
        if display_width(row.plain.rstrip()) >= panel_width:
            return self._hunk_row(line, width)
        bar = Style(color=self.palette.line_num_fg, bgcolor=self.palette.hunk_bg)
        row.append(SPLIT_SEPARATOR, style=bar)
        row.append(" " * panel_width, style=self.styles.hunk_header)
        return self._pad_right_edge(row, width)

    def _pad_right_edge(self, row: Text, width: int) -> Text:
        """Odd leftover cell after two equal panels and the separator."""
        slack = width - row.cell_len
        if slack > 0:
            row.append(" " * slack, style=self.styles.blank)
        return row

    def _split_row(self, pair: SplitLine, filename: str, width: int) -> Text:
        # Equal panels so context lines crop at the same column on both sides
        panel_width = max(0, (width - 1) // 2)
        if pair.is_hunk_header:
            return self._split_hunk_row(pair.left, panel_width, width)

        row = Text.assemble(
            self._split_side(pair.left, filename, panel_width, left=True),
            Text(SPLIT_SEPARATOR, style=self.styles.line_num),
            self._split_side(pair.right, filename, panel_width, left=False),
            end="",
        )
        return self._pad_right_edge(row, width)

    @staticmethod
    def _join(rows: Iterable[Text]) -> Text:
        out = Text(end="")
        for row in rows:
            out.append_text(row)
            out.append("\n")
        return out

    # Public API

    def render_diff(self, parsed: ParsedDiff, filename: str, width: int) -> Text:
        """Inline view of a parsed diff."""
        if parsed.binary:
            return self.render_binary_file(width)
        return self._join(self._inline_row(line, filename, width) for line in parsed.lines)

    def render_split_diff(self, parsed: ParsedDiff, filename: str, width: int) -> Text:
        """Side-by-side view of a parsed diff."""
        if parsed.binary:
            return self.render_binary_file(width)
        pairs = pair_lines(parsed.lines, strategy=self.strategy)
        return self._join(self._split_row(pair, filename, width) for pair in pairs)

    def render_new_file(self, content: str, filename: str, width: int) -> Text:
        """Untracked file content shown as an all-added inline diff."""
        return self._join(self._inline_row(line, filename, width) for line in new_file_lines(content))

    def render_new_file_split(self, content: str, filename: str, width: int) -> Text:
        """Untracked file content on the right panel, left panel blank."""
        pairs = [SplitLine(right=line) for line in new_file_lines(content)]
        return self._join(self._split_row(pair, filename, width) for pair in pairs)

    def render_binary_file(self, width: int) -> Text:
        """One-line placeholder for binary files, never cropped."""
        row = Text(BINARY_PLACEHOLDER, style=self.styles.hunk_header, end="")
        if row.cell_len < width:
            fit_text(row, width, self.styles.hunk_header)
        return row

    def render_file_banner(self, filename: str, width: int) -> Text:
        banner = Text(" " + filename, style=self.styles.header_bar, end="")
        return fit_text(banner, width, self.styles.header_bar)

    def render_commit_diff(
        self,
        raw: str,
        width: int,
        split: bool = False,
        max_lines: int = MAX_DIFF_LINES,
        filename: str = "",
    ) -> Text:
        """Multi-file diff with a banner above each file.

        ``filename`` is the highlighting hint for a section that has no
        "diff --git" header of its own.
        """
        out = Text(end="")
        for section in split_file_diffs(raw):
            if section.filename:
                out.append_text(self.render_file_banner(section.filename, width))
                out.append("\n")
            hint = section.filename or filename
            parsed = parse_diff(section.raw, max_lines)
            if split:
                body = self.render_split_diff(parsed, hint, width)
            else:
                body = self.render_diff(parsed, hint, width)
            out.append_text(body)
            if parsed.binary:
                out.append("\n")
        return out


def render_diff(parsed: ParsedDiff, filename: str, width: int, renderer: DiffRenderer | None = None) -> Text:
    return (renderer or DiffRenderer()).render_diff(parsed, filename, width)


def render_split_diff(parsed: ParsedDiff, filename: str, width: int, renderer: DiffRenderer | None = None) -> Text:
    return (renderer or DiffRenderer()).render_split_diff(parsed, filename, width)


def render_new_file(content: str, filename: str, width: int, renderer: DiffRenderer | None = None) -> Text:
    return (renderer or DiffRenderer()).render_new_file(content, filename, width)


def render_new_file_split(content: str, filename: str, width: int, renderer: DiffRenderer | None = None) -> Text:
    return (renderer or DiffRenderer()).render_new_file_split(content, filename, width)


def render_binary_file(width: int, renderer: DiffRenderer | None = None) -> Text:
    return (renderer or DiffRenderer()).render_binary_file(width)
