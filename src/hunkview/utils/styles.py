from __future__ import annotations

from dataclasses import dataclass

from rich.style import Style

from hunkview.themes.palette import Palette


@dataclass(frozen=True)
class DiffStyles:
    """Rich styles derived from a palette."""

    context: Style
    added: Style
    removed: Style
    added_bg: Style  # bg-only, for padding highlighted lines
    removed_bg: Style  # bg-only, for padding highlighted lines
    hunk_header: Style
    line_num: Style
    line_num_added: Style
    line_num_removed: Style
    header_bar: Style
    blank: Style

    @classmethod
    def from_palette(cls, palette: Palette) -> DiffStyles:
        return cls(
            context=Style(color=palette.fg),
            added=Style(color=palette.added_fg, bgcolor=palette.added_bg),
            removed=Style(color=palette.removed_fg, bgcolor=palette.removed_bg),
            added_bg=Style(bgcolor=palette.added_bg),
            removed_bg=Style(bgcolor=palette.removed_bg),
            hunk_header=Style(color=palette.hunk_fg, bgcolor=palette.hunk_bg),
            line_num=Style(color=palette.line_num_fg),
            line_num_added=Style(color=palette.line_num_added_fg, bgcolor=palette.added_bg),
            line_num_removed=Style(color=palette.line_num_removed_fg, bgcolor=palette.removed_bg),
            header_bar=Style(color=palette.header_fg, bgcolor=palette.header_bg, bold=True),
            blank=Style.null(),
        )
