from hunkview.themes.palette import Palette

# Catppuccin Latte inspired pastel light palette
THEMES = [
    Palette(
        name="light",
        fg="#4c4f69",  # text
        added_fg="#1a7f2a",
        added_bg="#e6f5e4",
        removed_fg="#d20f39",
        removed_bg="#fde4e8",
        hunk_fg="#1e66f5",  # blue
        hunk_bg="#e6e9ef",
        line_num_fg="#9ca0b0",
        line_num_added_fg="#1a7f2a",
        line_num_removed_fg="#d20f39",
        header_bg="#e6e9ef",
        header_fg="#8839ef",  # mauve
        syntax_style="friendly",
        dark=False,
    )
]
