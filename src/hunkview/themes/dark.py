from hunkview.themes.palette import Palette

# Catppuccin Mocha inspired pastel dark palette
THEMES = [
    Palette(
        name="dark",
        fg="#e0e0f0",
        added_fg="#a6e3a1",  # green
        added_bg="#1e3a2c",
        removed_fg="#f38ba8",  # red
        removed_bg="#3b1d2e",
        hunk_fg="#6c5ce7",  # violet
        hunk_bg="#252636",
        line_num_fg="#585b70",  # surface2
        line_num_added_fg="#a6e3a1",
        line_num_removed_fg="#f38ba8",
        header_bg="#282a3a",
        header_fg="#c678dd",
        syntax_style="monokai",
        dark=True,
    )
]
