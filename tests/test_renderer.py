"""Tests for inline and split diff rendering."""

import pytest
from rich.console import Console
from rich.text import Text

from hunkview.renderer import (
    BINARY_PLACEHOLDER,
    HUNK_MARKER,
    SPLIT_SEPARATOR,
    DiffRenderer,
    FileDiff,
    extract_filename,
    render_binary_file,
    render_diff,
    render_new_file,
    render_split_diff,
    split_file_diffs,
    to_ansi,
)
from hunkview.utils.diff_engine import DiffLine, DiffLineKind, ParsedDiff, parse_diff
from hunkview.utils.highlighter import TokenHighlighter
from hunkview.utils.text import display_width


def rows_of(text: Text):
    """Rendered rows without the trailing newline."""
    return text.split("\n")


def bgcolor_at(row: Text, offset: int):
    style = row.get_style_at_offset(Console(), offset)
    if style.bgcolor is None:
        return None
    return style.bgcolor.triplet.hex


class TestFilenames:
    """Test multi-file diff splitting."""

    def test_extract_filename(self):
        assert extract_filename("diff --git a/src/main.go b/src/main.go") == "src/main.go"

    def test_extract_filename_without_b_path(self):
        assert extract_filename("diff --git something") == ""

    def test_split_file_diffs(self, multi_file_diff):
        sections = split_file_diffs(multi_file_diff)
        assert [section.filename for section in sections] == ["one.py", "two.txt"]
        assert sections[0].raw.startswith("diff --git a/one.py")
        assert "+x = 2" in sections[0].raw
        assert "+world" in sections[1].raw

    def test_split_headerless_diff(self):
        assert split_file_diffs("@@ -1 +1 @@\n-a\n+b") == [FileDiff("", "@@ -1 +1 @@\n-a\n+b")]

    def test_split_empty(self):
        assert split_file_diffs("") == []


class TestInlineRendering:
    """Test the unified (inline) layout."""

    def test_row_per_line(self, plain_renderer, sample_diff):
        parsed = parse_diff(sample_diff)
        text = plain_renderer.render_diff(parsed, "main.go", 100)

        assert isinstance(text, Text)
        assert text.plain.endswith("\n")
        assert len(rows_of(text)) == len(parsed.lines)

    def test_row_widths(self, plain_renderer, sample_diff):
        """Code rows fill width - 1 cells, hunk bars the full width."""
        parsed = parse_diff(sample_diff)
        rows = rows_of(plain_renderer.render_diff(parsed, "main.go", 100))

        for line, row in zip(parsed.lines, rows):
            expected = 100 if line.kind is DiffLineKind.HUNK_HEADER else 99
            assert row.cell_len == expected

    def test_gutters_and_indicators(self, plain_renderer, sample_diff):
        rows = [row.plain for row in rows_of(plain_renderer.render_diff(parse_diff(sample_diff), "main.go", 100))]

        assert rows[0].startswith(HUNK_MARKER + " package main")
        assert rows[1].startswith("   1    1   package main")
        assert rows[2].startswith('   2      - import "fmt"')
        assert rows[3].startswith("        2 + import (")
        assert rows[6].startswith("   3    5   func main() {}")

    def test_tabs_are_expanded(self, plain_renderer, sample_diff):
        rows = [row.plain for row in rows_of(plain_renderer.render_diff(parse_diff(sample_diff), "main.go", 100))]
        assert all("\t" not in row for row in rows)
        assert rows[4].startswith('        3 +     "fmt"')

    def test_no_git_metadata(self, plain_renderer, sample_diff):
        text = plain_renderer.render_diff(parse_diff(sample_diff), "main.go", 100)
        assert "diff --git" not in text.plain
        assert "index abc1234" not in text.plain

    def test_background_runs_to_edge(self, plain_renderer, sample_diff):
        """Added and removed rows carry their background into the padding."""
        palette = plain_renderer.palette
        rows = rows_of(plain_renderer.render_diff(parse_diff(sample_diff), "main.go", 100))

        assert bgcolor_at(rows[2], 98) == palette.removed_bg
        assert bgcolor_at(rows[3], 98) == palette.added_bg
        assert bgcolor_at(rows[1], 98) is None

    def test_long_line_is_cropped_with_ellipsis(self, plain_renderer):
        parsed = parse_diff("+" + "x" * 200)
        (row,) = rows_of(plain_renderer.render_diff(parsed, "a.txt", 60))
        assert row.cell_len == 59
        assert row.plain.endswith("…")

    def test_wide_characters(self, plain_renderer):
        """Double-width characters count as two cells."""
        parsed = parse_diff("+日本語のテキスト\n-漢字")
        rows = rows_of(plain_renderer.render_diff(parsed, "a.txt", 40))
        assert [row.cell_len for row in rows] == [39, 39]

    def test_wide_characters_cropped(self, plain_renderer):
        parsed = parse_diff("+" + "字" * 40)
        (row,) = rows_of(plain_renderer.render_diff(parsed, "a.txt", 40))
        assert row.cell_len == 39

    def test_syntax_colors_keep_alignment(self, renderer, sample_diff):
        parsed = parse_diff(sample_diff)
        plain = DiffRenderer(palette=renderer.palette, highlighter=TokenHighlighter(None))

        colored = [row.plain for row in rows_of(renderer.render_diff(parsed, "main.go", 100))]
        uncolored = [row.plain for row in rows_of(plain.render_diff(parsed, "main.go", 100))]
        assert colored == uncolored

    def test_empty_diff(self, plain_renderer):
        assert plain_renderer.render_diff(ParsedDiff(), "a.txt", 80).plain == ""

    def test_truncation_notice_is_shown(self, plain_renderer):
        parsed = parse_diff("\n".join("+x" for _ in range(20)), max_lines=5)
        rows = rows_of(plain_renderer.render_diff(parsed, "a.txt", 80))
        assert "truncated" in rows[-1].plain

    def test_hunk_header_is_not_a_code_line(self, plain_renderer):
        with pytest.raises(ValueError):
            plain_renderer._code_column(DiffLine(DiffLineKind.HUNK_HEADER, "x"), "a.txt", 20)


class TestSplitRendering:
    """Test the side-by-side layout."""

    def test_separator_on_every_row(self, plain_renderer, sample_diff):
        text = plain_renderer.render_split_diff(parse_diff(sample_diff), "main.go", 101)
        for row in rows_of(text):
            assert SPLIT_SEPARATOR in row.plain
            assert row.cell_len == 101

    def test_separator_column_is_fixed(self, plain_renderer, sample_diff):
        text = plain_renderer.render_split_diff(parse_diff(sample_diff), "main.go", 101)
        for row in rows_of(text):
            assert row.plain[50] == SPLIT_SEPARATOR

    def test_panels(self, plain_renderer, sample_diff):
        rows = [row.plain for row in rows_of(plain_renderer.render_split_diff(parse_diff(sample_diff), "main.go", 101))]

        left, right = rows[2][:50], rows[2][51:]
        assert left.startswith('   2 - import "fmt"')
        assert right.startswith("   2 + import (")

        # Excess additions leave the left panel blank
        assert rows[3][:50].strip() == ""
        assert rows[3][51:].startswith('   3 +     "fmt"')

    @pytest.mark.parametrize("width", [80, 81, 100, 101])
    def test_context_identical_on_both_sides(self, plain_renderer, width):
        """Both panels are the same width, so long lines crop at the same column."""
        raw = "@@ -1,3 +1,3 @@\n same line\n x = compute_something(alpha, beta, gamma, delta, epsilon)\n other"
        rows = rows_of(plain_renderer.render_split_diff(parse_diff(raw), "a.py", width))
        panel = (width - 1) // 2
        for row in rows[1:]:
            text = row.plain
            assert text[:panel] == text[panel + 1:2 * panel + 1]
            assert text[panel] == SPLIT_SEPARATOR
            assert text[2 * panel + 1:].strip() == ""
            assert row.cell_len == width
        assert rows[2].plain[:panel].endswith("…")

    def test_even_width_leftover_cell_is_blank(self, plain_renderer, sample_diff):
        """The odd cell after two equal panels carries no background."""
        rows = rows_of(plain_renderer.render_split_diff(parse_diff(sample_diff), "main.go", 80))
        for row in rows:
            assert row.cell_len == 80
            assert row.plain[79] == " "
            assert bgcolor_at(row, 79) is None

    def test_long_hunk_header_spans_both_panels(self, plain_renderer):
        context = "def a_rather_long_function_name(argument_one, argument_two, argument_three):"
        parsed = parse_diff(f"@@ -1 +1 @@ {context}")
        (row,) = rows_of(plain_renderer.render_split_diff(parsed, "a.py", 101))
        assert context in row.plain
        assert row.cell_len == 101

    def test_odd_and_even_widths(self, plain_renderer, sample_diff):
        parsed = parse_diff(sample_diff)
        for width in (80, 81, 120, 121):
            for row in rows_of(plain_renderer.render_split_diff(parsed, "main.go", width)):
                assert row.cell_len == width

    def test_similarity_strategy(self):
        renderer = DiffRenderer(highlighter=TokenHighlighter(None), strategy="similarity")
        parsed = parse_diff("-value = compute(a, b)\n+import logging\n+value = compute(a, b, c)")
        rows = [row.plain for row in rows_of(renderer.render_split_diff(parsed, "a.py", 101))]

        assert rows[0][:50].strip() == ""
        assert "value = compute(a, b)" in rows[1][:50]
        assert "value = compute(a, b, c)" in rows[1][51:]


class TestBinaryRendering:
    """Test the binary placeholder."""

    @pytest.mark.parametrize("width", [0, 1, 5, 20, 80, 200])
    def test_placeholder_at_any_width(self, plain_renderer, width):
        parsed = parse_diff("Binary files a/x and b/x differ")
        assert "Binary" in plain_renderer.render_diff(parsed, "x", width).plain
        assert "Binary" in plain_renderer.render_split_diff(parsed, "x", width).plain

    def test_placeholder_text(self, plain_renderer):
        text = plain_renderer.render_binary_file(80)
        assert text.plain.startswith(BINARY_PLACEHOLDER)
        assert text.cell_len == 80
        assert "\n" not in text.plain


class TestNewFileRendering:
    """Test rendering untracked file content."""

    def test_inline(self, plain_renderer):
        rows = [row.plain for row in rows_of(plain_renderer.render_new_file("a\nb\nc", "x.txt", 60))]
        assert len(rows) == 3
        assert rows[0].startswith("        1 + a")
        assert rows[2].startswith("        3 + c")

    def test_split_uses_right_panel(self, plain_renderer):
        rows = rows_of(plain_renderer.render_new_file_split("a\nb\nc", "x.txt", 61))
        assert len(rows) == 3
        for number, row in enumerate(rows, start=1):
            assert row.plain[:30].strip() == ""
            assert row.plain[30] == SPLIT_SEPARATOR
            assert row.plain[31:].startswith(f"   {number} + ")
            assert row.cell_len == 61


class TestTinyWidths:
    """Narrow terminals never raise and never overflow."""

    @pytest.mark.parametrize("width", [0, 1, 2, 5, 10, 11, 12])
    def test_inline(self, plain_renderer, sample_diff, width):
        text = plain_renderer.render_diff(parse_diff(sample_diff), "main.go", width)
        assert all(row.cell_len <= width for row in rows_of(text))

    @pytest.mark.parametrize("width", [1, 2, 3, 7, 12])
    def test_split(self, plain_renderer, sample_diff, width):
        text = plain_renderer.render_split_diff(parse_diff(sample_diff), "main.go", width)
        assert all(row.cell_len <= width for row in rows_of(text))

    def test_split_zero_width(self, plain_renderer, sample_diff):
        plain_renderer.render_split_diff(parse_diff(sample_diff), "main.go", 0)
        plain_renderer.render_new_file_split("a", "a.txt", 0)


class TestCommitDiff:
    """Test multi-file rendering with file banners."""

    def test_banners(self, plain_renderer, multi_file_diff):
        rows = [row.plain for row in rows_of(plain_renderer.render_commit_diff(multi_file_diff, 80))]

        assert rows[0].startswith(" one.py")
        banner_two = next(i for i, row in enumerate(rows) if row.startswith(" two.txt"))
        assert any("x = 2" in row for row in rows[:banner_two])
        assert any("world" in row for row in rows[banner_two:])
        assert all(display_width(row) <= 80 for row in rows)

    def test_split_layout(self, plain_renderer, multi_file_diff):
        rows = [row.plain for row in rows_of(plain_renderer.render_commit_diff(multi_file_diff, 81, split=True))]
        code_rows = [row for row in rows if not row.startswith((" one.py", " two.txt"))]
        assert all(row[40] == SPLIT_SEPARATOR for row in code_rows)

    def test_binary_section(self, plain_renderer, binary_diff, multi_file_diff):
        text = plain_renderer.render_commit_diff(binary_diff + multi_file_diff, 80)
        rows = [row.plain for row in rows_of(text)]

        assert rows[0].startswith(" logo.png")
        assert rows[1].startswith(BINARY_PLACEHOLDER)
        assert rows[2].startswith(" one.py")

    def test_headerless_diff_uses_filename_hint(self, renderer):
        text = renderer.render_commit_diff("@@ -1 +1 @@\n-x = 1\n+x = 2", 80, filename="a.py")
        assert "x = 2" in text.plain
        assert not text.plain.startswith(" a.py")


class TestModuleFunctions:
    """Test the module-level convenience wrappers."""

    def test_with_explicit_renderer(self, plain_renderer, sample_diff):
        parsed = parse_diff(sample_diff)
        assert render_diff(parsed, "main.go", 80, renderer=plain_renderer).plain == (
            plain_renderer.render_diff(parsed, "main.go", 80).plain
        )

    def test_default_renderer(self, sample_diff):
        parsed = parse_diff(sample_diff)
        assert "package main" in render_diff(parsed, "main.go", 80).plain
        assert SPLIT_SEPARATOR in render_split_diff(parsed, "main.go", 80).plain
        assert "+ hello" in render_new_file("hello", "a.txt", 40).plain
        assert "Binary" in render_binary_file(3).plain


class TestAnsiExport:
    def test_contains_escape_codes(self, renderer, sample_diff):
        ansi = to_ansi(renderer.render_diff(parse_diff(sample_diff), "main.go", 80))
        assert "\x1b[" in ansi
        assert "package main" in ansi
