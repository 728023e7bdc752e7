import os
import sys
from typing import Iterator

import pytest

# Ensure local src path is importable
_here = os.path.dirname(os.path.dirname(__file__))
_src = os.path.join(_here, "src")
if os.path.isdir(_src) and _src not in sys.path:
    sys.path.insert(0, _src)

from hunkview.renderer import DiffRenderer  # noqa: E402
from hunkview.themes import get_palette  # noqa: E402
from hunkview.utils.highlighter import TokenHighlighter  # noqa: E402
from hunkview.utils.logger import LogLevel, log  # noqa: E402

SAMPLE_DIFF = """diff --git a/main.go b/main.go
index abc1234..def5678 100644
--- a/main.go
+++ b/main.go
@@ -1,3 +1,4 @@ package main
 package main
-import "fmt"
+import (
+\t"fmt"
+)
 func main() {}
"""

MULTI_FILE_DIFF = """diff --git a/one.py b/one.py
--- a/one.py
+++ b/one.py
@@ -1,2 +1,2 @@
-x = 1
+x = 2
 y = 3
diff --git a/two.txt b/two.txt
--- a/two.txt
+++ b/two.txt
@@ -5,1 +5,2 @@
 hello
+world
"""

BINARY_DIFF = """diff --git a/logo.png b/logo.png
index 1111111..2222222 100644
Binary files a/logo.png and b/logo.png differ
"""


@pytest.fixture
def sample_diff() -> str:
    """Single-file diff with one hunk, one removal and three additions."""
    return SAMPLE_DIFF


@pytest.fixture
def multi_file_diff() -> str:
    return MULTI_FILE_DIFF


@pytest.fixture
def binary_diff() -> str:
    return BINARY_DIFF


@pytest.fixture
def plain_renderer() -> DiffRenderer:
    """Renderer whose highlighter passes text through uncolored.

    Keeps layout assertions independent of Pygments token boundaries.
    """
    return DiffRenderer(palette=get_palette("dark"), highlighter=TokenHighlighter(None))


@pytest.fixture
def renderer() -> DiffRenderer:
    """Renderer with a private, fully initialized highlighter."""
    palette = get_palette("dark")
    return DiffRenderer(palette=palette, highlighter=TokenHighlighter(palette.syntax_style))


@pytest.fixture
def captured_log() -> Iterator[list]:
    """Route logger output into a list of lines at DEBUG level."""

    class _Sink:
        def __init__(self):
            self.lines = []

        def write(self, text):
            self.lines.extend(part for part in text.splitlines() if part)

        def flush(self):
            pass

        def isatty(self):
            return False

    sink = _Sink()
    previous_level = log.level
    log.set_stream(sink)
    log.set_level(LogLevel.DEBUG)
    try:
        yield sink.lines
    finally:
        log.set_stream(None)
        log.set_level(previous_level)
