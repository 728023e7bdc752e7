"""Token-level syntax highlighting for diff lines.

Lines are tokenized with Pygments and each run gets a foreground colour from
the active Pygments style. Backgrounds are left to the caller, which knows
whether the line was added, removed or unchanged.
"""

from __future__ import annotations

import os
import threading
from typing import Optional

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_for_filename
from pygments.lexers.special import TextLexer
from pygments.style import StyleMeta
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .error_handling import log_highlight_error, log_theme_error
from .logger import log

FALLBACK_STYLE = "monokai"

Run = tuple[str, Optional[str]]


def lexer_cache_key(filename: str) -> str:
    """Cache lexers per extension, or per basename for files like Makefile."""
    ext = os.path.splitext(filename)[1]
    return ext or os.path.basename(filename)


def token_foreground(style: StyleMeta, token_type) -> Optional[str]:
    """Hex foreground for a token type, or None when the style sets none."""
    color = style.style_for_token(token_type).get("color")
    if color:
        return f"#{color}"
    return None


class TokenHighlighter:
    """Pygments-backed highlighter with a per-extension lexer cache."""

    def __init__(self, style_name: Optional[str] = FALLBACK_STYLE):
        """Initialize for one Pygments style.

        Args:
            style_name: Pygments style name; None leaves the highlighter
                uninitialized so every line passes through uncolored
        """
        self._lexers: dict[str, Lexer] = {}
        self._lock = threading.Lock()
        self._style: Optional[StyleMeta] = None
        self.style_name = style_name
        if style_name is not None:
            self._style = self._load_style(style_name)

    @staticmethod
    def _load_style(style_name: str) -> StyleMeta:
        try:
            return get_style_by_name(style_name)
        except ClassNotFound as e:
            log_theme_error(style_name, "loading syntax style", e)
            return get_style_by_name(FALLBACK_STYLE)

    @property
    def initialized(self) -> bool:
        return self._style is not None

    def get_lexer(self, filename: str) -> Lexer:
        """Return the cached lexer for a filename, resolving it on first use."""
        key = lexer_cache_key(filename)
        with self._lock:
            lexer = self._lexers.get(key)
            if lexer is not None:
                return lexer

        try:
            lexer = get_lexer_for_filename(filename, stripnl=False, ensurenl=False)
        except ClassNotFound:
            log.debug(f"[HIGHLIGHT] No lexer for {filename!r}, using plain text")
            lexer = TextLexer(stripnl=False, ensurenl=False)

        with self._lock:
            return self._lexers.setdefault(key, lexer)

    def highlight(self, text: str, filename: str) -> list[Run]:
        """Split ``text`` into (run, foreground) pairs.

        Adjacent runs sharing a foreground are merged. Highlighting is best
        effort: any failure yields the whole line as one uncolored run.
        """
        if not text or self._style is None:
            return [(text, None)]

        lexer = self.get_lexer(filename)
        runs: list[Run] = []
        try:
            for token_type, value in lexer.get_tokens(text):
                if not value:
                    continue
                color = token_foreground(self._style, token_type)
                if runs and runs[-1][1] == color:
                    runs[-1] = (runs[-1][0] + value, color)
                else:
                    runs.append((value, color))
        except Exception as e:
            log_highlight_error(filename, e)
            return [(text, None)]

        return runs or [(text, None)]

    def clear_cache(self):
        """Drop cached lexers."""
        with self._lock:
            self._lexers.clear()


_instances: dict[Optional[str], TokenHighlighter] = {}
_instances_lock = threading.Lock()


def get_highlighter(style_name: Optional[str] = FALLBACK_STYLE) -> TokenHighlighter:
    """Process-wide highlighter per style, created on first request."""
    with _instances_lock:
        instance = _instances.get(style_name)
        if instance is None:
            instance = _instances[style_name] = TokenHighlighter(style_name)
        return instance


def highlight_line(text: str, filename: str, style_name: Optional[str] = FALLBACK_STYLE) -> list[Run]:
    """Convenience function using the shared highlighter for ``style_name``."""
    return get_highlighter(style_name).highlight(text, filename)
