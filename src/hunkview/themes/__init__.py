"""Palette plugins for hunkview.

Drop Python files in this package that expose either:
- THEMES: list[Palette]
- get_themes() -> list[Palette] | Palette

They will be auto-discovered the first time a palette is requested.
"""

from __future__ import annotations

import importlib
import pkgutil
import re
from dataclasses import fields
from typing import Any

from hunkview.themes.palette import Palette
from hunkview.utils.error_handling import log_theme_error
from hunkview.utils.logger import log

DEFAULT_PALETTE = "dark"

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class ThemeValidator:
    """Validates palette objects before they are made available."""

    def validate_theme(self, theme_obj: Any) -> bool:
        """Validate that a palette has a name and well-formed colours.

        Args:
            theme_obj: Palette object to validate

        Returns:
            True if palette is valid, False otherwise
        """
        if not isinstance(theme_obj, Palette):
            return False
        if not theme_obj.name or not theme_obj.name.strip():
            return False

        for palette_field in fields(Palette):
            if palette_field.name in ("name", "syntax_style", "dark"):
                continue
            value = getattr(theme_obj, palette_field.name)
            if not isinstance(value, str) or not _HEX_COLOR.match(value):
                log.debug(f"Palette {theme_obj.name} has invalid {palette_field.name} colour: {value!r}")
                return False
        return True


# Global theme validator instance
theme_validator = ThemeValidator()

_registry: dict[str, Palette] = {}


def _coerce_to_list(obj: Any) -> list[Any]:
    if obj is None:
        return []
    if isinstance(obj, list):
        return obj  # type: ignore
    return [obj]  # type: ignore


def discover_themes() -> list[Palette]:
    themes: list[Any] = []
    for modinfo in pkgutil.iter_modules(__path__, prefix=__name__ + "."):
        try:
            mod = importlib.import_module(modinfo.name)
        except ImportError as e:
            log_theme_error(modinfo.name, "importing", e)
            continue
        try:
            if hasattr(mod, "THEMES"):
                themes.extend(list(mod.THEMES))  # type: ignore
            elif hasattr(mod, "get_themes"):
                got = mod.get_themes()  # type: ignore[attr-defined]
                themes.extend(_coerce_to_list(got))
        except (AttributeError, ValueError, TypeError) as e:
            log_theme_error(modinfo.name, "extracting palettes from", e)
            continue
    return themes


def register_all_themes(registry: dict[str, Palette] | None = None) -> int:
    """Register every valid discovered palette.

    Returns the number of palettes registered.
    """
    target = _registry if registry is None else registry
    count = 0
    for theme in discover_themes():
        if not theme_validator.validate_theme(theme):
            log(f"Skipping invalid palette: {getattr(theme, 'name', 'unknown')}")
            continue
        target[theme.name] = theme
        count += 1
    log.debug(f"Registered {count} palettes")
    return count


def _ensure_registered() -> None:
    if not _registry:
        register_all_themes()


def available_palettes() -> list[str]:
    _ensure_registered()
    return sorted(_registry)


def get_palette(name: str | None = None) -> Palette:
    """Return the named palette, falling back to the default one."""
    _ensure_registered()
    if name and name in _registry:
        return _registry[name]
    if name:
        log_theme_error(name, "resolving")
    return _registry[DEFAULT_PALETTE]
