"""Light and dark color themes."""

from headjump.config.themes.base import (
    Theme,
    ThemeColors,
    ThemeMessages,
    ThemeSwitcher,
    hex_to_rgb,
    list_themes,
    load_theme,
)

__all__ = [
    "Theme",
    "ThemeColors",
    "ThemeMessages",
    "ThemeSwitcher",
    "hex_to_rgb",
    "list_themes",
    "load_theme",
]
