"""
Base theme class and theme loading utilities.

Themes are purely cosmetic: they only change colors and labels, never the
simulation.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
import logging

import yaml

logger = logging.getLogger(__name__)

Color = tuple[int, int, int]


def hex_to_rgb(hex_color: str) -> Color:
    """Convert ``#RRGGBB`` to an RGB tuple."""
    hex_color = hex_color.lstrip("#")
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


@dataclass
class ThemeColors:
    """Theme color palette."""
    background: str = "#F4F1EA"   # Page around the play field
    field: str = "#DCEBFA"        # Play field sky
    ground: str = "#6B8E23"       # Floor strip
    player_head: str = "#F2C48D"
    player_body: str = "#3A6EA5"
    obstacle: str = "#C0392B"
    text: str = "#1E1E28"
    accent: str = "#3A6EA5"       # Buttons
    overlay: str = "#000000"      # Modal dim color

    def to_rgb(self, color_name: str) -> Color:
        """Convert a named palette entry to an RGB tuple."""
        return hex_to_rgb(getattr(self, color_name, self.text))


@dataclass
class ThemeMessages:
    """Labels shown by the window."""
    title: str = "Head Jump Game"
    start_hint: str = "Click or press SPACE to jump over obstacles!"
    start_button: str = "Start Game"
    game_over: str = "Game Over!"
    restart_button: str = "Play Again"
    instructions: str = "Press SPACE or click to jump"


@dataclass
class Theme:
    """Complete theme configuration."""
    name: str = "light"
    description: str = "Light theme"
    toggle_label: str = "Dark Mode"  # Label of the button that leaves this theme

    colors: ThemeColors = field(default_factory=ThemeColors)
    messages: ThemeMessages = field(default_factory=ThemeMessages)

    @classmethod
    def from_yaml(cls, data: dict[str, Any]) -> "Theme":
        """Create theme from YAML data."""
        theme = cls(
            name=data.get("name", "light"),
            description=data.get("description", ""),
            toggle_label=data.get("toggle_label", "Dark Mode"),
        )

        if "colors" in data:
            theme.colors = ThemeColors(**data["colors"])

        if "messages" in data:
            theme.messages = ThemeMessages(**data["messages"])

        return theme


def load_theme(theme_name: str, themes_path: Path | None = None) -> Theme:
    """
    Load a theme from YAML file.

    Args:
        theme_name: Name of the theme (without .yaml extension)
        themes_path: Path to themes directory

    Returns:
        Theme instance
    """
    if themes_path is None:
        themes_path = Path(__file__).parent

    theme_file = themes_path / f"{theme_name}.yaml"

    if not theme_file.exists():
        logger.warning(f"Theme file not found: {theme_file}, using defaults")
        return Theme(name=theme_name)

    with open(theme_file, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return Theme.from_yaml(data)


def list_themes(themes_path: Path | None = None) -> list[str]:
    """List available themes."""
    if themes_path is None:
        themes_path = Path(__file__).parent

    return sorted(f.stem for f in themes_path.glob("*.yaml"))


class ThemeSwitcher:
    """Cycles between the available themes."""

    def __init__(self, initial: str = "light", themes_path: Path | None = None) -> None:
        self._themes_path = themes_path
        self._names = list_themes(themes_path) or [initial]
        if initial not in self._names:
            self._names.insert(0, initial)
        self._index = self._names.index(initial)
        self._current = load_theme(initial, themes_path)

    @property
    def current(self) -> Theme:
        return self._current

    def toggle(self) -> Theme:
        """Switch to the next theme and return it."""
        self._index = (self._index + 1) % len(self._names)
        self._current = load_theme(self._names[self._index], self._themes_path)
        logger.info(f"Theme switched to {self._current.name}")
        return self._current
