"""Configuration for Head Jump."""

from headjump.config.settings import GameSettings, WindowSettings, Settings, get_settings

__all__ = ["GameSettings", "WindowSettings", "Settings", "get_settings"]
