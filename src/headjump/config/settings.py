"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested groups use a double underscore, e.g. ``HEADJUMP_GAME__GRAVITY=0.8``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GameSettings(BaseSettings):
    """Play field geometry and physics constants.

    All distances are pixels, all speeds are pixels per tick.
    """

    # Play field
    field_width: int = Field(default=800, gt=0)
    field_height: int = Field(default=400, gt=0)
    ground_margin: int = Field(default=50, ge=0)  # Floor sits this far above the field bottom

    # Player
    player_left: int = Field(default=100, ge=0)
    player_width: int = Field(default=60, gt=0)
    player_height: int = Field(default=80, gt=0)
    player_head_size: int = Field(default=50, gt=0)

    # Obstacles
    obstacle_width: int = Field(default=30, gt=0)
    obstacle_height: int = Field(default=60, gt=0)

    # Physics
    gravity: float = Field(default=0.6, ge=0.0)
    jump_strength: float = Field(default=-12.0, lt=0.0)
    game_speed: float = Field(default=5.0, gt=0.0)
    jump_tolerance: float = Field(default=5.0, ge=0.0)

    # Schedules (milliseconds)
    tick_interval_ms: float = Field(default=1000.0 / 60.0, gt=0.0)
    spawn_interval_ms: float = Field(default=2000.0, gt=0.0)

    @property
    def ground_line(self) -> float:
        """Player top edge when standing on the floor."""
        return float(self.field_height - self.player_height - self.ground_margin)

    @property
    def obstacle_top(self) -> float:
        return float(self.field_height - self.obstacle_height - self.ground_margin)

    @property
    def obstacle_bottom(self) -> float:
        return float(self.field_height - self.ground_margin)

    @property
    def player_leading_edge(self) -> float:
        """Fixed x of the player's right side, used for scoring."""
        return float(self.player_left + self.player_width)


class WindowSettings(BaseSettings):
    """Simulator window settings."""

    width: int = 1000
    height: int = 640
    title: str = "Head Jump Game"
    fps: int = Field(default=60, gt=0)

    # Longest frame the scheduler will catch up on in one go
    max_frame_delta_ms: float = Field(default=250.0, gt=0.0)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="HEADJUMP_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    theme: Literal["light", "dark"] = "light"
    log_file: Path | None = Field(default_factory=lambda: Path("headjump.log"))

    # Nested settings
    game: GameSettings = Field(default_factory=GameSettings)
    window: WindowSettings = Field(default_factory=WindowSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
