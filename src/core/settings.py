"""
Configuration.

GameSettings are the tunable constants of a single game (the defaults are the ones the portfolio site ships with).
AppSettings wrap them together with the host concerns (database, logging), and can be read from the environment.
"""

import os
from typing import Self

from pydantic import BaseModel, ValidationInfo, field_validator, model_validator

from src.core.exceptions import InvalidConfigurationError

ENV_PREFIX = "KROW_"


class GameSettings(BaseModel):
    size: int = 6
    win_length: int = 4
    blocked_count: int = 3
    search_depth: int = 3

    @field_validator("size", "win_length")
    @classmethod
    def validate_positive(cls, value: int, info: ValidationInfo) -> int:
        if value < 1:
            raise InvalidConfigurationError(f"{info.field_name} must be at least 1, got {value}.")
        return value

    @field_validator("blocked_count", "search_depth")
    @classmethod
    def validate_non_negative(cls, value: int, info: ValidationInfo) -> int:
        if value < 0:
            raise InvalidConfigurationError(f"{info.field_name} cannot be negative, got {value}.")
        return value

    @model_validator(mode="after")
    def validate_blocked_fits_on_board(self) -> Self:
        # NOTE: win_length > size is allowed. There are simply no lines to complete, so the game can only end in a draw.
        if self.blocked_count >= self.size * self.size:
            raise InvalidConfigurationError(
                f"Cannot block {self.blocked_count} cells on a {self.size}x{self.size} board."
            )
        return self

    @property
    def cell_count(self) -> int:
        return self.size * self.size


class AppSettings(BaseModel):
    game: GameSettings = GameSettings()
    database_url: str = "sqlite:///games.db"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Self:
        """Read settings from KROW_* environment variables, falling back to the defaults."""
        game_fields = {
            name: int(os.environ[f"{ENV_PREFIX}{name.upper()}"])
            for name in GameSettings.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in os.environ
        }
        app_fields = {
            name: os.environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in ("database_url", "log_level")
            if f"{ENV_PREFIX}{name.upper()}" in os.environ
        }
        return cls(game=GameSettings(**game_fields), **app_fields)
