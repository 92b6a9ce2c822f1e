"""Configuration for the session runner."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from src.engine import DEFAULT_GAME_DURATION, DEFAULT_GUESS_DURATION, ValidationError
from src.history import DEFAULT_MAX_ENTRIES, DEFAULT_TTL_SECONDS, get_history_dir

# Config field -> environment variable
ENV_VARS = {
    "game_duration": "GAME_DURATION_SECONDS",
    "guess_duration": "GUESS_DURATION_SECONDS",
    "handoff_ttl_seconds": "HANDOFF_TTL_SECONDS",
}


class EngineConfig(BaseModel):
    """Settings the runner needs from its environment."""

    # Per-participant countdown, seconds
    game_duration: int = Field(default=DEFAULT_GAME_DURATION, gt=0)

    # Guess mode countdown, seconds
    guess_duration: int = Field(default=DEFAULT_GUESS_DURATION, gt=0)

    # History output directory (configurable via env var)
    history_dir: str = Field(default_factory=lambda: str(get_history_dir()))

    # Duplicate-save suppression
    handoff_max_entries: int = Field(default=DEFAULT_MAX_ENTRIES, gt=0)
    handoff_ttl_seconds: float = Field(default=DEFAULT_TTL_SECONDS, gt=0)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """
        Build a config from environment variables, falling back to defaults.

        Raises:
            ValidationError: naming every variable that holds an unusable value.
        """
        values = {
            field: os.environ[var]
            for field, var in ENV_VARS.items()
            if os.environ.get(var)
        }
        try:
            return cls(**values)
        except PydanticValidationError as e:
            errors = []
            for error in e.errors():
                field = error["loc"][0] if error["loc"] else ""
                var = ENV_VARS.get(field, field)
                errors.append(f"{var}={values.get(field)!r}: {error['msg']}")
            raise ValidationError(
                "Invalid environment settings: " + "; ".join(errors), errors
            ) from e

    def get_history_path(self) -> Path:
        return Path(self.history_dir)
