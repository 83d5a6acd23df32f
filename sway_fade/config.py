"""
Configuration loader for sway-fade.

Reads default fade timing from an optional TOML file:

    # ~/.config/sway-fade/config.toml
    [fade]
    steps = 10
    time = 0.1

Command-line flags take precedence over the file.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigLoadError, ErrorCode
from .models import MAX_STEPS, FadeConfig

logger = logging.getLogger(__name__)

DEFAULT_STEPS = 10
DEFAULT_TIME = 0.1


class FadeSettings(BaseModel):
    """The ``[fade]`` table of the configuration file."""

    model_config = {"extra": "forbid"}

    steps: int = Field(DEFAULT_STEPS, gt=0, le=MAX_STEPS, description="Number of opacity steps per fade")
    time: float = Field(DEFAULT_TIME, gt=0, description="Fade duration in seconds")

    def to_fade_config(self, steps: Optional[int] = None, time: Optional[float] = None) -> FadeConfig:
        """Build a FadeConfig, letting explicit values override the file."""
        return FadeConfig(
            steps=steps if steps is not None else self.steps,
            duration_seconds=time if time is not None else self.time,
        )


def default_config_path() -> Path:
    """$XDG_CONFIG_HOME/sway-fade/config.toml, falling back to ~/.config."""
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
    return base / "sway-fade" / "config.toml"


def load_settings(config_path: Optional[Path] = None) -> FadeSettings:
    """
    Load fade settings.

    Args:
        config_path: Explicit config file; must exist if given

    Returns:
        FadeSettings (defaults when the default file is absent)

    Raises:
        ConfigLoadError: If the file is missing (explicit path only),
            unreadable, or invalid
    """
    explicit = config_path is not None
    path = config_path if explicit else default_config_path()

    if not path.exists():
        if explicit:
            raise ConfigLoadError(str(path), "file not found")
        logger.debug("No config file at %s, using defaults", path)
        return FadeSettings()

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigLoadError(str(path), str(e)) from e

    try:
        settings = FadeSettings(**data.get("fade", {}))
    except (TypeError, ValidationError) as e:
        raise ConfigLoadError(str(path), str(e), code=ErrorCode.INVALID_CONFIG) from e

    logger.debug("Loaded settings from %s: %s", path, settings)
    return settings
