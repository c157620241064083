"""Configuration management for jailbot.

Launch settings come from environment variables and are read once per run.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .constants import CONTAINER_HOME, ENV_CONTAINER_VOLUME, ENV_IMAGE_NAME
from .errors import ConfigError


@dataclass(frozen=True)
class Settings:
    """jailbot launch settings."""

    # Image to run (required)
    image_name: str

    # Named volume mounted at the container home (optional)
    container_volume: str | None = None

    @property
    def volume_spec(self) -> str | None:
        """Docker ``--volume`` value for the persistent home, if configured."""
        if not self.container_volume:
            return None
        return f"{self.container_volume}:{CONTAINER_HOME}"


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Load settings from the environment.

    Args:
        environ: Environment mapping (defaults to os.environ).

    Returns:
        Settings for this launch.

    Raises:
        ConfigError: If JAILBOT_IMAGE_NAME is missing or blank.
    """
    env = os.environ if environ is None else environ

    image_name = env.get(ENV_IMAGE_NAME, "").strip()
    if not image_name:
        raise ConfigError(f"{ENV_IMAGE_NAME} environment variable is not set")

    volume = env.get(ENV_CONTAINER_VOLUME, "").strip() or None
    return Settings(image_name=image_name, container_volume=volume)
