"""Constants module for jailbot.

All timeout values and shared constants are defined here (SSOT).
"""

from __future__ import annotations

# === Docker Timeouts (seconds) ===
DOCKER_COMMAND_TIMEOUT = 30  # Quick docker commands (info, inspect)

# === Exit Codes ===
EXIT_INTERRUPTED = 130  # Standard Ctrl+C code

# === Environment Variables ===
ENV_IMAGE_NAME = "JAILBOT_IMAGE_NAME"  # Required: image to run
ENV_CONTAINER_VOLUME = "JAILBOT_CONTAINER_VOLUME"  # Optional: persistent volume at /root
ENV_DEBUG = "JAILBOT_DEBUG"  # Optional: enable debug logging

# === Container Paths ===
CONTAINER_WORKDIR = "/workspace"  # Workspace root, all argument mounts live here
CONTAINER_HOME = "/root"  # Persistent home (volume mount point)

# === Git Configuration Mounts ===
# (host path relative to $HOME, container path), always read-only
GIT_CONFIG_MOUNTS: tuple[tuple[str, str], ...] = (
    (".gitconfig", "/root/.gitconfig"),
    (".config/git/ignore", "/root/.config/git/ignore"),
)

# === Timezone Detection ===
LOCALTIME_PATH = "/etc/localtime"
TIMEZONE_PATH = "/etc/timezone"
