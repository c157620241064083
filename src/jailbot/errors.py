"""Unified exception hierarchy for jailbot.

All custom exceptions inherit from JailbotError for consistent error handling.
The CLI catches these and converts them to user-friendly messages.

Path classification, resolution, mounting and translation never raise: a bad
token degrades to being passed through unmounted.

Dependency direction:
    This module has NO internal dependencies (leaf module).
    It may be imported by: all other jailbot modules.
    It should NOT import from any other jailbot modules.
"""

from __future__ import annotations


class JailbotError(Exception):
    """Base exception for all jailbot errors."""


class ConfigError(JailbotError):
    """Configuration-related errors.

    Examples:
        - JAILBOT_IMAGE_NAME not set
        - Blank configuration values
    """


class DockerError(JailbotError):
    """Docker operation errors.

    Base class for all Docker-related exceptions.
    """


class DockerNotFoundError(DockerError):
    """Raised when Docker is not installed or not in PATH."""


class DockerTimeoutError(DockerError):
    """Raised when a Docker operation times out."""


class DockerNotRunningError(DockerError):
    """Raised when Docker daemon is not running."""


class ImageNotFoundError(DockerError):
    """Raised when the configured image is not available locally."""
