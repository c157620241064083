"""Docker calls made by the launcher.

Two kinds of call: short status commands (``docker info``,
``docker image inspect``) run with captured output and a timeout, and the
container itself, which runs attached to the terminal until it exits.
"""

from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING

from .constants import DOCKER_COMMAND_TIMEOUT, EXIT_INTERRUPTED
from .errors import (
    DockerNotFoundError,
    DockerNotRunningError,
    DockerTimeoutError,
    ImageNotFoundError,
)
from .logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = get_logger(__name__)

_NOT_INSTALLED = "Docker not found. Please install Docker."
_NOT_RUNNING = "Docker daemon not accessible. Is Docker running?"


def _docker(*args: str, timeout: int = DOCKER_COMMAND_TIMEOUT) -> int:
    """Run ``docker <args>`` quietly and return its exit code.

    Raises:
        DockerNotFoundError: If the docker binary is not on PATH.
        DockerTimeoutError: If docker does not answer within timeout seconds.
    """
    cmd = ["docker", *args]
    logger.debug("Running: %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=False, timeout=timeout)
    except FileNotFoundError as e:
        raise DockerNotFoundError(_NOT_INSTALLED) from e
    except subprocess.TimeoutExpired as e:
        raise DockerTimeoutError(f"docker {args[0]} timed out after {timeout}s") from e
    if result.returncode != 0:
        logger.debug(
            "docker %s exited with %d: %s", args[0], result.returncode, result.stderr.strip()
        )
    return result.returncode


def check_docker_status() -> bool:
    """True if the docker daemon answers ``docker info``."""
    try:
        return _docker("info") == 0
    except (DockerNotFoundError, DockerTimeoutError):
        return False


def image_exists(image_name: str) -> bool:
    """True if image_name (name[:tag]) is available locally."""
    try:
        return _docker("image", "inspect", image_name) == 0
    except (DockerNotFoundError, DockerTimeoutError):
        return False


def validate_docker(image_name: str) -> None:
    """Make sure docker can run the image.

    Raises:
        DockerNotFoundError: If the docker binary is missing.
        DockerNotRunningError: If the daemon is not accessible.
        ImageNotFoundError: If the image is not present locally.
    """
    try:
        running = _docker("info") == 0
    except DockerTimeoutError as e:
        raise DockerNotRunningError(_NOT_RUNNING) from e
    if not running:
        raise DockerNotRunningError(_NOT_RUNNING)

    if not image_exists(image_name):
        raise ImageNotFoundError(
            f"Docker image {image_name} not found locally. Please build it first."
        )
    logger.debug("Docker ready, image %s present", image_name)


def run_container(cmd: Sequence[str]) -> int:
    """Run the container in the foreground, attached to this terminal.

    Returns:
        Container exit code (130 if interrupted with Ctrl+C).

    Raises:
        DockerNotFoundError: If docker command is not found.
    """
    logger.debug("Executing: %s", " ".join(cmd))
    try:
        result = subprocess.run(list(cmd), check=False)
    except FileNotFoundError as e:
        raise DockerNotFoundError(_NOT_INSTALLED) from e
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED
    return result.returncode
