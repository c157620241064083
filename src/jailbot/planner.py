"""docker run command assembly for jailbot.

Combines interactive flags, mounts, timezone, the persistent volume and the
translated container arguments into the final command line.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from .constants import CONTAINER_WORKDIR, LOCALTIME_PATH, TIMEZONE_PATH
from .logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .config import Settings

logger = get_logger(__name__)


def detect_interactive_flag() -> str:
    """Return ``-it`` when stdin is a terminal, ``-i`` for pipes/redirects."""
    if sys.stdin is not None and sys.stdin.isatty():
        logger.debug("Interactive mode detected")
        return "-it"
    logger.debug("Non-interactive mode detected (pipe/redirect)")
    return "-i"


def detect_timezone(
    localtime: str | Path = LOCALTIME_PATH,
    timezone_file: str | Path = TIMEZONE_PATH,
) -> str | None:
    """Detect the host timezone name (e.g. ``Europe/Berlin``).

    Reads the /etc/localtime symlink target first, then /etc/timezone.

    Returns:
        Timezone name, or None if it cannot be determined.
    """
    localtime = Path(localtime)
    timezone_file = Path(timezone_file)

    try:
        if localtime.is_symlink():
            target = os.readlink(localtime)
            _, sep, zone = target.partition("/zoneinfo/")
            return (zone if sep else target) or None
        if timezone_file.is_file():
            return timezone_file.read_text(encoding="utf-8").strip() or None
    except OSError as e:
        logger.debug("Timezone detection failed: %s", e)
    return None


def get_docker_run_cmd(
    settings: Settings,
    mount_specs: Sequence[str],
    container_args: Sequence[str] | None = None,
    *,
    interactive_flag: str | None = None,
    timezone: str | None = None,
    workdir: str = CONTAINER_WORKDIR,
) -> list[str]:
    """Generate the docker run command.

    Args:
        settings: Launch settings (image, persistent volume).
        mount_specs: ``--mount`` values in registry order.
        container_args: Translated container command, if any.
        interactive_flag: ``-it`` or ``-i``; detected from stdin if None.
        timezone: Value for TZ inside the container; omitted if None.
        workdir: Container working directory.

    Returns:
        Complete argument list starting with ``docker``.
    """
    if interactive_flag is None:
        interactive_flag = detect_interactive_flag()

    cmd = [
        "docker",
        "run",
        "--rm",  # Remove container on exit
        interactive_flag,
    ]

    for spec in mount_specs:
        cmd.extend(["--mount", spec])
    if not mount_specs:
        logger.debug("No filesystem paths mounted")

    if timezone:
        cmd.extend(["--env", f"TZ={timezone}"])

    if settings.volume_spec:
        cmd.extend(["--volume", settings.volume_spec])

    cmd.extend(["--workdir", workdir])
    cmd.append(settings.image_name)

    # Docker stops option parsing at the image name, everything after is the command
    if container_args:
        cmd.extend(container_args)

    logger.debug("Docker command: %s", " ".join(cmd))
    return cmd
