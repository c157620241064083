"""Run operations for jailbot.

Handles mount planning, container execution and failure diagnostics.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..config import load_settings
from ..constants import EXIT_INTERRUPTED
from ..docker import check_docker_status, run_container, validate_docker
from ..logging import get_logger, set_debug
from ..mounts import MountRegistry, mount_git_config
from ..planner import detect_timezone, get_docker_run_cmd
from ..translator import ArgumentTranslator
from .utils import console

if TYPE_CHECKING:
    from ..run_config import RunConfig

logger = get_logger(__name__)


def diagnose_container_failure(returncode: int) -> None:
    """Diagnose container failure and provide actionable feedback.

    Args:
        returncode: Container exit code.
    """
    if returncode == 125:
        console.print("[yellow]docker run failed before the command started[/yellow]")
        console.print("[dim]Check the mount paths and image name above[/dim]")
        return
    if returncode == 126:
        console.print("[yellow]Command found but not executable in the container[/yellow]")
        return
    if returncode == 127:
        console.print("[yellow]Command not found in the container[/yellow]")
        return
    if returncode == 137:
        console.print("[yellow]Container was killed (OOM or manual stop)[/yellow]")
        return

    if not check_docker_status():
        console.print("[red]Docker daemon is not responding[/red]")
        console.print("[dim]Docker may have restarted or crashed during session[/dim]")
        return

    logger.debug("Container exited with code %d", returncode)


def plan_mounts(config: RunConfig, registry: MountRegistry) -> list[str] | None:
    """Register all mounts for this run and translate the container command.

    Order matters for de-duplication: --workdir first, then git config,
    then command arguments left to right.

    Returns:
        Translated container arguments, or None if no command was given.
    """
    translator = ArgumentTranslator(registry)

    if config.workdir is not None:
        translator.mount_workdir(config.workdir)

    if config.mount_git:
        mount_git_config(registry)

    if config.command is None:
        return None
    return translator.translate(config.command).container_args


def run(config: RunConfig) -> int:
    """Run a command in the configured container.

    Returns:
        Container exit code.

    Raises:
        ConfigError: If the image name is not configured.
        DockerError: If docker or the image is unavailable.
    """
    if config.verbose:
        set_debug(True)

    settings = load_settings()
    logger.info("Starting run: image=%s", settings.image_name)

    registry = MountRegistry()
    container_args = plan_mounts(config, registry)

    validate_docker(settings.image_name)

    cmd = get_docker_run_cmd(
        settings,
        registry.specs,
        container_args,
        timezone=detect_timezone(),
    )

    returncode = run_container(cmd)
    if returncode not in (0, EXIT_INTERRUPTED):
        diagnose_container_failure(returncode)
    return returncode
