"""Run configuration dataclass for jailbot.

Bundles CLI arguments into a single configuration object for cleaner
function signatures and easier testing.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class RunConfig:
    """Configuration for a jailbot run.

    Immutable dataclass bundling all CLI arguments for the launch.
    Use frozen=True for hashability and to prevent accidental mutation.
    """

    # Logging
    verbose: bool = False

    # Extra mounts
    mount_git: bool = False
    workdir: str | None = None

    # Container command (everything after --), None if no separator was given
    command: tuple[str, ...] | None = None

    @classmethod
    def from_cli(
        cls,
        *,
        verbose: bool = False,
        git: bool = False,
        workdir: str | None = None,
        command: Sequence[str] | None = None,
    ) -> RunConfig:
        """Create RunConfig from CLI arguments.

        Handles argument transformation (e.g., --git -> mount_git).
        """
        return cls(
            verbose=verbose,
            mount_git=git,
            workdir=workdir,
            command=tuple(command) if command is not None else None,
        )
