"""Bind mount tracking for a single launch.

MountRegistry keeps the ordered list of bind mounts and guarantees that each
host path is mounted at most once. Membership is exact string equality:
two spellings of the same directory count as different host paths.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from .constants import CONTAINER_WORKDIR, GIT_CONFIG_MOUNTS
from .logging import get_logger
from .paths import is_under

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = get_logger(__name__)

# docker reads the --mount value as one CSV record
_CHAR_NAMES = {",": "comma", '"': "quote", "\n": "newline", "\r": "carriage return"}


def _unsupported_char(text: str) -> str | None:
    for char in _CHAR_NAMES:
        if char in text:
            return char
    return None


class MountStatus(str, Enum):
    """Outcome of a mount request. Only ADDED creates an entry."""

    ADDED = "added"
    EMPTY = "empty"  # Host or target path missing
    RESERVED = "reserved"  # Host path lies under the workspace root
    DUPLICATE = "duplicate"  # Host path already mounted
    UNSUPPORTED = "unsupported"  # Character docker --mount cannot carry


@dataclass(frozen=True)
class MountEntry:
    """A single bind mount from host_path to target_path."""

    host_path: str
    target_path: str
    read_only: bool = False

    @property
    def spec(self) -> str:
        """Docker ``--mount`` value for this entry."""
        spec = f"type=bind,source={self.host_path},target={self.target_path}"
        if self.read_only:
            spec += ",readonly"
        return spec


class MountRegistry:
    """Ordered, de-duplicated set of bind mounts.

    Entries are append-only and keep first-added order, which is also the
    order of the ``--mount`` flags in the final docker command.
    """

    def __init__(self, workspace: str = CONTAINER_WORKDIR) -> None:
        self.workspace = workspace
        self._entries: list[MountEntry] = []
        self._hosts: dict[str, MountEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[MountEntry]:
        return iter(self._entries)

    def __contains__(self, host_path: object) -> bool:
        return host_path in self._hosts

    def contains(self, host_path: str) -> bool:
        """Check if host_path is already mounted (exact string match)."""
        return host_path in self._hosts

    def target_for(self, host_path: str) -> str | None:
        """Return the container path host_path is mounted at, if any."""
        entry = self._hosts.get(host_path)
        return entry.target_path if entry else None

    @property
    def entries(self) -> list[MountEntry]:
        return list(self._entries)

    @property
    def specs(self) -> list[str]:
        """Mount specifications in first-added order."""
        return [entry.spec for entry in self._entries]

    def add(self, host_path: str, target_path: str, read_only: bool = False) -> MountStatus:
        """Register a bind mount.

        Rejection rules, checked in order:
        1. either path is empty
        2. host_path lies under the workspace root
        3. host_path is already mounted
        4. host_path or target_path contains a character docker --mount
           cannot carry (comma, quote, newline)

        Args:
            host_path: Absolute path on the host.
            target_path: Absolute path inside the container.
            read_only: Mount read-only if True.

        Returns:
            MountStatus.ADDED when a new entry was created, otherwise the
            reason the request was rejected. Rejection is never an error.
        """
        if not host_path or not target_path:
            return MountStatus.EMPTY

        if is_under(host_path, self.workspace):
            logger.debug("Skipping container workdir path: %s", host_path)
            return MountStatus.RESERVED

        if host_path in self._hosts:
            logger.debug("Path already mounted: %s", host_path)
            return MountStatus.DUPLICATE

        bad = _unsupported_char(host_path + target_path)
        if bad is not None:
            logger.warning(
                "Skipping mount (%s in path unsupported by docker --mount): %r",
                _CHAR_NAMES[bad],
                host_path,
            )
            return MountStatus.UNSUPPORTED

        entry = MountEntry(host_path, target_path, read_only)
        self._entries.append(entry)
        self._hosts[host_path] = entry
        suffix = " (ro)" if read_only else ""
        logger.debug("Added mount: %s -> %s%s", host_path, target_path, suffix)
        return MountStatus.ADDED

    def try_add(self, host_path: str, target_path: str, read_only: bool = False) -> bool:
        """Boolean form of add(): True only if a new mount was registered."""
        return self.add(host_path, target_path, read_only) is MountStatus.ADDED


def mount_git_config(registry: MountRegistry, home: Path | None = None) -> int:
    """Mount the user's global git configuration read-only.

    Each file in GIT_CONFIG_MOUNTS is mounted only if it exists as a
    regular file on the host.

    Args:
        registry: Registry to add the mounts to.
        home: Home directory to look in (defaults to Path.home()).

    Returns:
        Number of mounts added.
    """
    home = home if home is not None else Path.home()
    added = 0
    for relative, target in GIT_CONFIG_MOUNTS:
        host_file = home / relative
        if not host_file.is_file():
            logger.debug("Git config not found, skipping: %s", host_file)
            continue
        logger.debug("Mounting git config: %s", host_file)
        if registry.try_add(str(host_file), target, read_only=True):
            added += 1
    return added
